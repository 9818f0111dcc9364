# otpkit test suite
"""
- RFC 4226 / RFC 6238 known-answer vectors
- otpauth:// Key URI decoding, encoding and error ordering

Run with: pytest
"""
