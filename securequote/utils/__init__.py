"""
Utilities package for SecureQuote API.
"""
