"""
HTTP routes for SecureQuote API.
"""
