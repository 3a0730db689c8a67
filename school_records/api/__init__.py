"""
HTTP API for the school records services.
"""
