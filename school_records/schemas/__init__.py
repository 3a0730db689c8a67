"""
Transport schemas for the school records package.
"""
