"""
Core utilities shared by schemas and services.
"""
