"""
School records: transport schemas and in-memory services for a school
information system.
"""

__version__ = "0.1.0"
