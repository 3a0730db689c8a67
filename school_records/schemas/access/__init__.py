"""
Access control schemas package.
"""

from school_records.schemas.access.access_decision import AccessDecision

__all__ = ["AccessDecision"]
