"""
Shared enumerations for roles and literacy tiers
"""
from enum import Enum


class UserRole(str, Enum):
    STUDENT = "student"
    TEACHER = "teacher"
    ADMIN = "admin"


class LiteracyLevel(str, Enum):
    """Ordinal literacy tiers plus the initial untested state of a user"""
    ILLITERATE = "illiterate"
    SEMI_LITERATE = "semi-literate"
    LITERATE = "literate"
    NOT_TESTED = "not-tested"
