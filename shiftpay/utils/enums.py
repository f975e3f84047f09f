"""Utility functions for handling enum/string values safely."""
from enum import Enum


def enum_to_str(v):
    """
    Safely convert enum or string value to string.

    Examples:
        >>> enum_to_str(PayrollStatus.PAID)
        'paid'
        >>> enum_to_str('paid')
        'paid'
        >>> enum_to_str(None)
        None
    """
    if v is None:
        return None
    if isinstance(v, Enum):
        return v.value
    return str(v)


def enum_values(enum_cls):
    """Column values for SQLEnum: persist the lowercase wire strings, not member names."""
    return [member.value for member in enum_cls]
