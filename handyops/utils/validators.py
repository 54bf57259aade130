"""
Validation utilities
"""
import re


def validate_email(email):
    """
    Validate email format

    Args:
        email (str): Email address to validate

    Returns:
        bool: True if valid, False otherwise
    """
    if not email:
        return False

    pattern = r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$'
    return bool(re.match(pattern, email))


def is_blank(text):
    """True when text is None or only whitespace"""
    return text is None or not str(text).strip()


def require_fields(data, fields):
    """
    Return the names of required fields that are missing or blank

    Args:
        data (dict): Submitted values
        fields (iterable): Required field names

    Returns:
        list: Missing field names, in the order given
    """
    return [field for field in fields if is_blank(data.get(field))]
