"""Utilities package"""
from .validators import validate_email, is_blank, require_fields
from .helpers import (
    generate_unique_id,
    local_now,
    round_half_up,
    round_currency,
    format_currency,
    format_hours,
    parse_date,
    parse_datetime,
    safe_float,
    safe_int,
    serialize_record,
)

__all__ = [
    'validate_email',
    'is_blank',
    'require_fields',
    'generate_unique_id',
    'local_now',
    'round_half_up',
    'round_currency',
    'format_currency',
    'format_hours',
    'parse_date',
    'parse_datetime',
    'safe_float',
    'safe_int',
    'serialize_record',
]
