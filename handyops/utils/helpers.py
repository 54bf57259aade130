"""
Helper utilities
"""
import uuid
from datetime import date, datetime, time
from decimal import ROUND_HALF_UP, Decimal


def generate_unique_id():
    """
    Generate a unique UUID

    Returns:
        str: UUID string
    """
    return str(uuid.uuid4())


def local_now():
    """
    Current business-local time as a naive datetime, truncated to seconds

    Returns:
        datetime: Now
    """
    return datetime.now().replace(microsecond=0)


def round_half_up(value, places=1):
    """Round half away from zero to ``places`` decimals (None is treated as 0)"""
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value or 0)).quantize(quantum, rounding=ROUND_HALF_UP))


def round_currency(amount):
    """
    Round an amount to cents, half away from zero

    Only used at presentation time; internal arithmetic keeps full precision.

    Args:
        amount: Numeric amount (None is treated as 0)

    Returns:
        float: Rounded amount
    """
    return round_half_up(amount, 2)


def format_currency(amount, currency='USD'):
    """
    Format amount as currency

    Args:
        amount: Numeric amount
        currency (str): Currency code

    Returns:
        str: Formatted currency string
    """
    if isinstance(amount, (Decimal, float, int)):
        amount = round_currency(amount)

        if currency == 'USD':
            return f'${amount:,.2f}'
        else:
            return f'{amount:,.2f} {currency}'

    return str(amount)


def format_hours(hours):
    """Format a duration in hours with one decimal, e.g. ``6.0hrs``"""
    return f'{float(hours or 0):.1f}hrs'


def parse_date(date_string, format='%Y-%m-%d'):
    """
    Parse date string to date object

    Args:
        date_string (str): Date string
        format (str): strptime format string

    Returns:
        date: Date object or None if invalid
    """
    if isinstance(date_string, datetime):
        return date_string.date()
    if isinstance(date_string, date):
        return date_string
    try:
        return datetime.strptime(date_string, format).date()
    except (ValueError, TypeError):
        return None


def parse_datetime(value, default_hour=0):
    """
    Parse an ISO-8601 date or date-time into a naive datetime

    Date-only values are placed at ``default_hour``. Timezone-aware values are
    converted to local time and made naive.

    Args:
        value: str, date or datetime
        default_hour (int): Hour used for date-only values

    Returns:
        datetime: Parsed value or None if invalid
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return datetime.combine(value, time(default_hour))
    elif isinstance(value, str) and value.strip():
        text = value.strip().replace('Z', '+00:00')
        if len(text) == 10:
            day = parse_date(text)
            return datetime.combine(day, time(default_hour)) if day else None
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def safe_float(value, default=0.0):
    """
    Safely convert value to float

    Args:
        value: Value to convert
        default (float): Default value if conversion fails

    Returns:
        float: Converted value or default
    """
    try:
        return float(value)
    except (ValueError, TypeError):
        return default


def safe_int(value, default=0):
    """
    Safely convert value to int

    Args:
        value: Value to convert
        default (int): Default value if conversion fails

    Returns:
        int: Converted value or default
    """
    try:
        return int(value)
    except (ValueError, TypeError, OverflowError):
        return default


def serialize_record(value):
    """Convert a record (or nested structure) into JSON-safe values."""
    if isinstance(value, dict):
        return {key: serialize_record(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_record(item) for item in value]
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    return value
