"""Small input and formatting helpers shared by services and routes."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from flask import request

from swishdrip.errors import ValidationError

CENTS = Decimal('0.01')


def to_money(value, field='price'):
    """Convert a number or numeric string to a Decimal rounded to cents."""
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be a number')
    try:
        amount = Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError(f'{field} must be a number')
    if amount < 0:
        raise ValidationError(f'{field} must not be negative')
    return amount


def money_to_float(value):
    """Format Decimal/None for JSON output."""
    if value is None:
        return 0.0
    return float(value)


def parse_id(value, field='productId'):
    """Parse a positive integer id from a payload value."""
    if value is None or value == '' or isinstance(value, bool):
        raise ValidationError(f'{field} is required')
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be a valid id')
    if parsed < 1:
        raise ValidationError(f'{field} must be a valid id')
    return parsed


def parse_quantity(value, field='quantity', minimum=1):
    """Parse an integer quantity, rejecting values below ``minimum``."""
    if isinstance(value, bool):
        raise ValidationError(f'{field} must be an integer')
    try:
        quantity = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be an integer')
    if isinstance(value, float) and value != quantity:
        raise ValidationError(f'{field} must be an integer')
    if minimum is not None and quantity < minimum:
        raise ValidationError(f'{field} must be at least {minimum}')
    return quantity


def normalize_size(size):
    """Treat blank size labels as "no size"."""
    if size is None:
        return None
    size = str(size).strip()
    return size or None


def pick(data, *keys, default=None):
    """Return the first present key, so payloads may use camelCase or snake_case."""
    for key in keys:
        if key in data:
            return data[key]
    return default


def json_body():
    """The request's JSON object, or ``{}`` when there is no JSON body."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError('Request body must be a JSON object')
    return data
