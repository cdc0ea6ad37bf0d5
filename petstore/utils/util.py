# petstore/utils/util.py
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from functools import wraps

from dateutil.parser import isoparse
from flask_jwt_extended import verify_jwt_in_request, current_user

from petstore.exceptions import AccessDeniedException, ValidationException

CENTS = Decimal('0.01')
# upper bound of a Numeric(10, 2) column
MAX_AMOUNT = Decimal('100000000')


def role_required(*roles):
    def wrapper(fn):
        @wraps(fn)
        def decorator(*args, **kwargs):
            verify_jwt_in_request()
            if not current_user.has_role(*roles):
                raise AccessDeniedException(
                    f"Access denied: requires one of {', '.join(role.value for role in roles)}")
            return fn(*args, **kwargs)
        return decorator
    return wrapper


def money(value):
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def to_float(value):
    return float(value) if value is not None else None


def to_iso(value):
    return value.isoformat() if value is not None else None


def parse_decimal(value, field, max_value=None):
    try:
        number = Decimal(str(value))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationException(f"Field '{field}' must be a number")
    if not number.is_finite():
        raise ValidationException(f"Field '{field}' must be a finite number")
    if max_value is not None and abs(number) >= max_value:
        raise ValidationException(f"Field '{field}' must be less than {max_value:f}")
    return number


def parse_datetime(value, field):
    """ISO-8601 string to a naive UTC datetime."""
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = isoparse(str(value))
        except (ValueError, OverflowError):
            raise ValidationException(f"Field '{field}' must be an ISO-8601 date-time")
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
