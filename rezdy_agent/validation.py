"""
Business-rule validation for booking and customer payloads.

Every ``validate_*`` collector returns a list of human-readable messages,
empty when the payload is valid. They never raise on malformed input and
never mutate it; a missing or wrongly typed field is reported as a message.
Messages follow field-check order.
"""

import re
from datetime import date, datetime, timezone
from typing import Any, List, Optional

from pydantic import EmailStr, TypeAdapter, ValidationError

from .models import read_field

_email_adapter = TypeAdapter(EmailStr)

_PHONE_RE = re.compile(r"\+?[1-9]\d{0,15}", re.ASCII)
_PHONE_SEPARATORS_RE = re.compile(r"[\s\-()]")

DATETIME_FORMAT_HINT = "Use ISO 8601 format (YYYY-MM-DDTHH:mm:ssZ)"


def validate_email(email: Any) -> bool:
    if not isinstance(email, str):
        return False
    try:
        _email_adapter.validate_python(email)
    except ValidationError:
        return False
    return True


def validate_phone(phone: Any) -> bool:
    """Loose international format: optional +, no leading zero, at most 16 digits."""
    if not isinstance(phone, str):
        return False
    return _PHONE_RE.fullmatch(_PHONE_SEPARATORS_RE.sub("", phone)) is not None


def validate_date(date_string: Any) -> bool:
    """True for a real calendar date written exactly as YYYY-MM-DD."""
    if not isinstance(date_string, str):
        return False
    try:
        parsed = date.fromisoformat(date_string)
    except ValueError:
        return False
    return parsed.isoformat() == date_string


def parse_datetime(value: Any) -> Optional[datetime]:
    """Parse an ISO 8601 timestamp. Naive values are taken as UTC."""
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def validate_datetime(value: Any) -> bool:
    return parse_datetime(value) is not None


def sanitize_string(value: str, max_length: int = 255) -> str:
    return value.strip()[:max_length]


def _is_positive_integer(value: Any) -> bool:
    # bool is an int subclass but not a quantity
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return value > 0
    if isinstance(value, float):
        return value.is_integer() and value > 0
    return False


def validate_quantities(quantities: Any) -> List[str]:
    """
    Check booking quantity lines.

    An empty or missing list yields a single error. Otherwise both the
    option ID and the unit count of every line are checked, so one line can
    produce two messages.
    """
    errors: List[str] = []

    if not quantities:
        errors.append("At least one quantity must be specified")
        return errors

    for index, quantity in enumerate(quantities):
        if not _is_positive_integer(read_field(quantity, "option_id")):
            errors.append(f"Invalid optionId at index {index}: must be a positive integer")
        if not _is_positive_integer(read_field(quantity, "value")):
            errors.append(f"Invalid quantity value at index {index}: must be a positive integer")

    return errors


def validate_booking_dates(start_date: Any, end_date: Any = None) -> List[str]:
    """
    Check a booking window.

    Format, ordering and "not in the past" are reported independently. An
    unparseable start date is only reported as a format error; it is never
    also reported as being in the past.
    """
    errors: List[str] = []

    start = parse_datetime(start_date)
    if start is None:
        errors.append(f"Invalid start date format. {DATETIME_FORMAT_HINT}")

    end = parse_datetime(end_date)
    if end_date and end is None:
        errors.append(f"Invalid end date format. {DATETIME_FORMAT_HINT}")

    if start is not None and end is not None and start >= end:
        errors.append("End date must be after start date")

    if start is not None and start < datetime.now(timezone.utc):
        errors.append("Start date cannot be in the past")

    return errors


def validate_customer_data(customer: Any) -> List[str]:
    """
    Check a customer record.

    Accepts a CustomerRecord or a mapping with camelCase or snake_case keys.
    Names and email are required; phone and date of birth are checked only
    when present.
    """
    errors: List[str] = []

    first_name = read_field(customer, "first_name")
    if not first_name or not isinstance(first_name, str):
        errors.append("Customer first name is required")

    last_name = read_field(customer, "last_name")
    if not last_name or not isinstance(last_name, str):
        errors.append("Customer last name is required")

    email = read_field(customer, "email")
    if not email or not validate_email(email):
        errors.append("Valid customer email is required")

    phone = read_field(customer, "phone")
    if phone and not validate_phone(phone):
        errors.append("Invalid customer phone number format")

    date_of_birth = read_field(customer, "date_of_birth")
    if date_of_birth and not validate_date(date_of_birth):
        errors.append("Invalid customer date of birth format. Use YYYY-MM-DD")

    return errors
