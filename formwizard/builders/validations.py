"""Pre-built validation rules and named patterns for common inputs."""

import math
import re
from datetime import date, datetime
from typing import Any, Callable, Dict, List, Optional, Union
from formwizard.engine.coercion import is_file_like, strict_equals, to_number
from formwizard.engine.schema import RuleType, ValidationRule

DateLike = Union[date, datetime, str]

# Anchored with \Z, since $ also matches before a trailing newline. Patterns
# using \d or \w run in ASCII mode so other scripts' digits are rejected.
VALIDATION_PATTERNS: Dict[str, re.Pattern] = {
    'email': re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+\Z'),
    'url': re.compile(r'^(https?://)?([\da-z.-]+)\.([a-z.]{2,6})([/\w .-]*)*/?\Z', re.ASCII),
    'phone': re.compile(r'^[+]?[(]?[0-9]{2,4}[)]?[-\s.]?[(]?[0-9]{2,4}[)]?[-\s.]?[0-9]{3,6}\Z'),
    'alphanumeric': re.compile(r'^[a-zA-Z0-9]+\Z'),
    'numeric': re.compile(r'^\d+\Z', re.ASCII),
    'decimal': re.compile(r'^\d+(\.\d{1,2})?\Z', re.ASCII),
    # Italy
    'italian_fiscal_code': re.compile(r'^[A-Z]{6}\d{2}[A-Z]\d{2}[A-Z]\d{3}[A-Z]\Z', re.ASCII),
    'italian_vat': re.compile(r'^\d{11}\Z', re.ASCII),
    'italian_postal_code': re.compile(r'^\d{5}\Z', re.ASCII),
    # United States
    'us_zip_code': re.compile(r'^\d{5}(-\d{4})?\Z', re.ASCII),
    'us_ssn': re.compile(r'^\d{3}-\d{2}-\d{4}\Z', re.ASCII),
    # United Kingdom
    'uk_postcode': re.compile(r'^[A-Z]{1,2}\d[A-Z\d]? ?\d[A-Z]{2}\Z', re.IGNORECASE | re.ASCII),
    'credit_card': re.compile(r'^\d{13,19}\Z', re.ASCII),
    'uuid': re.compile(r'^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}\Z', re.IGNORECASE),
    'slug': re.compile(r'^[a-z0-9]+(?:-[a-z0-9]+)*\Z'),
    'hex_color': re.compile(r'^#?([a-f0-9]{6}|[a-f0-9]{3})\Z', re.IGNORECASE),
    'ipv4': re.compile(
        r'^(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\Z'
    ),
}


def required(message: Optional[str] = None) -> ValidationRule:
    return ValidationRule(type=RuleType.REQUIRED.value, message=message or "This field is required")


def email(message: Optional[str] = None) -> ValidationRule:
    return ValidationRule(type=RuleType.EMAIL.value, message=message or "Please enter a valid email address")


def min_length(length: int, message: Optional[str] = None) -> ValidationRule:
    return ValidationRule(
        type=RuleType.MIN_LENGTH.value,
        value=length,
        message=message or f"Must be at least {length} characters",
    )


def max_length(length: int, message: Optional[str] = None) -> ValidationRule:
    return ValidationRule(
        type=RuleType.MAX_LENGTH.value,
        value=length,
        message=message or f"Must be at most {length} characters",
    )


def pattern(regex: Union[str, re.Pattern], message: str) -> ValidationRule:
    return ValidationRule(type=RuleType.PATTERN.value, value=regex, message=message)


def min_value(value: float, message: Optional[str] = None) -> ValidationRule:
    return ValidationRule(type=RuleType.MIN.value, value=value, message=message or f"Minimum value is {value}")


def max_value(value: float, message: Optional[str] = None) -> ValidationRule:
    return ValidationRule(type=RuleType.MAX.value, value=value, message=message or f"Maximum value is {value}")


def custom(validator: Callable[[Any, Dict[str, Any]], bool], message: str) -> ValidationRule:
    """Wrap a (value, form_data) predicate. The full form data allows cross-field checks."""
    return ValidationRule(type=RuleType.CUSTOM.value, custom_validator=validator, message=message)


def range_of(minimum: float, maximum: float, message: Optional[str] = None) -> ValidationRule:
    """Numeric value within [minimum, maximum]; non-numeric values fail."""
    def in_range(value, form_data):
        number = to_number(value)
        return not math.isnan(number) and minimum <= number <= maximum

    return custom(in_range, message or f"Value must be between {minimum} and {maximum}")


def url(message: Optional[str] = None) -> ValidationRule:
    return pattern(VALIDATION_PATTERNS['url'], message or "Please enter a valid URL")


def phone(message: Optional[str] = None) -> ValidationRule:
    return pattern(VALIDATION_PATTERNS['phone'], message or "Please enter a valid phone number")


def alphanumeric(message: Optional[str] = None) -> ValidationRule:
    return pattern(VALIDATION_PATTERNS['alphanumeric'], message or "Only letters and numbers are allowed")


def numeric(message: Optional[str] = None) -> ValidationRule:
    return pattern(VALIDATION_PATTERNS['numeric'], message or "Only numbers are allowed")


def decimal(decimal_places: Optional[int] = None, message: Optional[str] = None) -> ValidationRule:
    """Unsigned decimal, optionally limited to a number of decimal places."""
    if decimal_places:
        regex = re.compile(rf'^\d+(\.\d{{1,{decimal_places}}})?\Z', re.ASCII)
        default = f"Please enter a valid number with up to {decimal_places} decimal places"
    else:
        regex = re.compile(r'^\d+(\.\d+)?\Z', re.ASCII)
        default = "Please enter a valid number"
    return pattern(regex, message or default)


def match_field(field_name: str, message: Optional[str] = None) -> ValidationRule:
    """Value must equal another field's value (password confirmation)."""
    return custom(
        lambda value, form_data: strict_equals(value, form_data.get(field_name)),
        message or "Values do not match",
    )


def different_from(field_name: str, message: Optional[str] = None) -> ValidationRule:
    return custom(
        lambda value, form_data: not strict_equals(value, form_data.get(field_name)),
        message or "Values must be different",
    )


def file_size(max_bytes: int, message: Optional[str] = None) -> ValidationRule:
    """Attached file no larger than max_bytes. Non-file values pass."""
    def small_enough(value, form_data):
        if is_file_like(value) and hasattr(value, 'size'):
            return value.size <= max_bytes
        return True

    return custom(small_enough, message or f"File size must be less than {max_bytes / (1024 * 1024):.1f} MB")


def file_type(allowed_types: List[str], message: Optional[str] = None) -> ValidationRule:
    """Attached file extension in allowed_types (case-insensitive). Non-file values pass."""
    allowed = [extension.lower() for extension in allowed_types]

    def allowed_extension(value, form_data):
        if not is_file_like(value):
            return True
        name = str(getattr(value, 'name', '') or '')
        if '.' not in name:
            return False
        return name.rsplit('.', 1)[1].lower() in allowed

    return custom(
        allowed_extension,
        message or f"Allowed file types: {', '.join(t.upper() for t in allowed_types)}",
    )


def _parse_date(value: Any) -> Optional[date]:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.strip()).date()
        except ValueError:
            return None
    return None


def _reference_date(reference: DateLike) -> Optional[date]:
    if reference == 'today':
        return date.today()
    return _parse_date(reference)


def date_after(reference: DateLike, message: Optional[str] = None) -> ValidationRule:
    """
    Date strictly after the reference day ('today' or a date).

    Empty values pass; unparseable dates fail.
    """
    def is_after(value, form_data):
        if not value:
            return True
        entered = _parse_date(value)
        limit = _reference_date(reference)
        return entered is not None and limit is not None and entered > limit

    return custom(is_after, message or "Date must be in the future")


def date_before(reference: DateLike, message: Optional[str] = None) -> ValidationRule:
    """Date on or before the reference day ('today' or a date)."""
    def is_before(value, form_data):
        if not value:
            return True
        entered = _parse_date(value)
        limit = _reference_date(reference)
        return entered is not None and limit is not None and entered <= limit

    return custom(is_before, message or "Date must be in the past")
