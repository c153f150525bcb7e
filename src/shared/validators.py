"""Validation utilities for the expense tracker application."""

import math
from typing import Any, Dict, Iterable, List, Optional
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from .exceptions import ValidationError
from .formatting import format_currency


# Expense categories
VALID_CATEGORIES = [
    "Food",
    "Travel",
    "Entertainment",
    "Office",
    "Healthcare",
    "Education",
    "Shopping",
    "Utilities",
    "Other"
]

DEFAULT_CATEGORY = "Other"

MAX_AMOUNT = Decimal('1000000')
MAX_VENDOR_LENGTH = 100
MAX_DESCRIPTION_LENGTH = 500


def parse_amount(value: Any) -> Optional[float]:
    """
    Coerce a stored amount to a float without raising.

    Args:
        value: Raw amount (number, Decimal or numeric string)

    Returns:
        The amount as float, or None if it is absent or not a finite number
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None

    try:
        amount = float(value)
    except (TypeError, ValueError, InvalidOperation):
        return None

    if math.isnan(amount) or math.isinf(amount):
        return None

    return amount


def validate_amount(amount: Any) -> Decimal:
    """
    Validate monetary amount.

    Args:
        amount: Amount to validate

    Returns:
        Validated amount as Decimal

    Raises:
        ValidationError: If amount is invalid
    """
    if amount is None or amount == '':
        raise ValidationError("Amount is required")

    try:
        decimal_amount = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise ValidationError("Invalid amount format")

    if not decimal_amount.is_finite():
        raise ValidationError("Invalid amount format")

    if decimal_amount <= 0:
        raise ValidationError("Amount must be greater than 0")

    if decimal_amount > MAX_AMOUNT:
        raise ValidationError(f"Amount cannot exceed {format_currency(MAX_AMOUNT)}")

    # Ensure at most 2 decimal places
    if decimal_amount.as_tuple().exponent < -2:
        raise ValidationError("Amount can have at most 2 decimal places")

    return decimal_amount


def validate_date(date_value: Any, today: Optional[date] = None) -> str:
    """
    Validate an expense date (ISO 8601: YYYY-MM-DD) that is not in the future.

    Args:
        date_value: Date string or date to validate
        today: Reference date (default: current UTC date)

    Returns:
        Validated date string

    Raises:
        ValidationError: If date is invalid or in the future
    """
    if not date_value:
        raise ValidationError("Date is required")

    if isinstance(date_value, datetime):
        parsed = date_value.date()
    elif isinstance(date_value, date):
        parsed = date_value
    else:
        try:
            parsed = datetime.strptime(str(date_value), '%Y-%m-%d').date()
        except ValueError:
            raise ValidationError("Invalid date format. Use YYYY-MM-DD")

    today = today or datetime.utcnow().date()
    if parsed > today:
        raise ValidationError("Date cannot be in the future")

    return parsed.isoformat()


def validate_category(category: str) -> str:
    """
    Validate expense category.

    Args:
        category: Category to validate

    Returns:
        Validated category

    Raises:
        ValidationError: If category is invalid
    """
    if not category:
        raise ValidationError("Category is required")

    if category not in VALID_CATEGORIES:
        raise ValidationError(
            f"Invalid category. Must be one of: {', '.join(VALID_CATEGORIES)}"
        )

    return category


def validate_required_fields(data: Dict[str, Any], required_fields: List[str]) -> None:
    """
    Validate that required fields are present in data.

    Args:
        data: Data dictionary to validate
        required_fields: List of required field names

    Raises:
        ValidationError: If any required field is missing
    """
    missing_fields = [field for field in required_fields if field not in data or data[field] is None]

    if missing_fields:
        raise ValidationError(
            f"Missing required fields: {', '.join(missing_fields)}"
        )


def sanitize_string(value: str, max_length: Optional[int] = None) -> str:
    """
    Sanitize string input.

    Args:
        value: String to sanitize
        max_length: Optional maximum length

    Returns:
        Sanitized string

    Raises:
        ValidationError: If string is invalid
    """
    if not isinstance(value, str):
        raise ValidationError("Value must be a string")

    # Remove leading/trailing whitespace
    value = value.strip()

    if max_length and len(value) > max_length:
        raise ValidationError(f"Value exceeds maximum length of {max_length}")

    return value


def validate_expense_data(
    data: Dict[str, Any],
    categories: Iterable[Any] = (),
    today: Optional[date] = None
) -> Dict[str, str]:
    """
    Run the semantic checks for a new expense and collect field errors.

    The category-limit check compares the single amount against the
    category's configured monthly limit and replaces any earlier amount error.

    Args:
        data: Raw expense fields
        categories: Category configs exposing ``name`` and ``monthly_limit``
        today: Reference date for the future-date check

    Returns:
        Mapping of field name to error message; empty when the data is valid
    """
    errors: Dict[str, str] = {}

    try:
        validate_amount(data.get('amount'))
    except ValidationError as e:
        errors['amount'] = e.message

    try:
        validate_category(data.get('category'))
    except ValidationError as e:
        errors['category'] = e.message

    try:
        validate_date(data.get('date'), today=today)
    except ValidationError as e:
        errors['date'] = e.message

    description = data.get('description')
    if description:
        try:
            sanitize_string(description, max_length=MAX_DESCRIPTION_LENGTH)
        except ValidationError:
            errors['description'] = (
                f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters"
            )

    vendor = data.get('vendor')
    if vendor:
        try:
            sanitize_string(vendor, max_length=MAX_VENDOR_LENGTH)
        except ValidationError:
            errors['vendor'] = f"Vendor name cannot exceed {MAX_VENDOR_LENGTH} characters"

    # Category limit check
    amount = parse_amount(data.get('amount'))
    for category in categories:
        if category.name != data.get('category'):
            continue
        if category.monthly_limit and amount is not None and amount > category.monthly_limit:
            errors['amount'] = (
                f"Amount exceeds monthly limit of {format_currency(category.monthly_limit)}"
            )
        break

    return errors
