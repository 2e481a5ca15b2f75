"""
Input validation and sanitization utilities
"""
from decimal import Decimal, InvalidOperation


MAX_TARGET_LENGTH = 200
MAX_COMMENT_LENGTH = 2000
# Largest single top-up accepted by the Numeric(12, 4) balance column
MAX_AMOUNT = Decimal('99999999.9999')


def validate_impression_limit(value, minimum):
    """
    Validate the number of impressions to purchase
    Returns: (is_valid, int value or error_message)
    """
    error = f"impressionLimit (minimum {minimum}) required"
    if value is None or isinstance(value, bool):
        return False, error

    if isinstance(value, float):
        if not value.is_integer():
            return False, "impressionLimit must be a whole number"
        value = int(value)

    try:
        limit = int(value)
    except (ValueError, TypeError):
        return False, error

    if limit < minimum:
        return False, error

    return True, limit


def validate_amount(value):
    """
    Validate a strictly positive money amount
    Returns: (is_valid, Decimal amount or error_message)
    """
    if value is None or isinstance(value, bool):
        return False, "Amount must be positive"

    try:
        # str() so floats like 10.1 keep their printed value
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        return False, "Amount must be a number"

    if not amount.is_finite() or amount <= 0:
        return False, "Amount must be positive"

    if amount > MAX_AMOUNT:
        return False, f"Amount too large (max {MAX_AMOUNT})"

    return True, amount


def clean_target(value, field_name="Target"):
    """
    Normalize an optional audience targeting value
    Blank strings mean "no targeting" and become None
    Returns: (is_valid, value or error_message)
    """
    if value is None:
        return True, None

    value_str = str(value).strip()
    if not value_str:
        return True, None

    if len(value_str) > MAX_TARGET_LENGTH:
        return False, f"{field_name} too long (max {MAX_TARGET_LENGTH} characters)"

    return True, value_str


def validate_comment_body(body):
    """
    Validate public comment text
    Returns: (is_valid, stripped body or error_message)
    """
    if not body:
        return False, "Comment is required"

    body_str = str(body).strip()

    if len(body_str) == 0:
        return False, "Comment cannot be empty"

    if len(body_str) > MAX_COMMENT_LENGTH:
        return False, f"Comment too long (max {MAX_COMMENT_LENGTH} characters)"

    return True, body_str


def sanitize_sql_like_pattern(pattern):
    """
    Sanitize a SQL LIKE pattern to prevent SQL injection
    """
    if not pattern:
        return ""

    # Escape special SQL LIKE characters
    sanitized = pattern.replace('\\', '\\\\').replace('%', '\\%').replace('_', '\\_')
    return sanitized
