import math

from utils.errors import ValidationError


def _missing(value):
    return value is None or str(value).strip() == ""


def require_int(data, field, minimum=None, maximum=None):
    value = data.get(field)
    if _missing(value):
        raise ValidationError(f"{field} required")
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field}")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field}")
    if isinstance(value, float) and value != number:
        raise ValidationError(f"Invalid {field}")
    if minimum is not None and number < minimum:
        raise ValidationError(f"{field} must be at least {minimum}")
    if maximum is not None and number > maximum:
        raise ValidationError(f"{field} must be at most {maximum}")
    return number


def optional_int(data, field, minimum=None, maximum=None, default=None):
    if _missing(data.get(field)):
        return default
    return require_int(data, field, minimum=minimum, maximum=maximum)


def require_number(data, field, minimum=None, maximum=None):
    value = data.get(field)
    if _missing(value):
        raise ValidationError(f"{field} required")
    if isinstance(value, bool):
        raise ValidationError(f"Invalid {field}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field}")
    if not math.isfinite(number):
        raise ValidationError(f"Invalid {field}")
    if minimum is not None and number < minimum:
        raise ValidationError(f"{field} must be at least {minimum}")
    if maximum is not None and number > maximum:
        raise ValidationError(f"{field} must be at most {maximum}")
    return number


def require_str(data, field, max_length=None):
    value = data.get(field)
    if _missing(value):
        raise ValidationError(f"{field} required")
    value = str(value).strip()
    if max_length is not None and len(value) > max_length:
        raise ValidationError(f"{field} must be at most {max_length} characters")
    return value
