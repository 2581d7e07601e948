import re

from .exceptions import ValidationError

CAMEROON_PREFIX = "+237"
_SEPARATORS = re.compile(r"[\s\-\.\(\)]")
_NINE_DIGITS = re.compile(r"[0-9]{9}")


def normalize_cameroon_phone(raw):
    """
    Normalize a Cameroon mobile number to +237XXXXXXXXX.

    Accepts local (676858216, 0676858216) and international
    (237..., +237..., 00237...) forms, with spaces, dashes, dots or
    parentheses anywhere in the input.
    """
    if raw is None or not str(raw).strip():
        raise ValidationError("Phone number is required")

    digits = _SEPARATORS.sub("", str(raw).strip())

    if digits.startswith("00237"):
        digits = digits[5:]
    elif digits.startswith("+237"):
        digits = digits[4:]
    elif digits.startswith("237") and len(digits) == 12:
        digits = digits[3:]
    elif digits.startswith("0") and len(digits) == 10:
        digits = digits[1:]

    if not _NINE_DIGITS.fullmatch(digits):
        raise ValidationError("Phone number must be 9 digits (e.g., 676858216)")
    if not digits.startswith("6"):
        raise ValidationError("Cameroon mobile numbers must start with 6")

    return f"{CAMEROON_PREFIX}{digits}"
