import re
from typing import Any, Dict, Iterable, Optional

SENSITIVE_KEYS = {"password", "token", "access", "refresh", "pickup_code"}

_DIGITS = re.compile(r"^\+?\d{7,15}$")


def mask_value(value: Any) -> Any:
    if not isinstance(value, str):
        return value
    if "@" in value:  # email
        name, _, domain = value.partition("@")
        return (name[:2] + "***@" + domain) if name else "***@" + domain
    if _DIGITS.match(value):  # phone number
        return "*" * (len(value) - 2) + value[-2:]
    if len(value) > 12:
        return value[:4] + "..." + value[-4:]
    return "***"


def sanitize_payload(payload: Dict, allowed_keys: Optional[Iterable[str]] = None) -> Dict:
    """Return a copy of payload safe for logs.

    With ``allowed_keys`` only those keys are kept (masked). Without it every key
    is kept, secrets are replaced and contact details are masked.
    """
    result = {}
    if allowed_keys is not None:
        for key in allowed_keys:
            if key in payload:
                result[key] = mask_value(payload[key])
        return result

    for key, value in payload.items():
        if key in SENSITIVE_KEYS:
            result[key] = "[REDACTED]"
        elif key in ("email", "phone_number", "alternate_phone", "whatsapp_number"):
            result[key] = mask_value(value)
        else:
            result[key] = value
    return result
