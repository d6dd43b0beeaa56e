from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError


def require_non_empty(value: Any, message: str) -> str:
    if value is None or isinstance(value, bool):
        raise ValidationError(message)
    text = str(value).strip()
    if not text:
        raise ValidationError(message)
    return text
