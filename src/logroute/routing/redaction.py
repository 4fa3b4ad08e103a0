"""Routing – SensitiveFieldsRedactor.

Formatters run extra fields through a redactor before rendering; the record
itself is never touched.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

DEFAULT_SENSITIVE_FIELDS: frozenset[str] = frozenset({
    "password", "passwd", "secret", "token", "api_key", "apikey",
    "authorization", "credit_card", "card_number", "cvv", "ssn",
})


class SensitiveFieldsRedactor:
    """Replace values of sensitive keys with ``[REDACTED]``."""

    REDACTED = "[REDACTED]"

    def __init__(self, sensitive_fields: frozenset[str] | None = None) -> None:
        fields = sensitive_fields or DEFAULT_SENSITIVE_FIELDS
        self._fields = frozenset(f.lower() for f in fields)

    @property
    def sensitive_fields(self) -> frozenset[str]:
        return self._fields

    def redact(self, data: Mapping[str, Any]) -> dict[str, Any]:
        """Return a redacted copy of *data*, recursing into nested mappings."""
        result: dict[str, Any] = {}
        for k, v in data.items():
            if isinstance(k, str) and k.lower() in self._fields:
                result[k] = self.REDACTED
            elif isinstance(v, Mapping):
                result[k] = self.redact(v)
            else:
                result[k] = v
        return result


__all__ = ["DEFAULT_SENSITIVE_FIELDS", "SensitiveFieldsRedactor"]
