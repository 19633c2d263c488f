"""Sanitizers for untrusted request input."""

import html
from typing import Any


def sanitize_field(value: Any) -> Any:
    """Trim and HTML-escape a string. Other values are returned unchanged."""
    if isinstance(value, str):
        return html.escape(value.strip(), quote=True)
    return value


def sanitize_body(body: dict[str, Any]) -> dict[str, Any]:
    """Return a sanitized copy of a request body, with the email lower-cased."""
    sanitized = {key: sanitize_field(value) for key, value in body.items()}
    if isinstance(sanitized.get("email"), str):
        sanitized["email"] = sanitized["email"].lower()
    return sanitized
