from __future__ import annotations

import html
import re

_CONTROL_CHARS = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]")


def clean_free_text(value: str, max_length: int | None = 200) -> str:
    """Trim, collapse inner whitespace and drop control characters from form text.

    ``max_length=None`` keeps the full cleaned text.
    """
    cleaned = " ".join(_CONTROL_CHARS.sub("", value).split())
    if max_length is None:
        return cleaned
    return cleaned[:max_length]


def sanitize_html_text(value: str) -> str:
    return html.escape(value, quote=True)
