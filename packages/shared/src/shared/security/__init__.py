from shared.security.sanitize import clean_free_text, sanitize_html_text

__all__ = [
    "clean_free_text",
    "sanitize_html_text",
]
