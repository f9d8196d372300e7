from __future__ import annotations


def preview(text: str | None, limit: int = 50, suffix: str = "…") -> str:
    """
    Shortens text for log lines.
    """
    if not text:
        return ""
    if len(text) <= limit:
        return text
    return text[:limit] + suffix
