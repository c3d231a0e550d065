"""Domain normalization helpers."""


def normalize_name(name: str | None) -> str | None:
    """Collapse surrounding and repeated whitespace in a display name.

    Args:
        name: Raw name typed by a user.

    Returns:
        str | None: Cleaned name, or None when nothing remains.
    """
    if not name:
        return None
    cleaned = " ".join(name.split())
    return cleaned or None


def normalize_reference(reference: str | None) -> str | None:
    """Normalize an item reference (id or name) for lookups."""
    return normalize_name(reference)


__all__ = ["normalize_name", "normalize_reference"]
