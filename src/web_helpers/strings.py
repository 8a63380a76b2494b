"""String helpers."""


def ucfirst(text: str) -> str:
    """Upper-case the first character, leaving the rest untouched."""
    text = str(text)
    return text[:1].upper() + text[1:]


def lcfirst(text: str) -> str:
    """Lower-case the first character, leaving the rest untouched."""
    text = str(text)
    return text[:1].lower() + text[1:]


def truncate(text: str, length: int, suffix: str = "...") -> str:
    """
    Truncate text to a number of characters.

    Args:
        text: Source text
        length: Maximal number of characters kept from the source
        suffix: Appended when the text was cut

    Returns:
        str: Text of at most `length` characters plus suffix

    Examples:
        >>> truncate("Чайник электрический", 6)
        'Чайник...'
    """
    text = str(text)
    if len(text) <= length:
        return text
    return text[:length].rstrip() + suffix


__all__ = ["ucfirst", "lcfirst", "truncate"]
