"""Dotted path helpers used to label where in the input an error occurred."""

SEPARATOR = "."


def extend_path(path: str, segment) -> str:
    """Append a segment to a dotted path.

    Segments are not escaped, so a key containing ``.`` produces a path
    that cannot be split back unambiguously.

    Examples:
        >>> extend_path("", "name")
        'name'
        >>> extend_path("address", "city")
        'address.city'
        >>> extend_path("tags", 0)
        'tags.0'
    """
    if path == "":
        return str(segment)
    return f"{path}{SEPARATOR}{segment}"


def split_path(path: str) -> list:
    if not path:
        return []
    return path.split(SEPARATOR)


__all__ = [
    "SEPARATOR",
    "extend_path",
    "split_path",
]
