"""Small text helpers shared by the value and statement modules."""

from typing import Tuple


def split_lr(source: str, sep: str) -> Tuple[str, str]:
    """
    Split source around the first occurrence of sep.

    Neither side contains sep. If sep is not found the left side is
    empty and the right side is the whole source.

    Examples:
        split_lr("var:name", ":")  -> ("var", "name")
        split_lr("var:name", "??") -> ("", "var:name")
    """
    index = source.find(sep)
    if index < 0:
        return "", source
    return source[:index], source[index + len(sep):]
