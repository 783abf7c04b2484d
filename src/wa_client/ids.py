"""Chat id helpers."""

from typing import Any, Iterable, List, Optional

USER_SUFFIX = "@c.us"


def to_chat_id(number: str) -> str:
    """Turn a bare phone number into a user chat id."""
    if USER_SUFFIX in number:
        return number
    return f"{number}{USER_SUFFIX}"


def to_chat_ids(numbers: Iterable[str]) -> List[str]:
    return [to_chat_id(n) for n in numbers]


def serialized_id(value: Any) -> Optional[str]:
    """
    Return the string form of a library id.

    Library ids are objects exposing ``serialized`` (or ``_serialized``);
    plain strings are returned as they are.
    """
    if value is None or isinstance(value, str):
        return value
    for attr in ("serialized", "_serialized"):
        serialized = getattr(value, attr, None)
        if serialized is not None:
            return serialized
    return str(value)
