"""Word-boundary aware identifier case conversion."""

from __future__ import annotations

from collections.abc import Iterator
from enum import Enum, auto

__all__ = ["to_snake_case", "to_lower_camel_case", "to_upper_camel_case"]


class _Mode(Enum):
    BOUNDARY = auto()
    LOWERCASE = auto()
    UPPERCASE = auto()


def _split_segments(text: str) -> Iterator[str]:
    """Split on any run of characters that are not letters or digits."""
    segment: list[str] = []
    for char in text:
        if char.isalnum():
            segment.append(char)
        elif segment:
            yield "".join(segment)
            segment = []
    if segment:
        yield "".join(segment)


def _words(text: str) -> Iterator[str]:
    """Yield the words of ``text``, splitting on separators and case changes.

    A boundary falls between a lowercase letter and a following uppercase one
    (``fooBar``), and before the last capital of an uppercase run that is
    followed by a lowercase letter (``XMLHttp`` gives ``XML`` and ``Http``).
    Digits carry on whatever case the word had before them.
    """
    for segment in _split_segments(text):
        start = 0
        mode = _Mode.BOUNDARY
        for index, (char, following) in enumerate(zip(segment, segment[1:])):
            if char.islower():
                next_mode = _Mode.LOWERCASE
            elif char.isupper():
                next_mode = _Mode.UPPERCASE
            else:
                next_mode = mode

            if next_mode is _Mode.LOWERCASE and following.isupper():
                yield segment[start : index + 1]
                start = index + 1
                mode = _Mode.BOUNDARY
            elif mode is _Mode.UPPERCASE and char.isupper() and following.islower():
                if index > start:
                    yield segment[start:index]
                start = index
                mode = _Mode.BOUNDARY
            else:
                mode = next_mode
        yield segment[start:]


def _capitalize(word: str) -> str:
    return word[:1].upper() + word[1:].lower()


def to_snake_case(text: str) -> str:
    """Convert ``text`` to ``snake_case``."""
    return "_".join(word.lower() for word in _words(text))


def to_lower_camel_case(text: str) -> str:
    """Convert ``text`` to ``lowerCamelCase``."""
    words = list(_words(text))
    if not words:
        return ""
    first, *rest = words
    return first.lower() + "".join(_capitalize(word) for word in rest)


def to_upper_camel_case(text: str) -> str:
    """Convert ``text`` to ``UpperCamelCase``."""
    return "".join(_capitalize(word) for word in _words(text))