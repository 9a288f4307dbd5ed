"""Identifier helpers shared by the validator, synthesizer and renderer."""

import keyword
import re

PYTHON_KEYWORDS = frozenset(keyword.kwlist)

_WORD_BOUNDARY = re.compile(
    r"(?<=[a-z0-9])(?=[A-Z])"  # fooBar, foo2Bar
    r"|(?<=[A-Z])(?=[A-Z][a-z])"  # HTTPServer -> HTTP_Server
)


def to_snake_case(name: str) -> str:
    """Convert a type name into its lower-snake-case namespace form.

    Examples:
        "GameEvent" -> "game_event"
        "UIEvent" -> "ui_event"
        "HTTPServerError" -> "http_server_error"
        "Event2D" -> "event2_d"
        "already_snake" -> "already_snake"
    """
    parts = [p for p in name.split("_") if p]
    words: list[str] = []
    for part in parts:
        words.extend(w for w in _WORD_BOUNDARY.split(part) if w)
    return "_".join(w.lower() for w in words)


def is_valid_identifier(name: str) -> bool:
    """True if name can be used as a Python attribute / class name."""
    return name.isidentifier() and name not in PYTHON_KEYWORDS


def positional_field_name(index: int) -> str:
    """Attribute name used for the index-th field of a tuple variant."""
    return f"_{index}"
