"""Value types for decoded STSS declarations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass
class VNumber:
    value: float

    quoted = False

    def __str__(self) -> str:
        v = self.value
        if v == int(v):
            return str(int(v))
        return str(v)


@dataclass
class VBool:
    value: bool

    quoted = False

    def __str__(self) -> str:
        return str(self.value).lower()


@dataclass
class VText:
    """String literal; rendered with quotes."""

    value: str

    quoted = True

    def __str__(self) -> str:
        return self.value


@dataclass
class VRef:
    """Namespaced reference (``Ti.UI.FILL``, ``Alloy.Globals.x``); rendered bare."""

    value: str

    quoted = False

    def __str__(self) -> str:
        return self.value


@dataclass
class VLocale:
    """Locale call such as ``L("title")``; rendered bare."""

    value: str

    quoted = False

    def __str__(self) -> str:
        return self.value


@dataclass
class VList:
    items: list["Value"] = field(default_factory=list)

    quoted = False

    def __str__(self) -> str:
        return "[" + ", ".join(str(v) for v in self.items) + "]"


@dataclass
class VDict:
    """Object value; ``unquote`` names the keys of ``body`` rendered bare."""

    body: dict[str, "Value"] = field(default_factory=dict)
    unquote: list[str] = field(default_factory=list)

    quoted = False

    def __str__(self) -> str:
        return "{" + ", ".join(f"{k}: {v}" for k, v in self.body.items()) + "}"


Value = Union[VNumber, VBool, VText, VRef, VLocale, VList, VDict]

Body = dict[str, "Value | Body"]


def to_data(value):
    """Convert a Value (or a nested Body) to plain JSON-compatible data."""
    if isinstance(value, dict):
        return {k: to_data(v) for k, v in value.items()}
    if isinstance(value, VList):
        return [to_data(v) for v in value.items]
    if isinstance(value, VDict):
        return {k: to_data(v) for k, v in value.body.items()}
    if isinstance(value, VNumber):
        v = value.value
        return int(v) if v == int(v) else v
    if isinstance(value, VBool):
        return value.value
    return value.value
