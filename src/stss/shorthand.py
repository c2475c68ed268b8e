"""Shorthand dictionary: built-in table merged with an optional user table."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from importlib import resources

from .errors import ShorthandFileInvalidError, ShorthandFileMissingError

logger = logging.getLogger(__name__)

_SECTIONS = ("queries", "queryValues", "propertyNames", "propertyValues")


def _normalize(table: dict | None) -> dict:
    """Make sure every section exists (missing sections become empty)."""
    table = dict(table or {})
    for section in _SECTIONS:
        table.setdefault(section, {})
    return table


def _load_builtin() -> dict:
    text = resources.files("stss").joinpath("shorthand.json").read_text(encoding="utf-8")
    return json.loads(text)


@dataclass(frozen=True)
class ShorthandDictionary:
    """Read-only lookup tables; the user table always wins over the built-in one.

    ``propertyNames`` is keyed by parent property, ``propertyValues`` by
    property name; ``queries`` and ``queryValues`` are flat.
    """

    builtin: dict = field(default_factory=dict)
    user: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "builtin", _normalize(self.builtin))
        object.__setattr__(self, "user", _normalize(self.user))

    # -- Construction ---------------------------------------------------

    @classmethod
    def load(cls, shorthand_file: str | None = None) -> ShorthandDictionary:
        """Build the dictionary from the packaged table and *shorthand_file*."""
        user: dict = {}
        if shorthand_file:
            if not os.path.exists(shorthand_file):
                raise ShorthandFileMissingError(shorthand_file)
            try:
                with open(shorthand_file, encoding="utf-8") as fh:
                    user = json.load(fh)
            except ValueError as exc:
                raise ShorthandFileInvalidError(shorthand_file, str(exc)) from exc
            if not isinstance(user, dict):
                raise ShorthandFileInvalidError(shorthand_file, "top level must be an object")
            logger.debug("loaded shorthand file %s", shorthand_file)
        return cls(builtin=_load_builtin(), user=user)

    # -- Lookups --------------------------------------------------------

    def _scoped(self, section: str, scope: str, token: str) -> str | None:
        for table in (self.user, self.builtin):
            hit = table[section].get(scope, {}).get(token)
            if hit is not None:
                return hit
        return None

    def _flat(self, section: str, token: str) -> str | None:
        for table in (self.user, self.builtin):
            hit = table[section].get(token)
            if hit is not None:
                return hit
        return None

    def expand_name(self, parent: str, name: str) -> str:
        return self._scoped("propertyNames", parent, name) or name

    def expand_value(self, name: str, value: str) -> str | None:
        """Return the expansion of *value* for property *name*, or None."""
        return self._scoped("propertyValues", name, value)

    def expand_query(self, query: str) -> str:
        return self._flat("queries", query) or query

    def expand_query_value(self, value: str) -> str:
        return self._flat("queryValues", value) or value
