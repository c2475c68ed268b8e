"""Serializer: Document -> TSS text."""

from __future__ import annotations

import json

from .document import Comment, Document, Rule
from .values import Body, Value, VBool, VDict, VList, VLocale, VNumber


INDENT = "\t"


def _locale(text: str) -> str:
    return text.replace("\\\\", "\\").replace('\\"', '"').replace("\\'", "'")


def render_value(value: Value | Body, level: int, bare: bool = False) -> str:
    """Render one value; *bare* forces a scalar out of its quotes."""
    if isinstance(value, dict):
        return render_body(value, level)
    if isinstance(value, VDict):
        return render_body(value.body, level, value.unquote)
    if isinstance(value, VList):
        return "[" + ",".join(render_value(v, level + 1) for v in value.items) + "]"
    if isinstance(value, (VNumber, VBool)):
        return str(value)
    if isinstance(value, VLocale):
        return _locale(value.value)
    if bare or not value.quoted:
        return str(value)
    return json.dumps(value.value, ensure_ascii=False)


def render_body(body: Body, level: int = 0, unquote: list[str] | tuple[str, ...] = ()) -> str:
    """Render *body* as an object literal indented *level* tabs deep.

    Keys listed in *unquote* only affect this level, never nested bodies.
    """
    if not body:
        return "{}"
    pad = INDENT * (level + 1)
    lines = [
        f"{pad}{key}: {render_value(value, level + 1, bare=key in unquote)}"
        for key, value in body.items()
    ]
    return "{\n" + ",\n".join(lines) + "\n" + INDENT * level + "}"


def render_rule(rule: Rule) -> str:
    return f'"{rule.selector}": {render_body(rule.body, 0, rule.unquote)},\n'


def serialize(document: Document) -> str:
    """Render every entry of *document*; a single trailing ``,\\n`` is trimmed."""
    parts: list[str] = []
    for entry in document:
        if isinstance(entry, Comment):
            parts.append(f"/*{entry.text}*/\n")
        else:
            parts.append(render_rule(entry))
    tss = "".join(parts)
    if tss.endswith(",\n"):
        tss = tss[:-2]
    return tss
