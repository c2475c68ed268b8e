"""Encoder: STSS -> SCSS the compiler accepts.

The compiler only understands flat ``property: value`` declarations, so
array values are smuggled through it as placeholder calls plus side-channel
rules appended to the document::

    shadow: [1, red];

becomes::

    shadow: --stss-array0(stss-array0-val0 stss-array0-val1);
    ...
    -stss-array0-val0{ text: 1; }
    -stss-array0-val1{ text: red; }

The structuring stage consumes the side-channel rules again.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from .context import RenderContext

logger = logging.getLogger(__name__)

ARRAY_PREFIX = "stss-array"

# name: value; the value ends at ; } or newline, so selectors (a:hover {) never match
_DECL_RE = re.compile(
    r"(?P<pre>(?:^|[{;])[ \t]*)"
    r"(?P<name>[$\w-]+)"
    r"(?P<sep>[ \t]*:[ \t]*)"
    r"(?P<value>[^;{}\n]*)"
    r"(?=[ \t]*(?:[;}\n]|$))",
    re.M,
)
_HYPHEN_LOWER_RE = re.compile(r"-([a-z])")

# [c1 c2] inside a selector (a { follows before any ; or })
_SELECTOR_BRACKET_RE = re.compile(r"\[([^\[\]{};\n]+)\](?=[^{};]*\{)")
_CONDITION_SEP_RE = re.compile(r"\s*[:=]\s*")

_QUOTED = r"""("(?:\\.|[^"\\\n])*"|'(?:\\.|[^'\\\n])*')"""
_DOTTED_RE = re.compile(_QUOTED + r"|(?<![\w.#$/:-])(\w[\w-]*(?:\.[\w-]+)+%?)(?![\w.(/-])")
_UNIT_NUMERAL_RE = re.compile(r"^\d*\.?\d+(?:[a-zA-Z]+|%)?$")
_PLAIN_WORDS_RE = re.compile(r"^[\w.%\s-]+$")
_HEX_RE = re.compile(_QUOTED + r"|(?<![\w\"'])(#[0-9a-fA-F]{3,8})\b")

_ARRAY_DECL_RE = re.compile(r"(?:^|(?<=[{;]))[ \t]*[A-Za-z_-][\w-]*[ \t]*:[ \t]*(?=\[)", re.M)
_OPENERS = {"[": "]", "{": "}", "(": ")"}


# ---------------------------------------------------------------------------
# Declaration helpers
# ---------------------------------------------------------------------------

def _map_declarations(text: str, fn: Callable[[str, str], tuple[str, str]]) -> str:
    """Rewrite every ``name: value`` declaration through *fn(name, value)*."""
    def replace(m: re.Match) -> str:
        name, value = fn(m.group("name"), m.group("value"))
        return m.group("pre") + name + m.group("sep") + value
    return _DECL_RE.sub(replace, text)


def camelize(name: str) -> str:
    """``background-color`` -> ``backgroundColor``; unhyphenated names pass unchanged."""
    return _HYPHEN_LOWER_RE.sub(lambda m: m.group(1).upper(), name)


def _normalize_name(name: str, value: str) -> tuple[str, str]:
    if name.startswith("$"):
        return name, value
    return camelize(name), value


def _quote_dotted(value: str) -> str:
    def replace(m: re.Match) -> str:
        token = m.group(2)
        if token is None or _UNIT_NUMERAL_RE.match(token):
            return m.group(0)
        return f'"{token}"'
    quoted = _DOTTED_RE.sub(replace, value)
    text = value.strip()
    # several plain words: one literal, not one per dotted word
    if quoted != value and _PLAIN_WORDS_RE.match(text) and len(text.split()) > 1:
        return value.replace(text, f'"{text}"', 1)
    return quoted


def _quote_hex(value: str) -> str:
    def replace(m: re.Match) -> str:
        if m.group(2) is None:
            return m.group(0)
        return f'"{m.group(2)}"'
    return _HEX_RE.sub(replace, value)


def _split_conditions(m: re.Match) -> str:
    parts = _CONDITION_SEP_RE.sub("=", m.group(1)).split()
    return "".join(f"[{p}]" for p in parts)


# ---------------------------------------------------------------------------
# Array encoding
# ---------------------------------------------------------------------------

def _match_close(text: str, start: int) -> int:
    """Index just past the bracket matching ``text[start]``, or -1."""
    stack: list[str] = []
    i = start
    quote: str | None = None
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 1
            elif ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch in _OPENERS:
            stack.append(_OPENERS[ch])
        elif stack and ch == stack[-1]:
            stack.pop()
            if not stack:
                return i + 1
        i += 1
    return -1


def split_top_level(text: str) -> list[str]:
    """Split on commas that are not nested in brackets or quotes."""
    parts: list[str] = []
    depth = 0
    quote: str | None = None
    current: list[str] = []
    i = 0
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\" and i + 1 < len(text):
                current.append(ch)
                i += 1
                ch = text[i]
            elif ch == quote:
                quote = None
        elif ch in "\"'":
            quote = ch
        elif ch in "[{(":
            depth += 1
        elif ch in "]})":
            depth -= 1
        elif ch == "," and depth == 0:
            parts.append("".join(current))
            current = []
            i += 1
            continue
        current.append(ch)
        i += 1
    parts.append("".join(current))
    return [p.strip() for p in parts if p.strip()]


def _encode_array(literal: str, context: RenderContext, side_rules: dict) -> str:
    """Replace one ``[...]`` literal by its placeholder call."""
    nr = context.next_array_nr()
    tokens: list[str] = []
    for i, element in enumerate(split_top_level(literal[1:-1])):
        if element.startswith("{") and element.endswith("}"):
            name = f"{ARRAY_PREFIX}{nr}-obj{i}"
            content = encode_arrays(element[1:-1].strip(), context, side_rules)
            side_rules[(nr, i)] = f"-{name}{{ {content} }}"
        else:
            name = f"{ARRAY_PREFIX}{nr}-val{i}"
            if element.startswith("["):
                element = _encode_array(element, context, side_rules)
            else:
                element = _quote_hex(_quote_dotted(element))
            side_rules[(nr, i)] = f"-{name}{{ text: {element}; }}"
        tokens.append(name)
    return f"--{ARRAY_PREFIX}{nr}(" + " ".join(tokens) + ")"


def encode_arrays(text: str, context: RenderContext, side_rules: dict) -> str:
    """Encode every array-valued declaration in *text*.

    Side-channel rules are collected in *side_rules* keyed by
    ``(array_nr, element_nr)``.
    """
    out: list[str] = []
    pos = 0
    while True:
        m = _ARRAY_DECL_RE.search(text, pos)
        if m is None:
            break
        start = m.end()
        end = _match_close(text, start)
        if end < 0:
            # unbalanced; leave it for the compiler to report
            break
        out.append(text[pos:start])
        out.append(_encode_array(text[start:end], context, side_rules))
        pos = end
    out.append(text[pos:])
    return "".join(out)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def encode(stss: str, context: RenderContext) -> str:
    """Convert import-resolved STSS into SCSS."""
    scss = _map_declarations(stss, _normalize_name)
    scss = _SELECTOR_BRACKET_RE.sub(_split_conditions, scss)
    scss = _map_declarations(scss, lambda n, v: (n, _quote_dotted(v)))
    scss = _map_declarations(scss, lambda n, v: (n, _quote_hex(v)))

    side_rules: dict[tuple[int, int], str] = {}
    scss = encode_arrays(scss, context, side_rules)
    if side_rules:
        logger.debug("encoded %d array elements", len(side_rules))
        scss = scss.rstrip("\n") + "\n\n" + "\n".join(side_rules[k] for k in sorted(side_rules)) + "\n"
    return scss
