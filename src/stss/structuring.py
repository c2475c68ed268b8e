"""Structuring stage: rule tree (+ side channel) -> Document.

Two passes over the extracted CSS:

1. Side-channel extraction -- the ``-stss-array<N>-(val|obj)<I>`` rules the
   encoder appended are decoded into the context's SideChannelTable and
   removed from the tree.
2. The remaining nodes are walked; property names are nested on hyphens,
   values classified, shorthands expanded and media queries flattened into
   selector suffixes.
"""

from __future__ import annotations

import logging
import re

from .context import RenderContext
from .document import Comment, Document, Entry, Rule
from .encoder import split_top_level
from .errors import ASTParseError
from .extractor import CommentNode, Declaration, MediaNode, Node, RuleNode
from .shorthand import ShorthandDictionary
from .values import Body, Value, VBool, VDict, VList, VLocale, VNumber, VRef, VText

logger = logging.getLogger(__name__)

_SIDE_CHANNEL_RE = re.compile(r"^-stss-array(\d+)-(val|obj)(\d+)$")
_PLACEHOLDER_RE = re.compile(r"^--stss-array(\d+)\(([\w\s-]*)\)$")
_ELEMENT_RE = re.compile(r"stss-array(\d+)-(val|obj)(\d+)")

_NUMBER_RE = re.compile(r"^-?(?:\d+\.?\d*|\.\d+)$")
_BOOL_RE = re.compile(r"^(?:true|false)$", re.I)
_LOCALE_RE = re.compile(r"""^L\((["']).*\1\)$""", re.S)
_REFERENCE_RE = re.compile(r"""^(["']?)([A-Za-z_]\w*(?:\.\w+)+)\1$""")
_QUOTED_RE = re.compile(r"""^(["'])((?:\\.|(?!\1).)*)\1$""", re.S)

_BRACKET_RE = re.compile(r"\[([^\]]*)\]")
_PARENS_RE = re.compile(r"^\((.*)\)$", re.S)
_COLON_RE = re.compile(r"\s*:\s*")
_AND_RE = re.compile(r"\s+and\s+", re.I)


# ---------------------------------------------------------------------------
# Value classification
# ---------------------------------------------------------------------------

def _resolve_placeholder(m: re.Match, context: RenderContext) -> VList:
    items: list[Value] = []
    for nr, _, index in _ELEMENT_RE.findall(m.group(2)):
        key = (int(nr), int(index))
        if key not in context.side_channel:
            raise ASTParseError(f"Unresolved array element stss-array{nr}-{index}")
        items.append(context.side_channel.get(*key))
    return VList(items)


def classify(value: str, name: str, context: RenderContext) -> Value:
    """Turn a raw declaration value into a typed Value.

    Precedence: array placeholder, number, boolean, locale call, value
    shorthand, dotted reference, string literal.
    """
    value = value.strip()

    m = _PLACEHOLDER_RE.match(value)
    if m:
        return _resolve_placeholder(m, context)

    if _NUMBER_RE.match(value):
        return VNumber(float(value))

    if _BOOL_RE.match(value):
        return VBool(value.lower() == "true")

    if _LOCALE_RE.match(value):
        return VLocale(value)

    expanded = context.shorthand.expand_value(name, value)
    if expanded is not None:
        return VRef(expanded)

    m = _REFERENCE_RE.match(value)
    # Android themes (Theme.AppCompat...) stay strings
    if m and not m.group(2).startswith("Theme."):
        return VRef(m.group(2))

    m = _QUOTED_RE.match(value)
    if m:
        return VText(m.group(2))
    return VText(value)


# ---------------------------------------------------------------------------
# Declarations / bodies
# ---------------------------------------------------------------------------

def add_declaration(decl: Declaration, body: Body, context: RenderContext) -> None:
    """Nest *decl* into *body*; a later write to the same path replaces it."""
    segments = [s for s in decl.property.split("-") if s]
    if not segments:
        return
    name = segments[0]
    target = body
    for segment in segments[1:]:
        node = target.get(name)
        if not isinstance(node, dict):
            node = target[name] = {}
        target = node
        name = context.shorthand.expand_name(name, segment)

    target[name] = classify(decl.value, name, context)


def _has_bare(value: Value | Body) -> bool:
    if isinstance(value, dict):
        return any(_has_bare(v) for v in value.values())
    return not value.quoted


def structure_body(declarations: list[Declaration], context: RenderContext) -> tuple[Body, list[str]]:
    """Returns the body and its top-level keys holding any unquoted value."""
    body: Body = {}
    for decl in declarations:
        add_declaration(decl, body, context)
    unquote = [key for key, value in body.items() if _has_bare(value)]
    return body, unquote


# ---------------------------------------------------------------------------
# Selectors and conditions
# ---------------------------------------------------------------------------

def normalize_condition(query: str, shorthand: ShorthandDictionary) -> str:
    """``(platform: ios)`` -> ``platform=ios``; bare names go through ``queries``."""
    query = query.strip()
    m = _PARENS_RE.match(query)
    if m:
        query = m.group(1).strip()
    query = _COLON_RE.sub("=", query, count=1)

    if "=" not in query:
        return shorthand.expand_query(query)

    key, value = query.split("=", 1)
    value = value.strip()
    m = _QUOTED_RE.match(value)
    if m:
        value = m.group(2)
    return f"{key.strip()}={shorthand.expand_query_value(value)}"


def parse_selector(selector: str, shorthand: ShorthandDictionary) -> str:
    """Normalize the bracket conditions embedded in a selector."""
    def replace(m: re.Match) -> str:
        parts = m.group(1).split()
        return "".join(f"[{normalize_condition(p, shorthand)}]" for p in parts)
    return _BRACKET_RE.sub(replace, selector)


def condition_groups(media: str, shorthand: ShorthandDictionary) -> list[str]:
    """Media expression -> one ``[c1][c2]`` suffix per OR group."""
    groups: list[str] = []
    for group in split_top_level(media):
        parts = [normalize_condition(p, shorthand) for p in _AND_RE.split(group) if p.strip()]
        groups.append("".join(f"[{p}]" for p in parts))
    return groups


# ---------------------------------------------------------------------------
# Node handlers
# ---------------------------------------------------------------------------

def _structure_rule(node: RuleNode, context: RenderContext) -> list[Rule]:
    body, unquote = structure_body(node.declarations, context)
    template = Rule(selector="", body=body, unquote=unquote)
    selectors = [parse_selector(s, context.shorthand) for s in node.selectors]
    if len(selectors) == 1:
        template.selector = selectors[0]
        return [template]
    # arrays are decoded in place, so every selector gets its own copy
    return [template.copy(selector=s) for s in selectors]


def _structure_media(node: MediaNode, context: RenderContext) -> list[Rule]:
    # Valid CSS nests media one level deep at most
    nested = [e for e in walk(node.rules, context) if isinstance(e, Rule)]
    groups = condition_groups(node.condition, context.shorthand)
    rules: list[Rule] = []
    for rule in nested:
        for suffix in groups:
            rules.append(rule.copy(selector=rule.selector + suffix))
    return rules


def walk(nodes: list[Node], context: RenderContext) -> list[Entry]:
    entries: list[Entry] = []
    for node in nodes:
        if isinstance(node, CommentNode):
            entries.append(Comment(node.text))
        elif isinstance(node, RuleNode):
            entries.extend(_structure_rule(node, context))
        elif isinstance(node, MediaNode):
            entries.extend(_structure_media(node, context))
    return entries


# ---------------------------------------------------------------------------
# Side channel
# ---------------------------------------------------------------------------

def extract_side_channel(nodes: list[Node], context: RenderContext) -> None:
    """Move side-channel rules out of *nodes* into ``context.side_channel``."""
    found: list[tuple[int, int, str, RuleNode]] = []
    # Backward, so indices not yet visited stay valid while deleting
    for i in range(len(nodes) - 1, -1, -1):
        node = nodes[i]
        if not isinstance(node, RuleNode) or not node.selectors:
            continue
        m = _SIDE_CHANNEL_RE.match(node.selectors[0])
        if m:
            found.append((int(m.group(1)), int(m.group(3)), m.group(2), node))
            del nodes[i]

    # Nested arrays always carry a higher number than the array holding them
    for nr, index, kind, node in sorted(found, key=lambda f: (f[0], f[1]), reverse=True):
        body, unquote = structure_body(node.declarations, context)
        if kind == "val":
            value = body.get("text", VText(""))
        else:
            value = VDict(body, unquote)
        context.side_channel.put(nr, index, value)
    if found:
        logger.debug("decoded %d side-channel elements", len(found))


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def structure(nodes: list[Node], context: RenderContext) -> Document:
    """Build the Document for one conversion."""
    nodes = list(nodes)
    extract_side_channel(nodes, context)
    return Document(walk(nodes, context))
