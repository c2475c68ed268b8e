"""AST extractor: compiled CSS -> rule tree (via tinycss2)."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Union

import tinycss2

from .errors import ASTParseError

logger = logging.getLogger(__name__)

# At-rules the compiler may legitimately leave behind; they carry no rules
_PASSTHROUGH_AT_RULES = {"charset", "import"}


@dataclass
class Declaration:
    property: str
    value: str


@dataclass
class RuleNode:
    selectors: list[str]
    declarations: list[Declaration] = field(default_factory=list)


@dataclass
class MediaNode:
    condition: str
    rules: list["Node"] = field(default_factory=list)


@dataclass
class CommentNode:
    text: str


Node = Union[RuleNode, MediaNode, CommentNode]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _split_selectors(prelude: list) -> list[str]:
    """Split a rule prelude on top-level commas."""
    groups: list[list] = [[]]
    for token in prelude:
        if token.type == "literal" and token.value == ",":
            groups.append([])
        else:
            groups[-1].append(token)
    return [s for s in (tinycss2.serialize(g).strip() for g in groups) if s]


def _declarations(content: list) -> list[Declaration]:
    result: list[Declaration] = []
    for item in tinycss2.parse_declaration_list(content, skip_comments=True, skip_whitespace=True):
        if item.type == "error":
            raise ASTParseError(f"Invalid declaration: {item.message}")
        if item.type != "declaration":
            continue
        value = tinycss2.serialize(item.value).strip()
        if item.important:
            value += " !important"
        result.append(Declaration(item.name, value))
    return result


def _convert(nodes: list) -> list[Node]:
    result: list[Node] = []
    for node in nodes:
        if node.type == "error":
            raise ASTParseError(f"Parsing CSS failed: {node.message} (line {node.source_line})")
        if node.type == "comment":
            result.append(CommentNode(node.value))
        elif node.type == "qualified-rule":
            result.append(RuleNode(_split_selectors(node.prelude), _declarations(node.content)))
        elif node.type == "at-rule":
            keyword = node.lower_at_keyword
            if keyword == "media" and node.content is not None:
                inner = tinycss2.parse_rule_list(node.content, skip_comments=False, skip_whitespace=True)
                result.append(MediaNode(tinycss2.serialize(node.prelude).strip(), _convert(inner)))
            elif keyword in _PASSTHROUGH_AT_RULES:
                logger.debug("ignoring @%s rule", keyword)
            else:
                raise ASTParseError(f"Unsupported at-rule: @{node.at_keyword} (line {node.source_line})")
    return result


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

def extract(css: str) -> list[Node]:
    """Parse compiled CSS into RuleNode / MediaNode / CommentNode items."""
    nodes = tinycss2.parse_stylesheet(css, skip_comments=False, skip_whitespace=True)
    return _convert(nodes)
