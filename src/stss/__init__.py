"""STSS: Sass-like stylesheets compiled to Titanium Alloy TSS."""

from .context import RenderContext, SideChannelTable
from .document import Comment, Document, Rule
from .errors import (
    ASTParseError,
    CompileError,
    CyclicImportError,
    ImportNotFoundError,
    InputError,
    ShorthandFileInvalidError,
    ShorthandFileMissingError,
    STSSError,
)
from .render import STAGES, RenderOptions, convert, render, render_many
from .shorthand import ShorthandDictionary
from .values import Value, VBool, VDict, VList, VLocale, VNumber, VRef, VText

__version__ = "0.3.0"

__all__ = [
    "convert",
    "render",
    "render_many",
    "RenderOptions",
    "RenderContext",
    "SideChannelTable",
    "STAGES",
    "Document",
    "Rule",
    "Comment",
    "ShorthandDictionary",
    "Value",
    "VBool",
    "VDict",
    "VList",
    "VLocale",
    "VNumber",
    "VRef",
    "VText",
    "STSSError",
    "InputError",
    "ImportNotFoundError",
    "CyclicImportError",
    "ShorthandFileInvalidError",
    "ShorthandFileMissingError",
    "CompileError",
    "ASTParseError",
]
