"""Import resolver: inlines ``@import``-ed STSS files before encoding."""

from __future__ import annotations

import logging
import os
import re

from .errors import CyclicImportError, ImportNotFoundError, InputError

logger = logging.getLogger(__name__)

EXTENSION = ".stss"

_IMPORT_RE = re.compile(r"""@import\s+((?:(["'])[^"'\n]*\2[ \t]*(?:,\s*)?)+);?""")
_NAME_RE = re.compile(r"""(["'])([^"'\n]*)\1""")


def is_importable(name: str) -> bool:
    """Only extension-less names and ``.stss`` files are inlined."""
    if "://" in name:
        return False
    ext = os.path.splitext(name)[1]
    return ext == "" or ext == EXTENSION


def _candidates(name: str) -> list[str]:
    has_ext = os.path.splitext(name)[1] == EXTENSION
    names = [name] if has_ext else [name, name + EXTENSION]
    # SCSS-style partials: "_name.stss"
    head, tail = os.path.split(name)
    if not tail.startswith("_"):
        partial = os.path.join(head, "_" + tail)
        names.append(partial if has_ext else partial + EXTENSION)
    return names


def find_import(name: str, search_paths: list[str]) -> str | None:
    """Return the first existing file for *name* on *search_paths*."""
    for directory in search_paths:
        for candidate in _candidates(name):
            path = os.path.join(directory, candidate)
            if os.path.isfile(path):
                return path
    return None


def resolve_imports(
    text: str,
    filename: str | None = None,
    include_paths: list[str] | tuple[str, ...] = (),
    _chain: tuple[str, ...] = (),
) -> str:
    """Recursively replace ``@import "a", "b";`` statements by file contents.

    The directory of *filename* is searched first, then *include_paths* in
    order.  Non-STSS imports are left in place for the compiler.
    """
    search_paths = list(include_paths)
    if filename:
        search_paths.insert(0, os.path.dirname(os.path.abspath(filename)))
        _chain = _chain + (os.path.realpath(filename),)

    def replace(match: re.Match) -> str:
        kept: list[str] = []
        parts: list[str] = []
        for _, name in _NAME_RE.findall(match.group(1)):
            if not is_importable(name):
                kept.append(name)
                continue
            path = find_import(name, search_paths)
            if path is None:
                line = text.count("\n", 0, match.start()) + 1
                line_text = text.splitlines()[line - 1].strip()
                raise ImportNotFoundError(name, line, line_text)
            real = os.path.realpath(path)
            if real in _chain:
                raise CyclicImportError(list(_chain) + [real])
            logger.debug("importing %s", path)
            try:
                with open(path, encoding="utf-8") as fh:
                    content = fh.read()
            except UnicodeDecodeError as exc:
                raise InputError(f"Imported file is not valid UTF-8: {path}") from exc
            parts.append(resolve_imports(content, path, search_paths, _chain) + "\n")
        if kept:
            parts.append("@import " + ", ".join(f'"{n}"' for n in kept) + ";\n")
        return "".join(parts)

    return _IMPORT_RE.sub(replace, text)
