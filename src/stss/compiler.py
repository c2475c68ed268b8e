"""External compiler: SCSS -> flat CSS through libsass."""

from __future__ import annotations

import re

import sass

from .errors import CompileError


# libsass echoes the offending source line prefixed by ">> "
_FRAGMENT_RE = re.compile(r"^>>\s?(.*)$", re.M)


def compile_scss(scss: str, include_paths: list[str] | tuple[str, ...] = ()) -> str:
    """Compile *scss* and return the expanded CSS text."""
    try:
        return sass.compile(
            string=scss,
            include_paths=list(include_paths),
            output_style="expanded",
        )
    except sass.CompileError as exc:
        message = str(exc).strip()
        m = _FRAGMENT_RE.search(message)
        fragment = m.group(1).strip() if m else None
        raise CompileError(message.splitlines()[0] if message else "Compilation failed",
                           fragment=fragment or None) from exc


def locate_error(error: CompileError, source: str) -> CompileError:
    """Attach the first source line containing the error's fragment."""
    if not error.fragment:
        return error
    for number, line in enumerate(source.splitlines(), 1):
        if error.fragment in line:
            error.line = number
            error.line_text = line.strip()
            break
    return error
