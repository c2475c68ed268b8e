"""Exception hierarchy for STSS conversion."""

from __future__ import annotations


class STSSError(Exception):
    """Base class for every error raised by the conversion pipeline."""


class InputError(STSSError):
    """No usable input was supplied (neither data nor an existing file)."""


class ImportNotFoundError(STSSError):
    """An ``@import`` target could not be found on any search path."""

    def __init__(self, filename: str, line: int | None = None,
                 line_text: str | None = None) -> None:
        self.filename = filename
        self.line = line
        self.line_text = line_text
        msg = f"Imported file not found: {filename}"
        if line is not None:
            msg += f" (line {line}: {line_text})"
        super().__init__(msg)


class CyclicImportError(STSSError):
    """An ``@import`` chain leads back to a file that is still being resolved."""

    def __init__(self, chain: list[str]) -> None:
        self.chain = list(chain)
        super().__init__("Cyclic import: " + " -> ".join(self.chain))


class ShorthandFileMissingError(STSSError):
    """The configured shorthand dictionary file does not exist."""

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"Shorthand file does not exist: {path}")


class ShorthandFileInvalidError(STSSError):
    """The shorthand dictionary file is not valid JSON."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        super().__init__(f"Invalid shorthand file {path}: {reason}")


class CompileError(STSSError):
    """The SCSS compiler rejected the encoded source.

    ``fragment`` is the offending statement as reported by the compiler;
    ``line`` and ``line_text`` are filled in when the fragment can be found
    in the original source.
    """

    def __init__(self, message: str, fragment: str | None = None,
                 line: int | None = None, line_text: str | None = None) -> None:
        self.message = message
        self.fragment = fragment
        self.line = line
        self.line_text = line_text
        super().__init__(message)

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message} (line {self.line}: {self.line_text})"


class ASTParseError(STSSError):
    """The compiled CSS could not be parsed into rules."""
