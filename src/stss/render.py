"""Pipeline orchestration: STSS source -> TSS text.

    imports -> scss -> css -> (rule tree) -> json -> tss

Each stage runs to completion before the next one starts. The first error
aborts the run; nothing is written in that case.
"""

from __future__ import annotations

import json
import logging
import os
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable

from .compiler import compile_scss, locate_error
from .context import RenderContext
from .encoder import encode
from .errors import CompileError, InputError, STSSError
from .extractor import extract
from .imports import resolve_imports
from .serializer import serialize
from .shorthand import ShorthandDictionary
from .structuring import structure

logger = logging.getLogger(__name__)

STAGES = ("imports", "scss", "css", "json", "tss")

StageCallback = Callable[[str, str], None]


@dataclass
class RenderOptions:
    """Settings for one conversion.

    Exactly one of ``data`` or ``file`` is needed; ``data`` wins when both
    are given.
    """

    data: str | None = None
    file: str | None = None
    out_file: str | None = None
    shorthand_file: str | None = None
    include_paths: list[str] = field(default_factory=list)

    def read_source(self) -> str:
        if self.data is not None:
            return self.data
        if not self.file:
            raise InputError("No input file or data supplied")
        if not os.path.exists(self.file):
            raise InputError(f"Input file does not exist: {self.file}")
        try:
            with open(self.file, encoding="utf-8") as fh:
                return fh.read()
        except UnicodeDecodeError as exc:
            raise InputError(f"Input file is not valid UTF-8: {self.file}") from exc


def _run(source: str, filename: str | None, context: RenderContext,
         on_stage: StageCallback | None) -> str:
    def notify(stage: str, text: str) -> None:
        logger.debug("stage %s complete (%d chars)", stage, len(text))
        if on_stage is not None:
            on_stage(stage, text)

    stss = resolve_imports(source, filename, context.include_paths)
    notify("imports", stss)

    scss = encode(stss, context)
    notify("scss", scss)

    try:
        css = compile_scss(scss, context.include_paths)
    except CompileError as exc:
        raise locate_error(exc, source)
    notify("css", css)

    document = structure(extract(css), context)
    notify("json", json.dumps(document.to_data(), indent=2))

    tss = serialize(document)
    notify("tss", tss)
    return tss


def convert(
    data: str | None = None,
    file: str | None = None,
    *,
    shorthand_file: str | None = None,
    shorthand: ShorthandDictionary | None = None,
    include_paths: list[str] | tuple[str, ...] = (),
    on_stage: StageCallback | None = None,
) -> str:
    """Convert STSS to TSS and return the TSS text.

    A prebuilt *shorthand* dictionary may be shared between calls; otherwise
    one is loaded from the packaged table and *shorthand_file*.
    """
    options = RenderOptions(data=data, file=file, shorthand_file=shorthand_file,
                            include_paths=list(include_paths))
    if shorthand is None:
        shorthand = ShorthandDictionary.load(options.shorthand_file)
    source = options.read_source()
    context = RenderContext(shorthand=shorthand, include_paths=options.include_paths)
    filename = options.file if options.data is None else None
    return _run(source, filename, context, on_stage)


def render(
    data: str | None = None,
    file: str | None = None,
    out_file: str | None = None,
    shorthand_file: str | None = None,
    include_paths: list[str] | tuple[str, ...] = (),
    success: Callable[[str], None] | None = None,
    error: Callable[[Exception], None] | None = None,
    on_stage: StageCallback | None = None,
) -> None:
    """Callback flavour of :func:`convert`.

    ``success`` receives the TSS text, or *out_file* once it has been
    written. ``error`` receives the exception; without an ``error``
    callback the exception propagates.
    """
    try:
        tss = convert(data, file, shorthand_file=shorthand_file,
                      include_paths=include_paths, on_stage=on_stage)
        if out_file:
            with open(out_file, "w", encoding="utf-8") as fh:
                fh.write(tss)
            logger.info("TSS written to %s", out_file)
            result = out_file
        else:
            result = tss
    except (STSSError, OSError, UnicodeError) as exc:
        if error is None:
            raise
        error(exc)
        return
    if success is not None:
        success(result)


def render_many(
    files: list[str],
    *,
    shorthand_file: str | None = None,
    include_paths: list[str] | tuple[str, ...] = (),
    max_workers: int | None = None,
) -> dict[str, str]:
    """Convert independent files in parallel; returns ``{file: tss}``.

    Every file gets its own RenderContext; only the shorthand dictionary
    is shared.
    """
    shorthand = ShorthandDictionary.load(shorthand_file)
    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = {
            f: pool.submit(convert, file=f, shorthand=shorthand, include_paths=include_paths)
            for f in files
        }
        return {f: future.result() for f, future in futures.items()}
