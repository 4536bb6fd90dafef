"""Typeset every HTML document below a directory.

Each document is an independent task: it is read, parsed, transformed and
written by one worker, and a failure is recorded for that document only.
"""

from __future__ import annotations

import logging
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

from justhtml.node import Element

from .constants import THIN_SPACE_CLASS
from .pipeline import typeset_html

if TYPE_CHECKING:
    from collections.abc import Iterator

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BuildOptions:
    marker_tag: str = "span"
    marker_class: str | None = THIN_SPACE_CLASS
    ascend: bool = False
    drop_comments: bool = True
    fragment: bool = False
    # 0 picks a worker count from the CPU count.
    jobs: int = 0

    def marker(self) -> Element:
        attrs: dict[str, str | None] = {}
        if self.marker_class:
            attrs["class"] = self.marker_class
        return Element(self.marker_tag.lower(), attrs, "html")

    def worker_count(self) -> int:
        if self.jobs > 0:
            return self.jobs
        return min(32, os.cpu_count() or 4)


@dataclass(slots=True)
class BuildResult:
    written: list[Path] = field(default_factory=list)
    failed: list[tuple[Path, BaseException]] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


def is_ignored_file(path: str | os.PathLike[str]) -> bool:
    """Editor backups, autosaves and ``_partials`` are not published."""

    path = os.fspath(path)
    base = os.path.basename(path)
    if base.startswith("#"):
        return True
    if base.startswith("_"):
        return True
    if path.endswith("~"):
        return True
    return False


def iter_html_files(in_dir: str | os.PathLike[str]) -> Iterator[Path]:
    root = Path(in_dir)
    for path in sorted(root.rglob("*.html")):
        if not path.is_file() or is_ignored_file(path):
            continue
        yield path


def typeset_source(html: str, options: BuildOptions) -> str:
    return typeset_html(
        html,
        options.marker(),
        fragment=options.fragment,
        ascend=options.ascend,
        drop_comments=options.drop_comments,
    )


def process_file(
    in_path: str | os.PathLike[str],
    out_path: str | os.PathLike[str],
    options: BuildOptions | None = None,
) -> Path:
    """Typeset one file. I/O and decoding errors propagate."""

    if options is None:
        options = BuildOptions()
    in_path = Path(in_path)
    out_path = Path(out_path)

    html = in_path.read_text(encoding="utf-8")
    rendered = typeset_source(html, options)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(rendered, encoding="utf-8")
    logger.debug("Wrote %s", out_path)
    return out_path


def build(
    in_dir: str | os.PathLike[str],
    out_dir: str | os.PathLike[str],
    options: BuildOptions | None = None,
) -> BuildResult:
    """Typeset all HTML files of ``in_dir`` into the same layout under ``out_dir``."""

    if options is None:
        options = BuildOptions()
    in_root = Path(in_dir)
    out_root = Path(out_dir)
    if not in_root.is_dir():
        raise NotADirectoryError(f"Input directory not found: {in_root}")

    result = BuildResult()
    sources = list(iter_html_files(in_root))
    logger.info("Typesetting %d document(s) from %s", len(sources), in_root)
    if not sources:
        return result

    with ThreadPoolExecutor(max_workers=options.worker_count()) as ex:
        futures = {
            ex.submit(process_file, src, out_root / src.relative_to(in_root), options): src for src in sources
        }
        for fut in as_completed(futures):
            src = futures[fut]
            try:
                result.written.append(fut.result())
            except Exception as e:
                logger.error("Failed to typeset %s: %s", src, e)
                result.failed.append((src, e))

    result.written.sort()
    result.failed.sort(key=lambda item: item[0])
    return result


__all__ = [
    "BuildOptions",
    "BuildResult",
    "build",
    "is_ignored_file",
    "iter_html_files",
    "process_file",
    "typeset_source",
]
