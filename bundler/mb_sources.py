#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List

from mb_context import BundleContext
from mb_diagnostics import Diagnostic
from mb_logger import log_debug, log_warning


class UnreadableSourceError(Exception):
    """Raised when a source blob cannot be obtained or decoded."""

    def __init__(self, origin: str, reason: str):
        super().__init__(f"[SRC-0010] cannot read source {origin}: {reason}")
        self.origin = origin
        self.reason = reason


@dataclass(frozen=True)
class SourceText:
    """
    One readable text blob. `origin` is opaque to the bundler core and only
    shows up in diagnostics.
    """
    origin: str
    text: str


@dataclass(frozen=True)
class SkippedSource:
    origin: str
    reason: str


@dataclass
class SourceLoadResult:
    """
    Outcome of loading a batch of sources.

    - loaded:  sources that were read and decoded
    - skipped: sources that were not, with the reason why

    Skips are not fatal here; the caller decides whether they should be.
    """
    loaded: List[SourceText] = field(default_factory=list)
    skipped: List[SkippedSource] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.skipped

    def diagnostics(self) -> List[Diagnostic]:
        return [
            Diagnostic(
                kind="warning",
                message=f"[SRC-0010] source skipped: {s.reason}",
                origin=s.origin,
            )
            for s in self.skipped
        ]


def decode_source(origin: str, data: bytes, encoding: str = "utf-8") -> SourceText:
    try:
        return SourceText(origin=origin, text=data.decode(encoding))
    except UnicodeDecodeError as e:
        raise UnreadableSourceError(origin, f"not valid {encoding}: {e.reason} at byte {e.start}") from e
    except LookupError as e:
        raise UnreadableSourceError(origin, str(e)) from e


def read_source(path: str | Path, encoding: str = "utf-8") -> SourceText:
    """
    Read and decode a single file. Raises UnreadableSourceError on failure.
    """
    path = Path(path)
    try:
        data = path.read_bytes()
    except OSError as e:
        raise UnreadableSourceError(str(path), e.strerror or str(e)) from e
    return decode_source(str(path), data, encoding)


def load_sources(
    paths: Iterable[str | Path],
    encoding: str = "utf-8",
    context: BundleContext | None = None,
) -> SourceLoadResult:
    """
    Read every path, collecting failures as skips instead of raising.
    """
    context = context or BundleContext.default()
    result = SourceLoadResult()
    for path in paths:
        try:
            source = read_source(path, encoding)
        except UnreadableSourceError as e:
            log_warning(context, f"warning: {e}")
            result.skipped.append(SkippedSource(origin=e.origin, reason=e.reason))
            continue
        log_debug(context, f"Read {len(source.text)} character(s) from {source.origin}")
        result.loaded.append(source)
    return result
