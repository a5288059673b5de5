#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

import sys
from pathlib import Path
from textwrap import dedent

import pytest

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from mb_context import BundleContext, DedupMode, LogLevel
from mb_resolver import Resolver
from mb_sources import SourceText


@pytest.fixture
def temp_project(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture
def write_source(temp_project: Path):
    """Write a component source below the temp project.

    Usage:
        def test_something(write_source):
            path = write_source("app/foo.js", '''
                @package app
                class Foo { }
            ''')
    """

    def _write(rel: str, content: str | bytes) -> Path:
        file_path = temp_project / rel
        file_path.parent.mkdir(parents=True, exist_ok=True)
        if isinstance(content, bytes):
            file_path.write_bytes(content)
        else:
            file_path.write_text(dedent(content).lstrip("\n"), encoding="utf-8")
        return file_path

    return _write


@pytest.fixture
def make_resolver():
    """Build a Resolver from in-memory texts; origins are 'src0.js', 'src1.js', ...

    Usage:
        def test_something(make_resolver):
            resolver = make_resolver(
                "@package app\\nclass Foo { }\\n",
                mode=DedupMode.CONTAINMENT,
            )
    """

    def _make(*texts: str, mode: DedupMode = DedupMode.EXACT) -> Resolver:
        context = BundleContext(log_level=LogLevel.SILENT, dedup_mode=mode)
        sources = [SourceText(origin=f"src{i}.js", text=t) for i, t in enumerate(texts)]
        return Resolver(sources, context=context)

    return _make


def has_code(diagnostics, code: str) -> bool:
    """Check if any diagnostic carries the given code, e.g. "IMP-0010"."""
    if not code.startswith("["):
        code = f"[{code}]"
    return any(code in d.message for d in diagnostics)
