#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import pytest

from conftest import has_code
from mb_context import BundleContext, LogLevel
from mb_resolver import ComponentNotFoundError, Resolver
from mb_sources import SourceText


def test_resolve_accepts_dotted_and_qualified_forms(make_resolver):
    resolver = make_resolver("@package app.bar\nclass Bar { }\n")

    assert resolver.resolve("app.bar.Bar") == "class app_bar_Bar { }\n"
    assert resolver.resolve("app_bar_Bar") == "class app_bar_Bar { }\n"


def test_resolve_is_memoized(make_resolver, monkeypatch):
    resolver = make_resolver(
        "@package app\n@import lib.Button\nclass Page { Button }\n",
        "@package lib\nclass Button { }\n",
    )
    calls = []
    flatten = resolver.flattener.flatten

    def counting_flatten(handle):
        calls.append(handle)
        return flatten(handle)

    monkeypatch.setattr(resolver.flattener, "flatten", counting_flatten)

    first = resolver.resolve("app.Page")
    second = resolver.resolve("app.Page")

    assert first == second
    assert second is first
    assert len(calls) == 1
    assert resolver.cache == {"app_Page": first}


def test_unknown_component_always_fails(make_resolver):
    resolver = make_resolver("@package app\nclass Page { }\n")

    for _ in range(2):
        with pytest.raises(ComponentNotFoundError) as excinfo:
            resolver.resolve("not.a.real.Component")
        assert excinfo.value.component_name == "not.a.real.Component"
        assert "[RES-0010]" in str(excinfo.value)

    assert resolver.cache == {}


def test_components_in_one_file_share_flattened_text(make_resolver):
    resolver = make_resolver("@package ui\nclass Row { }\nclass Table { Row }\n")

    assert resolver.resolve("ui.Row") == resolver.resolve("ui.Table")
    assert resolver.resolve("ui.Row") == "class ui_Row { }\nclass ui_Table { ui_Row }\n"
    assert resolver.components() == ["ui_Row", "ui_Table"]


def test_contains_normalizes(make_resolver):
    resolver = make_resolver("@package ui\nclass Row { }\n")

    assert "ui.Row" in resolver
    assert "ui_Row" in resolver
    assert "ui.Col" not in resolver


def test_dependencies_of_lists_closure(make_resolver):
    resolver = make_resolver(
        "@package x\n@import x.B\nclass A {}\n",
        "@package x\n@import x.C\nclass B {}\n",
        "@package x\nclass C {}\n",
    )

    assert resolver.dependencies_of("x.A") == ["x_A", "x_B", "x_C"]

    with pytest.raises(ComponentNotFoundError):
        resolver.dependencies_of("x.Nope")


def test_diagnostics_combine_load_and_registry_findings(write_source, temp_project):
    good = write_source("app/page.js", """
        @package app
        @import lib.Missing
        class Page { }
    """)

    resolver = Resolver.from_paths(
        [good, temp_project / "gone.js"],
        context=BundleContext(log_level=LogLevel.SILENT),
    )

    assert has_code(resolver.diagnostics, "SRC-0010")
    assert has_code(resolver.diagnostics, "IMP-0010")
    assert not resolver.has_errors()
    assert resolver.resolve("app.Page") == "class app_Page { }\n"


def test_unreadable_sources_do_not_block_others(write_source, temp_project):
    good = write_source("lib/button.js", "@package lib\nclass Button { }\n")
    bad = write_source("lib/broken.js", b"@package lib\nclass Broken { \xff\xfe }\n")

    resolver = Resolver.from_paths(
        [bad, good, temp_project / "missing.js"],
        context=BundleContext(log_level=LogLevel.SILENT),
    )

    assert [s.origin for s in resolver.load_result.skipped] == [str(bad), str(temp_project / "missing.js")]
    assert not resolver.load_result.ok
    assert resolver.components() == ["lib_Button"]
    assert resolver.resolve("lib.Button") == "class lib_Button { }\n"
    with pytest.raises(ComponentNotFoundError):
        resolver.resolve("lib.Broken")


def test_sources_are_taken_as_given():
    resolver = Resolver(
        [SourceText(origin="inline:1", text="@package a\nclass Foo { }\n")],
        context=BundleContext(log_level=LogLevel.SILENT),
    )

    assert resolver.load_result.loaded[0].origin == "inline:1"
    assert resolver.load_result.ok
    assert resolver.resolve("a.Foo") == "class a_Foo { }\n"
