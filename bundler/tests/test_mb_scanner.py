#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from mb_scanner import DirectiveScanner, ImportDirective


def test_package_first_match_wins():
    text = "@package app.ui;\n@package other;\nclass Foo { }\n"

    assert DirectiveScanner().find_package_name(text) == "app.ui"


def test_package_defaults_to_empty():
    assert DirectiveScanner().find_package_name("class Foo { }") == ""


def test_component_names_collapse_duplicates_in_source_order():
    text = "class Zeta {\n}\nclass Alpha{ }\nclass Zeta { }\n"

    assert DirectiveScanner().find_component_names(text) == ["Zeta", "Alpha"]


def test_class_like_words_are_not_components():
    text = "const className = 'x';\nsubclass Foo { }\nclassName { }\n"

    assert DirectiveScanner().find_component_names(text) == []


def test_imports_keep_order_and_positions():
    text = "@package app\n@import lib.Button;\n  @import lib.Icon\n"

    imports = DirectiveScanner().find_imports(text)

    assert imports == [
        ImportDirective(target="lib.Button", line=2, column=1),
        ImportDirective(target="lib.Icon", line=3, column=3),
    ]


def test_scan_collects_everything():
    text = "@package app;\n@import lib.Button;\nclass Page { }\n"

    scan = DirectiveScanner().scan(text)

    assert scan.package_name == "app"
    assert scan.component_names == ["Page"]
    assert [imp.target for imp in scan.imports] == ["lib.Button"]


def test_strip_removes_directive_lines_with_trailing_whitespace():
    text = "@package app;\n@import lib.Button;\n\nclass Page { }\n"

    assert DirectiveScanner().strip_directives(text) == "class Page { }\n"


def test_strip_leaves_other_at_words_alone():
    text = "// @author someone\nclass Page { }\n"

    assert DirectiveScanner().strip_directives(text) == text
