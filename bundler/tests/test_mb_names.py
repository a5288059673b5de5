#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from mb_names import normalize_component_id, qualified_name


def test_normalize_replaces_every_dot():
    assert normalize_component_id("app.bar.Bar") == "app_bar_Bar"
    assert normalize_component_id("app_bar_Bar") == "app_bar_Bar"


def test_qualified_name_joins_package_and_local_name():
    assert qualified_name("app.bar", "Bar") == "app_bar_Bar"


def test_qualified_name_without_package_keeps_separator():
    assert qualified_name("", "Foo") == "_Foo"


def test_dotted_and_qualified_forms_agree():
    assert normalize_component_id("app.bar.Bar") == qualified_name("app.bar", "Bar")
