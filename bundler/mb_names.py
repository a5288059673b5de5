#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz


def normalize_component_id(dotted: str) -> str:
    """
    Convert a dotted identifier like 'app.bar.Bar' to its lookup key 'app_bar_Bar'.
    """
    return dotted.replace(".", "_")


def qualified_name(package_name: str, local_name: str) -> str:
    """
    Canonical key for a component: normalized package, '_', local name.

    An empty package still contributes the separator ('' + 'Foo' -> '_Foo').
    """
    return f"{normalize_component_id(package_name)}_{local_name}"
