#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List

from mb_names import normalize_component_id, qualified_name
from mb_scanner import DEFAULT_SCANNER, DirectiveScanner, ImportDirective
from mb_sources import SourceText

if TYPE_CHECKING:
    from mb_registry import SourceRegistry


@dataclass
class ComponentUnit:
    """
    One parsed source file.

    - package_name:       from the first `@package` directive, '' if none
    - component_names:    names declared with `class Name {`, first-seen order
    - imports:            every `@import` directive, in source order
    - dependencies:       registry handles of direct dependencies (import order,
                          no duplicates, never this unit's own handle)
    - unresolved_imports: imports whose target is not registered

    Dependencies are filled in by resolve_dependencies() once the registry
    holds every unit.
    """
    origin: str
    raw_text: str
    handle: int = -1
    package_name: str = ""
    component_names: List[str] = field(default_factory=list)
    imports: List[ImportDirective] = field(default_factory=list)
    dependencies: List[int] = field(default_factory=list)
    unresolved_imports: List[ImportDirective] = field(default_factory=list)

    @staticmethod
    def from_source(source: SourceText, handle: int = -1,
                    scanner: DirectiveScanner = DEFAULT_SCANNER) -> ComponentUnit:
        scan = scanner.scan(source.text)
        return ComponentUnit(
            origin=source.origin,
            raw_text=source.text,
            handle=handle,
            package_name=scan.package_name,
            component_names=scan.component_names,
            imports=scan.imports,
        )

    def qualified_name(self, local_name: str) -> str:
        return qualified_name(self.package_name, local_name)

    def qualified_names(self) -> List[str]:
        return [self.qualified_name(name) for name in self.component_names]

    @property
    def display_name(self) -> str:
        names = self.qualified_names()
        return names[0] if names else self.origin

    def resolve_dependencies(self, registry: SourceRegistry) -> None:
        """
        Turn import directives into dependency handles.

        Targets are normalized like qualified names ('app.bar.Bar' -> 'app_bar_Bar').
        A target naming no component but a whole package ('app.bar') depends on
        every unit of that package. Self-imports, including an import of the
        unit's own package, are dropped; unknown targets go to unresolved_imports.
        """
        self.dependencies = []
        self.unresolved_imports = []
        own_package = normalize_component_id(self.package_name)
        for imp in self.imports:
            key = normalize_component_id(imp.target)
            handle = registry.lookup(key)
            if handle is None and key == own_package:
                continue
            handles = [handle] if handle is not None else registry.lookup_package(key)
            if not handles:
                self.unresolved_imports.append(imp)
                continue
            for h in handles:
                if h != self.handle and h not in self.dependencies:
                    self.dependencies.append(h)

    def body(self, registry: SourceRegistry) -> str:
        """
        Raw text with identifiers rewritten, directives still in place:

          1. every occurrence of a local component name -> its qualified name
             (plain substring match, one pass, longest names first)
          2. whole-word occurrences of each direct dependency's component
             names -> the dependency's qualified names
        """
        text = self.raw_text
        if self.component_names:
            local = {name: self.qualified_name(name) for name in self.component_names}
            pattern = re.compile(
                "|".join(re.escape(name) for name in sorted(local, key=len, reverse=True))
            )
            text = pattern.sub(lambda m: local[m.group(0)], text)

        for handle in self.dependencies:
            dependency = registry.get(handle)
            for name in dependency.component_names:
                replacement = dependency.qualified_name(name)
                text = re.sub(rf"\b{re.escape(name)}\b", lambda _m, r=replacement: r, text)
        return text
