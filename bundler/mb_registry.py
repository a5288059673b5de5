#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from typing import Dict, Iterable, Iterator, List, Optional, Set

from mb_context import BundleContext
from mb_diagnostics import Diagnostic
from mb_internal_error import InternalBundlerError
from mb_logger import log_debug, log_stage
from mb_names import normalize_component_id
from mb_scanner import DEFAULT_SCANNER, DirectiveScanner
from mb_sources import SourceText
from mb_unit import ComponentUnit


class SourceRegistry:
    """
    Owns every ComponentUnit in a flat list; a unit's handle is its index.

    Built in two phases:
      1. parse_all(): parse every source and register it under each of its
         qualified names
      2. resolve_all(): let every unit resolve its imports against the
         complete name table

    Resolving during parsing would make edges depend on input order, so
    resolve_all() must only run once every source is registered.
    """

    def __init__(self, context: BundleContext | None = None,
                 scanner: DirectiveScanner = DEFAULT_SCANNER):
        self.context = context or BundleContext.default()
        self.scanner = scanner
        self.units: List[ComponentUnit] = []
        self.by_qualified_name: Dict[str, int] = {}
        # Normalized package name -> handles of units declaring components in it.
        self.by_package: Dict[str, List[int]] = {}
        self.diagnostics: List[Diagnostic] = []

    # --- Build ---

    def parse_all(self, sources: Iterable[SourceText]) -> None:
        log_stage(self.context, "Parsing sources")
        for source in sources:
            self._register(source)
        log_debug(self.context, f"Registered {len(self.by_qualified_name)} component(s) from {len(self.units)} source(s)")

    def resolve_all(self) -> None:
        log_stage(self.context, "Resolving dependencies")
        for unit in self.units:
            unit.resolve_dependencies(self)
            for imp in unit.unresolved_imports:
                self.diagnostics.append(
                    Diagnostic(
                        kind="warning",
                        message=f"[IMP-0010] import '{imp.target}' does not match any component; ignored",
                        component=unit.display_name,
                        origin=unit.origin,
                        line=imp.line,
                        column=imp.column,
                    )
                )
            if unit.dependencies:
                deps = ", ".join(self.units[h].display_name for h in unit.dependencies)
                log_debug(self.context, f"{unit.display_name} depends on: {deps}")

    # --- Queries ---

    def lookup(self, qualified_name: str) -> Optional[int]:
        return self.by_qualified_name.get(qualified_name)

    def lookup_package(self, package_key: str) -> List[int]:
        """Handles of the package's units that still own at least one qualified name."""
        return [
            h for h in self.by_package.get(package_key, ())
            if any(self.by_qualified_name.get(name) == h for name in self.units[h].qualified_names())
        ]

    def get(self, handle: int) -> ComponentUnit:
        if not 0 <= handle < len(self.units):
            raise InternalBundlerError(f"[ICE-0010] invalid unit handle {handle} (registry has {len(self.units)} unit(s))")
        return self.units[handle]

    def unit_for(self, qualified_name: str) -> Optional[ComponentUnit]:
        handle = self.lookup(qualified_name)
        return None if handle is None else self.units[handle]

    def qualified_names(self) -> List[str]:
        return sorted(self.by_qualified_name)

    def dependency_closure(self, handle: int) -> List[int]:
        """
        Handles reachable from `handle`, depth-first in import order, each once.
        The starting handle comes first.
        """
        visited: Set[int] = set()
        order: List[int] = []

        def visit(h: int) -> None:
            if h in visited:
                return
            visited.add(h)
            order.append(h)
            for dep in self.get(h).dependencies:
                visit(dep)

        visit(handle)
        return order

    def __contains__(self, qualified_name: str) -> bool:
        return qualified_name in self.by_qualified_name

    def __len__(self) -> int:
        return len(self.units)

    def __iter__(self) -> Iterator[ComponentUnit]:
        return iter(self.units)

    # --- Internal helpers ---

    def _register(self, source: SourceText) -> None:
        handle = len(self.units)
        unit = ComponentUnit.from_source(source, handle=handle, scanner=self.scanner)
        self.units.append(unit)

        if not unit.component_names:
            self.diagnostics.append(
                Diagnostic(
                    kind="warning",
                    message="[SRC-0020] source declares no components",
                    origin=unit.origin,
                )
            )
            return

        if unit.package_name:
            self.by_package.setdefault(normalize_component_id(unit.package_name), []).append(handle)

        for name in unit.qualified_names():
            previous = self.by_qualified_name.get(name)
            if previous is not None and previous != handle:
                # Last write wins; the earlier unit stays stored but unreachable by this name.
                self.diagnostics.append(
                    Diagnostic(
                        kind="warning",
                        message=f"[REG-0010] component '{name}' already declared in {self.units[previous].origin}; replaced",
                        component=name,
                        origin=unit.origin,
                    )
                )
            self.by_qualified_name[name] = handle
            log_debug(self.context, f"Registered '{name}' from {unit.origin}")
