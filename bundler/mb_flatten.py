#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from typing import List, Set

from mb_context import BundleContext, DedupMode
from mb_logger import log_debug
from mb_registry import SourceRegistry


class CyclicDependencyError(Exception):
    """Raised when flattening re-enters a unit that is still being expanded."""

    def __init__(self, path: List[str]):
        super().__init__(f"[RES-0020] cyclic dependency: {' -> '.join(path)}")
        self.path = path


class Flattener:
    """
    Builds the self-contained text for one unit:

      1. start from the unit's raw text
      2. qualify its own component names
      3. qualify the component names of its direct dependencies
      4. append dependency content (depth-first, import order)
      5. strip `@import` / `@package` directives

    Step 4 depends on the dedup mode:
      - EXACT: every unit of the closure is emitted once.
      - CONTAINMENT: each dependency's flattened text is appended unless the
        output already contains it. A unit shared by two branches of a
        diamond may then appear twice.

    In both modes a unit re-entered while it is still being expanded raises
    CyclicDependencyError.
    """

    def __init__(self, registry: SourceRegistry, context: BundleContext | None = None):
        self.registry = registry
        self.context = context or registry.context

    def flatten(self, handle: int) -> str:
        if self.context.dedup_mode is DedupMode.CONTAINMENT:
            return self._flatten_containment(handle, [])
        return self._flatten_exact(handle)

    # --- Internal helpers ---

    def _flatten_exact(self, handle: int) -> str:
        emitted: Set[int] = set()
        expanding: List[int] = []
        parts: List[str] = []

        def visit(h: int) -> None:
            # Check the expansion stack before `emitted`: units on it are emitted too.
            if h in expanding:
                self._raise_cycle(expanding, h)
            if h in emitted:
                return
            emitted.add(h)
            unit = self.registry.get(h)
            log_debug(self.context, f"Emitting {unit.display_name} from {unit.origin}")
            # Strip per unit: a trailing directive must not run into the next body.
            parts.append(self.registry.scanner.strip_directives(unit.body(self.registry)))
            expanding.append(h)
            for dep in unit.dependencies:
                visit(dep)
            expanding.pop()

        visit(handle)
        return "".join(parts)

    def _flatten_containment(self, handle: int, expanding: List[int]) -> str:
        if handle in expanding:
            self._raise_cycle(expanding, handle)
        unit = self.registry.get(handle)
        log_debug(self.context, f"Expanding {unit.display_name} from {unit.origin}")

        expanding.append(handle)
        try:
            content = self.registry.scanner.strip_directives(unit.body(self.registry))
            for dep in unit.dependencies:
                dep_content = self._flatten_containment(dep, expanding)
                if dep_content not in content:
                    content += dep_content
        finally:
            expanding.pop()
        return content

    def _raise_cycle(self, expanding: List[int], handle: int) -> None:
        start = expanding.index(handle)
        path = [self.registry.get(h).display_name for h in expanding[start:] + [handle]]
        raise CyclicDependencyError(path)
