#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from pathlib import Path
from typing import Dict, Iterable, List

from mb_context import BundleContext
from mb_diagnostics import Diagnostic
from mb_flatten import Flattener
from mb_logger import log_debug, log_info, log_stage
from mb_names import normalize_component_id
from mb_registry import SourceRegistry
from mb_sources import SkippedSource, SourceLoadResult, SourceText, load_sources


class ComponentNotFoundError(LookupError):
    """Raised when a requested component is not registered."""

    def __init__(self, component_name: str):
        super().__init__(f"[RES-0010] component '{component_name}' not found")
        self.component_name = component_name


class Resolver:
    """
    Public entry point of the bundler.

    Construction parses every source and resolves every import edge; after
    that the registry is read-only. resolve() flattens a component on first
    request and memoizes the text for the lifetime of the Resolver.

    Example:
        resolver = Resolver([SourceText("foo.js", "@package app; class Foo { }")])
        resolver.resolve("app.Foo")
    """

    def __init__(
        self,
        sources: Iterable[SourceText],
        context: BundleContext | None = None,
        skipped: Iterable[SkippedSource] = (),
    ):
        self.context = context or BundleContext.default()
        sources = list(sources)
        self.load_result = SourceLoadResult(loaded=sources, skipped=list(skipped))
        self.registry = SourceRegistry(context=self.context)
        self.registry.parse_all(sources)
        self.registry.resolve_all()
        self.flattener = Flattener(self.registry, self.context)
        self.cache: Dict[str, str] = {}
        log_info(
            self.context,
            f"Loaded {len(self.registry)} source(s), {len(self.registry.by_qualified_name)} component(s), "
            f"{len(self.load_result.skipped)} skipped",
        )

    @classmethod
    def from_paths(cls, paths: Iterable[str | Path], context: BundleContext | None = None,
                   encoding: str = "utf-8") -> 'Resolver':
        """Read sources from files; unreadable ones are skipped and recorded."""
        result = load_sources(paths, encoding=encoding, context=context)
        return cls(result.loaded, context=context, skipped=result.skipped)

    # --- Public API ---

    def resolve(self, component_name: str) -> str:
        """
        Resolves the component using its fully qualified name.

        Accepts either the dotted form ('app.bar.Bar') or the normalized key
        ('app_bar_Bar'). Returns the component plus all of its dependencies.
        Raises ComponentNotFoundError if nothing is registered under the name.
        """
        component_id = normalize_component_id(component_name)
        handle = self.registry.lookup(component_id)
        if handle is None:
            raise ComponentNotFoundError(component_name)

        cached = self.cache.get(component_id)
        if cached is not None:
            log_debug(self.context, f"Component '{component_id}' already flattened (cache hit)")
            return cached

        log_stage(self.context, "Flattening component", component_id)
        content = self.flattener.flatten(handle)
        self.cache[component_id] = content
        return content

    def components(self) -> List[str]:
        return self.registry.qualified_names()

    def dependencies_of(self, component_name: str) -> List[str]:
        """Qualified display names of the component's transitive closure, itself first."""
        component_id = normalize_component_id(component_name)
        handle = self.registry.lookup(component_id)
        if handle is None:
            raise ComponentNotFoundError(component_name)
        closure = self.registry.dependency_closure(handle)
        return [component_id] + [self.registry.get(h).display_name for h in closure[1:]]

    @property
    def diagnostics(self) -> List[Diagnostic]:
        return self.load_result.diagnostics() + self.registry.diagnostics

    def has_errors(self) -> bool:
        return any(d.kind == "error" for d in self.diagnostics)

    def __contains__(self, component_name: str) -> bool:
        return normalize_component_id(component_name) in self.registry
