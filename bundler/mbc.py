#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import argparse
import os
import sys
from pathlib import Path
from typing import Dict, List, Optional

from mb_context import BundleContext, DedupMode, LogLevel
from mb_diagnostics import Diagnostic
from mb_flatten import CyclicDependencyError
from mb_logger import log_error, log_info
from mb_paths import SourceRoots
from mb_resolver import ComponentNotFoundError, Resolver


def _load_file_lines(path: str, cache: Dict[str, List[str]]) -> List[str]:
    if path not in cache:
        text = Path(path).read_text(encoding="utf-8")
        cache[path] = text.splitlines()
    return cache[path]


def print_diagnostics(diagnostics: List[Diagnostic], context: BundleContext) -> None:
    file_cache: Dict[str, List[str]] = {}

    for diag in diagnostics:
        print_diagnostic_with_snippet(diag, file_cache, context)


def print_diagnostic_with_snippet(diag: Diagnostic, file_cache: Dict[str, List[str]],
                                  context: Optional[BundleContext] = None) -> None:
    log_error(context, diag.format())

    if not diag.origin or diag.line is None:
        return

    try:
        lines = _load_file_lines(diag.origin, file_cache)
    except (OSError, UnicodeDecodeError):
        # Origin is not a readable file; header only
        return

    line_idx = diag.line - 1
    if not (0 <= line_idx < len(lines)):
        return

    src_line = lines[line_idx]
    width = max(5, len(str(diag.line)))
    log_error(context, f"{diag.line:>{width}} | " + src_line)

    if diag.column is None:
        return

    caret_prefix = " " * width + " | " + " " * (max(1, diag.column) - 1)
    log_error(context, caret_prefix + "^")


def build_source_roots(context: BundleContext, args: argparse.Namespace) -> SourceRoots:
    roots = list(args.root)
    if not roots:
        # Default roots from $MB_PATH, separated like PATH
        env_roots = os.getenv("MB_PATH")
        if env_roots:
            roots = [p for p in env_roots.split(os.pathsep) if p]
        else:
            roots = ["."]
    sr = SourceRoots(suffixes=list(args.ext) or [".js"])
    for root in roots:
        sr.add_root(root)
    root_list = ",".join(f"'{p}'" for p in sr.roots)
    log_info(context, f"Source root(s): {root_list}")
    return sr


def build_bundle_context(args: argparse.Namespace) -> BundleContext:
    """Build a BundleContext from command-line arguments."""
    verbosity = getattr(args, 'verbosity', 0)
    if verbosity >= 3:
        log_level = LogLevel.DEBUG
    elif verbosity >= 1:
        log_level = LogLevel.INFO
    else:
        log_level = LogLevel.ERROR

    return BundleContext(
        log_rich_format=getattr(args, 'log', False),
        log_level=log_level,
        dedup_mode=DedupMode.CONTAINMENT if getattr(args, 'compat', False) else DedupMode.EXACT,
    )


def _build_resolver(args: argparse.Namespace):
    """Load every source under the roots, returning (resolver, context, exit_code)."""
    context = build_bundle_context(args)
    roots = build_source_roots(context, args)
    resolver = Resolver.from_paths(roots.collect(), context=context)
    exit_code = 0
    if getattr(args, 'strict', False) and resolver.load_result.skipped:
        exit_code = 1
    return resolver, context, exit_code


def cmd_resolve(args: argparse.Namespace) -> int:
    """Print (or write) the flattened text of a component."""
    resolver, context, exit_code = _build_resolver(args)
    if exit_code != 0:
        print_diagnostics(resolver.load_result.diagnostics(), context)
        return exit_code

    try:
        content = resolver.resolve(args.component)
    except (ComponentNotFoundError, CyclicDependencyError) as e:
        log_error(context, f"error: {e}")
        return 1

    if args.output:
        Path(args.output).write_text(content, encoding="utf-8")
        log_info(context, f"Wrote {args.output}")
    else:
        sys.stdout.write(content)
    return 0


def cmd_list(args: argparse.Namespace) -> int:
    """List registered components with the source declaring them."""
    resolver, _, exit_code = _build_resolver(args)
    for name in resolver.components():
        unit = resolver.registry.unit_for(name)
        print(f"{name:<40} {unit.origin}")
    return exit_code


def cmd_deps(args: argparse.Namespace) -> int:
    """Print the dependency closure of a component, one per line."""
    resolver, context, exit_code = _build_resolver(args)
    try:
        names = resolver.dependencies_of(args.component)
    except ComponentNotFoundError as e:
        log_error(context, f"error: {e}")
        return 1
    for name in names:
        print(name)
    return exit_code


def cmd_check(args: argparse.Namespace) -> int:
    """Report every diagnostic; with --strict, skipped sources fail the check."""
    resolver, context, exit_code = _build_resolver(args)
    print_diagnostics(resolver.diagnostics, context)

    if resolver.has_errors():
        exit_code = 1
    for name in resolver.components():
        try:
            resolver.resolve(name)
        except CyclicDependencyError as e:
            log_error(context, f"{name}: error: {e}")
            exit_code = 1
    return exit_code


def _add_component_arg(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("component", help="Component name (e.g. 'app.bar.Bar')")


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(prog="mbc", description="Mithril component bundler")
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    parser.add_argument("-v", "--verbose",
                        action='count',
                        default=0,
                        dest='verbosity',
                        help="Increase verbosity: -v=INFO, -vvv=DEBUG")
    parser.add_argument("-l", "--log",
                        action='store_true',
                        default=False,
                        help="Enable rich log formatting (timestamps, levels)")
    parser.add_argument(
        "-R", "--root",
        action="append",
        default=[],
        help="Add a source root directory or file (can be passed multiple times; default: $MB_PATH or '.')",
    )
    parser.add_argument(
        "-x", "--ext",
        action="append",
        default=[],
        help="Source file suffix (can be passed multiple times; default: .js)",
    )
    parser.add_argument("--compat",
                        action="store_true",
                        help="Containment-based dependency dedup (reproduces legacy output)")
    parser.add_argument("--strict",
                        action="store_true",
                        help="Fail when a source cannot be read")

    p_resolve = subparsers.add_parser("resolve", help="Print a flattened component", aliases=["bundle"])
    p_resolve.add_argument("--output", "-o", help="Output file (default: stdout)")
    _add_component_arg(p_resolve)
    p_resolve.set_defaults(func=cmd_resolve)

    p_list = subparsers.add_parser("list", help="List registered components", aliases=["components"])
    p_list.set_defaults(func=cmd_list)

    p_deps = subparsers.add_parser("deps", help="Print a component's dependency closure")
    _add_component_arg(p_deps)
    p_deps.set_defaults(func=cmd_deps)

    p_check = subparsers.add_parser("check", help="Load every source and report diagnostics")
    p_check.set_defaults(func=cmd_check)

    args = parser.parse_args(argv)

    rc = args.func(args)
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
