"""
Bundle context for cross-cutting bundler options.

This module defines the BundleContext dataclass which holds options that
affect more than one stage of bundling (parsing, flattening, diagnostics).
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass
from enum import Enum, IntEnum


class LogLevel(IntEnum):
    """Hierarchical logging levels for the bundler."""
    SILENT = 0      # No logging
    ERROR = 3       # Error messages only
    WARNING = 6     # Warning messages (default)
    INFO = 10       # General progress messages (-v)
    DEBUG = 30      # Detailed diagnostic information (-vvv)


class DedupMode(Enum):
    """How dependency content is de-duplicated while flattening."""
    EXACT = "exact"              # each unit emitted once (visited set)
    CONTAINMENT = "containment"  # append unless already a substring of the output


@dataclass
class BundleContext:
    """
    Holds cross-cutting options that affect multiple bundling stages.

    Attributes:
        log_rich_format:    If True, emit logs in rich format: timestamps and log level.
        log_level:          Current logging level.
        dedup_mode:         Dependency de-duplication strategy used by the flattener.
    """
    log_rich_format: bool = False
    log_level: LogLevel = LogLevel.WARNING
    dedup_mode: DedupMode = DedupMode.EXACT

    @staticmethod
    def default() -> 'BundleContext':
        """Create a BundleContext with default settings."""
        return BundleContext(log_level=LogLevel.WARNING)
