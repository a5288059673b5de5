#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass, field
from pathlib import Path
from typing import List


@dataclass
class SourceRoots:
    """
    Where the command-line driver looks for component sources.

    - roots:    directories searched recursively, or single files
    - suffixes: file suffixes that count as sources (e.g. '.js')

    The bundler core never walks the file system; this only feeds it paths.
    """
    roots: List[Path] = field(default_factory=list)
    suffixes: List[str] = field(default_factory=lambda: [".js"])

    def add_root(self, root: str | Path) -> None:
        self.roots.append(Path(root))

    def collect(self) -> List[Path]:
        """
        All matching files under the roots, sorted per root, without duplicates.

        A root that is a file is taken as-is whatever its suffix. A missing root
        is passed through so the loader reports it as a skipped source.
        """
        seen = set()
        found: List[Path] = []
        for root in self.roots:
            if root.is_dir():
                candidates = sorted(
                    p for p in root.rglob("*") if p.is_file() and p.suffix in self.suffixes
                )
            else:
                candidates = [root]
            for path in candidates:
                key = path.resolve()
                if key in seen:
                    continue
                seen.add(key)
                found.append(path)
        return found
