"""
Directive and declaration scanner.

All textual pattern extraction lives here: the `@package` and `@import`
directives, `class Name {` declarations and directive stripping. Units and
the flattener only see ScanResult and the strip helper, so a structural
parser can take this module's place without touching resolution.
"""

#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import re
from dataclasses import dataclass, field
from typing import List


PACKAGE_PATTERN = re.compile(r"@package\s+([\w.]+);?")
IMPORT_PATTERN = re.compile(r"@import\s+([\w.]+);?")
CLASS_PATTERN = re.compile(r"\bclass\s+([^\s{]+)\s*\{")

# A directive is stripped together with the whitespace that follows it.
IMPORT_STRIP_PATTERN = re.compile(r"@import\s*\S+\s*")
PACKAGE_STRIP_PATTERN = re.compile(r"@package\s*\S+\s*")


@dataclass(frozen=True)
class ImportDirective:
    target: str  # dotted identifier as written, e.g. 'app.bar.Bar'
    line: int
    column: int


@dataclass
class ScanResult:
    package_name: str = ""
    component_names: List[str] = field(default_factory=list)
    imports: List[ImportDirective] = field(default_factory=list)


def _position(text: str, offset: int) -> tuple[int, int]:
    line = text.count("\n", 0, offset) + 1
    column = offset - (text.rfind("\n", 0, offset) + 1) + 1
    return line, column


class DirectiveScanner:
    """
    Regex-level scanner for the templating dialect.

    - package: first `@package <dotted>` match, '' if none
    - components: every `class <Name> {`, duplicates collapsed, first-seen order
    - imports: every `@import <dotted>`, in source order, with positions
    """

    def scan(self, text: str) -> ScanResult:
        return ScanResult(
            package_name=self.find_package_name(text),
            component_names=self.find_component_names(text),
            imports=self.find_imports(text),
        )

    def find_package_name(self, text: str) -> str:
        match = PACKAGE_PATTERN.search(text)
        return match.group(1) if match else ""

    def find_component_names(self, text: str) -> List[str]:
        names: dict[str, None] = {}
        for match in CLASS_PATTERN.finditer(text):
            names.setdefault(match.group(1), None)
        return list(names)

    def find_imports(self, text: str) -> List[ImportDirective]:
        imports: List[ImportDirective] = []
        for match in IMPORT_PATTERN.finditer(text):
            line, column = _position(text, match.start())
            imports.append(ImportDirective(target=match.group(1), line=line, column=column))
        return imports

    def strip_directives(self, text: str) -> str:
        """Remove every `@import` and `@package` directive from text."""
        text = IMPORT_STRIP_PATTERN.sub("", text)
        return PACKAGE_STRIP_PATTERN.sub("", text)


DEFAULT_SCANNER = DirectiveScanner()
