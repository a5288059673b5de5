#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from dataclasses import dataclass
from typing import Optional


DIAGNOSTIC_CODE_FAMILIES = {
    "SRC": [
        "SRC-0010",  # source could not be read or decoded
        "SRC-0020",  # source declares no components
    ],
    "REG": [
        "REG-0010",  # duplicate qualified name (last one wins)
    ],
    "IMP": [
        "IMP-0010",  # import target not registered
    ],
    "RES": [
        "RES-0010",  # component not found
        "RES-0020",  # cyclic dependency
    ],
    # ICE codes are internal errors raised as exceptions,
    # not user-facing diagnostics; they are excluded from this registry.
}


@dataclass
class Diagnostic:
    kind: str  # "error" or "warning"
    message: str
    component: Optional[str] = None  # qualified component name
    origin: Optional[str] = None  # where the source text came from

    line: Optional[int] = None
    column: Optional[int] = None

    def format(self) -> str:
        loc = ""
        if self.origin is not None:
            loc += self.origin
        if self.line is not None:
            loc += f":{self.line}"
            if self.column is not None:
                loc += f":{self.column}"
        if self.component is not None:
            loc += f"({self.component})"
        if loc:
            loc += ": "
        return f"{loc}{self.kind}: {self.message}"


def diagnostic_code(diag: Diagnostic) -> Optional[str]:
    """Return the `FAM-NNNN` code embedded in a diagnostic message, if any."""
    start = diag.message.find("[")
    end = diag.message.find("]", start + 1)
    if start < 0 or end < 0:
        return None
    return diag.message[start + 1:end]
