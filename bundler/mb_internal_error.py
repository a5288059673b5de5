#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

from __future__ import annotations

from typing import Optional


class InternalBundlerError(RuntimeError):
    """
    A bundler bug or violated registry invariant.
    Not for user mistakes (those are Diagnostics).
    """

    def __init__(self, message: str, origin: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.origin = origin

    def format(self) -> str:
        message = self.message
        if "[ICE-" not in message:
            message = f"[ICE-9999] {message}"
        if self.origin:
            return f"{self.origin}: internal bundler error: {message}"
        return f"internal bundler error: {message}"
