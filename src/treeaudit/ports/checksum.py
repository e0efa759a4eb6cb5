# Licensed under the Apache License, Version 2.0
from __future__ import annotations

from typing import Protocol


class ChecksumPort(Protocol):
    """
    Content fingerprint for change detection between copies of a tree.
    Only equality of fingerprints matters; no security property is assumed.
    """

    label: str

    def hexdigest(self, data: bytes) -> str:
        """Return the lowercase hex fingerprint of the full file content."""
        ...
