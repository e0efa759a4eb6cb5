# Licensed under the Apache License, Version 2.0
from __future__ import annotations

from typing import Protocol

from ..domain import ContentKind


class ClassifierPort(Protocol):
    """
    Content sniffing by file signature, never by name or extension.
    Implementations raise ClassificationError when a given path cannot be sniffed.
    """

    def mime_type(self, path: str) -> str: ...

    def classify(self, path: str) -> ContentKind: ...
