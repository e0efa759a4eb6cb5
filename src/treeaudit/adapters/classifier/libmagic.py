# Licensed under the Apache License, Version 2.0
from __future__ import annotations

import logging
import os
from typing import Iterable, Optional

from ...domain import ClassificationError, ContentKind, FatalInitError
from ...ports.classifier import ClassifierPort

try:
    import magic as _magic  # pip install python-magic (needs libmagic)
except Exception:
    _magic = None

logger = logging.getLogger(__name__)

# Compiled artefacts differ between machines through linking, so their
# checksums are never compared.
DEFAULT_BINARY_TYPES = frozenset(
    {
        "application/octet-stream",
        "application/x-executable",
        "application/x-pie-executable",
        "application/x-sharedlib",
        "application/x-object",
        "application/x-coredump",
        "application/x-mach-binary",
    }
)


class LibmagicClassifier(ClassifierPort):
    """
    MIME sniffing through libmagic. Symlinks are resolved before sniffing.

    Construction fails with FatalInitError if libmagic is unavailable or its
    signature database cannot be loaded.
    """

    def __init__(
        self,
        binary_types: Optional[Iterable[str]] = None,
        magic_file: Optional[str] = None,
    ) -> None:
        if _magic is None:
            raise FatalInitError("libmagic is not available (install python-magic)")
        try:
            self._magic = _magic.Magic(mime=True, magic_file=magic_file)
        except Exception as e:
            raise FatalInitError(f"Problem initialising libmagic detection: {e}") from e
        self._binary_types = frozenset(
            t.strip().lower() for t in (binary_types or DEFAULT_BINARY_TYPES)
        )
        logger.debug(
            "LibmagicClassifier: binary types %s", ", ".join(sorted(self._binary_types))
        )

    def mime_type(self, path: str) -> str:
        target = os.path.realpath(path)
        try:
            return str(self._magic.from_file(target))
        except Exception as e:
            raise ClassificationError(f"{path}: {e}") from e

    def classify(self, path: str) -> ContentKind:
        mimetype = self.mime_type(path)
        if mimetype.lower() in self._binary_types:
            return ContentKind.BINARY
        return ContentKind.TEXTUAL
