from .errors import (
    ClassificationError,
    FatalInitError,
    ReadError,
    StatError,
    TreeAuditError,
    WalkError,
)
from .entry import ContentKind, EntryReport, FileEntry

__all__ = [
    "ClassificationError",
    "ContentKind",
    "EntryReport",
    "FatalInitError",
    "FileEntry",
    "ReadError",
    "StatError",
    "TreeAuditError",
    "WalkError",
]
