class TreeAuditError(Exception):
    """Base exception for domain-specific errors."""


class FatalInitError(TreeAuditError):
    """Mandatory infrastructure (the content sniffer) could not be built."""


class StatError(TreeAuditError):
    """Metadata for a path could not be retrieved."""


class WalkError(TreeAuditError):
    """A root path or a subtree could not be traversed."""


class ClassificationError(TreeAuditError):
    """Content sniffing failed for a specific file."""


class ReadError(TreeAuditError):
    """File content could not be fully read for checksumming."""
