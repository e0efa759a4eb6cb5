from .checksum import ChecksumPort
from .classifier import ClassifierPort
from .filesystem import FilesystemPort
from .identity import IdentityPort

__all__ = ["ChecksumPort", "ClassifierPort", "FilesystemPort", "IdentityPort"]
