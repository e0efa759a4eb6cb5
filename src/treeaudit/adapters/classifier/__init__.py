from .libmagic import DEFAULT_BINARY_TYPES, LibmagicClassifier

__all__ = ["DEFAULT_BINARY_TYPES", "LibmagicClassifier"]
