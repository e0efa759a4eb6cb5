from .etc_files import EtcIdentityResolver

__all__ = ["EtcIdentityResolver"]
