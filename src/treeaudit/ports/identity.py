# Licensed under the Apache License, Version 2.0
from __future__ import annotations

from typing import Protocol


class IdentityPort(Protocol):
    """
    Numeric owner ids to account names.
    Unknown ids resolve to an empty string; lookups never raise.
    """

    def user_name(self, uid: int) -> str: ...

    def group_name(self, gid: int) -> str: ...
