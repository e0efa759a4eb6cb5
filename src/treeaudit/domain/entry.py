# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from __future__ import annotations

import enum
import os
import stat
from dataclasses import dataclass
from typing import Optional


class ContentKind(enum.Enum):
    TEXTUAL = "textual"
    BINARY = "binary"


@dataclass(frozen=True)
class FileEntry:
    """
    Metadata snapshot of one visited node. Mode and size come from `st`;
    uid/gid from `owner_st` when given (the lstat of a symlink).
    """

    path: str
    mode: int
    size: int
    uid: int
    gid: int

    @classmethod
    def from_stat(
        cls,
        path: str,
        st: os.stat_result,
        owner_st: Optional[os.stat_result] = None,
    ) -> FileEntry:
        ids = owner_st if owner_st is not None else st
        return cls(
            path=path,
            mode=st.st_mode,
            size=st.st_size,
            uid=getattr(ids, "st_uid", 0),
            gid=getattr(ids, "st_gid", 0),
        )

    @property
    def is_directory(self) -> bool:
        return stat.S_ISDIR(self.mode)

    @property
    def is_regular(self) -> bool:
        return stat.S_ISREG(self.mode)

    @property
    def permissions(self) -> str:
        return stat.filemode(self.mode)


@dataclass(frozen=True)
class EntryReport:
    """Everything known about an entry once it has been reported."""

    entry: FileEntry
    owner: str
    group: str
    kind: Optional[ContentKind] = None
    md5: Optional[str] = None

    def format_line(self) -> str:
        """
        Render the space-separated output line:

            <perms> <size> <owner> <group> <path>[ md5=<hex>]
        """
        e = self.entry
        line = f"{e.permissions} {e.size} {self.owner} {self.group} {e.path}"
        if self.md5 is not None:
            line += f" md5={self.md5}"
        return line
