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

import os
from abc import ABC, abstractmethod
from typing import Iterator


class FilesystemPort(ABC):
    """Abstract interface for filesystem access."""

    @abstractmethod
    def scandir(self, path: str) -> Iterator[os.DirEntry]:
        """Yield the children of a directory in enumeration order."""
        raise NotImplementedError

    @abstractmethod
    def stat(self, path: str) -> os.stat_result:
        """Return metadata for a path, following symlinks."""
        raise NotImplementedError

    @abstractmethod
    def lstat(self, path: str) -> os.stat_result:
        """Return metadata for a path without following symlinks."""
        raise NotImplementedError

    @abstractmethod
    def read_bytes(self, path: str) -> bytes:
        """Return the whole content of a file."""
        raise NotImplementedError
