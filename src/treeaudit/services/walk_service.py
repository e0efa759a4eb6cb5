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

import logging
import os
import stat
import sys
from typing import Callable, Iterable, Optional

from ..domain import WalkError
from ..ports.filesystem import FilesystemPort
from .report_service import ReportService

logger = logging.getLogger(__name__)


class WalkService:
    """
    Depth-first, pre-order traversal of one or more roots.

    Each visited node (the root included) is handed to the ReportService and
    its line passed to `echo`. Children are visited in the order the OS lists
    them unless `sort_entries` is set. Symlinked directories are reported but
    not descended into. Traversal uses an explicit stack, not recursion.
    """

    def __init__(
        self,
        fs: FilesystemPort,
        reporter: ReportService,
        *,
        echo: Optional[Callable[[str], None]] = None,
        sort_entries: bool = False,
    ) -> None:
        self._fs = fs
        self._reporter = reporter
        self._echo = echo
        self._sort_entries = bool(sort_entries)

    def _emit(self, path: str) -> int:
        line = self._reporter.report(path)
        if line is None:
            return 0
        if self._echo is not None:
            self._echo(line)
        else:
            sys.stdout.write(line + "\n")
        return 1

    def _children(self, path: str) -> list[os.DirEntry]:
        try:
            children = list(self._fs.scandir(path))
        except OSError as e:
            raise WalkError(f"{path}: {e}") from e
        if self._sort_entries:
            children.sort(key=lambda c: c.name)
        return children

    def _visit(self, root: str, root_is_dir: bool) -> int:
        emitted = 0
        stack: list[tuple[str, bool]] = [(root, root_is_dir)]
        while stack:
            path, is_dir = stack.pop()
            emitted += self._emit(path)
            if not is_dir:
                continue

            try:
                children = self._children(path)
            except WalkError as e:
                logger.warning("Unable to walk %s", e)
                continue

            pending: list[tuple[str, bool]] = []
            for child in children:
                try:
                    child_is_dir = child.is_dir(follow_symlinks=False)
                except OSError as e:
                    logger.warning("Unable to inspect %s: %s", child.path, e)
                    child_is_dir = False
                pending.append((child.path, child_is_dir))
            # reversed so the first listed child is popped first
            stack.extend(reversed(pending))
        return emitted

    def walk_root(self, root: str | os.PathLike) -> int:
        """
        Walk a single root. Returns the number of lines emitted.

        Raises:
            WalkError: the root itself does not exist or cannot be inspected.
        """
        root = os.fspath(root)
        try:
            st = self._fs.lstat(root)
        except OSError as e:
            raise WalkError(f"{root}: {e}") from e
        return self._visit(root, stat.S_ISDIR(st.st_mode))

    def walk(self, roots: Iterable[str | os.PathLike]) -> int:
        """Walk each root in the given order. Returns the total number of lines emitted."""
        total = 0
        for root in roots:
            try:
                total += self.walk_root(root)
            except WalkError as e:
                logger.warning("Unable to walk path %s", e)
        logger.debug("WalkService.walk: emitted %d lines", total)
        return total
