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
from typing import Optional

from ..domain import (
    ClassificationError,
    ContentKind,
    EntryReport,
    FileEntry,
    ReadError,
    StatError,
)
from ..ports.checksum import ChecksumPort
from ..ports.classifier import ClassifierPort
from ..ports.filesystem import FilesystemPort
from ..ports.identity import IdentityPort

logger = logging.getLogger(__name__)


class ReportService:
    """
    Builds the report line for a single filesystem entry:
      - stats the path: mode and size follow symlinks, owner/group are the
        link's own (lstat); a dangling link is reported from lstat alone
      - resolves owner/group names
      - for regular files, sniffs the content and checksums non-binary content

    Every per-entry failure is logged here and degrades the line; the base
    fields are always printed once a stat result exists, `md5=` only when the
    checksum was actually computed.
    """

    def __init__(
        self,
        fs: FilesystemPort,
        identities: IdentityPort,
        classifier: ClassifierPort,
        checksummer: ChecksumPort,
    ) -> None:
        self._fs = fs
        self._identities = identities
        self._classifier = classifier
        self._checksummer = checksummer

    def _stat_entry(self, path: str) -> tuple[FileEntry, bool]:
        """Return (entry, followed) where `followed` is False for an lstat-only entry."""
        try:
            link_st = self._fs.lstat(path)
        except OSError as e:
            logger.debug("lstat failed for %s: %s", path, e)
            link_st = None
        try:
            st = self._fs.stat(path)
        except OSError as e:
            logger.warning("Unable to stat %s: %s", path, e)
            if link_st is None:
                raise StatError(f"{path}: {e}") from e
            return FileEntry.from_stat(path, link_st), False
        return FileEntry.from_stat(path, st, owner_st=link_st), True

    def checksum(self, path: str) -> str:
        try:
            data = self._fs.read_bytes(path)
        except OSError as e:
            raise ReadError(f"{path}: {e}") from e
        return self._checksummer.hexdigest(data)

    def describe(self, path: str) -> Optional[EntryReport]:
        try:
            entry, followed = self._stat_entry(path)
        except StatError as e:
            logger.warning("Skipping %s", e)
            return None

        owner = self._identities.user_name(entry.uid)
        group = self._identities.group_name(entry.gid)

        if entry.is_directory or not followed or not entry.is_regular:
            return EntryReport(entry, owner, group)

        try:
            kind = self._classifier.classify(path)
        except ClassificationError as e:
            logger.warning("Unable to determine file mimetype: %s", e)
            return EntryReport(entry, owner, group)

        if kind is ContentKind.BINARY:
            # Checksums of linked binaries differ between machines; skip them.
            return EntryReport(entry, owner, group, kind=kind)

        try:
            digest = self.checksum(path)
        except ReadError as e:
            logger.warning("Unable to read %s", e)
            return EntryReport(entry, owner, group, kind=kind)

        logger.debug("%s %s=%s", path, self._checksummer.label, digest)
        return EntryReport(entry, owner, group, kind=kind, md5=digest)

    def report(self, path: str) -> Optional[str]:
        """Return the formatted line for `path`, or None when it cannot be stat'ed at all."""
        described = self.describe(path)
        if described is None:
            return None
        return described.format_line()
