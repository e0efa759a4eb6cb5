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
import threading
from pathlib import Path

from ...ports.identity import IdentityPort

logger = logging.getLogger(__name__)

PASSWD_PATH = "/etc/passwd"
GROUP_PATH = "/etc/group"


def parse_id_database(path: str | Path) -> dict[int, str]:
    """
    Parse a colon-separated account database (passwd(5) / group(5) layout).

    Field 0 is the name, field 2 the numeric id. Malformed lines are skipped;
    when an id is listed twice the last line wins.
    An unreadable file yields an empty mapping.
    """
    mapping: dict[int, str] = {}
    try:
        with open(path, "r", encoding="utf-8", errors="replace") as fh:
            for line in fh:
                if not line.strip() or line.startswith("#"):
                    continue
                parts = line.rstrip("\n").split(":")
                if len(parts) < 3:
                    continue
                try:
                    ident = int(parts[2].strip())
                except ValueError:
                    continue
                # a later line for the same id replaces the earlier one
                mapping[ident] = parts[0].strip()
    except OSError as e:
        logger.debug("parse_id_database: cannot read %s: %s", path, e)
    return mapping


class EtcIdentityResolver(IdentityPort):
    """
    Resolves uids/gids through /etc/passwd and /etc/group.

    - Both databases are parsed together, once, on the first lookup of either kind.
    - Concurrent first callers block on the lock until the maps are complete.
    - After loading, the maps are never mutated; lookups are plain dict reads.
    """

    def __init__(
        self,
        passwd_path: str | Path = PASSWD_PATH,
        group_path: str | Path = GROUP_PATH,
    ) -> None:
        self._passwd_path = passwd_path
        self._group_path = group_path
        self._users: dict[int, str] = {}
        self._groups: dict[int, str] = {}
        self._lock = threading.Lock()
        self._loaded = False

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        with self._lock:
            if self._loaded:
                return
            self._users = parse_id_database(self._passwd_path)
            self._groups = parse_id_database(self._group_path)
            logger.debug(
                "EtcIdentityResolver: loaded %d users, %d groups",
                len(self._users),
                len(self._groups),
            )
            self._loaded = True

    def user_name(self, uid: int) -> str:
        self._ensure_loaded()
        return self._users.get(uid, "")

    def group_name(self, gid: int) -> str:
        self._ensure_loaded()
        return self._groups.get(gid, "")
