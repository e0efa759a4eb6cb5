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

import hashlib
import logging
import os
from pathlib import Path
from typing import Iterator, List, Optional

import typer

from .. import __version__
from ..adapters.classifier.libmagic import DEFAULT_BINARY_TYPES, LibmagicClassifier
from ..adapters.identity.etc_files import GROUP_PATH, PASSWD_PATH, EtcIdentityResolver
from ..domain import FatalInitError
from ..ports.checksum import ChecksumPort
from ..ports.filesystem import FilesystemPort
from ..services import ReportService, WalkService

from ..logging_config import apply_verbosity, setup_logging

setup_logging()

app = typer.Typer(
    help="treeaudit - inventory a file tree: mode, size, owner, group, path and md5 of non-binary content"
)

logger = logging.getLogger(__name__)


class LocalFS(FilesystemPort):
    """Local filesystem adapter over os.scandir / os.stat."""

    def scandir(self, path: str) -> Iterator[os.DirEntry]:
        with os.scandir(path) as it:
            yield from it

    def stat(self, path: str) -> os.stat_result:
        return os.stat(path)

    def lstat(self, path: str) -> os.stat_result:
        return os.lstat(path)

    def read_bytes(self, path: str) -> bytes:
        with open(path, "rb") as f:
            return f.read()


class MD5Checksum(ChecksumPort):
    """
    Full-content MD5, used only as a change-detection fingerprint between
    copies of a tree; collision resistance is not relied upon.
    """

    label = "md5"

    def hexdigest(self, data: bytes) -> str:
        return hashlib.md5(data).hexdigest()


# ------------------------------
# CLI Commands
# ------------------------------


def _wire(
    *,
    binary_types: Optional[List[str]] = None,
    magic_file: Optional[Path] = None,
    passwd: Path = Path(PASSWD_PATH),
    group: Path = Path(GROUP_PATH),
    sort_entries: bool = False,
) -> WalkService:
    """
    Minimal composition root:
      LocalFS + EtcIdentityResolver + LibmagicClassifier + MD5Checksum

    Raises:
        FatalInitError: libmagic could not be initialised.
    """
    fs = LocalFS()
    classifier = LibmagicClassifier(
        binary_types=binary_types or DEFAULT_BINARY_TYPES,
        magic_file=str(magic_file) if magic_file else None,
    )
    identities = EtcIdentityResolver(passwd_path=passwd, group_path=group)
    reporter = ReportService(fs, identities, classifier, MD5Checksum())
    return WalkService(fs, reporter, echo=typer.echo, sort_entries=sort_entries)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"treeaudit {__version__}")
        raise typer.Exit()


@app.command()
def audit(
    paths: List[str] = typer.Argument(
        ...,
        help="One or more files or directories to inventory, walked in the order given.",
    ),
    sort: bool = typer.Option(
        False,
        "--sort",
        help="Sort directory entries by name for deterministic output.",
    ),
    binary_type: Optional[List[str]] = typer.Option(
        None,
        "--binary-type",
        help="MIME type treated as binary (no checksum). Repeatable; replaces the defaults.",
    ),
    magic_file: Optional[Path] = typer.Option(
        None,
        "--magic-file",
        exists=True,
        dir_okay=False,
        help="Alternative libmagic signature database.",
    ),
    passwd: Path = typer.Option(
        Path(PASSWD_PATH), "--passwd", help="Account database used to resolve uids."
    ),
    group: Path = typer.Option(
        Path(GROUP_PATH), "--group", help="Group database used to resolve gids."
    ),
    quiet: bool = typer.Option(False, "--quiet", help="Only log errors."),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
):
    """
    Print one line per file and directory under each PATH.
    """
    apply_verbosity(verbose=verbose, quiet=quiet)
    logger.debug("Verbose logging enabled")

    try:
        walker = _wire(
            binary_types=binary_type,
            magic_file=magic_file,
            passwd=passwd,
            group=group,
            sort_entries=sort,
        )
    except FatalInitError as e:
        logger.error("%s", e)
        raise typer.Exit(code=2)

    count = walker.walk(paths)
    logger.info("Reported %d entries under %d path(s)", count, len(paths))
