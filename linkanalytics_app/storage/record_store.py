"""
File-based record store for links.

Each link is one file in the storage directory:

    <storage_dir>/<identifier><suffix>

The first line holds the destination. Every following line is a hit,
appended by HitLog. Files are created once and never rewritten.

Creation links a fully written temp file into place with os.link(). On
filesystems without hard links (FAT, some network mounts) it falls back to
an exclusive create, where a reader racing the creator can briefly see an
empty unit.
"""

import contextlib
import errno
import logging
import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from linkanalytics_app.exceptions import (
    InvalidDestinationError,
    LinkNotFoundError,
    StorageError,
)
from linkanalytics_app.identifiers.strategies import IdentifierStrategy
from linkanalytics_app.models.link import Link
from .locks import KeyedLock

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX = ".linkanalytics"

# errno values os.link() reports on filesystems without hard links
_NO_HARD_LINKS = {errno.EPERM, errno.ENOTSUP, errno.EOPNOTSUPP, errno.ENOSYS}


class FileRecordStore:
    """
    Content-addressed link store backed by one file per link.

    No in-memory index: every call goes to disk, so the store is always
    consistent with what other threads (or processes) wrote.
    """

    def __init__(
        self,
        base_dir: Union[str, Path],
        identifiers: IdentifierStrategy,
        suffix: str = DEFAULT_SUFFIX,
        locks: Optional[KeyedLock] = None
    ):
        """
        Initialize the record store.

        Args:
            base_dir: Directory holding the storage units (created if missing)
            identifiers: Strategy used to derive identifiers from destinations
            suffix: File name suffix of every storage unit
            locks: Per-identifier locks, shared with the HitLog on the same store
        """
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self.identifiers = identifiers
        self.suffix = suffix
        self.locks = locks if locks is not None else KeyedLock()

    def path_for(self, identifier: str) -> Path:
        """
        Path of the storage unit for an identifier.

        Raises:
            LinkNotFoundError: identifier is not a well-formed digest, so no
                unit can exist for it
        """
        if not self.identifiers.is_valid(identifier):
            raise LinkNotFoundError(identifier)
        return self.base_dir / f"{identifier}{self.suffix}"

    def exists(self, identifier: str) -> bool:
        try:
            return self.path_for(identifier).is_file()
        except LinkNotFoundError:
            return False

    def create(self, destination: str) -> Link:
        """
        Register a destination.

        Idempotent: if the destination was registered before, the existing
        unit (and its hit history) is left untouched and returned as is.

        Raises:
            InvalidDestinationError: destination is empty, spans several lines
                or cannot be encoded as UTF-8
            StorageError: the unit could not be written or read back
        """
        _check_destination(destination)

        identifier = self.identifiers.derive(destination)
        path = self.path_for(identifier)

        with self.locks.hold(identifier):
            try:
                created = self._publish(path, destination)
            except OSError as e:
                raise StorageError(f"Could not create {path.name}: {e}") from e

            if not created:
                logger.debug("Link %s already registered, keeping its history", identifier)
                return self.load(identifier)

        logger.info("Registered link %s -> %s", identifier, destination)
        return Link(identifier=identifier, destination=destination)

    def load(self, identifier: str) -> Link:
        """
        Read the destination of a link.

        Raises:
            LinkNotFoundError: no unit exists for the identifier
            StorageError: the unit is unreadable, truncated or does not
                belong to the identifier
        """
        path = self.path_for(identifier)

        try:
            with open(path, "rb") as fh:
                header = fh.readline()
        except FileNotFoundError:
            raise LinkNotFoundError(identifier) from None
        except OSError as e:
            raise StorageError(f"Could not read {path.name}: {e}") from e

        if not header.endswith(b"\n"):
            raise StorageError(f"Truncated header in {path.name}")

        try:
            destination = header[:-1].decode("utf-8")
        except UnicodeDecodeError as e:
            raise StorageError(f"Header of {path.name} is not valid UTF-8") from e

        if self.identifiers.derive(destination) != identifier:
            raise StorageError(f"Header of {path.name} does not match its identifier")

        return Link(identifier=identifier, destination=destination)

    def _publish(self, path: Path, destination: str) -> bool:
        """
        Write the unit to a private temp file, then link it into place.

        os.link() refuses to replace an existing file, so exactly one creator
        wins and readers never see a half-written header. On filesystems
        without hard links this falls back to _publish_exclusive().

        Returns:
            True if this call created the unit, False if it already existed
        """
        data = f"{destination}\n".encode("utf-8")
        fd, tmp_name = tempfile.mkstemp(
            dir=self.base_dir,
            prefix=f".{path.name}.",
            suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
                fh.flush()
                os.fsync(fh.fileno())
            os.link(tmp_name, path)
            return True
        except FileExistsError:
            return False
        except OSError as e:
            if e.errno not in _NO_HARD_LINKS:
                raise
            logger.warning("Hard links unsupported in %s (%s), using exclusive create", self.base_dir, e)
            return self._publish_exclusive(path, data)
        finally:
            with contextlib.suppress(FileNotFoundError):
                os.unlink(tmp_name)

    def _publish_exclusive(self, path: Path, data: bytes) -> bool:
        """
        Create the unit in place with O_CREAT | O_EXCL.

        Still exactly one creator wins, but until the header write returns
        a concurrent load() may see an empty unit and report a StorageError.
        """
        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
        except FileExistsError:
            return False
        with os.fdopen(fd, "wb") as fh:
            fh.write(data)
            fh.flush()
            os.fsync(fh.fileno())
        return True


def _check_destination(destination: str) -> None:
    if not destination:
        raise InvalidDestinationError("Destination must not be empty")
    if "\n" in destination or "\r" in destination:
        raise InvalidDestinationError("Destination must be a single line")
    try:
        destination.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidDestinationError("Destination is not valid Unicode text") from e
