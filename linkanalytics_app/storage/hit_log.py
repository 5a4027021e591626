"""
Append-only hit log stored in the same file as the link record.

Line format (one hit per line, plain UTF-8 text):

    hit: 2026/10/18 09:41:07 Mozilla/5.0 (X11; Linux x86_64) ...
    ^^^^^ ^^^^^^^^^^^^^^^^^^^ ^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^
    prefix  UTC timestamp       client signature

Each line is appended with O_APPEND under the per-link lock, and a torn tail
left by an earlier crash is terminated before the next hit is written, so a
torn write can only ever damage the line it was writing.
"""

import logging
import os
from datetime import datetime, timezone
from typing import List

from linkanalytics_app.exceptions import LinkNotFoundError, StorageError
from linkanalytics_app.models.link import HitRecord
from .record_store import FileRecordStore

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "hit: "
TIMESTAMP_FORMAT = "%Y/%m/%d %H:%M:%S"
TIMESTAMP_WIDTH = 19  # len("2026/10/18 09:41:07")


class HitLog:
    """Records visits of registered links and reads them back in order"""

    def __init__(self, records: FileRecordStore, prefix: str = DEFAULT_PREFIX):
        """
        Args:
            records: Record store owning the storage units (and their locks)
            prefix: Marker written at the start of every hit line
        """
        self.records = records
        self.prefix = prefix

    def append(self, identifier: str, client_signature: str) -> HitRecord:
        """
        Append one hit to the link's storage unit.

        Never creates the unit: hits for unknown links are rejected.

        Raises:
            LinkNotFoundError: no unit exists for the identifier
            StorageError: the unit could not be opened or written
        """
        path = self.records.path_for(identifier)
        signature = _single_line(client_signature or "")

        # Timestamp is taken under the lock so file order matches time order
        with self.records.locks.hold(identifier):
            hit = HitRecord(
                timestamp=datetime.now(timezone.utc).replace(microsecond=0),
                client_signature=signature
            )
            data = self.format_line(hit).encode("utf-8")

            try:
                fd = os.open(path, os.O_RDWR | os.O_APPEND)
            except FileNotFoundError:
                raise LinkNotFoundError(identifier) from None
            except OSError as e:
                raise StorageError(f"Could not open {path.name} for append: {e}") from e

            try:
                # Terminate a torn tail so it cannot swallow this hit
                size = os.fstat(fd).st_size
                if size > 0 and os.pread(fd, 1, size - 1) != b"\n":
                    logger.warning("Terminating torn last line in %s", path.name)
                    data = b"\n" + data
                _write_all(fd, data)
            except OSError as e:
                raise StorageError(f"Could not append to {path.name}: {e}") from e
            finally:
                os.close(fd)

        logger.debug("Hit on %s from %r", identifier, signature)
        return hit

    def read_all(self, identifier: str) -> bytes:
        """
        Raw content of the storage unit: destination line plus all hit lines.

        Raises:
            LinkNotFoundError: no unit exists for the identifier
            StorageError: the unit could not be read
        """
        path = self.records.path_for(identifier)
        try:
            with open(path, "rb") as fh:
                return fh.read()
        except FileNotFoundError:
            raise LinkNotFoundError(identifier) from None
        except OSError as e:
            raise StorageError(f"Could not read {path.name}: {e}") from e

    def read_hits(self, identifier: str) -> List[HitRecord]:
        """Parsed hits of a link, in the order they were recorded"""
        return self.parse_history(self.read_all(identifier))

    def parse_history(self, history: bytes) -> List[HitRecord]:
        """
        Parse the hit lines of a storage unit's raw content.

        The first line is the destination and is skipped. A last line without
        a trailing newline is a torn write and is dropped.
        """
        lines = history.split(b"\n")
        torn = lines.pop()  # b"" when the content ends with a newline
        if torn:
            logger.warning("Dropping torn hit line: %r", torn)

        hits = []
        for raw in lines[1:]:
            line = raw.decode("utf-8", errors="replace")
            try:
                hits.append(self.parse_line(line))
            except ValueError:
                logger.warning("Skipping unparseable hit line: %r", line)
        return hits

    def format_line(self, hit: HitRecord) -> str:
        stamp = hit.timestamp.astimezone(timezone.utc).strftime(TIMESTAMP_FORMAT)
        return f"{self.prefix}{stamp} {hit.client_signature}\n"

    def parse_line(self, line: str) -> HitRecord:
        """
        Parse one hit line (without its newline).

        Raises:
            ValueError: the line is not a hit line
        """
        if not line.startswith(self.prefix):
            raise ValueError(f"Missing {self.prefix!r} prefix")

        rest = line[len(self.prefix):]
        stamp, sep, signature = (
            rest[:TIMESTAMP_WIDTH],
            rest[TIMESTAMP_WIDTH:TIMESTAMP_WIDTH + 1],
            rest[TIMESTAMP_WIDTH + 1:],
        )
        if sep != " ":
            raise ValueError("Malformed timestamp")

        timestamp = datetime.strptime(stamp, TIMESTAMP_FORMAT).replace(tzinfo=timezone.utc)
        return HitRecord(timestamp=timestamp, client_signature=signature)


def _single_line(value: str) -> str:
    """Flatten to one line; unencodable characters (lone surrogates) become \"?\""""
    value = value.encode("utf-8", errors="replace").decode("utf-8")
    return value.replace("\r", " ").replace("\n", " ")


def _write_all(fd: int, data: bytes) -> None:
    """os.write until every byte is out; O_APPEND keeps each chunk at the end"""
    view = memoryview(data)
    while view:
        written = os.write(fd, view)
        view = view[written:]
