"""
File-backed storage for links and their hits.

One file per link: the destination on the first line, followed by an
append-only sequence of hit lines. The filesystem is the database.
"""

from .locks import KeyedLock
from .record_store import FileRecordStore
from .hit_log import HitLog

__all__ = [
    "KeyedLock",
    "FileRecordStore",
    "HitLog",
]
