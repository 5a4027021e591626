"""
Data models for the link analytics store.

Note: there is no database. Each link lives in its own file on disk
(destination on the first line, one hit per following line), and these
models are what the store reads out of those files.
"""

from .link import Link, HitRecord, LinkAnalytics

__all__ = ["Link", "HitRecord", "LinkAnalytics"]
