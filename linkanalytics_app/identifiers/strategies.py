"""
Identifier derivation strategies for the link store.
Uses Strategy Pattern so the hash algorithm can be swapped without
touching the record store.
"""

import hashlib
import re
from abc import ABC, abstractmethod


class IdentifierStrategy(ABC):
    """
    Abstract base class for identifier derivation strategies.

    An identifier is the lowercase hex digest of the destination's UTF-8
    bytes. It doubles as the storage key and the public short-link token,
    so it must be deterministic across processes and restarts.
    """

    # Length of the hex digest produced by derive()
    identifier_length: int = 64

    @abstractmethod
    def derive(self, destination: str) -> str:
        """
        Derive the identifier for a destination.

        Args:
            destination: Destination URL, already stripped of surrounding whitespace

        Returns:
            Lowercase hex digest of fixed length
        """
        pass

    def is_valid(self, identifier: str) -> bool:
        """Check that a string looks like an identifier this strategy produces"""
        return (
            len(identifier) == self.identifier_length
            and re.fullmatch(r"[0-9a-f]+", identifier) is not None
        )


class Sha256IdentifierStrategy(IdentifierStrategy):
    """
    SHA-256 digest (default).

    Pros: Ubiquitous, stable, 256-bit collision resistance
    Cons: Slower than BLAKE2b in pure software
    """

    def derive(self, destination: str) -> str:
        return hashlib.sha256(destination.encode("utf-8")).hexdigest()


class Sha3IdentifierStrategy(IdentifierStrategy):
    """SHA3-256 digest, same length as SHA-256 but a different construction"""

    def derive(self, destination: str) -> str:
        return hashlib.sha3_256(destination.encode("utf-8")).hexdigest()


class Blake2bIdentifierStrategy(IdentifierStrategy):
    """
    BLAKE2b digest truncated to 32 bytes.

    Pros: Fastest of the three in software
    Cons: Identifiers are not interchangeable with SHA-256 ones
    """

    DIGEST_SIZE = 32

    def derive(self, destination: str) -> str:
        return hashlib.blake2b(
            destination.encode("utf-8"),
            digest_size=self.DIGEST_SIZE
        ).hexdigest()
