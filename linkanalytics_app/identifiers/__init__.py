"""
Identifier derivation for content-addressed links.
Implements Strategy Pattern for pluggable hash algorithms.
"""

from .strategies import (
    IdentifierStrategy,
    Sha256IdentifierStrategy,
    Sha3IdentifierStrategy,
    Blake2bIdentifierStrategy,
)
from .factory import IdentifierFactory, IdentifierStrategyType, derive

__all__ = [
    "IdentifierStrategy",
    "Sha256IdentifierStrategy",
    "Sha3IdentifierStrategy",
    "Blake2bIdentifierStrategy",
    "IdentifierFactory",
    "IdentifierStrategyType",
    "derive",
]
