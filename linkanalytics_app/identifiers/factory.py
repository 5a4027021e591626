"""
Factory for creating identifier derivation strategies.
Uses caching to avoid creating multiple instances.
"""

from enum import Enum
from .strategies import (
    IdentifierStrategy,
    Sha256IdentifierStrategy,
    Sha3IdentifierStrategy,
    Blake2bIdentifierStrategy
)
from linkanalytics_app.config import settings


class IdentifierStrategyType(Enum):
    """Available identifier derivation strategies"""
    SHA256 = "sha256"
    SHA3_256 = "sha3_256"
    BLAKE2B = "blake2b"


class IdentifierFactory:
    """Factory for creating identifier strategies with caching"""

    _instances = {}  # Cache for strategy instances

    @classmethod
    def create_strategy(
        cls,
        strategy_type: IdentifierStrategyType = None
    ) -> IdentifierStrategy:
        """
        Create or return cached identifier strategy.

        Args:
            strategy_type: Type of strategy to create.
                          If None, uses value from settings.

        Returns:
            A cached instance of an IdentifierStrategy

        Raises:
            ValueError: If strategy_type is unknown
        """
        # Use default from settings if not specified
        if strategy_type is None:
            strategy_type = IdentifierStrategyType(settings.identifier_strategy)

        if strategy_type in cls._instances:
            return cls._instances[strategy_type]

        if strategy_type == IdentifierStrategyType.SHA256:
            instance = Sha256IdentifierStrategy()
        elif strategy_type == IdentifierStrategyType.SHA3_256:
            instance = Sha3IdentifierStrategy()
        elif strategy_type == IdentifierStrategyType.BLAKE2B:
            instance = Blake2bIdentifierStrategy()
        else:
            raise ValueError(f"Unknown strategy type: {strategy_type}")

        cls._instances[strategy_type] = instance
        return instance


def derive(destination: str) -> str:
    """Derive an identifier with the configured strategy"""
    return IdentifierFactory.create_strategy().derive(destination)
