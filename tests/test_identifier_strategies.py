"""
Tests for identifier derivation strategies.
"""
import hashlib
import re

import pytest

from linkanalytics_app.identifiers import derive
from linkanalytics_app.identifiers.strategies import (
    Sha256IdentifierStrategy,
    Sha3IdentifierStrategy,
    Blake2bIdentifierStrategy
)
from linkanalytics_app.identifiers.factory import (
    IdentifierFactory,
    IdentifierStrategyType
)

HEX64 = re.compile(r"[0-9a-f]{64}")

ALL_STRATEGIES = [
    Sha256IdentifierStrategy(),
    Sha3IdentifierStrategy(),
    Blake2bIdentifierStrategy(),
]


class TestSha256Strategy:
    """Test the default SHA-256 strategy"""

    def test_known_digest(self):
        """Test against the published SHA-256 test vector for 'abc'"""
        strategy = Sha256IdentifierStrategy()

        assert strategy.derive("abc") == (
            "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"
        )

    def test_hashes_utf8_bytes(self):
        """Test that non-ASCII destinations hash their UTF-8 encoding"""
        strategy = Sha256IdentifierStrategy()
        destination = "https://example.com/café"

        assert strategy.derive(destination) == hashlib.sha256(destination.encode("utf-8")).hexdigest()

    def test_example_destination(self):
        strategy = Sha256IdentifierStrategy()

        identifier = strategy.derive("https://example.com/a")

        assert HEX64.fullmatch(identifier)

    def test_does_not_strip(self):
        """Whitespace is the caller's job: padded input is a different link"""
        strategy = Sha256IdentifierStrategy()

        assert strategy.derive(" https://example.com/") != strategy.derive("https://example.com/")


@pytest.mark.parametrize("strategy", ALL_STRATEGIES, ids=lambda s: type(s).__name__)
class TestAllStrategies:
    """Properties every strategy must have"""

    def test_fixed_length_lowercase_hex(self, strategy):
        for destination in ["a", "https://example.com/", "x" * 10_000]:
            assert HEX64.fullmatch(strategy.derive(destination))

    def test_same_destination_same_identifier(self, strategy):
        assert strategy.derive("https://example.com/a") == strategy.derive("https://example.com/a")

    def test_corpus_has_no_duplicates(self, strategy):
        """Test that 20,000 distinct destinations give 20,000 identifiers"""
        destinations = [f"https://example.com/page/{i}?q={i * 7}" for i in range(20_000)]

        identifiers = {strategy.derive(d) for d in destinations}

        assert len(identifiers) == len(destinations)

    def test_is_valid(self, strategy):
        assert strategy.is_valid(strategy.derive("https://example.com/"))
        assert not strategy.is_valid("")
        assert not strategy.is_valid("ABCDEF" + "0" * 58)
        assert not strategy.is_valid("0" * 63)
        assert not strategy.is_valid("../../etc/passwd")


def test_strategies_disagree():
    """Test that swapping the strategy changes identifiers"""
    identifiers = {s.derive("https://example.com/") for s in ALL_STRATEGIES}
    assert len(identifiers) == len(ALL_STRATEGIES)


class TestIdentifierFactory:
    """Test strategy factory"""

    def test_creates_sha256_strategy(self):
        strategy = IdentifierFactory.create_strategy(IdentifierStrategyType.SHA256)
        assert isinstance(strategy, Sha256IdentifierStrategy)

    def test_creates_sha3_strategy(self):
        strategy = IdentifierFactory.create_strategy(IdentifierStrategyType.SHA3_256)
        assert isinstance(strategy, Sha3IdentifierStrategy)

    def test_creates_blake2b_strategy(self):
        strategy = IdentifierFactory.create_strategy(IdentifierStrategyType.BLAKE2B)
        assert isinstance(strategy, Blake2bIdentifierStrategy)

    def test_returns_cached_instance(self):
        first = IdentifierFactory.create_strategy(IdentifierStrategyType.SHA256)
        second = IdentifierFactory.create_strategy(IdentifierStrategyType.SHA256)
        assert first is second

    def test_creates_default_from_settings(self):
        """Test factory uses settings when no type specified (sha256 by default)"""
        strategy = IdentifierFactory.create_strategy()
        assert strategy is not None

    def test_unknown_strategy_name(self):
        with pytest.raises(ValueError):
            IdentifierStrategyType("md5")

    def test_module_level_derive(self):
        strategy = IdentifierFactory.create_strategy()
        assert derive("https://example.com/") == strategy.derive("https://example.com/")
