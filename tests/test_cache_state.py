"""Tests for CacheState: generation, memento round-trip, withdrawal."""

import pytest

from geocoin.core.cache import CacheState
from geocoin.core.errors import MalformedMementoError
from geocoin.core.models import Cell, Depleted, Token
from geocoin.systems.rng import DeterministicRNG


class _FixedRNG:
    """Returns one luck value for every key and records the keys asked for."""

    def __init__(self, value: float):
        self.value = value
        self.keys: list[str] = []

    def luck(self, key: str) -> float:
        self.keys.append(key)
        return self.value


# ---------------------------------------------------------------------------
# generate
# ---------------------------------------------------------------------------

class TestGenerate:
    def test_initial_value_from_luck(self):
        rng = _FixedRNG(0.5)
        state = CacheState.generate(Cell(5, 5), rng)
        assert state.tokens_remaining == 50
        assert rng.keys == ["5,5,initialValue"]

    def test_scale(self):
        assert CacheState.generate(Cell(0, 0), _FixedRNG(0.25), scale=20).tokens_remaining == 5

    def test_floor(self):
        assert CacheState.generate(Cell(0, 0), _FixedRNG(0.999)).tokens_remaining == 99
        assert CacheState.generate(Cell(0, 0), _FixedRNG(0.0)).tokens_remaining == 0

    def test_deterministic(self):
        rng = DeterministicRNG()
        for i in range(-5, 5):
            for j in range(-5, 5):
                a = CacheState.generate(Cell(i, j), rng)
                b = CacheState.generate(Cell(i, j), DeterministicRNG())
                assert a.tokens_remaining == b.tokens_remaining
                assert 0 <= a.tokens_remaining < 100


# ---------------------------------------------------------------------------
# memento
# ---------------------------------------------------------------------------

class TestMemento:
    def test_serialize_is_decimal_count(self):
        assert CacheState(Cell(1, 2), 17).serialize() == "17"
        assert CacheState(Cell(1, 2), 0).serialize() == "0"

    def test_round_trip(self):
        cell = Cell(3, -4)
        for n in range(100):
            restored = CacheState.deserialize(CacheState(cell, n).serialize(), cell)
            assert restored.tokens_remaining == n
            assert restored.cell is cell

    @pytest.mark.parametrize("memento", ["", "-1", "abc", "1.5", " 3", "3 ", "0x10", "²"])
    def test_malformed(self, memento):
        with pytest.raises(MalformedMementoError):
            CacheState.deserialize(memento, Cell(0, 0))

    def test_non_string_malformed(self):
        with pytest.raises(MalformedMementoError):
            CacheState.deserialize(None, Cell(0, 0))  # type: ignore[arg-type]

    def test_malformed_is_value_error(self):
        with pytest.raises(ValueError, match="1:2"):
            CacheState.deserialize("x", Cell(1, 2))


# ---------------------------------------------------------------------------
# withdraw
# ---------------------------------------------------------------------------

class TestWithdraw:
    def test_single_withdraw(self):
        state = CacheState(Cell(5, 5), 50)
        token = state.withdraw()
        assert isinstance(token, Token)
        assert token.serial == "5:5#49"
        assert token.origin == Cell(5, 5)
        assert state.tokens_remaining == 49

    def test_monotonic_with_unique_serials(self):
        state = CacheState.generate(Cell(7, -3), _FixedRNG(0.3))
        v = state.tokens_remaining
        tokens = [state.withdraw() for _ in range(10)]
        assert state.tokens_remaining == v - 10
        assert all(isinstance(t, Token) for t in tokens)
        assert len({t.serial for t in tokens}) == 10

    def test_depleted_boundary(self):
        state = CacheState(Cell(1, 1), 0)
        result = state.withdraw()
        assert result == Depleted(Cell(1, 1))
        assert not result
        assert state.tokens_remaining == 0
        assert state.is_depleted

    def test_exhaust(self):
        state = CacheState(Cell(2, 2), 3)
        serials = [state.withdraw().serial for _ in range(3)]
        assert serials == ["2:2#2", "2:2#1", "2:2#0"]
        assert isinstance(state.withdraw(), Depleted)
        assert state.tokens_remaining == 0


# ---------------------------------------------------------------------------
# Token
# ---------------------------------------------------------------------------

class TestToken:
    def test_parse(self):
        assert Token.parse("-3:7#12") == Token(-3, 7, 12)

    def test_parse_round_trip(self):
        t = Token(369894, -1220627, 41)
        assert Token.parse(t.serial) == t
        assert str(t) == "369894:-1220627#41"

    @pytest.mark.parametrize("serial", ["", "1:2", "1-2#3", "a:b#c", "1:2#-1"])
    def test_parse_malformed(self, serial):
        with pytest.raises(ValueError):
            Token.parse(serial)
