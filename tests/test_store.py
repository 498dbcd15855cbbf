"""Tests for Store."""

import pytest

from sigflow import Signal, Store, effect, store


class TestStore:
    def test_one_signal_per_field(self):
        s = store({"x": 10, "y": "hello"})
        assert isinstance(s, Store)
        assert isinstance(s["x"], Signal)
        assert s["x"].read() == 10
        assert s.y.read() == "hello"

    def test_mapping_protocol(self):
        s = store({"a": 1, "b": 2})
        assert set(s) == {"a", "b"}
        assert len(s) == 2
        assert "a" in s
        assert s.get("missing") is None

    def test_unknown_attribute(self):
        s = store({"a": 1})
        with pytest.raises(AttributeError):
            s.nope
        with pytest.raises(KeyError):
            s["nope"]

    def test_fields_are_independent(self):
        s = store({"x": 0, "y": 0})
        xs, ys = [], []
        effect(lambda: xs.append(s.x.read()))
        effect(lambda: ys.append(s.y.read()))
        s.x.set(1)
        assert xs == [0, 1]
        assert ys == [0]

    def test_initial_mapping_is_not_linked(self):
        initial = {"x": 1}
        s = store(initial)
        initial["x"] = 2
        assert s.x.read() == 1

    def test_snapshot(self):
        s = store({"x": 1, "y": 2})
        s.x.set(5)
        assert s.snapshot() == {"x": 5, "y": 2}

    def test_update_batches(self):
        s = store({"x": 0, "y": 0})
        log = []
        effect(lambda: log.append((s.x.read(), s.y.read())))
        s.update({"x": 1, "y": 2})
        assert log == [(0, 0), (1, 2)]

    def test_update_unknown_key(self):
        s = store({"x": 0})
        with pytest.raises(KeyError):
            s.update({"x": 1, "z": 2})
        assert s.x.read() == 0

    def test_repr(self):
        assert repr(store({"x": 1})) == "Store({'x': 1})"
