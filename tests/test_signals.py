"""Tests for Signal and the is_signal/is_computed guards."""

import math

from sigflow import Kind, Signal, computed, effect, is_computed, is_signal, signal


class TestSignal:
    def test_read_set(self):
        s = signal(42)
        assert s.read() == 42
        s.set(100)
        assert s.read() == 100

    def test_update(self):
        s = signal(1)
        s.update(lambda n: n + 1)
        assert s.read() == 2

    def test_value_property(self):
        s = signal("a")
        assert s.value == "a"

    def test_update_with_new_list(self):
        items = signal([1, 2, 3])
        items.update(lambda xs: [*xs, 4])
        assert items.read() == [1, 2, 3, 4]

    def test_works_with_objects(self):
        user = signal({"name": "John", "age": 30})
        user.set({"name": "Jane", "age": 25})
        assert user.read()["name"] == "Jane"

    def test_repr(self):
        assert repr(signal(5)) == "Signal(5)"


class TestChangeDetection:
    def test_same_value_is_noop(self):
        s = signal(0)
        runs = []
        effect(lambda: runs.append(s.read()))
        s.set(0)
        assert runs == [0]
        s.set(1)
        assert runs == [0, 1]

    def test_same_object_is_noop(self):
        data = [1, 2]
        s = signal(data)
        runs = []
        effect(lambda: runs.append(s.read()))
        data.append(3)
        s.set(data)
        assert len(runs) == 1

    def test_equal_but_distinct_object_notifies(self):
        s = signal([1, 2])
        runs = []
        effect(lambda: runs.append(s.read()))
        s.set([1, 2])
        assert len(runs) == 2

    def test_large_ints_compare_by_value(self):
        s = signal(10**6)
        runs = []
        effect(lambda: runs.append(s.read()))
        s.set(int("1000000"))
        assert len(runs) == 1

    def test_nan_is_same_as_nan(self):
        s = signal(math.nan)
        runs = []
        effect(lambda: runs.append(s.read()))
        s.set(float("nan"))
        assert len(runs) == 1

    def test_bool_and_int_differ(self):
        s = signal(1)
        runs = []
        effect(lambda: runs.append(s.read()))
        s.set(True)
        assert runs == [1, True]

    def test_negative_zero_differs(self):
        s = signal(0.0)
        runs = []
        effect(lambda: runs.append(s.read()))
        s.set(-0.0)
        assert len(runs) == 2
        s.set(-0.0)
        assert len(runs) == 2


class TestPeek:
    def test_peek_does_not_track(self):
        s = signal(0)
        runs = []
        effect(lambda: runs.append(s.peek()))
        for i in range(1, 5):
            s.set(i)
        assert runs == [0]
        assert s.peek() == 4


class TestSubscribe:
    def test_subscribe_and_unsubscribe(self):
        s = signal(0)
        calls = []
        unsub = s.subscribe(lambda: calls.append(s.peek()))
        s.set(1)
        s.set(2)
        assert calls == [1, 2]
        unsub()
        s.set(3)
        assert calls == [1, 2]

    def test_unsubscribe_twice_is_harmless(self):
        s = signal(0)
        unsub = s.subscribe(lambda: None)
        unsub()
        unsub()

    def test_unsubscribe_removes_only_that_callback(self):
        s = signal(0)
        a, b = [], []
        unsub_a = s.subscribe(lambda: a.append(1))
        s.subscribe(lambda: b.append(1))
        unsub_a()
        s.set(1)
        assert a == []
        assert b == [1]

    def test_callback_removed_mid_notify_is_skipped(self):
        s = signal(0)
        calls = []
        unsubs = {}

        def make(name, other):
            def callback():
                calls.append(name)
                unsubs[other]()

            return callback

        unsubs["a"] = s.subscribe(make("a", "b"))
        unsubs["b"] = s.subscribe(make("b", "a"))
        s.set(1)
        assert len(calls) == 1


class TestGuards:
    def test_is_signal(self):
        assert is_signal(signal(0))
        assert is_signal(computed(lambda: 1))
        assert not is_signal(0)
        assert not is_signal(lambda: 0)

    def test_is_computed(self):
        s = signal(0)
        c = computed(lambda: s.read() * 2)
        assert is_computed(c)
        assert not is_computed(s)
        assert not is_computed(None)

    def test_kind_marker(self):
        assert signal(0).kind is Kind.SIGNAL
        assert computed(lambda: 0).kind is Kind.COMPUTED
        assert isinstance(computed(lambda: 0), Signal)
