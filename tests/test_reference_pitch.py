"""Tests for the A4 reference pitch model."""

import math

import pytest

from chromatic_tuner.errors import InvalidReference
from chromatic_tuner.reference_pitch import ReferencePitch


class TestReferencePitch:
    """Tests for reading and changing the reference."""

    def test_default_440(self):
        """The reference defaults to 440 Hz."""
        reference = ReferencePitch()
        assert reference.frequency == 440
        assert reference.standard_frequency(69) == 440.0

    def test_change_to_432(self):
        """Changing the reference moves A4."""
        reference = ReferencePitch()
        assert reference.set_reference(432) is True
        assert reference.frequency == 432
        assert reference.standard_frequency(69) == 432.0

    def test_change_keeps_note_indices(self):
        """Note indices are fixed; only their frequencies follow the reference."""
        reference = ReferencePitch()
        before = [key.note_index for key in reference.note_table()]
        reference.set_reference(432)
        after = [key.note_index for key in reference.note_table()]
        assert before == after
        assert reference.map_frequency(432.0).note_index == 69

    def test_unchanged_value_is_noop(self):
        """Setting the current value notifies nobody."""
        reference = ReferencePitch()
        calls = []
        reference.subscribe(calls.append)
        assert reference.set_reference(440) is False
        assert reference.set_reference("440") is False
        assert calls == []

    @pytest.mark.parametrize("value", [0, "0", -5, "abc", "", None, math.nan, math.inf, True, [440]])
    def test_invalid_rejected(self, value):
        """Invalid values are rejected and the reference is kept."""
        reference = ReferencePitch(442)
        with pytest.raises(InvalidReference):
            reference.set_reference(value)
        assert reference.frequency == 442

    @pytest.mark.parametrize(
        ("value", "expected"),
        [("432", 432), (" 415 ", 415), ("432.5", 432), ("443Hz", 443), (432.9, 432), (444, 444)],
    )
    def test_coercion(self, value, expected):
        """Input is coerced like a numeric text field."""
        reference = ReferencePitch()
        reference.set_reference(value)
        assert reference.frequency == expected

    def test_invalid_initial_reference(self):
        """An invalid initial reference is rejected."""
        with pytest.raises(InvalidReference):
            ReferencePitch(0)


class TestNoteTable:
    """Tests for the octave 1-8 note table."""

    def test_range(self):
        """The table runs from C1 to B8."""
        table = ReferencePitch().note_table()
        assert len(table) == 96
        assert table[0].note_index == 24
        assert table[0].label == "C1"
        assert table[-1].note_index == 119
        assert table[-1].label == "B8"

    def test_frequencies_follow_reference(self):
        """Table frequencies follow the reference."""
        reference = ReferencePitch()
        a4 = next(key for key in reference.note_table() if key.note_index == 69)
        assert a4.frequency == 440.0

        reference.set_reference(432)
        a4 = next(key for key in reference.note_table() if key.note_index == 69)
        assert a4.frequency == 432.0

    def test_key_label_parts(self):
        """Keys expose their accidental and a combined label."""
        table = ReferencePitch().note_table()
        c_sharp_4 = next(key for key in table if key.note_index == 61)
        assert c_sharp_4.accidental == "♯"
        assert c_sharp_4.octave == 4
        assert c_sharp_4.label == "C♯4"
        assert next(key for key in table if key.note_index == 60).accidental == ""


class TestObservers:
    """Tests for change notification."""

    def test_observer_called_with_new_reference(self):
        """Observers receive the new reference."""
        reference = ReferencePitch()
        calls = []
        reference.subscribe(calls.append)
        reference.set_reference(432)
        assert calls == [432]

    def test_observer_not_called_on_rejection(self):
        """Rejected values notify nobody."""
        reference = ReferencePitch()
        calls = []
        reference.subscribe(calls.append)
        with pytest.raises(InvalidReference):
            reference.set_reference(0)
        assert calls == []

    def test_unsubscribe(self):
        """Unsubscribed observers are not called."""
        reference = ReferencePitch()
        calls = []
        reference.subscribe(calls.append)
        reference.unsubscribe(calls.append)
        reference.set_reference(432)
        assert calls == []


class TestPersistenceHooks:
    """Tests for load/save against a store."""

    def test_load_stored_value(self, memory_store):
        """A stored reference is loaded."""
        memory_store.save_reference_hz(432)
        reference = ReferencePitch()
        assert reference.load(memory_store) is True
        assert reference.frequency == 432

    def test_load_missing_value_keeps_default(self, memory_store):
        """Nothing stored keeps the default."""
        reference = ReferencePitch()
        assert reference.load(memory_store) is False
        assert reference.frequency == 440

    def test_load_invalid_value_keeps_default(self, memory_store):
        """An invalid stored value is ignored."""
        memory_store.save_reference_hz(0)
        reference = ReferencePitch()
        assert reference.load(memory_store) is False
        assert reference.frequency == 440

    def test_save(self, memory_store):
        """The current reference is saved."""
        reference = ReferencePitch(415)
        reference.save(memory_store)
        assert memory_store.load_reference_hz() == 415
