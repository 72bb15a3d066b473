"""
Unit tests for the pure tuning logic: note naming, frequency math,
root detection, chord labels and session state.

Run with: pytest test/
"""
import itertools

import pytest

from harmony_director.chords import (
    chord_name_to_midi_notes,
    chord_quality,
    classify_chord,
    detect_root,
    transpose_chord_name,
)
from harmony_director.constants import Octave, Pitch, Timbre, Transpose, Tuning
from harmony_director.frequency import (
    calculate_frequency,
    equal_temperament,
    get_frequency,
    just_intonation,
)
from harmony_director.music_theory import (
    JUST_RATIOS,
    midi_from_note_name,
    note_name,
    note_name_with_octave,
)
from harmony_director.session import TuningSession
from harmony_director.synth_protocol import StaticSettings


class TestMusicTheory:
    """Tests for note naming and the ratio table."""

    def test_note_names(self):
        """Test MIDI note to name conversion."""
        assert note_name(60) == "C"  # C4
        assert note_name(61) == "C#"
        assert note_name(72) == "C"  # C5 (octave up)
        assert note_name(69) == "A"  # A4 (440Hz)

    def test_note_names_with_octave(self):
        assert note_name_with_octave(60) == "C4"
        assert note_name_with_octave(69) == "A4"
        assert note_name_with_octave(0) == "C-1"

    def test_midi_from_note_name(self):
        assert midi_from_note_name("C4") == 60
        assert midi_from_note_name("A4") == 69
        assert midi_from_note_name("F#3") == 54
        assert midi_from_note_name("C-1") == 0

    def test_midi_from_invalid_note_name(self):
        for bad in ("H2", "C", "Cb4", ""):
            with pytest.raises(ValueError):
                midi_from_note_name(bad)

    def test_just_ratio_table(self):
        """Unison is exactly 1 and the table is strictly ascending within the octave."""
        assert len(JUST_RATIOS) == 12
        assert JUST_RATIOS[0] == 1
        assert JUST_RATIOS[4] == pytest.approx(5 / 4)
        assert JUST_RATIOS[7] == pytest.approx(3 / 2)
        for lower, upper in zip(JUST_RATIOS, JUST_RATIOS[1:]):
            assert lower < upper < 2


class TestFrequency:
    """Tests for equal temperament and just intonation."""

    def test_a4_is_reference_pitch(self):
        assert equal_temperament(69, 440.0) == 440.0
        assert equal_temperament(69, 442.0) == 442.0

    def test_middle_c(self):
        assert equal_temperament(60, 440.0) == pytest.approx(261.6255653, rel=1e-9)

    def test_octave_up_doubles_exactly(self):
        for pitch in (430.0, 440.0, 442.5, 450.0):
            for midi in range(0, 116):
                assert equal_temperament(midi + 12, pitch) == 2 * equal_temperament(midi, pitch), (
                    "midi " + str(midi) + " at " + str(pitch)
                )

    def test_just_root_matches_equal_temperament(self):
        for pitch in (430.0, 440.0, 447.0):
            for root in range(36, 84):
                assert just_intonation(root, pitch, root) == equal_temperament(root, pitch)

    def test_just_octave_above_root_doubles(self):
        for root in range(36, 84):
            assert just_intonation(root + 12, 440.0, root) == 2 * just_intonation(root, 440.0, root)

    def test_just_intervals(self):
        c4 = equal_temperament(60, 440.0)
        assert just_intonation(64, 440.0, 60) == pytest.approx(c4 * 5 / 4)
        assert just_intonation(67, 440.0, 60) == pytest.approx(c4 * 3 / 2)
        assert just_intonation(71, 440.0, 60) == pytest.approx(c4 * 15 / 8)
        # Tenth: major third one octave up
        assert just_intonation(76, 440.0, 60) == pytest.approx(c4 * 5 / 2)

    def test_just_below_root(self):
        """Notes under the root fold down by whole octaves."""
        c4 = equal_temperament(60, 440.0)
        assert just_intonation(55, 440.0, 60) == pytest.approx(c4 * 3 / 4)
        assert just_intonation(48, 440.0, 60) == pytest.approx(c4 / 2)

    def test_equal_ignores_root(self):
        assert calculate_frequency(64, Tuning.EQUAL, 440.0, Transpose.C, 60) == equal_temperament(64, 440.0)

    def test_just_without_root_is_equal(self):
        assert calculate_frequency(64, Tuning.JUST, 440.0, Transpose.C, None) == equal_temperament(64, 440.0)

    def test_transpose_shifts_equal(self):
        assert calculate_frequency(60, Tuning.EQUAL, 440.0, Transpose.B_FLAT, None) == equal_temperament(58, 440.0)
        assert calculate_frequency(60, Tuning.EQUAL, 440.0, Transpose.A, None) == equal_temperament(63, 440.0)

    def test_transpose_preserves_just_intervals(self):
        for key in Transpose.ALL:
            root = calculate_frequency(60, Tuning.JUST, 440.0, key, 60)
            third = calculate_frequency(64, Tuning.JUST, 440.0, key, 60)
            assert third / root == pytest.approx(5 / 4), key

    def test_unknown_transpose_key(self):
        with pytest.raises(ValueError):
            calculate_frequency(60, Tuning.EQUAL, 440.0, "H", None)

    def test_get_frequency_reads_session(self):
        session = TuningSession(tuning=Tuning.JUST, reference_pitch=440.0)
        session.add_note(60)
        session.add_note(64)
        session.root = 60
        assert get_frequency(64, session) == pytest.approx(equal_temperament(60, 440.0) * 5 / 4)


class TestRootDetector:
    """Tests for harmonic root inference."""

    def test_major_triad(self):
        assert detect_root([60, 64, 67]) == 60

    def test_order_does_not_matter(self):
        assert detect_root([67, 60, 64]) == 60
        assert detect_root({64, 67, 60}) == 60

    def test_first_inversion(self):
        """E-G-C: E and G fail as roots, C matches and its held instance is returned."""
        assert detect_root([64, 67, 72]) == 72

    def test_second_inversion(self):
        assert detect_root([67, 72, 76]) == 72

    def test_lowest_instance_of_root_class(self):
        assert detect_root([48, 64, 67, 72]) == 48

    def test_bass_breaks_ties(self):
        """C-E-G-A is Am7 over A and C6 over C."""
        assert detect_root([57, 60, 64, 67]) == 57
        assert detect_root([60, 64, 67, 69]) == 60

    def test_dominant_seventh(self):
        assert detect_root([55, 59, 62, 65]) == 55

    def test_suspended_ambiguity(self):
        assert detect_root([60, 62, 67]) == 60  # Csus2
        assert detect_root([67, 72, 74]) == 67  # Gsus4

    def test_fallback_to_lowest_note(self):
        """A chromatic cluster matches nothing; the bass is the root."""
        assert detect_root([60, 61, 62]) == 60
        assert detect_root([66, 60]) == 60

    def test_octave_only(self):
        assert detect_root([60, 72]) == 60

    def test_too_few_notes(self):
        assert detect_root([]) is None
        assert detect_root([60]) is None
        assert detect_root([60, 60]) is None

    def test_root_is_always_held(self):
        """For every small chord the root is one of the held notes."""
        for size in (2, 3, 4):
            for notes in itertools.combinations(range(55, 70), size):
                assert detect_root(notes) in notes, str(notes)


class TestChordClassifier:
    """Tests for chord labels."""

    def test_triads(self):
        assert classify_chord([60, 64, 67]) == "C"
        assert classify_chord([62, 65, 69]) == "Dm"
        assert classify_chord([71, 74, 77]) == "Bdim"
        assert classify_chord([60, 64, 68]) == "Caug"

    def test_sevenths_and_sixths(self):
        assert classify_chord([55, 59, 62, 65]) == "G7"
        assert classify_chord([60, 64, 67, 71]) == "CM7"
        assert classify_chord([57, 60, 64, 67]) == "Am7"
        assert classify_chord([60, 64, 67, 69]) == "C6"
        assert classify_chord([59, 62, 65, 68]) == "Bdim7"

    def test_ninths(self):
        assert classify_chord([60, 64, 67, 74]) == "Cadd9"
        assert classify_chord([60, 64, 67, 70, 74]) == "C9"

    def test_power_chord(self):
        assert classify_chord([60, 67]) == "C5"

    def test_inversion_uses_root_name(self):
        assert classify_chord([64, 67, 72]) == "C"

    def test_unmatched_lists_pitch_classes(self):
        assert classify_chord([60, 61, 62]) == "C/C#/D"
        assert classify_chord([60, 72]) == "C"

    def test_explicit_root(self):
        assert classify_chord([60, 64, 67], root=60) == "C"
        assert classify_chord([60, 64, 67], root=64) == "C/E/G"

    def test_too_few_notes(self):
        assert classify_chord([]) is None
        assert classify_chord([60]) is None

    def test_chord_quality(self):
        assert chord_quality("") == "major"
        assert chord_quality("m7") == "minor7"
        assert chord_quality("xyz") is None


class TestChordNames:
    """Tests for chord-name parsing used by chord pads."""

    def test_basic_chords(self):
        assert chord_name_to_midi_notes("C") == [60, 64, 67]
        assert chord_name_to_midi_notes("Dm") == [62, 65, 69]
        assert chord_name_to_midi_notes("G7") == [67, 71, 74, 77]
        assert chord_name_to_midi_notes("F#m7") == [66, 69, 73, 76]

    def test_longest_suffix_wins(self):
        assert chord_name_to_midi_notes("Am7b5") == [69, 72, 75, 79]
        assert chord_name_to_midi_notes("Cdim7") == [60, 63, 66, 69]

    def test_flats_and_octave(self):
        assert chord_name_to_midi_notes("Bb", octave=3) == [58, 62, 65]
        assert chord_name_to_midi_notes("Eb") == [63, 67, 70]

    def test_ninth_voiced_above_octave(self):
        assert chord_name_to_midi_notes("Cadd9") == [60, 64, 67, 74]

    def test_unknown_suffix_is_major(self):
        assert chord_name_to_midi_notes("Cxyz") == [60, 64, 67]

    def test_unparseable(self):
        assert chord_name_to_midi_notes("") == []
        assert chord_name_to_midi_notes("   ") == []
        assert chord_name_to_midi_notes("H7") == []

    def test_parsed_chord_classifies_back(self):
        for name in ("C", "Dm", "G7", "F#m7", "Bdim", "Csus4", "Am6"):
            assert classify_chord(chord_name_to_midi_notes(name)) == name

    def test_transpose_chord_name(self):
        assert transpose_chord_name("C", 2) == "D"
        assert transpose_chord_name("Bb", 2) == "C"
        assert transpose_chord_name("F#m7", -1) == "Fm7"
        assert transpose_chord_name("B", 1) == "C"
        assert transpose_chord_name("Am", 0) == "Am"
        assert transpose_chord_name("xyz", 3) == "xyz"
        assert transpose_chord_name("", 3) == ""


class TestTuningSession:
    """Tests for session state and its invariants."""

    def test_defaults(self):
        session = TuningSession()
        assert session.tuning == Tuning.EQUAL
        assert session.reference_pitch == Pitch.DEFAULT
        assert session.transpose == Transpose.C
        assert session.timbre == Timbre.ORGAN
        assert session.root is None
        assert session.note_count == 0

    def test_from_settings(self):
        session = TuningSession.from_settings(StaticSettings(default_pitch=442.0, default_tuning=Tuning.JUST))
        assert session.reference_pitch == 442.0
        assert session.tuning == Tuning.JUST

    def test_reference_pitch_is_clamped(self):
        session = TuningSession()
        session.reference_pitch = 500
        assert session.reference_pitch == Pitch.MAX
        session.reference_pitch = 100
        assert session.reference_pitch == Pitch.MIN
        session.reference_pitch = 441.5
        assert session.reference_pitch == 441.5

    def test_invalid_settings_rejected(self):
        session = TuningSession()
        with pytest.raises(ValueError):
            session.tuning = "pythagorean"
        with pytest.raises(ValueError):
            session.timbre = "kazoo"
        with pytest.raises(ValueError):
            session.transpose = "H"

    def test_keyboard_octave(self):
        session = TuningSession()
        assert session.keyboard_start_note == 60
        session.octave = 5
        assert session.keyboard_start_note == 72
        session.octave = 10
        assert session.octave == 6
        session.octave = -3
        assert session.octave == 1
        assert Octave.clamp(Octave.MAX) == Octave.MAX
        assert Octave.clamp(Octave.MAX + 1) == Octave.MAX

    def test_active_notes_snapshot_is_read_only(self):
        session = TuningSession()
        session.add_note(60)
        snapshot = session.active_notes
        session.add_note(64)
        assert snapshot == frozenset([60])
        assert session.sorted_notes() == [60, 64]

    def test_note_count(self):
        session = TuningSession()
        session.add_note(60)
        session.add_note(64)
        session.add_note(60)
        assert session.note_count == 2
        session.discard_note(64)
        assert session.note_count == 1
        session.clear_notes()
        assert session.note_count == 0

    def test_settle_root(self):
        session = TuningSession()
        for note in (60, 64, 67):
            session.add_note(note)
        session.root = session.detect_root()
        assert session.root == 60

        # Removing a non-root keeps the root
        session.discard_note(67)
        assert session.settle_root() is False
        assert session.root == 60

        # Removing the root re-detects among the held notes
        session.add_note(67)
        session.discard_note(60)
        assert session.settle_root() is True
        assert session.root in session.active_notes

        # One note left: no root
        session.discard_note(67)
        session.settle_root()
        assert session.root is None

    def test_chord_label(self):
        session = TuningSession()
        assert session.chord_label() is None
        for note in (57, 60, 64):
            session.add_note(note)
        session.root = session.detect_root()
        assert session.chord_label() == "Am"
