"""
Tuning session state - the data the controller owns.
No audio dependencies; mutated only by TuningSessionController.
"""
from .chords import classify_chord, detect_root
from .constants import Music, Octave, Pitch, Timbre, Transpose, Tuning
from .frequency import get_frequency


class TuningSession:
    """
    Tuning settings plus the set of held notes and their harmonic root.

    The root is None whenever fewer than two notes are held, and is
    otherwise one of the held notes.
    """

    def __init__(self, tuning=Tuning.EQUAL, reference_pitch=Pitch.DEFAULT,
                 transpose=Transpose.DEFAULT, timbre=Timbre.DEFAULT,
                 octave=Octave.DEFAULT):
        """
        Args:
            tuning: Tuning.EQUAL or Tuning.JUST
            reference_pitch: Frequency of A4 in Hz (clamped to range)
            transpose: Transpose key (see constants.Transpose)
            timbre: Voice timbre (see constants.Timbre)
            octave: Starting octave of the on-screen keyboard
        """
        self.tuning = tuning
        self.reference_pitch = reference_pitch
        self.transpose = transpose
        self.timbre = timbre
        self.octave = octave
        self.hold_mode = False

        self._active_notes = set()
        self.root = None

    @classmethod
    def from_settings(cls, settings):
        """Create a session seeded from a SettingsProvider."""
        return cls(
            tuning=settings.get_default_tuning(),
            reference_pitch=settings.get_default_pitch(),
        )

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------
    @property
    def tuning(self):
        return self._tuning

    @tuning.setter
    def tuning(self, tuning):
        if tuning not in Tuning.ALL:
            raise ValueError("Unknown tuning mode: " + repr(tuning))
        self._tuning = tuning

    @property
    def reference_pitch(self):
        """Frequency of A4 in Hz, always within Pitch.MIN..Pitch.MAX."""
        return self._reference_pitch

    @reference_pitch.setter
    def reference_pitch(self, hz):
        self._reference_pitch = Pitch.clamp(hz)

    @property
    def transpose(self):
        return self._transpose

    @transpose.setter
    def transpose(self, key):
        Transpose.offset(key)  # validates
        self._transpose = key

    @property
    def timbre(self):
        return self._timbre

    @timbre.setter
    def timbre(self, timbre):
        if timbre not in Timbre.ALL:
            raise ValueError("Unknown timbre: " + repr(timbre))
        self._timbre = timbre

    @property
    def octave(self):
        return self._octave

    @octave.setter
    def octave(self, octave):
        self._octave = Octave.clamp(octave)

    @property
    def keyboard_start_note(self):
        """MIDI note of the leftmost keyboard key (C of the current octave)."""
        return Music.MIDDLE_C + (self._octave - Octave.REFERENCE) * Music.NOTES_PER_OCTAVE

    # ------------------------------------------------------------------
    # Held notes
    # ------------------------------------------------------------------
    @property
    def active_notes(self):
        """Read-only snapshot of the held notes."""
        return frozenset(self._active_notes)

    def sorted_notes(self):
        """Held notes in ascending order."""
        return sorted(self._active_notes)

    def is_active(self, midi_note):
        return midi_note in self._active_notes

    @property
    def note_count(self):
        """Number of held notes."""
        return len(self._active_notes)

    def add_note(self, midi_note):
        self._active_notes.add(midi_note)

    def discard_note(self, midi_note):
        self._active_notes.discard(midi_note)

    def clear_notes(self):
        self._active_notes.clear()
        self.root = None

    def detect_root(self):
        """Run root detection over the held notes (no state change)."""
        return detect_root(self._active_notes)

    def settle_root(self):
        """
        Re-establish the root invariant after notes were removed.

        Drops the root below two notes, and re-detects it if the old
        root is no longer held. A still-valid root is kept.

        Returns:
            True if the root changed
        """
        previous = self.root
        if self.note_count < Music.CHORD_MIN_NOTES:
            self.root = None
        elif self.root not in self._active_notes:
            self.root = detect_root(self._active_notes)
        return self.root != previous

    # ------------------------------------------------------------------
    # Read-only projections
    # ------------------------------------------------------------------
    def frequency(self, midi_note):
        """Frequency of a note under the current session state."""
        return get_frequency(midi_note, self)

    def chord_label(self):
        """Chord label for the held notes, or None below two notes."""
        if self.note_count < Music.CHORD_MIN_NOTES:
            return None
        return classify_chord(self._active_notes, self.root)
