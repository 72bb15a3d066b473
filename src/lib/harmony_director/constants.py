"""
Constants for the Harmony Director engine.
All magic strings and numbers are defined here for easy maintenance.
"""


# ============================================================================
# TUNING MODES
# ============================================================================
class Tuning:
    """Tuning system constants."""
    EQUAL = "equal"
    JUST = "just"

    ALL = [EQUAL, JUST]


# ============================================================================
# TIMBRES
# ============================================================================
class Timbre:
    """Voice timbres understood by the synthesizer."""
    ORGAN = "organ"
    ORGAN2 = "organ2"
    FLUTE = "flute"
    CLARINET = "clarinet"

    DEFAULT = ORGAN
    ALL = [ORGAN, ORGAN2, FLUTE, CLARINET]


# ============================================================================
# REFERENCE PITCH
# ============================================================================
class Pitch:
    """Reference pitch (A4) bounds in Hz."""
    MIN = 430.0
    MAX = 450.0
    DEFAULT = 440.0

    # MIDI note the reference pitch is assigned to
    REFERENCE_NOTE = 69  # A4

    @classmethod
    def clamp(cls, hz):
        """Clamp a frequency to the configured reference range."""
        return max(cls.MIN, min(cls.MAX, float(hz)))


# ============================================================================
# KEYBOARD OCTAVE
# ============================================================================
class Octave:
    """Keyboard octave constants."""
    MIN = 1
    MAX = 6   # the keyboard spans two octaves from here
    DEFAULT = 4
    REFERENCE = 4  # Octave 4 starts at middle C

    @classmethod
    def clamp(cls, octave):
        return max(cls.MIN, min(cls.MAX, octave))


# ============================================================================
# TRANSPOSE KEYS
# ============================================================================
class Transpose:
    """Instrument keys and their semitone offsets (sounding vs written)."""
    C = "C"
    B_FLAT = "Bb"
    F = "F"
    E_FLAT = "Eb"
    A = "A"
    D = "D"
    G = "G"
    A_FLAT = "Ab"
    D_FLAT = "Db"
    G_FLAT = "Gb"
    E = "E"
    B = "B"

    DEFAULT = C

    SEMITONES = {
        C: 0,
        B_FLAT: -2,
        F: -5,
        E_FLAT: -3,
        A: 3,
        D: 2,
        G: -7,
        A_FLAT: -4,
        D_FLAT: -1,
        G_FLAT: -6,
        E: 4,
        B: -11,
    }

    # Chromatic order for pickers
    ALL = [C, D_FLAT, D, E_FLAT, E, F, G_FLAT, G, A_FLAT, A, B_FLAT, B]

    @classmethod
    def offset(cls, key):
        """
        Get the semitone offset for a transpose key.

        Raises:
            ValueError: if the key is not one of the twelve known keys
        """
        try:
            return cls.SEMITONES[key]
        except KeyError:
            raise ValueError("Unknown transpose key: " + repr(key)) from None


# ============================================================================
# VOICE CONSTANTS
# ============================================================================
class Voice:
    """Synthesizer voice constants."""
    VELOCITY_DEFAULT = 0.3
    VOLUME_MIN = 0.0
    VOLUME_MAX = 1.0


# ============================================================================
# MUSIC CONSTANTS
# ============================================================================
class Music:
    """Music theory constants."""
    NOTES_PER_OCTAVE = 12
    MIDDLE_C = 60
    NOTE_MIN = 0
    NOTE_MAX = 127

    # Minimum number of distinct notes that form a chord
    CHORD_MIN_NOTES = 2
