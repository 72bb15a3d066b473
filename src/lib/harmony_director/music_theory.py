"""
Pure music theory helpers - no audio dependencies.
Note naming and the 5-limit just intonation table.
"""
import re
from fractions import Fraction

from .constants import Music

# 5-limit just ratios, indexed by semitone distance above the root
JUST_RATIOS = [
    Fraction(1, 1),    # unison
    Fraction(16, 15),  # minor second
    Fraction(9, 8),    # major second
    Fraction(6, 5),    # minor third
    Fraction(5, 4),    # major third
    Fraction(4, 3),    # perfect fourth
    Fraction(45, 32),  # tritone
    Fraction(3, 2),    # perfect fifth
    Fraction(8, 5),    # minor sixth
    Fraction(5, 3),    # major sixth
    Fraction(9, 5),    # minor seventh
    Fraction(15, 8),   # major seventh
]

NOTE_NAMES = ["C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B"]

# Flats are folded onto the sharp spelling used by NOTE_NAMES
FLAT_TO_SHARP = {
    "C": "B",
    "D": "C#",
    "E": "D#",
    "F": "E",
    "G": "F#",
    "A": "G#",
    "B": "A#",
}

_NOTE_NAME_RE = re.compile(r"^([A-G]#?)(-?\d+)$")


def pitch_class(midi_note):
    """Reduce a MIDI note to its pitch class (0-11)."""
    return midi_note % Music.NOTES_PER_OCTAVE


def interval_above(midi_note, root):
    """Semitone distance of a note above a root, folded into one octave."""
    return (midi_note - root) % Music.NOTES_PER_OCTAVE


def just_ratio(interval):
    """Return the just ratio for an interval in semitones (any octave)."""
    return JUST_RATIOS[interval % Music.NOTES_PER_OCTAVE]


def note_name(midi_note):
    """Convert MIDI note number to note name."""
    return NOTE_NAMES[pitch_class(midi_note)]


def note_name_with_octave(midi_note):
    """Convert MIDI note number to scientific pitch name (60 -> "C4")."""
    octave = midi_note // Music.NOTES_PER_OCTAVE - 1
    return note_name(midi_note) + str(octave)


def midi_from_note_name(name):
    """
    Convert a scientific pitch name to a MIDI note number.

    Args:
        name: Note name with octave, e.g. "C4" or "F#-1"

    Returns:
        MIDI note number

    Raises:
        ValueError: if the name cannot be parsed
    """
    match = _NOTE_NAME_RE.match(name)
    if not match:
        raise ValueError("Invalid note name: " + repr(name))

    note = match.group(1)
    octave = int(match.group(2))
    if note not in NOTE_NAMES:
        raise ValueError("Invalid note: " + repr(note))

    return (octave + 1) * Music.NOTES_PER_OCTAVE + NOTE_NAMES.index(note)


def pitch_class_from_name(root_name):
    """
    Resolve a root spelling ("C", "F#", "Bb") to a pitch class.

    Returns:
        Pitch class 0-11, or None if the spelling is not recognised
    """
    if not root_name:
        return None
    letter = root_name[0]
    accidental = root_name[1:]
    if accidental == "#":
        name = letter + "#"
    elif accidental == "b":
        name = FLAT_TO_SHARP.get(letter, letter)
    elif accidental == "":
        name = letter
    else:
        return None
    if name not in NOTE_NAMES:
        return None
    return NOTE_NAMES.index(name)
