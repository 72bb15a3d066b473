"""
Chord recognition - pure logic, no state.

Infers the harmonic root of a set of held MIDI notes and derives a chord
label for display. Also converts chord names (as used by chord pads)
back into MIDI voicings.
"""
import re

from .constants import Music
from .music_theory import NOTE_NAMES, note_name, pitch_class, pitch_class_from_name

# Known chord shapes, most common first.
# Each entry: (label suffix, quality name, voicing in semitones above root).
# Ninths are voiced an octave up (14) but match as pitch class 2.
CHORD_SHAPES = [
    # Triads
    ("", "major", [0, 4, 7]),
    ("m", "minor", [0, 3, 7]),
    ("dim", "diminished", [0, 3, 6]),
    ("aug", "augmented", [0, 4, 8]),
    ("sus4", "suspended4", [0, 5, 7]),
    ("sus2", "suspended2", [0, 2, 7]),
    # Sevenths
    ("7", "dominant7", [0, 4, 7, 10]),
    ("M7", "major7", [0, 4, 7, 11]),
    ("m7", "minor7", [0, 3, 7, 10]),
    ("mM7", "minor_major7", [0, 3, 7, 11]),
    ("dim7", "diminished7", [0, 3, 6, 9]),
    ("m7b5", "half_diminished7", [0, 3, 6, 10]),
    ("aug7", "augmented7", [0, 4, 8, 10]),
    # Sixths
    ("6", "major6", [0, 4, 7, 9]),
    ("m6", "minor6", [0, 3, 7, 9]),
    # Ninths
    ("9", "dominant9", [0, 4, 7, 10, 14]),
    ("m9", "minor9", [0, 3, 7, 10, 14]),
    ("add9", "add9", [0, 4, 7, 14]),
    ("madd9", "minor_add9", [0, 3, 7, 14]),
    # Dyads
    ("5", "power", [0, 7]),
]

# Pitch-class interval sets, in the same order as CHORD_SHAPES
_SHAPE_SETS = [
    (suffix, frozenset(interval % Music.NOTES_PER_OCTAVE for interval in voicing))
    for suffix, _, voicing in CHORD_SHAPES
]

# Longest suffix first so "m7" wins over "m" when parsing names
_SHAPES_BY_SUFFIX = sorted(CHORD_SHAPES, key=lambda shape: len(shape[0]), reverse=True)

_CHORD_NAME_RE = re.compile(r"^([A-G])([#b]?)(.*)$")


def _distinct_sorted(midi_notes):
    return sorted(set(midi_notes))


def _candidate_order(notes):
    """
    Pitch classes to try as root: ascending, starting from the bass.

    Args:
        notes: Distinct MIDI notes in ascending order
    """
    classes = sorted(set(pitch_class(note) for note in notes))
    start = classes.index(pitch_class(notes[0]))
    return classes[start:] + classes[:start]


def _intervals_from(root_class, notes):
    return frozenset((pitch_class(note) - root_class) % Music.NOTES_PER_OCTAVE for note in notes)


def _find_shape(root_class, notes):
    """Return the suffix of the first shape matching exactly, or None."""
    intervals = _intervals_from(root_class, notes)
    for suffix, shape in _SHAPE_SETS:
        if intervals == shape:
            return suffix
    return None


def _lowest_of_class(notes, root_class):
    for note in notes:
        if pitch_class(note) == root_class:
            return note
    return None


def detect_root(midi_notes):
    """
    Infer the harmonic root of a set of held notes.

    Every pitch class present is tried as a root, starting with the
    bass and moving up chromatically; the first one whose intervals
    exactly form a known chord shape wins. If nothing matches, the
    lowest note is the root.

    Args:
        midi_notes: Iterable of MIDI note numbers

    Returns:
        MIDI note number of the root (the lowest held note of the root
        pitch class), or None for fewer than two distinct notes
    """
    notes = _distinct_sorted(midi_notes)
    if len(notes) < Music.CHORD_MIN_NOTES:
        return None

    for root_class in _candidate_order(notes):
        if _find_shape(root_class, notes) is not None:
            return _lowest_of_class(notes, root_class)

    return notes[0]


def classify_chord(midi_notes, root=None):
    """
    Derive a display label for a set of held notes.

    Args:
        midi_notes: Iterable of MIDI note numbers
        root: Root MIDI note from detect_root(); detected if omitted

    Returns:
        Label such as "C", "Am7" or "Gsus4"; the note names joined with
        "/" when no shape fits the root; None for fewer than two notes
    """
    notes = _distinct_sorted(midi_notes)
    if len(notes) < Music.CHORD_MIN_NOTES:
        return None

    if root is None:
        root = detect_root(notes)

    suffix = _find_shape(pitch_class(root), notes)
    if suffix is not None:
        return note_name(root) + suffix

    classes = sorted(set(pitch_class(note) for note in notes))
    return "/".join(NOTE_NAMES[pc] for pc in classes)


def chord_quality(suffix):
    """Look up the quality name for a label suffix ("m7" -> "minor7")."""
    for shape_suffix, quality, _ in CHORD_SHAPES:
        if shape_suffix == suffix:
            return quality
    return None


def chord_name_to_midi_notes(chord_name, octave=4):
    """
    Build a root-position voicing for a chord name.

    Args:
        chord_name: Name like "C", "Dm", "G7", "F#m7" or "Bb"
        octave: Octave of the root (4 puts C at MIDI 60)

    Returns:
        List of MIDI note numbers, root first; empty if the name
        cannot be parsed. Unknown suffixes are voiced as major.
    """
    if not chord_name or not chord_name.strip():
        return []

    match = _CHORD_NAME_RE.match(chord_name)
    if not match:
        return []

    root_class = pitch_class_from_name(match.group(1) + match.group(2))
    if root_class is None:
        return []
    suffix = match.group(3)

    root_midi = (octave + 1) * Music.NOTES_PER_OCTAVE + root_class

    # "" is the shortest suffix and always matches, so this never falls through
    for shape_suffix, _, voicing in _SHAPES_BY_SUFFIX:
        if suffix.startswith(shape_suffix):
            return [root_midi + interval for interval in voicing]
    return [root_midi]


def transpose_chord_name(chord_name, semitones):
    """
    Transpose a chord name by a number of semitones.

    Only the root is respelled (always with sharps); the suffix is kept.
    Names that cannot be parsed are returned unchanged.
    """
    if not chord_name or not chord_name.strip() or semitones == 0:
        return chord_name

    match = _CHORD_NAME_RE.match(chord_name)
    if not match:
        return chord_name

    root_class = pitch_class_from_name(match.group(1) + match.group(2))
    if root_class is None:
        return chord_name

    new_root = NOTE_NAMES[(root_class + semitones) % Music.NOTES_PER_OCTAVE]
    return new_root + match.group(3)
