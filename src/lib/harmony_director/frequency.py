"""
Frequency calculation - pure functions, no state.

Converts MIDI notes to Hz under equal temperament or just intonation.
A transpose offset is applied to both the queried note and the harmonic
root, so intervals above the root do not depend on the transpose key.
"""
from .constants import Music, Pitch, Transpose, Tuning
from .music_theory import interval_above, just_ratio


def equal_temperament(midi_note, reference_pitch=Pitch.DEFAULT):
    """
    Frequency of a note in 12-tone equal temperament.

    Args:
        midi_note: MIDI note number (69 = A4)
        reference_pitch: Frequency of A4 in Hz, must be > 0

    Returns:
        Frequency in Hz
    """
    # Split into whole octaves and a semitone step so that +12 scales by
    # exactly 2.
    octaves, step = divmod(midi_note - Pitch.REFERENCE_NOTE, Music.NOTES_PER_OCTAVE)
    return reference_pitch * 2.0 ** octaves * 2.0 ** (step / Music.NOTES_PER_OCTAVE)


def just_intonation(midi_note, reference_pitch, root):
    """
    Frequency of a note in 5-limit just intonation above a root.

    The root itself sounds at its equal-tempered frequency; every other
    note is a small-integer ratio above it, shifted by whole octaves.

    Args:
        midi_note: MIDI note number
        reference_pitch: Frequency of A4 in Hz
        root: MIDI note number of the harmonic root

    Returns:
        Frequency in Hz
    """
    distance = midi_note - root
    octave_offset = distance // Music.NOTES_PER_OCTAVE
    ratio = just_ratio(interval_above(midi_note, root))
    return equal_temperament(root, reference_pitch) * float(ratio) * 2.0 ** octave_offset


def calculate_frequency(midi_note, tuning, reference_pitch, transpose, root):
    """
    Frequency of a note for explicit tuning parameters.

    Args:
        midi_note: MIDI note number as played on the keyboard
        tuning: Tuning.EQUAL or Tuning.JUST
        reference_pitch: Frequency of A4 in Hz
        transpose: Transpose key (see constants.Transpose)
        root: MIDI note number of the harmonic root, or None

    Returns:
        Frequency in Hz
    """
    offset = Transpose.offset(transpose)
    transposed = midi_note + offset

    if tuning == Tuning.EQUAL or root is None:
        return equal_temperament(transposed, reference_pitch)
    return just_intonation(transposed, reference_pitch, root + offset)


def get_frequency(midi_note, session):
    """Frequency of a note under the current state of a TuningSession."""
    return calculate_frequency(
        midi_note,
        session.tuning,
        session.reference_pitch,
        session.transpose,
        session.root,
    )
