"""
Harmony Director - harmonic tuning and chord-root inference engine.
"""

from .constants import Tuning, Timbre, Pitch, Octave, Transpose, Voice, Music
from .music_theory import (
    JUST_RATIOS,
    NOTE_NAMES,
    note_name,
    note_name_with_octave,
    midi_from_note_name,
)
from .frequency import (
    equal_temperament,
    just_intonation,
    calculate_frequency,
    get_frequency,
)
from .chords import (
    CHORD_SHAPES,
    detect_root,
    classify_chord,
    chord_quality,
    chord_name_to_midi_notes,
    transpose_chord_name,
)
from .errors import HarmonyError, SynthesizerError
from .events import Event, EventBus
from .session import TuningSession
from .synth_protocol import NoteSynthesizer, SettingsProvider, StaticSettings
from .controller import TuningSessionController

__all__ = [
    # Constants
    "Tuning",
    "Timbre",
    "Pitch",
    "Octave",
    "Transpose",
    "Voice",
    "Music",
    # Music Theory
    "JUST_RATIOS",
    "NOTE_NAMES",
    "note_name",
    "note_name_with_octave",
    "midi_from_note_name",
    # Frequency
    "equal_temperament",
    "just_intonation",
    "calculate_frequency",
    "get_frequency",
    # Chords
    "CHORD_SHAPES",
    "detect_root",
    "classify_chord",
    "chord_quality",
    "chord_name_to_midi_notes",
    "transpose_chord_name",
    # Errors
    "HarmonyError",
    "SynthesizerError",
    # Events
    "Event",
    "EventBus",
    # Session
    "TuningSession",
    # Collaborator Protocol
    "NoteSynthesizer",
    "SettingsProvider",
    "StaticSettings",
    # Controller
    "TuningSessionController",
]
