"""
Exceptions raised by the Harmony Director engine.
"""


class HarmonyError(Exception):
    """Base class for all engine errors."""


class SynthesizerError(HarmonyError):
    """A synthesizer could not start a voice or resume its audio context."""

    def __init__(self, message, midi_note=None):
        super().__init__(message)
        self.midi_note = midi_note
