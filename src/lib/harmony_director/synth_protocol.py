"""
Collaborator Protocol Definitions.
These are abstract base classes that the host application must implement.

This allows the same tuning engine to drive:
- A Web Audio synthesizer in a browser
- A native audio engine on a phone
- A recording mock for testing
"""
from .constants import Pitch, Tuning


class NoteSynthesizer:
    """Abstract interface for the voice synthesizer (one voice per MIDI note)."""

    async def start_note(self, midi_note, frequency, velocity, timbre):
        """
        Begin or retrigger the voice for a note.

        Args:
            midi_note: MIDI note number identifying the voice
            frequency: Frequency in Hz
            velocity: Voice level 0.0-1.0
            timbre: Timbre name (see constants.Timbre)

        Raises:
            SynthesizerError: if the voice could not be started
        """
        raise NotImplementedError

    async def stop_note(self, midi_note):
        """
        Stop the voice for a note. No-op if it is not sounding.

        Args:
            midi_note: MIDI note number identifying the voice
        """
        raise NotImplementedError

    async def stop_all_notes(self):
        """Stop every voice."""
        raise NotImplementedError

    async def set_note_volume(self, midi_note, level):
        """
        Adjust the gain of a sounding voice.

        Args:
            midi_note: MIDI note number identifying the voice
            level: Voice level 0.0-1.0
        """
        raise NotImplementedError

    async def ensure_audio_context_resumed(self):
        """
        Resume the audio output after user interaction.

        Returns:
            True if audio output is running
        """
        raise NotImplementedError


class SettingsProvider:
    """Abstract interface for persisted user defaults."""

    def get_default_pitch(self):
        """
        Returns:
            Default reference pitch (A4) in Hz
        """
        raise NotImplementedError

    def get_default_tuning(self):
        """
        Returns:
            Tuning.EQUAL or Tuning.JUST
        """
        raise NotImplementedError


class StaticSettings(SettingsProvider):
    """In-memory settings, used when the host supplies none."""

    def __init__(self, default_pitch=Pitch.DEFAULT, default_tuning=Tuning.EQUAL):
        """
        Args:
            default_pitch: Reference pitch in Hz
            default_tuning: Tuning.EQUAL or Tuning.JUST
        """
        self.default_pitch = default_pitch
        self.default_tuning = default_tuning

    def get_default_pitch(self):
        return self.default_pitch

    def get_default_tuning(self):
        return self.default_tuning
