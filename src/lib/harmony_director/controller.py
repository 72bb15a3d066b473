"""
Tuning session controller.
Ties together the tuning session, the pure frequency/chord logic and the
synthesizer. Platform-independent - receives the synthesizer through
dependency injection.
"""
import logging

from .constants import Music, Tuning, Voice
from .errors import SynthesizerError
from .events import Event, EventBus
from .session import TuningSession
from .synth_protocol import StaticSettings

logger = logging.getLogger(__name__)


class TuningSessionController:
    """
    Owns the tuning session and issues voice commands to the synthesizer.

    Every mutating entry point is a coroutine; the host awaits each one
    before dispatching the next event, so no locking is needed. Retuning
    a sounding note is a stop followed by a start at the new frequency.
    """

    def __init__(self, synthesizer, settings=None, velocity=Voice.VELOCITY_DEFAULT):
        """
        Initialize a session.

        Args:
            synthesizer: NoteSynthesizer implementation
            settings: SettingsProvider read once for the initial reference
                pitch and tuning; StaticSettings() if omitted
            velocity: Level every voice is started at (0.0-1.0)
        """
        if settings is None:
            settings = StaticSettings()

        self.session = TuningSession.from_settings(settings)
        self.synth = synthesizer
        self.velocity = velocity
        self.events = EventBus()

        # Frequency each sounding voice was last started at
        self._voices = {}

    # ------------------------------------------------------------------
    # Read-only surface for the UI
    # ------------------------------------------------------------------
    @property
    def active_notes(self):
        return self.session.active_notes

    @property
    def root(self):
        return self.session.root

    def get_frequency(self, midi_note):
        """Frequency a note would sound at under the current state."""
        return self.session.frequency(midi_note)

    def chord_label(self):
        return self.session.chord_label()

    def subscribe(self, event_type, callback):
        self.events.subscribe(event_type, callback)

    def unsubscribe(self, event_type, callback):
        self.events.unsubscribe(event_type, callback)

    def get_display_data(self):
        """Snapshot of everything the harmony view shows."""
        session = self.session
        notes = session.sorted_notes()
        return {
            "notes": notes,
            "root": session.root,
            "chord": session.chord_label(),
            "frequencies": {note: session.frequency(note) for note in notes},
            "tuning": session.tuning,
            "reference_pitch": session.reference_pitch,
            "transpose": session.transpose,
            "timbre": session.timbre,
            "octave": session.octave,
            "hold_mode": session.hold_mode,
        }

    def info_text(self):
        """Chord label, or the held notes' frequencies, or "" when silent."""
        label = self.chord_label()
        if label:
            return label
        return " / ".join(
            "{:.0f}Hz".format(self.get_frequency(note))
            for note in self.session.sorted_notes()
        )

    # ------------------------------------------------------------------
    # Note events
    # ------------------------------------------------------------------
    async def note_on(self, midi_note):
        """
        Start a note, re-detecting the root when a chord is held.

        In just intonation a root change retunes the other held notes
        before the new note starts. A single held note always sounds in
        equal temperament.
        """
        await self._resume_audio()
        session = self.session

        if session.is_active(midi_note):
            await self._reissue([midi_note], self._sounding_frequency)
            return

        previous_root = session.root
        session.add_note(midi_note)
        if session.note_count >= Music.CHORD_MIN_NOTES:
            session.root = session.detect_root()

        # Root the other held voices are currently tuned to
        tuned_root = previous_root
        if session.root != previous_root:
            logger.debug("Root %s -> %s", previous_root, session.root)
            if session.tuning == Tuning.JUST:
                others = [note for note in session.sorted_notes() if note != midi_note]
                await self._reissue(others, session.frequency)
                tuned_root = session.root

        if not await self._start(midi_note, session.frequency(midi_note)):
            session.discard_note(midi_note)
            session.settle_root()
            if session.tuning == Tuning.JUST and session.root != tuned_root:
                logger.debug("Root %s -> %s after failed start", tuned_root, session.root)
                await self._reissue(session.sorted_notes(), session.frequency)

        self._notify_notes(previous_root)

    async def note_off(self, midi_note):
        """
        Stop a note. Remaining notes keep their frequencies.
        """
        await self.synth.stop_note(midi_note)
        self._voices.pop(midi_note, None)

        session = self.session
        if not session.is_active(midi_note):
            return

        previous_root = session.root
        session.discard_note(midi_note)
        session.settle_root()
        self._notify_notes(previous_root)

    async def press_key(self, midi_note):
        """Keyboard key down. In hold mode, pressing a held key releases it."""
        if self.session.hold_mode and self.session.is_active(midi_note):
            await self.note_off(midi_note)
        elif not self.session.is_active(midi_note):
            await self.note_on(midi_note)

    async def release_key(self, midi_note):
        """Keyboard key up. Ignored in hold mode."""
        if self.session.hold_mode:
            return
        await self.note_off(midi_note)

    async def set_note_volume(self, midi_note, level):
        """Adjust the level of a held note's voice."""
        if not self.session.is_active(midi_note):
            return
        level = max(Voice.VOLUME_MIN, min(Voice.VOLUME_MAX, level))
        await self.synth.set_note_volume(midi_note, level)

    async def stop_all(self):
        """Silence everything and forget all held notes. Idempotent."""
        previous_root = self.session.root
        await self.synth.stop_all_notes()
        self._voices.clear()
        self.session.clear_notes()
        self._notify_notes(previous_root)

    async def close(self):
        """Tear the session down when the harmony view is left."""
        await self.stop_all()

    # ------------------------------------------------------------------
    # Control changes
    # ------------------------------------------------------------------
    async def set_tuning_mode(self, tuning):
        """Switch tuning system and retune held notes (root unchanged)."""
        self.session.tuning = tuning
        await self._retune_all()
        self.events.emit(Event.TUNING_CHANGED, {"tuning": tuning})

    async def set_reference_pitch(self, hz):
        """Set A4 (clamped to range) and retune held notes."""
        self.session.reference_pitch = hz
        await self._retune_all()
        self.events.emit(Event.PITCH_CHANGED, {"reference_pitch": self.session.reference_pitch})

    async def increment_pitch(self, amount=1):
        await self.set_reference_pitch(self.session.reference_pitch + amount)

    async def decrement_pitch(self, amount=1):
        await self.set_reference_pitch(self.session.reference_pitch - amount)

    async def set_transpose_key(self, key):
        """Change the instrument key and retune held notes."""
        self.session.transpose = key
        await self._retune_all()
        self.events.emit(Event.TRANSPOSE_CHANGED, {"transpose": key})

    async def set_timbre(self, timbre):
        """Restart held notes with a new timbre at their current frequencies."""
        self.session.timbre = timbre
        await self._reissue(self.session.sorted_notes(), self._sounding_frequency)
        self.events.emit(Event.TIMBRE_CHANGED, {"timbre": timbre})

    def set_octave(self, octave):
        """Move the keyboard. Sounding notes are not affected."""
        self.session.octave = octave
        self.events.emit(
            Event.OCTAVE_CHANGED,
            {"octave": self.session.octave, "start_note": self.session.keyboard_start_note},
        )

    def change_octave(self, delta):
        self.set_octave(self.session.octave + delta)

    async def set_hold_mode(self, hold):
        """Toggle hold mode. Turning it off silences everything."""
        self.session.hold_mode = bool(hold)
        if not hold:
            await self.stop_all()
        self.events.emit(Event.HOLD_CHANGED, {"hold_mode": self.session.hold_mode})

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _sounding_frequency(self, midi_note):
        if midi_note in self._voices:
            return self._voices[midi_note]
        return self.session.frequency(midi_note)

    async def _retune_all(self):
        await self._reissue(self.session.sorted_notes(), self.session.frequency)

    async def _reissue(self, notes, frequency_of):
        """
        Stop and restart each note in order at frequency_of(note).

        Notes whose restart fails are dropped from the session.
        """
        if not notes:
            return
        logger.debug("Reissuing %d note(s): %s", len(notes), notes)

        previous_root = self.session.root
        dropped = []
        for note in notes:
            frequency = frequency_of(note)
            await self.synth.stop_note(note)
            if not await self._start(note, frequency):
                dropped.append(note)

        if dropped:
            for note in dropped:
                self.session.discard_note(note)
            self.session.settle_root()
            self._notify_notes(previous_root)

    async def _start(self, midi_note, frequency):
        """Start a voice; returns False (and logs) if the synthesizer refused."""
        try:
            await self.synth.start_note(midi_note, frequency, self.velocity, self.session.timbre)
        except SynthesizerError as exc:
            logger.error("Could not start note %d at %.2f Hz: %s", midi_note, frequency, exc)
            self._voices.pop(midi_note, None)
            return False
        self._voices[midi_note] = frequency
        return True

    async def _resume_audio(self):
        try:
            resumed = await self.synth.ensure_audio_context_resumed()
        except SynthesizerError as exc:
            logger.warning("Audio context resume failed: %s", exc)
            return
        if not resumed:
            logger.warning("Audio context is not running")

    def _notify_notes(self, previous_root):
        session = self.session
        self.events.emit(Event.NOTES_CHANGED, {"notes": session.sorted_notes()})
        if session.root != previous_root:
            self.events.emit(
                Event.ROOT_CHANGED,
                {"root": session.root, "chord": session.chord_label()},
            )
