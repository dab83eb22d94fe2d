"""A polyphonic sine synthesizer driven by note events."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Optional, Union

from .dsp import ADSREnvelope, SineOsc, midi_to_freq
from .params import SynthParams

__all__ = ["MAX_VOICES", "NoteOn", "NoteOff", "Voice", "SineSynth"]

MAX_VOICES = 16
DEFAULT_SAMPLE_RATE = 44100.0


@dataclass(frozen=True)
class NoteOn:
    """A key press at sample offset ``timing`` within a block."""

    timing: int
    note: int
    velocity: float


@dataclass(frozen=True)
class NoteOff:
    """A key release at sample offset ``timing`` within a block."""

    timing: int
    note: int
    velocity: float = 0.0


Event = Union[NoteOn, NoteOff]


@dataclass
class Voice:
    """One sounding note: an oscillator shaped by an envelope."""

    osc: SineOsc
    env: ADSREnvelope
    note: Optional[int] = None
    velocity: float = 0.0

    @classmethod
    def _fresh(cls, sample_rate: float) -> "Voice":
        return cls(SineOsc(sample_rate), ADSREnvelope(sample_rate))


class SineSynth:
    """Sixteen-voice sine synth with oldest-first voice stealing."""

    NAME = "Sine Synth"

    def __init__(self, params: Optional[SynthParams] = None) -> None:
        self.params = params if params is not None else SynthParams()
        self.voices: List[Voice] = [Voice._fresh(DEFAULT_SAMPLE_RATE) for _ in range(MAX_VOICES)]
        self.next_voice = 0

    def initialize(self, sample_rate: float) -> None:
        """Rebuild every voice and the parameters for ``sample_rate``."""
        if sample_rate <= 0:
            raise ValueError(f"sample rate must be positive, got {sample_rate}")
        self.voices = [Voice._fresh(sample_rate) for _ in self.voices]
        self.params.initialize(sample_rate)

    def find_free_voice(self) -> Optional[int]:
        """Index of the first silent voice, or None when all are sounding."""
        return next((i for i, v in enumerate(self.voices) if not v.env.is_active()), None)

    def _handle(self, event: object) -> None:
        match event:
            case NoteOn(note=note, velocity=velocity):
                index = self.find_free_voice()
                if index is None:
                    index = self.next_voice
                    self.next_voice = (self.next_voice + 1) % MAX_VOICES
                voice = self.voices[index]
                voice.note = note
                voice.velocity = velocity
                voice.osc.set_frequency(midi_to_freq(note))
                voice.osc.reset()
                voice.env.attack = self.params.attack.smoothed.next()
                voice.env.decay = self.params.decay.smoothed.next()
                voice.env.sustain = self.params.sustain.smoothed.next()
                voice.env.release = self.params.release.smoothed.next()
                voice.env.note_on()
            case NoteOff(note=note):
                for voice in self.voices:
                    if voice.note == note:
                        voice.env.note_off()

    def process(
        self, num_samples: int, events: Iterable[Event] = (), channels: int = 2
    ) -> List[List[float]]:
        """Render one block and return one list of samples per channel.

        Events must come in timing order; one whose timing is not reached in
        this block, and every event after it, is ignored.
        """
        if num_samples < 0:
            raise ValueError(f"sample count must not be negative, got {num_samples}")
        if channels < 1:
            raise ValueError(f"need at least one channel, got {channels}")

        pending = iter(events)
        event = next(pending, None)
        gain = self.params.gain.smoothed.next()
        voice_count = len(self.voices)
        frames = []

        for sample_id in range(num_samples):
            while event is not None and event.timing == sample_id:
                self._handle(event)
                event = next(pending, None)

            left = right = 0.0
            for voice in self.voices:
                if voice.env.is_active():
                    value = voice.osc.next_sample() * voice.env.next_sample() * voice.velocity * gain
                    left += value
                    right += value
            frames.append((left / voice_count, right / voice_count))

        return [
            [left if channel % 2 == 0 else right for left, right in frames]
            for channel in range(channels)
        ]