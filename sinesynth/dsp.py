"""Oscillators, envelopes and small helpers for sample-by-sample synthesis."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field

__all__ = [
    "SineOsc",
    "EnvStage",
    "ADSREnvelope",
    "midi_to_freq",
    "lerp",
]

_RELEASE_FLOOR = 0.001


@dataclass
class SineOsc:
    """A sine oscillator whose phase runs over [0, 1)."""

    sample_rate: float
    frequency: float = 440.0
    phase: float = 0.0

    def set_frequency(self, freq: float) -> None:
        """Set the oscillator frequency in Hz."""
        self.frequency = freq

    def next_sample(self) -> float:
        """Return the current sample and advance the phase by one step."""
        sample = math.sin(self.phase * math.tau)
        self.phase += self.frequency / self.sample_rate
        if self.phase >= 1.0:
            self.phase -= 1.0
        return sample

    def reset(self) -> None:
        """Move the phase back to the start of the cycle."""
        self.phase = 0.0

    def __iter__(self):
        while True:
            yield self.next_sample()


class EnvStage(enum.Enum):
    """The stage an ADSR envelope is in."""

    IDLE = enum.auto()
    ATTACK = enum.auto()
    DECAY = enum.auto()
    SUSTAIN = enum.auto()
    RELEASE = enum.auto()


def _step(amount: float, seconds: float, sample_rate: float) -> float:
    """Per-sample change that covers ``amount`` in ``seconds``; a zero time is instant."""
    samples = seconds * sample_rate
    if samples == 0:
        return math.inf if amount >= 0 else -math.inf
    return amount / samples


@dataclass
class ADSREnvelope:
    """A linear attack/decay, exponential release envelope.

    Times are in seconds and the sustain level is in [0, 1].
    """

    sample_rate: float
    attack: float = 0.01
    decay: float = 0.1
    sustain: float = 0.7
    release: float = 0.2
    stage: EnvStage = field(default=EnvStage.IDLE)
    level: float = 0.0

    def note_on(self) -> None:
        """Start the attack stage from the current level."""
        self.stage = EnvStage.ATTACK

    def note_off(self) -> None:
        """Start the release stage from the current level."""
        self.stage = EnvStage.RELEASE

    def next_sample(self) -> float:
        """Advance the envelope by one sample and return its level."""
        stage = self.stage
        if stage is EnvStage.IDLE:
            return 0.0
        if stage is EnvStage.ATTACK:
            self.level += _step(1.0, self.attack, self.sample_rate)
            if self.level >= 1.0:
                self.level = 1.0
                self.stage = EnvStage.DECAY
            return self.level
        if stage is EnvStage.DECAY:
            self.level -= _step(1.0 - self.sustain, self.decay, self.sample_rate)
            if self.level <= self.sustain:
                self.level = self.sustain
                self.stage = EnvStage.SUSTAIN
            return self.level
        if stage is EnvStage.SUSTAIN:
            return self.sustain
        # Release
        self.level -= _step(self.level, self.release, self.sample_rate)
        if math.isnan(self.level) or self.level <= _RELEASE_FLOOR:
            self.level = 0.0
            self.stage = EnvStage.IDLE
        return self.level

    def is_active(self) -> bool:
        """True while the envelope is producing sound."""
        return self.stage is not EnvStage.IDLE


def midi_to_freq(note: int) -> float:
    """Convert a MIDI note number (0-255) to a frequency in Hz."""
    if not 0 <= note <= 255:
        raise ValueError(f"MIDI note out of range: {note}")
    return 440.0 * 2.0 ** ((note - 69.0) / 12.0)


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between ``a`` and ``b``."""
    return a + (b - a) * t