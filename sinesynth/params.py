"""Plugin parameters: value ranges, smoothing, formatting and the synth's parameter set."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass, field, fields
from typing import Callable, Iterator, Optional, Union

__all__ = [
    "MINUS_INFINITY_DB",
    "MINUS_INFINITY_GAIN",
    "db_to_gain",
    "gain_to_db",
    "gain_skew_factor",
    "LinearRange",
    "SkewedRange",
    "SmoothingStyle",
    "Smoother",
    "FloatParam",
    "SynthParams",
]

MINUS_INFINITY_DB = -100.0
MINUS_INFINITY_GAIN = 1e-5


def db_to_gain(db: float) -> float:
    """Convert decibels to a linear gain; anything at or below -100 dB is silence."""
    if db > MINUS_INFINITY_DB:
        return 10.0 ** (db * 0.05)
    return 0.0


def gain_to_db(gain: float) -> float:
    """Convert a linear gain to decibels, bottoming out at -100 dB."""
    return math.log10(max(gain, MINUS_INFINITY_GAIN)) * 20.0


def gain_skew_factor(min_db: float, max_db: float) -> float:
    """Skew factor that puts the midpoint in decibels at the centre of a gain range."""
    min_gain = db_to_gain(min_db)
    max_gain = db_to_gain(max_db)
    middle_gain = db_to_gain((min_db + max_db) / 2.0)
    return math.log(0.5) / math.log((middle_gain - min_gain) / (max_gain - min_gain))


def _check_bounds(minimum: float, maximum: float) -> None:
    if not minimum < maximum:
        raise ValueError(f"range minimum {minimum} must be below maximum {maximum}")


def _unit_clamp(normalized: float) -> float:
    return min(max(normalized, 0.0), 1.0)


@dataclass(frozen=True)
class LinearRange:
    """A range mapped linearly onto [0, 1]."""

    min: float
    max: float

    def __post_init__(self) -> None:
        _check_bounds(self.min, self.max)

    def clamp(self, value: float) -> float:
        """Limit ``value`` to the range."""
        return min(max(value, self.min), self.max)

    def normalize(self, value: float) -> float:
        """Map a plain value onto [0, 1]."""
        return (self.clamp(value) - self.min) / (self.max - self.min)

    def unnormalize(self, normalized: float) -> float:
        """Map a value in [0, 1] back onto the range."""
        return _unit_clamp(normalized) * (self.max - self.min) + self.min


@dataclass(frozen=True)
class SkewedRange:
    """A range mapped onto [0, 1] through a power curve."""

    min: float
    max: float
    factor: float

    def __post_init__(self) -> None:
        _check_bounds(self.min, self.max)
        if self.factor <= 0:
            raise ValueError(f"skew factor must be positive, got {self.factor}")

    def clamp(self, value: float) -> float:
        """Limit ``value`` to the range."""
        return min(max(value, self.min), self.max)

    def normalize(self, value: float) -> float:
        """Map a plain value onto [0, 1]."""
        return ((self.clamp(value) - self.min) / (self.max - self.min)) ** self.factor

    def unnormalize(self, normalized: float) -> float:
        """Map a value in [0, 1] back onto the range."""
        return _unit_clamp(normalized) ** (1.0 / self.factor) * (self.max - self.min) + self.min


Range = Union[LinearRange, SkewedRange]


class SmoothingStyle(enum.Enum):
    """How a parameter glides towards a new value."""

    NONE = enum.auto()
    LINEAR = enum.auto()
    LOGARITHMIC = enum.auto()


@dataclass
class Smoother:
    """Glides a value towards its target over a fixed time."""

    style: SmoothingStyle = SmoothingStyle.NONE
    time_ms: float = 0.0
    current: float = 0.0
    target: float = 0.0
    steps_left: int = 0
    _step: float = field(default=0.0, init=False, repr=False)

    def reset(self, value: float) -> None:
        """Jump straight to ``value`` with no gliding."""
        self.current = value
        self.target = value
        self.steps_left = 0

    def set_target(self, sample_rate: float, target: float) -> None:
        """Start gliding from the current value to ``target``."""
        self.target = target
        steps = math.floor(sample_rate * self.time_ms / 1000.0 + 0.5)
        if self.style is SmoothingStyle.NONE or steps <= 0:
            self.current = target
            self.steps_left = 0
            return
        if self.style is SmoothingStyle.LOGARITHMIC:
            if self.current <= 0 or target <= 0:
                raise ValueError("logarithmic smoothing needs positive values")
            self._step = (target / self.current) ** (1.0 / steps)
        else:
            self._step = (target - self.current) / steps
        self.steps_left = steps

    def next(self) -> float:
        """Advance by one sample and return the smoothed value."""
        if self.steps_left > 0:
            self.steps_left -= 1
            if self.steps_left == 0:
                self.current = self.target
            elif self.style is SmoothingStyle.LOGARITHMIC:
                self.current *= self._step
            else:
                self.current += self._step
        return self.current


def _rounded(digits: int) -> Callable[[float], str]:
    return lambda value: f"{value:.{digits}f}"


def _percentage(digits: int) -> Callable[[float], str]:
    return lambda value: f"{value * 100.0:.{digits}f}%"


def _gain_as_db(digits: int) -> Callable[[float], str]:
    def render(value: float) -> str:
        if value <= MINUS_INFINITY_GAIN:
            return "-inf"
        value_db = gain_to_db(value)
        if abs(value_db) < 1e-6:
            value_db = 0.0
        return f"{value_db:.{digits}f}"

    return render


def _db_as_gain(text: str) -> float:
    text = text.strip()
    text = text.removesuffix("dB").rstrip()
    if text.lower() == "-inf":
        return 0.0
    return db_to_gain(float(text))


@dataclass
class FloatParam:
    """A floating-point parameter with a range, a unit and optional smoothing."""

    name: str
    default: float
    range: Range
    unit: str = ""
    smoothed: Smoother = field(default_factory=Smoother)
    value_to_string: Optional[Callable[[float], str]] = None
    string_to_value: Optional[Callable[[str], float]] = None
    sample_rate: Optional[float] = None
    value: float = field(init=False)

    def __post_init__(self) -> None:
        self.value = self.range.clamp(self.default)
        self.smoothed.reset(self.value)

    def set_value(self, value: float) -> None:
        """Set the plain value, clamped to the range, and glide towards it."""
        self.value = self.range.clamp(value)
        if self.sample_rate is None:
            self.smoothed.reset(self.value)
        else:
            self.smoothed.set_target(self.sample_rate, self.value)

    def normalized(self) -> float:
        """The current value mapped onto [0, 1]."""
        return self.range.normalize(self.value)

    def format(self) -> str:
        """The current value as display text, with its unit."""
        text = self.value_to_string(self.value) if self.value_to_string else str(self.value)
        return f"{text}{self.unit}"

    def parse(self, text: str) -> float:
        """Read display text back into a plain value, clamped to the range."""
        cleaned = text.strip()
        if self.unit:
            cleaned = cleaned.removesuffix(self.unit)
        cleaned = cleaned.rstrip()
        try:
            value = self.string_to_value(cleaned) if self.string_to_value else float(cleaned)
        except ValueError as exc:
            raise ValueError(f"cannot read {text!r} as a value for {self.name}") from exc
        return self.range.clamp(value)


def _time_param(name: str, default: float) -> FloatParam:
    return FloatParam(
        name,
        default,
        SkewedRange(min=0.001, max=5.0, factor=0.25),
        unit=" s",
        value_to_string=_rounded(3),
    )


def _gain_param() -> FloatParam:
    return FloatParam(
        "Gain",
        db_to_gain(-12.0),
        SkewedRange(
            min=db_to_gain(-30.0),
            max=db_to_gain(0.0),
            factor=gain_skew_factor(-30.0, 0.0),
        ),
        unit=" dB",
        smoothed=Smoother(SmoothingStyle.LOGARITHMIC, 50.0),
        value_to_string=_gain_as_db(2),
        string_to_value=_db_as_gain,
    )


def _sustain_param() -> FloatParam:
    return FloatParam(
        "Sustain",
        0.7,
        LinearRange(min=0.0, max=1.0),
        value_to_string=_percentage(1),
    )


@dataclass
class SynthParams:
    """The synth's parameters: output gain and the ADSR shape."""

    gain: FloatParam = field(default_factory=_gain_param)
    attack: FloatParam = field(default_factory=lambda: _time_param("Attack", 0.01))
    decay: FloatParam = field(default_factory=lambda: _time_param("Decay", 0.1))
    sustain: FloatParam = field(default_factory=_sustain_param)
    release: FloatParam = field(default_factory=lambda: _time_param("Release", 0.2))

    def _all(self) -> Iterator[FloatParam]:
        return (getattr(self, f.name) for f in fields(self))

    def initialize(self, sample_rate: float) -> None:
        """Prepare every parameter for the given sample rate."""
        for param in self._all():
            param.sample_rate = sample_rate
            param.smoothed.reset(param.value)