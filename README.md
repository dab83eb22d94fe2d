# sinesynth

`sinesynth` is a small polyphonic sine wave synthesizer in pure Python, with
no dependencies outside the standard library. It renders blocks of samples
from note events.

## Modules

### `sinesynth.dsp`

- `SineOsc(sample_rate)`: a sine oscillator with a phase in [0, 1) and a
  default frequency of 440 Hz. `set_frequency(freq)` sets the frequency,
  `next_sample()` returns the current sample and advances the phase, and
  `reset()` sets the phase back to zero. Iterating over an oscillator yields
  samples without end.
- `ADSREnvelope(sample_rate)`: an envelope with a linear attack and decay and
  an exponential release. The defaults are attack 0.01 s, decay 0.1 s,
  sustain 0.7 and release 0.2 s. These are plain attributes (`attack`,
  `decay`, `sustain`, `release`). `note_on()` and `note_off()` start the
  attack and release stages. `next_sample()` advances by one sample and
  returns the level. `is_active()` is true until the release falls to
  0.001 or below, at which point the envelope goes idle. A time of zero
  makes its stage instant.
- `EnvStage`: the stages `IDLE`, `ATTACK`, `DECAY`, `SUSTAIN` and `RELEASE`.
- `midi_to_freq(note)`: converts a note number from 0 to 255 to Hz, with note
  69 at 440 Hz. Any other number raises `ValueError`.
- `lerp(a, b, t)`: linear interpolation.

### `sinesynth.params`

- `db_to_gain(db)` and `gain_to_db(gain)` convert between decibels and gain.
  Anything at or below -100 dB counts as silence.
- `gain_skew_factor(min_db, max_db)` returns the skew factor that puts the
  decibel midpoint at the centre of a gain range.
- `LinearRange(min, max)` and `SkewedRange(min, max, factor)` provide
  `clamp`, `normalize` and `unnormalize`. Bounds that are not in order, or a
  skew factor that is not positive, raise `ValueError`.
- `Smoother` glides towards a target in the `SmoothingStyle` given (`NONE`,
  `LINEAR` or `LOGARITHMIC`) over `time_ms`. Its methods are `reset(value)`,
  `set_target(sample_rate, target)` and `next()`.
- `FloatParam` holds a value clamped to its range.
  - `set_value(value)` sets the value. Once a sample rate is set, the
    parameter glides to the new value through its smoother.
  - `normalized()` returns the value mapped onto [0, 1].
  - `format()` returns display text with the unit.
  - `parse(text)` reads display text back into a value. Text that cannot be
    read raises `ValueError`.
- `SynthParams` groups the synth's parameters:
  - `gain`: default -12 dB, range -30 to 0 dB, logarithmic smoothing over
    50 ms.
  - `attack`, `decay`, `release`: 0.001 to 5 s, with defaults of 0.01, 0.1
    and 0.2 s.
  - `sustain`: 0 to 1, default 0.7, shown as a percentage.

  `initialize(sample_rate)` prepares all of them for a sample rate.

### `sinesynth.synth`

- `NoteOn(timing, note, velocity)` and `NoteOff(timing, note)` are note
  events at a sample offset within a block.
- `Voice` pairs an oscillator with an envelope.
- `SineSynth(params=None)` has 16 voices (`MAX_VOICES`).
  - `initialize(sample_rate)` rebuilds the voices and parameters for a
    sample rate, which must be positive.
  - `find_free_voice()` returns the index of the first silent voice, or
    `None`.
  - `process(num_samples, events=(), channels=2)` renders one block and
    returns one list of samples per channel. Even-numbered channels carry
    the left signal and odd-numbered channels the right; the two are
    currently identical.

## Usage

```python
from sinesynth.dsp import SineOsc, ADSREnvelope, midi_to_freq
from sinesynth.synth import SineSynth, NoteOn, NoteOff

osc = SineOsc(48000.0)
osc.set_frequency(midi_to_freq(69))   # 440 Hz
first = osc.next_sample()             # 0.0 at phase zero

env = ADSREnvelope(48000.0)
env.note_on()
level = env.next_sample()
env.note_off()

synth = SineSynth()
synth.initialize(48000.0)
events = [NoteOn(timing=0, note=60, velocity=0.8), NoteOff(timing=256, note=60)]
left, right = synth.process(512, events, 2)
```

### How blocks are rendered

Each event takes effect at the sample index given by its `timing`, and events
must come in timing order. Once an event's timing is not reached in the
block, that event and every event after it are ignored.

A `NoteOn` event takes the first silent voice. When every voice is busy, it
steals voices in turn. It takes the envelope times and sustain level from the
parameters at that moment. A `NoteOff` event releases every voice playing
that note.

The gain is read once per block. Each output sample is the sum of the active
voices, scaled by velocity and gain, then divided by the number of voices.

## What it does not do

`sinesynth` only computes samples. It does not:

- open an audio device;
- read MIDI from hardware or files;
- write audio files;
- load into a plugin host;
- provide a user interface or a command-line program.

Playing or saving the lists that `process` returns is left to the caller.

## Running the tests

```
pip install .[test]
pytest
```