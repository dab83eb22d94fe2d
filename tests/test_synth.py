import pytest

from sinesynth.synth import MAX_VOICES, NoteOff, NoteOn, SineSynth


@pytest.fixture
def synth():
    s = SineSynth()
    s.initialize(8000.0)
    return s


def test_silence_without_events(synth):
    out = synth.process(64)
    assert len(out) == 2
    assert out[0] == [0.0] * 64
    assert out[1] == [0.0] * 64


def test_initialize_sets_sample_rate():
    s = SineSynth()
    s.initialize(48000.0)
    assert all(v.osc.sample_rate == 48000.0 for v in s.voices)
    assert all(v.env.sample_rate == 48000.0 for v in s.voices)
    assert s.params.gain.sample_rate == 48000.0


def test_initialize_rejects_bad_rate():
    with pytest.raises(ValueError):
        SineSynth().initialize(0.0)


def test_note_on_produces_sound(synth):
    out = synth.process(200, [NoteOn(0, 69, 1.0)])
    assert out[0][0] == 0.0
    assert any(abs(s) > 0 for s in out[0])
    assert out[0] == out[1]
    assert synth.voices[0].note == 69
    assert synth.find_free_voice() == 1


def test_event_timing_is_sample_accurate(synth):
    out = synth.process(50, [NoteOn(20, 69, 1.0)])
    assert out[0][:21] == [0.0] * 21
    assert any(abs(s) > 0 for s in out[0][21:])


def test_extra_channels_alternate(synth):
    out = synth.process(40, [NoteOn(0, 60, 0.8)], channels=3)
    assert len(out) == 3
    assert out[2] == out[0]
    assert out[1] == out[0]


def test_event_beyond_block_is_ignored(synth):
    synth.process(10, [NoteOn(10, 60, 1.0)])
    assert synth.find_free_voice() == 0


def test_voice_stealing_wraps_oldest(synth):
    events = [NoteOn(0, 60 + i, 1.0) for i in range(MAX_VOICES + 1)]
    synth.process(1, events)
    assert synth.find_free_voice() is None
    assert synth.voices[0].note == 60 + MAX_VOICES
    assert synth.voices[1].note == 61
    assert synth.next_voice == 1


def test_note_off_releases_to_silence(synth):
    synth.params.release.set_value(0.001)
    synth.process(100, [NoteOn(0, 64, 1.0)])
    assert synth.voices[0].env.is_active()
    out = synth.process(500, [NoteOff(0, 64)])
    assert synth.find_free_voice() == 0
    assert not any(v.env.is_active() for v in synth.voices)
    assert out[0][-10:] == [0.0] * 10


def test_note_off_for_other_note_keeps_playing(synth):
    synth.process(10, [NoteOn(0, 64, 1.0)])
    synth.process(10, [NoteOff(0, 65)])
    assert synth.voices[0].env.is_active()


def test_output_bounded_by_gain(synth):
    events = [NoteOn(0, 40 + i, 1.0) for i in range(MAX_VOICES)]
    out = synth.process(400, events)
    gain = synth.params.gain.value
    assert max(abs(s) for s in out[0]) <= gain + 1e-9


def test_velocity_scales_output():
    loud, soft = SineSynth(), SineSynth()
    loud.initialize(8000.0)
    soft.initialize(8000.0)
    a = loud.process(100, [NoteOn(0, 57, 1.0)])[0]
    b = soft.process(100, [NoteOn(0, 57, 0.5)])[0]
    assert b == pytest.approx([x * 0.5 for x in a])


def test_envelope_takes_params_at_note_on(synth):
    synth.params.decay.set_value(2.0)
    synth.params.sustain.set_value(0.3)
    synth.process(1, [NoteOn(0, 60, 1.0)])
    assert synth.voices[0].env.decay == 2.0
    assert synth.voices[0].env.sustain == 0.3


def test_bad_note_raises(synth):
    with pytest.raises(ValueError):
        synth.process(4, [NoteOn(0, 300, 1.0)])


def test_bad_block_arguments(synth):
    with pytest.raises(ValueError):
        synth.process(-1)
    with pytest.raises(ValueError):
        synth.process(4, channels=0)