"""Polyphonic sine wave synthesizer: oscillators, ADSR envelopes, parameters and voice handling."""

__version__ = "0.1.0"
__all__ = ["dsp", "params", "synth"]