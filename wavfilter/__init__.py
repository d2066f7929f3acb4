"""Cascaded IIR filtering of PCM WAV files: biquads, direct-form filters and WAV headers."""

__version__ = "0.1.0"
__all__ = ["cli", "directform", "iir", "wavheader"]