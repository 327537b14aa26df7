"""Bridge MIDI input to RS-232C commands for MX-series video mixers."""

__version__ = "0.1.0"
__all__ = ["__version__"]