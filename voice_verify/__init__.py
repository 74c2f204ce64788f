"""Phone number verification over a text-to-speech voice call."""

__version__ = "1.0.0"
