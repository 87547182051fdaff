"""Hindi speech to English text: recognition, disambiguation, translation."""

__version__ = "0.1.0"
