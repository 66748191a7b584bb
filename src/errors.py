# src/errors.py


class EncoderError(Exception):
    """Base class for all encoder failures."""


class InvalidConfiguration(EncoderError, ValueError):
    """Raised at construction when the encoder parameters cannot be honoured."""


class InvalidInput(EncoderError, ValueError):
    """Raised when an input value cannot be interpreted as a number."""
