class AdatError(Exception):
    """Base error."""

class UnknownEngineError(AdatError, KeyError):
    """Raised when a calendar engine name is not registered."""

class SunsetFormatError(AdatError, ValueError):
    """Raised when a sunset time-of-day cannot be parsed as HH:MM."""
