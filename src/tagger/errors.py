# src/tagger/errors.py
from typing import Optional


class TaggerError(Exception):
    """Base class for option loading failures."""


class _LineError(TaggerError):
    def __init__(self, message: str, line: Optional[int] = None):
        self.message = message
        self.line = line  # 1-based line of the text config, when known
        super().__init__(message if line is None else f"line {line}: {message}")


class ConfigSyntaxError(_LineError):
    """Unrecognized key or a value outside its vocabulary."""


class NumericalRangeError(_LineError):
    """Negative value given to a field that only takes non-negative ones."""


class ReadFailed(TaggerError):
    """The binary stream ran dry or could not be read."""


class BadBinary(TaggerError):
    """The binary record is structurally broken."""
