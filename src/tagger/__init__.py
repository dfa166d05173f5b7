# src/tagger/__init__.py
from .options import TaggerOptions, Estimator, Inference, Regularization, DISABLED, FIELD_NAMES, float_eq
from .config import LineCounter, parse_options, load_options_file, format_options, write_options_file
from .codec import store, load, dumps, loads
from .errors import TaggerError, ConfigSyntaxError, NumericalRangeError, ReadFailed, BadBinary

__version__ = "0.1.0"
__all__ = [
    "TaggerOptions", "Estimator", "Inference", "Regularization", "DISABLED", "FIELD_NAMES", "float_eq",
    "LineCounter", "parse_options", "load_options_file", "format_options", "write_options_file",
    "store", "load", "dumps", "loads",
    "TaggerError", "ConfigSyntaxError", "NumericalRangeError", "ReadFailed", "BadBinary",
]
