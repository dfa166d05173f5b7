# src/tagger/config.py
"""Reader and writer for the ``key=value`` tagger config files.

Whitespace is ignored anywhere on a line, ``#`` starts a comment line and
every key not given keeps its default from TaggerOptions.
"""
import pathlib
import re
from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, Optional, Type, TypeVar, Union

from .errors import ConfigSyntaxError, NumericalRangeError
from .options import DISABLED, Estimator, Inference, Regularization, TaggerOptions

E = TypeVar("E", bound=IntEnum)

# atoi/atof accept the longest numeric prefix and read anything else as 0.
_INT_PREFIX = re.compile(r"[+-]?\d+")
_FLOAT_PREFIX = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)", re.IGNORECASE
)


@dataclass
class LineCounter:
    """Caller-owned count of lines consumed; names the failing line after an error."""
    value: int = 0


def despace(line: str) -> str:
    line = line.rstrip("\n")
    return line.replace(" ", "").replace("\t", "").replace("\r", "")


def strip_key(line: str, key: str) -> str:
    """Return what follows the first occurrence of ``key`` in ``line``."""
    start = line.find(key)
    if start < 0:
        raise ValueError(f"{key!r} not in {line!r}")
    return line[start + len(key):]


def _parse_int(text: str, strict: bool) -> int:
    m = _INT_PREFIX.match(text)
    if strict and (m is None or m.end() != len(text)):
        raise ConfigSyntaxError(f"not an integer: {text!r}")
    return int(m.group()) if m else 0


def _parse_float(text: str, strict: bool) -> float:
    m = _FLOAT_PREFIX.match(text)
    if strict and (m is None or m.end() != len(text)):
        raise ConfigSyntaxError(f"not a number: {text!r}")
    return float(m.group()) if m else 0.0


def get_uint(text: str, strict: bool = False) -> int:
    i = _parse_int(text, strict)
    if i < 0:
        raise NumericalRangeError(f"negative value {i} not allowed")
    return i


def get_int(text: str, strict: bool = False) -> int:
    return _parse_int(text, strict)


def get_float(text: str, strict: bool = False) -> float:
    f = _parse_float(text, strict)
    if f < 0:
        raise NumericalRangeError(f"negative value {f} not allowed")
    return f


def get_signed_float(text: str, strict: bool = False) -> float:
    return _parse_float(text, strict)


def _get_enum(cls: Type[E], text: str, strict: bool) -> E:
    for member in cls:
        if text == member.name or (not strict and text.startswith(member.name)):
            return member
    choices = ", ".join(m.name for m in cls)
    raise ConfigSyntaxError(f"unknown {cls.__name__.lower()} {text!r} (expected one of {choices})")


def get_estimator(text: str, strict: bool = False) -> Estimator:
    return _get_enum(Estimator, text, strict)


def get_inference(text: str, strict: bool = False) -> Inference:
    return _get_enum(Inference, text, strict)


def get_regularization(text: str, strict: bool = False) -> Regularization:
    return _get_enum(Regularization, text, strict)


def _disabled_if_negative(value):
    return None if value < 0 else value


# Checked in order; the first key found anywhere on the line wins.
_FIELDS = (
    ("estimator", get_estimator),
    ("inference", get_inference),
    ("suffix_length", get_uint),
    ("degree", get_uint),
    ("max_train_passes", get_uint),
    ("max_lemmatizer_passes", get_uint),
    ("max_useless_passes", get_uint),
    ("guess_mass", get_float),
    ("beam", lambda text, strict: _disabled_if_negative(get_int(text, strict))),
    ("beam_mass", lambda text, strict: _disabled_if_negative(get_signed_float(text, strict))),
    ("regularization", get_regularization),
    ("delta", lambda text, strict: _disabled_if_negative(get_signed_float(text, strict))),
    ("sigma", lambda text, strict: _disabled_if_negative(get_signed_float(text, strict))),
    ("use_label_dictionary", lambda text, strict: get_uint(text, strict) != 0),
)


def _parse_line(line: str, strict: bool):
    for name, convert in _FIELDS:
        key = name + "="
        if key in line:
            return name, convert(strip_key(line, key), strict)
    raise ConfigSyntaxError(f"unrecognized option {line!r}")


def parse_options(
    stream: Union[str, Iterable[str]], counter: Optional[LineCounter] = None, strict: bool = False
) -> TaggerOptions:
    """Build TaggerOptions from config lines (or a whole config as one string).

    ``counter`` is advanced once per line read, including the line that
    raises. With ``strict`` enum values must match exactly and numbers must
    parse completely; otherwise legacy prefix matching is used and
    unparsable numbers read as 0.
    """
    if isinstance(stream, str):
        stream = stream.splitlines(keepends=True)
    if counter is None:
        counter = LineCounter()
    values = {}
    for raw in stream:
        counter.value += 1
        line = despace(raw)
        if not line or line.startswith("#"):
            continue
        try:
            name, value = _parse_line(line, strict)
        except (ConfigSyntaxError, NumericalRangeError) as e:
            raise type(e)(e.message, line=counter.value) from None
        values[name] = value
    return TaggerOptions(**values)


def load_options_file(path: Union[str, pathlib.Path], strict: bool = False) -> TaggerOptions:
    path = pathlib.Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Tagger config not found: {path}")
    counter = LineCounter()
    with path.open("r", encoding="utf-8") as f:
        try:
            return parse_options(f, counter, strict=strict)
        except (ConfigSyntaxError, NumericalRangeError) as e:
            raise type(e)(f"{e.message} (in {path})", line=counter.value) from None


def _format_value(value) -> str:
    if value is None:
        return str(DISABLED)
    if isinstance(value, IntEnum):
        return value.name
    if isinstance(value, bool):
        return str(int(value))
    return repr(value) if isinstance(value, float) else str(value)


def format_options(options: TaggerOptions) -> str:
    lines = [f"{name}={_format_value(getattr(options, name))}" for name, _ in _FIELDS]
    return "\n".join(lines) + "\n"


def write_options_file(options: TaggerOptions, path: Union[str, pathlib.Path]) -> pathlib.Path:
    path = pathlib.Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_options(options), encoding="utf-8")
    return path
