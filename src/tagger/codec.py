# src/tagger/codec.py
"""Binary form of TaggerOptions: a vector of field names and a vector of values.

Fields are matched by name, so records written by a newer version with extra
fields still load here; unknown names only produce a warning.
"""
import io
import math
from typing import BinaryIO, Callable, Dict, Optional

from rich.console import Console

from .binary_io import read_vector, write_vector
from .console import console as default_console
from .errors import BadBinary
from .options import Estimator, Inference, Regularization, TaggerOptions


def _int(value: float) -> int:
    try:
        return int(value)
    except (ValueError, OverflowError):
        raise BadBinary(f"{value} is not a valid integer field value") from None


def _uint(value: float) -> int:
    if value < 0:
        raise BadBinary(f"{value} is negative in an unsigned field")
    return _int(value)


def _finite(value: float) -> float:
    if not math.isfinite(value):
        raise BadBinary(f"{value} is not a finite field value")
    return value


def _ufloat(value: float) -> float:
    if _finite(value) < 0:
        raise BadBinary(f"{value} is negative in a non-negative field")
    return value


def _enum(cls) -> Callable[[float], object]:
    def convert(value: float):
        try:
            return cls(_int(value))
        except ValueError:
            raise BadBinary(f"{value} is not a valid {cls.__name__} ordinal") from None
    return convert


def _sentinel(cast) -> Callable[[float], object]:
    # negative values mean "disabled"
    return lambda value: None if _finite(value) < 0 else cast(value)


_DECODERS: Dict[str, Callable[[float], object]] = {
    "estimator": _enum(Estimator),
    "inference": _enum(Inference),
    "suffix_length": _uint,
    "degree": _uint,
    "max_train_passes": _uint,
    "max_lemmatizer_passes": _uint,
    "max_useless_passes": _uint,
    "guess_mass": _ufloat,
    "beam": _sentinel(_int),
    "beam_mass": _sentinel(float),
    "regularization": _enum(Regularization),
    "delta": _sentinel(float),
    "sigma": _sentinel(float),
    "use_label_dictionary": lambda value: _uint(value) != 0,
}


def store(options: TaggerOptions, out: BinaryIO) -> None:
    pairs = options.to_pairs()
    write_vector(out, list(pairs.keys()))
    write_vector(out, list(pairs.values()))


def load(inp: BinaryIO, msg_out: Optional[Console] = None, reverse_bytes: bool = False) -> TaggerOptions:
    """Read a record written by :func:`store`.

    Raises ReadFailed if the stream ends early and BadBinary if the name and
    value vectors differ in length. Unknown field names are reported to
    ``msg_out`` and skipped.
    """
    if msg_out is None:
        msg_out = default_console
    names = read_vector(inp, str, reverse_bytes)
    values = read_vector(inp, float, reverse_bytes)

    if len(names) != len(values):
        raise BadBinary(f"{len(names)} field names but {len(values)} values")

    updates = {}
    for name, value in zip(names, values):
        decode = _DECODERS.get(name)
        if decode is None:
            msg_out.print(
                f"Found unknown parameter name {name}. Please, update your tagger version.",
                markup=False, highlight=False,
            )
            continue
        updates[name] = decode(value)
    return TaggerOptions.zero().with_updates(**updates)


def dumps(options: TaggerOptions) -> bytes:
    buf = io.BytesIO()
    store(options, buf)
    return buf.getvalue()


def loads(data: bytes, msg_out: Optional[Console] = None, reverse_bytes: bool = False) -> TaggerOptions:
    return load(io.BytesIO(data), msg_out=msg_out, reverse_bytes=reverse_bytes)
