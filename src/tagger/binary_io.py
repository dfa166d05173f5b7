# src/tagger/binary_io.py
"""Length-prefixed vector I/O shared by the binary model files.

A vector is a uint32 element count followed by the elements. Floats are
float32; strings are a uint32 byte count followed by UTF-8 bytes. Data is
written little-endian; ``reverse_bytes`` reads data from a big-endian writer.
"""
from typing import BinaryIO, List, Sequence, Union

import numpy as np

from .errors import BadBinary, ReadFailed

_SIZE = np.dtype("<u4")
_FLOAT = np.dtype("<f4")


def _dtype(base: np.dtype, reverse_bytes: bool) -> np.dtype:
    return base.newbyteorder(">") if reverse_bytes else base


def _read_exact(inp: BinaryIO, n: int) -> bytes:
    try:
        data = inp.read(n)
    except (OSError, ValueError) as e:
        raise ReadFailed(f"stream read failed: {e}") from e
    if data is None or len(data) != n:
        got = 0 if data is None else len(data)
        raise ReadFailed(f"unexpected end of stream: wanted {n} bytes, got {got}")
    return data


def _read_size(inp: BinaryIO, reverse_bytes: bool) -> int:
    raw = _read_exact(inp, _SIZE.itemsize)
    return int(np.frombuffer(raw, dtype=_dtype(_SIZE, reverse_bytes))[0])


def _write_size(out: BinaryIO, n: int) -> None:
    out.write(np.array([n], dtype=_SIZE).tobytes())


def write_vector(out: BinaryIO, seq: Sequence[Union[str, float]]) -> None:
    """Write a sequence of strings or numbers (numbers go out as float32)."""
    items = list(seq)
    if items and all(isinstance(x, str) for x in items):
        _write_size(out, len(items))
        for s in items:
            data = s.encode("utf-8")
            _write_size(out, len(data))
            out.write(data)
        return
    values = np.asarray(items, dtype=_FLOAT)
    _write_size(out, len(values))
    out.write(values.tobytes())


def read_vector(inp: BinaryIO, kind: type, reverse_bytes: bool = False) -> List:
    """Read one vector of ``kind`` (``str`` or ``float``) from ``inp``."""
    n = _read_size(inp, reverse_bytes)
    if kind is str:
        items: List[str] = []
        for _ in range(n):
            length = _read_size(inp, reverse_bytes)
            raw = _read_exact(inp, length)
            try:
                items.append(raw.decode("utf-8"))
            except UnicodeDecodeError as e:
                raise BadBinary(f"field name is not valid UTF-8: {raw!r}") from e
        return items
    if kind is float:
        raw = _read_exact(inp, n * _FLOAT.itemsize)
        return np.frombuffer(raw, dtype=_dtype(_FLOAT, reverse_bytes)).astype(float).tolist()
    raise TypeError(f"Unsupported vector element type: {kind!r}")
