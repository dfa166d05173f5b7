# tests/test_binary_io.py
import io
import numpy as np
import pytest
from tagger.binary_io import write_vector, read_vector
from tagger.errors import ReadFailed, BadBinary

def test_string_and_float_vectors_read_back():
    buf = io.BytesIO()
    write_vector(buf, ["degree", "säännöllistys"])
    write_vector(buf, [2, -1, 0.5])
    buf.seek(0)
    assert read_vector(buf, str) == ["degree", "säännöllistys"]
    assert read_vector(buf, float) == [2.0, -1.0, 0.5]

def test_layout_is_length_prefixed_little_endian():
    buf = io.BytesIO()
    write_vector(buf, [1.0])
    assert buf.getvalue() == np.array([1], dtype="<u4").tobytes() + np.array([1.0], dtype="<f4").tobytes()

def test_reverse_bytes_reads_big_endian_data():
    data = (np.array([1], dtype=">u4").tobytes() + np.array([4], dtype=">u4").tobytes() + b"beam"
            + np.array([1], dtype=">u4").tobytes() + np.array([3.0], dtype=">f4").tobytes())
    buf = io.BytesIO(data)
    assert read_vector(buf, str, reverse_bytes=True) == ["beam"]
    assert read_vector(buf, float, reverse_bytes=True) == [3.0]

def test_truncated_stream_fails():
    buf = io.BytesIO()
    write_vector(buf, [1.0, 2.0])
    with pytest.raises(ReadFailed):
        read_vector(io.BytesIO(buf.getvalue()[:-2]), float)
    with pytest.raises(ReadFailed):
        read_vector(io.BytesIO(b""), str)

def test_invalid_utf8_name():
    data = np.array([1, 2], dtype="<u4").tobytes() + b"\xff\xfe"
    with pytest.raises(BadBinary):
        read_vector(io.BytesIO(data), str)
