# tests/test_codec.py
import io
import numpy as np
import pytest
from rich.console import Console
from tagger.binary_io import write_vector
from tagger.codec import store, load, dumps, loads
from tagger.errors import BadBinary, ReadFailed
from tagger.options import TaggerOptions, Estimator, Inference, Regularization, FIELD_NAMES

def _quiet():
    sink = io.StringIO()
    return Console(file=sink, width=200), sink

def test_round_trip_defaults_and_overrides():
    msg, _ = _quiet()
    for opts in [
        TaggerOptions(),
        TaggerOptions(estimator=Estimator.ML, inference=Inference.MARGINAL, suffix_length=8, degree=7,
                      max_train_passes=6, max_lemmatizer_passes=6, max_useless_passes=5, guess_mass=0.9999,
                      beam=3, beam_mass=6.0, regularization=Regularization.L2, delta=2.0, sigma=1.0,
                      use_label_dictionary=False),
    ]:
        buf = io.BytesIO()
        opts.store(buf)
        buf.seek(0)
        assert TaggerOptions.load(buf, msg) == opts

def test_bytes_helpers():
    opts = TaggerOptions(beam=10, delta=0.5)
    assert loads(dumps(opts)) == opts
    assert TaggerOptions.from_bytes(opts.to_bytes()) == opts

def test_unknown_field_is_reported_and_skipped():
    opts = TaggerOptions(degree=4, sigma=2.0)
    pairs = opts.to_pairs()
    buf = io.BytesIO()
    write_vector(buf, list(pairs) + ["future_knob"])
    write_vector(buf, list(pairs.values()) + [7.0])
    buf.seek(0)
    msg, sink = _quiet()
    assert load(buf, msg_out=msg) == opts
    assert "Found unknown parameter name future_knob." in sink.getvalue()

def test_mismatched_lengths_are_bad_binary():
    buf = io.BytesIO()
    write_vector(buf, list(FIELD_NAMES))
    write_vector(buf, [0.0] * (len(FIELD_NAMES) - 1))
    buf.seek(0)
    with pytest.raises(BadBinary):
        load(buf)

def test_truncated_record_fails_to_read():
    data = dumps(TaggerOptions())
    with pytest.raises(ReadFailed):
        loads(data[:-3])

def test_missing_fields_start_from_zero():
    buf = io.BytesIO()
    write_vector(buf, ["degree"])
    write_vector(buf, [9.0])
    buf.seek(0)
    opts = load(buf)
    assert opts.degree == 9 and opts.suffix_length == 0 and opts.use_label_dictionary is False
    assert opts.beam is None and opts.estimator is Estimator.AVG_PERC

def test_values_are_truncated_to_field_types():
    buf = io.BytesIO()
    write_vector(buf, ["suffix_length", "beam", "use_label_dictionary"])
    write_vector(buf, [8.7, -1.0, 1.0])
    buf.seek(0)
    opts = load(buf)
    assert opts.suffix_length == 8 and opts.beam is None and opts.use_label_dictionary is True

def test_out_of_range_enum_ordinal():
    buf = io.BytesIO()
    write_vector(buf, ["regularization"])
    write_vector(buf, [5.0])
    buf.seek(0)
    with pytest.raises(BadBinary):
        load(buf)

def test_store_writes_names_then_float32_values():
    buf = io.BytesIO()
    store(TaggerOptions(), buf)
    # 14 names + 14 float32 values, each vector with a uint32 count
    names_len = 4 + sum(4 + len(n) for n in FIELD_NAMES)
    assert len(buf.getvalue()) == names_len + 4 + 14 * 4

def _record(names, values, dtype="<"):
    buf = io.BytesIO()
    buf.write(np.array([len(names)], dtype=dtype + "u4").tobytes())
    for n in names:
        data = n.encode("utf-8")
        buf.write(np.array([len(data)], dtype=dtype + "u4").tobytes() + data)
    buf.write(np.array([len(values)], dtype=dtype + "u4").tobytes())
    buf.write(np.array(values, dtype=dtype + "f4").tobytes())
    buf.seek(0)
    return buf

def test_negative_sentinels_survive_round_trip():
    opts = TaggerOptions(beam=-1, beam_mass=-1.0, delta=-5.0, sigma=-1.0)
    back = loads(dumps(opts))
    assert back == opts == TaggerOptions()
    assert back.beam is None and back.delta is None

def test_byte_swapped_record_loads_with_reverse_bytes():
    opts = TaggerOptions(estimator=Estimator.ML, degree=7, guess_mass=0.5, beam=4, sigma=1.5)
    pairs = opts.to_pairs()
    buf = _record(list(pairs), list(pairs.values()), dtype=">")
    assert load(buf, reverse_bytes=True) == opts
    assert TaggerOptions.from_bytes(_record(list(pairs), list(pairs.values()), dtype=">").getvalue(), reverse_bytes=True) == opts

def test_negative_unsigned_field_is_bad_binary():
    for name in ["suffix_length", "degree", "max_train_passes", "guess_mass", "use_label_dictionary"]:
        with pytest.raises(BadBinary):
            load(_record([name], [-5.0]))

def test_non_finite_values_are_bad_binary():
    for name in ["delta", "sigma", "beam_mass", "guess_mass", "degree"]:
        with pytest.raises(BadBinary):
            load(_record([name], [float("nan")]))
    with pytest.raises(BadBinary):
        load(_record(["sigma"], [float("inf")]))
