# src/tagger/options.py
from dataclasses import dataclass, fields, replace
from enum import IntEnum
from typing import Dict, Optional

DISABLED = -1  # wire value of an unset beam/beam_mass/delta/sigma
FLOAT_TOLERANCE = 0.001
SENTINEL_FIELDS = ("beam", "beam_mass", "delta", "sigma")


class Estimator(IntEnum):
    AVG_PERC = 0
    ML = 1


class Inference(IntEnum):
    MAP = 0
    MARGINAL = 1


class Regularization(IntEnum):
    NONE = 0
    L1 = 1
    L2 = 2


def float_eq(f1: float, f2: float) -> bool:
    return abs(f1 - f2) < FLOAT_TOLERANCE


def _optional_eq(a, b, eq) -> bool:
    if a is None or b is None:
        return a is None and b is None
    return eq(a, b)


@dataclass(frozen=True, eq=False)
class TaggerOptions:
    """Hyperparameters of one training or tagging run.

    ``beam``, ``beam_mass``, ``delta`` and ``sigma`` are ``None`` when the
    feature is disabled; on the wire and in text configs that is written as -1,
    and any negative value given to the constructor is stored as ``None``.
    Field order is the canonical order of the binary record.
    """

    estimator: Estimator = Estimator.AVG_PERC
    inference: Inference = Inference.MAP
    suffix_length: int = 10
    degree: int = 2
    max_train_passes: int = 50
    max_lemmatizer_passes: int = 50
    max_useless_passes: int = 3
    guess_mass: float = 0.99
    beam: Optional[int] = None
    beam_mass: Optional[float] = None
    regularization: Regularization = Regularization.NONE
    delta: Optional[float] = None
    sigma: Optional[float] = None
    use_label_dictionary: bool = True

    # tolerance equality cannot be made hash-consistent
    __hash__ = None

    def __post_init__(self):
        # any negative sentinel, -1 included, means disabled
        for name in SENTINEL_FIELDS:
            value = getattr(self, name)
            if value is not None and value < 0:
                object.__setattr__(self, name, None)

    @classmethod
    def defaults(cls) -> "TaggerOptions":
        return cls()

    @classmethod
    def zero(cls) -> "TaggerOptions":
        """Blank record that binary decoding fills in."""
        return cls(
            estimator=Estimator.AVG_PERC,
            inference=Inference.MAP,
            suffix_length=0,
            degree=0,
            max_train_passes=0,
            max_lemmatizer_passes=0,
            max_useless_passes=0,
            guess_mass=0.0,
            beam=None,
            beam_mass=None,
            regularization=Regularization.NONE,
            delta=None,
            sigma=None,
            use_label_dictionary=False,
        )

    @property
    def beam_enabled(self) -> bool:
        return self.beam is not None

    @property
    def beam_mass_enabled(self) -> bool:
        return self.beam_mass is not None

    @property
    def delta_enabled(self) -> bool:
        return self.delta is not None

    @property
    def sigma_enabled(self) -> bool:
        return self.sigma is not None

    def to_pairs(self) -> Dict[str, float]:
        """Ordered name -> value mapping as written to the binary record."""
        pairs: Dict[str, float] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            pairs[f.name] = float(DISABLED if value is None else value)
        return pairs

    def with_updates(self, **changes) -> "TaggerOptions":
        return replace(self, **changes)

    def store(self, out) -> None:
        from .codec import store
        store(self, out)

    @classmethod
    def load(cls, inp, msg_out=None, reverse_bytes: bool = False) -> "TaggerOptions":
        from .codec import load
        return load(inp, msg_out=msg_out, reverse_bytes=reverse_bytes)

    def to_bytes(self) -> bytes:
        from .codec import dumps
        return dumps(self)

    @classmethod
    def from_bytes(cls, data: bytes, msg_out=None, reverse_bytes: bool = False) -> "TaggerOptions":
        from .codec import loads
        return loads(data, msg_out=msg_out, reverse_bytes=reverse_bytes)

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, TaggerOptions):
            return NotImplemented
        return (
            self.estimator == other.estimator
            and self.inference == other.inference
            and self.suffix_length == other.suffix_length
            and self.degree == other.degree
            and self.max_train_passes == other.max_train_passes
            and self.max_lemmatizer_passes == other.max_lemmatizer_passes
            and self.max_useless_passes == other.max_useless_passes
            and float_eq(self.guess_mass, other.guess_mass)
            and self.beam == other.beam
            and _optional_eq(self.beam_mass, other.beam_mass, float_eq)
            and self.regularization == other.regularization
            and _optional_eq(self.delta, other.delta, float_eq)
            and _optional_eq(self.sigma, other.sigma, float_eq)
            and bool(self.use_label_dictionary) == bool(other.use_label_dictionary)
        )


FIELD_NAMES = tuple(f.name for f in fields(TaggerOptions))
