"""
## Overview

This module holds the static metadata of the eight discrete
trigonometric transforms (DTTs) and the rules used to differentiate a
sequence with them.

Each kind implies a symmetric extension of the input sequence. The
symmetry at each end is either *whole-sample* (`W`, the mirror point is a
sample) or *half-sample* (`H`, the mirror point sits between two samples),
and either *symmetric* (`S`) or *antisymmetric* (`A`):

| code | kind    | symmetry | period `M` |
|------|---------|----------|------------|
| 1    | DCT-I   | WSWS     | `2(N-1)`   |
| 2    | DCT-II  | HSHS     | `2N`       |
| 3    | DCT-III | WSWA     | `2N`       |
| 4    | DCT-IV  | HSHA     | `2N`       |
| 5    | DST-I   | WAWA     | `2(N+1)`   |
| 6    | DST-II  | HAHA     | `2N`       |
| 7    | DST-III | WAWS     | `2N`       |
| 8    | DST-IV  | HAHS     | `2N`       |

The derivative of a sequence with a given symmetry has the "opposite"
symmetry (`S <-> A`), and its samples live either on the same grid
(no shift) or on a grid staggered by half a sample. The transform
that brings the weighted coefficients back to the spatial domain,
and the number of boundary samples that must be dropped or added
before (and after) that inverse transform, are therefore fixed for
each `(kind, shift)` pair. They are all listed in `_GRADIENT_RULES`.

---
"""
__all__ = [
    'TransformKind', 'Shift', 'Edge', 'Splice',
    'KindInfo', 'GradientRule', 'SymmetryTable',
]
import enum
import math
import numbers
import torch
from torch import Tensor
from typing import Iterator, NamedTuple, Tuple, Union
from .errors import InvalidArgumentError


class TransformKind(enum.IntEnum):
    """The eight discrete trigonometric transforms (FFTW r2r kinds)."""

    DCT1 = 1    # WSWS, REDFT00
    DCT2 = 2    # HSHS, REDFT10
    DCT3 = 3    # WSWA, REDFT01
    DCT4 = 4    # HSHA, REDFT11
    DST1 = 5    # WAWA, RODFT00
    DST2 = 6    # HAHA, RODFT10
    DST3 = 7    # WAWS, RODFT01
    DST4 = 8    # HAHS, RODFT11

    @classmethod
    def parse(cls, value) -> 'TransformKind':
        """Convert an integer code, a name or a symmetry code to a kind.

        Accepted inputs are `TransformKind` members, integers 1 to 8,
        names such as `"dct1"`, `"DCT-I"`, `"dst_iii"`, and symmetry codes
        such as `"WSWS"` or `"haha"`.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper().replace('-', '').replace('_', '')
            if key in _NAME_ALIASES:
                return _NAME_ALIASES[key]
            raise InvalidArgumentError(
                f'Unknown transform kind {value!r}')
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise InvalidArgumentError(
                f'Transform kind must be an integer between 1 and 8, '
                f'got {value!r}')
        if not (1 <= value <= 8 and value == int(value)):
            raise InvalidArgumentError(
                f'Transform kind must be an integer between 1 and 8, '
                f'got {value!r}')
        return cls(int(value))

    @property
    def is_cosine(self) -> bool:
        return self <= 4

    @property
    def type(self) -> int:
        """Type number (1 to 4) within the DCT or DST family."""
        return (self - 1) % 4 + 1

    @property
    def symmetry(self) -> str:
        return _KINDS[self].symmetry

    @property
    def label(self) -> str:
        return ('DCT-' if self.is_cosine else 'DST-') + _ROMAN[self.type]


class Shift(enum.IntEnum):
    """Location of the gradient samples relative to the input grid."""

    NONE = 0        # same grid as the input
    FORWARD = 1     # staggered by +dx/2
    BACKWARD = 2    # staggered by -dx/2

    @classmethod
    def parse(cls, value) -> 'Shift':
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            key = value.strip().upper()
            if key in cls.__members__:
                return cls[key]
            raise InvalidArgumentError(f'Unknown shift {value!r}')
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise InvalidArgumentError(
                f'Shift must be 0, 1 or 2, got {value!r}')
        if value not in (0, 1, 2):
            raise InvalidArgumentError(
                f'Shift must be 0, 1 or 2, got {value!r}')
        return cls(int(value))

    @property
    def staggered(self) -> bool:
        return self is not Shift.NONE


class Edge(enum.Enum):
    """Edit applied to one end of a sequence."""

    KEEP = 'keep'       # leave the end sample untouched
    DROP = 'drop'       # remove the end sample
    ZERO = 'zero'       # add a zero sample (antisymmetric end)
    MIRROR = 'mirror'   # add the negated end sample

    @property
    def delta(self) -> int:
        return {Edge.KEEP: 0, Edge.DROP: -1}.get(self, 1)


class Splice(NamedTuple):
    """Constant-size edit of both ends of the last dimension."""

    head: Edge = Edge.KEEP
    tail: Edge = Edge.KEEP

    def length(self, n: int) -> int:
        """Length of a spliced sequence of original length `n`."""
        return n + self.head.delta + self.tail.delta

    def apply(self, x: Tensor, dim: int = -1) -> Tensor:
        """Splice dimension `dim` of `x` (the last one by default).

        Samples added by `Edge.MIRROR` are computed from the end samples
        of the *input*, before anything is dropped at the other end.
        """
        n = x.shape[dim]
        start = 1 if self.head is Edge.DROP else 0
        stop = n - 1 if self.tail is Edge.DROP else n
        first, last = x.narrow(dim, 0, 1), x.narrow(dim, n - 1, 1)
        parts = []
        if self.head is Edge.ZERO:
            parts.append(torch.zeros_like(first))
        elif self.head is Edge.MIRROR:
            parts.append(-first)
        parts.append(x.narrow(dim, start, stop - start))
        if self.tail is Edge.ZERO:
            parts.append(torch.zeros_like(last))
        elif self.tail is Edge.MIRROR:
            parts.append(-last)
        if len(parts) == 1:
            return parts[0]
        return torch.cat(parts, dim=dim)

    def __repr__(self):
        return f'Splice({self.head.value}, {self.tail.value})'


class KindInfo(NamedTuple):
    kind: TransformKind
    symmetry: str           # e.g. 'WSWS'
    period_offset: int      # M = 2 * (n + period_offset)
    inverse: TransformKind  # inverse kind, up to a factor 1/M
    min_length: int         # smallest transformable length
    index_start: int        # first wavenumber index
    index_offset: float     # 0.5 for quarter-wave kinds (III and IV)
    derivative_sign: int    # -1 for cosines, +1 for sines


class GradientRule(NamedTuple):
    kind: TransformKind
    shift: Shift
    pre_inverse: Splice         # applied to the weighted coefficients
    inverse_kind: TransformKind
    align: Splice               # applied to the normalized derivative

    @property
    def output_kind(self) -> TransformKind:
        """Kind whose symmetry the (aligned) derivative has."""
        return _KINDS[self.inverse_kind].inverse


_ROMAN = {1: 'I', 2: 'II', 3: 'III', 4: 'IV'}

K = TransformKind
_KINDS = {
    info.kind: info for info in (
        KindInfo(K.DCT1, 'WSWS', -1, K.DCT1, 2, 0, 0.0, -1),
        KindInfo(K.DCT2, 'HSHS', 0, K.DCT3, 1, 0, 0.0, -1),
        KindInfo(K.DCT3, 'WSWA', 0, K.DCT2, 1, 0, 0.5, -1),
        KindInfo(K.DCT4, 'HSHA', 0, K.DCT4, 1, 0, 0.5, -1),
        KindInfo(K.DST1, 'WAWA', 1, K.DST1, 1, 1, 0.0, 1),
        KindInfo(K.DST2, 'HAHA', 0, K.DST3, 1, 1, 0.0, 1),
        KindInfo(K.DST3, 'WAWS', 0, K.DST2, 1, 0, 0.5, 1),
        KindInfo(K.DST4, 'HAHS', 0, K.DST4, 1, 0, 0.5, 1),
    )
}

_NAME_ALIASES = {}
for _kind, _info in _KINDS.items():
    _family = 'DCT' if _kind.is_cosine else 'DST'
    _NAME_ALIASES[_kind.name] = _kind
    _NAME_ALIASES[_family + _ROMAN[_kind.type]] = _kind
    _NAME_ALIASES[_info.symmetry] = _kind
del _kind, _info, _family

KEEP, DROP, ZERO, MIRROR = Edge.KEEP, Edge.DROP, Edge.ZERO, Edge.MIRROR
S = Splice

# One row per (kind, shift):
#   pre-inverse splice, inverse kind, alignment splice
# Both staggered shifts share the same inverse pass and only differ in
# how the result is re-aligned with the input grid.
_GRADIENT_TABLE = {
    # WSWS -> WAWA (centered) / HAHA (staggered)
    (K.DCT1, 0): (S(DROP, DROP), K.DST1, S(ZERO, ZERO)),
    (K.DCT1, 1): (S(DROP, KEEP), K.DST3, S(KEEP, MIRROR)),
    (K.DCT1, 2): (S(DROP, KEEP), K.DST3, S(MIRROR, KEEP)),
    # HSHS -> HAHA / WAWA
    (K.DCT2, 0): (S(DROP, ZERO), K.DST3, S(KEEP, KEEP)),
    (K.DCT2, 1): (S(DROP, KEEP), K.DST1, S(KEEP, ZERO)),
    (K.DCT2, 2): (S(DROP, KEEP), K.DST1, S(ZERO, KEEP)),
    # WSWA -> WAWS / HAHS
    (K.DCT3, 0): (S(KEEP, KEEP), K.DST2, S(ZERO, DROP)),
    (K.DCT3, 1): (S(KEEP, KEEP), K.DST4, S(KEEP, KEEP)),
    (K.DCT3, 2): (S(KEEP, KEEP), K.DST4, S(MIRROR, DROP)),
    # HSHA -> HAHS / WAWS
    (K.DCT4, 0): (S(KEEP, KEEP), K.DST4, S(KEEP, KEEP)),
    (K.DCT4, 1): (S(KEEP, KEEP), K.DST2, S(KEEP, KEEP)),
    (K.DCT4, 2): (S(KEEP, KEEP), K.DST2, S(ZERO, DROP)),
    # WAWA -> WSWS / HSHS
    (K.DST1, 0): (S(ZERO, ZERO), K.DCT1, S(DROP, DROP)),
    (K.DST1, 1): (S(ZERO, KEEP), K.DCT3, S(DROP, KEEP)),
    (K.DST1, 2): (S(ZERO, KEEP), K.DCT3, S(KEEP, DROP)),
    # HAHA -> HSHS / WSWS
    (K.DST2, 0): (S(ZERO, DROP), K.DCT3, S(KEEP, KEEP)),
    (K.DST2, 1): (S(ZERO, KEEP), K.DCT1, S(DROP, KEEP)),
    (K.DST2, 2): (S(ZERO, KEEP), K.DCT1, S(KEEP, DROP)),
    # WAWS -> WSWA / HSHA
    (K.DST3, 0): (S(KEEP, KEEP), K.DCT2, S(DROP, ZERO)),
    (K.DST3, 1): (S(KEEP, KEEP), K.DCT4, S(DROP, MIRROR)),
    (K.DST3, 2): (S(KEEP, KEEP), K.DCT4, S(KEEP, KEEP)),
    # HAHS -> HSHA / WSWA
    (K.DST4, 0): (S(KEEP, KEEP), K.DCT4, S(KEEP, KEEP)),
    (K.DST4, 1): (S(KEEP, KEEP), K.DCT2, S(DROP, ZERO)),
    (K.DST4, 2): (S(KEEP, KEEP), K.DCT2, S(KEEP, KEEP)),
}
_GRADIENT_RULES = {
    (kind, Shift(shift)): GradientRule(kind, Shift(shift), *row)
    for (kind, shift), row in _GRADIENT_TABLE.items()
}
del K, S


KindLike = Union[TransformKind, int, str]
ShiftLike = Union[Shift, int, str]


class SymmetryTable:
    """Read-only lookups into the kind and gradient tables."""

    @staticmethod
    def info(kind: KindLike) -> KindInfo:
        return _KINDS[TransformKind.parse(kind)]

    @classmethod
    def period(cls, kind: KindLike, n: int) -> int:
        """Implied period `M` of a length-`n` sequence.

        Parameters
        ----------
        kind : TransformKind or int or str
            Transform kind.
        n : int
            Number of samples.

        Returns
        -------
        period : int
            `2*(n-1)` for DCT-I, `2*(n+1)` for DST-I, `2*n` otherwise.

        """
        info = cls.info(kind)
        period = 2 * (n + info.period_offset)
        if n < info.min_length or period <= 0:
            raise InvalidArgumentError(
                f'{info.kind.label} requires at least {info.min_length} '
                f'sample(s), got {n}')
        return period

    @classmethod
    def inverse_kind(cls, kind: KindLike) -> TransformKind:
        return cls.info(kind).inverse

    @classmethod
    def derivative_sign(cls, kind: KindLike) -> int:
        """-1 for the cosine family, +1 for the sine family."""
        return cls.info(kind).derivative_sign

    @classmethod
    def wavenumber_indices(cls, kind: KindLike, n: int, **backend) -> Tensor:
        """Wavenumber indices of the `n` coefficients of a transform.

        DCT-I: `0..M/2`, DCT-II: `0..M/2-1`, DST-I: `1..M/2-1`,
        DST-II: `1..M/2`, kinds III and IV: `0.5..M/2-0.5`.
        There are always exactly `n` of them.
        """
        info = cls.info(kind)
        cls.period(kind, n)
        backend.setdefault('dtype', torch.float64)
        index = torch.arange(n, **backend)
        return index.add_(info.index_start + info.index_offset)

    @classmethod
    def wavenumbers(cls, kind: KindLike, n: int, dx: float = 1.,
                    **backend) -> Tensor:
        """Wavenumbers `2*pi*index/(M*dx)` of a length-`n` transform."""
        index = cls.wavenumber_indices(kind, n, **backend)
        return index.mul_(2 * math.pi / (cls.period(kind, n) * dx))

    @staticmethod
    def rule(kind: KindLike, shift: ShiftLike = 0) -> GradientRule:
        return _GRADIENT_RULES[TransformKind.parse(kind), Shift.parse(shift)]

    @classmethod
    def inverse_pairing(
        cls, kind: KindLike, shift: ShiftLike = 0,
    ) -> Tuple[Splice, TransformKind]:
        """Splice and kind of the inverse pass of a gradient."""
        rule = cls.rule(kind, shift)
        return rule.pre_inverse, rule.inverse_kind

    @classmethod
    def alignment_rule(cls, kind: KindLike, shift: ShiftLike = 0) -> Splice:
        """Splice that restores the input length after the inverse pass."""
        return cls.rule(kind, shift).align

    @classmethod
    def min_length(cls, kind: KindLike, shift: ShiftLike = 0) -> int:
        """Smallest input length for which a gradient is defined."""
        rule = cls.rule(kind, shift)
        delta = rule.pre_inverse.length(0)
        inverse_min = _KINDS[rule.inverse_kind].min_length
        return max(_KINDS[rule.kind].min_length, inverse_min - delta, 1)

    @staticmethod
    def rules() -> Iterator[GradientRule]:
        return iter(_GRADIENT_RULES.values())
