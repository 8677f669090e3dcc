"""
## Overview

Spectral gradients computed with discrete trigonometric transforms.

The symmetry of the input sequence (given by a transform kind) fixes
its implied periodic extension, hence its wavenumbers. The derivative
is obtained by

1. transforming the input with that kind and weighting each
   coefficient by its (signed) wavenumber;
2. dropping or adding boundary coefficients so that the weighted
   sequence has the length expected by the inverse transform;
3. applying the inverse transform matching the symmetry of the
   derivative, and dividing by the implied period `M`;
4. optionally, adding or dropping boundary samples (known from the
   symmetry of the derivative) so that the output has the same length
   as the input.

The derivative can be evaluated on the input grid (`shift=0`) or on a
grid staggered by `+dx/2` (`shift=1`) or `-dx/2` (`shift=2`). Without
alignment, both staggered shifts return the same values, i.e. the
derivative at the midpoints that the inverse transform naturally
produces.

All the per-`(kind, shift)` rules live in `torchdtt.kinds`.

References
----------
- E. Wise, J. Jaros, B. Cox, and B. Treeby, "Pseudospectral time-domain
  (PSTD) methods for the wave equation: Realising boundary conditions
  with discrete sine and cosine transforms", 2020.

---
"""
__all__ = ['GradientRequest', 'differentiate', 'gradient', 'gradient_n']
import math
import numbers
from dataclasses import dataclass
from torch import Tensor
from typing import List
from ._impl.realtransforms import AxisSpec, execute
from .errors import InvalidArgumentError
from .kinds import TransformKind, Shift, SymmetryTable, GradientRule
from .typing import KindLike, ShiftLike, OneOrSeveral
from .utils import as_real_tensor


@dataclass(frozen=True)
class GradientRequest:
    """Parameters of a spectral gradient.

    Parameters
    ----------
    spacing : float
        Grid spacing, strictly positive.
    kind : TransformKind or {1..8} or str
        Kind matching the symmetry of the input.
    shift : Shift or {0, 1, 2}
        0: no shift, 1: shift by +dx/2, 2: shift by -dx/2.
    align_output : bool
        Pad or trim the output so that it has the same length as the
        input.
    """
    spacing: float
    kind: TransformKind
    shift: Shift = Shift.NONE
    align_output: bool = True

    def __post_init__(self):
        spacing = self.spacing
        if isinstance(spacing, Tensor) and spacing.numel() == 1:
            spacing = spacing.item()
        if isinstance(spacing, bool) or not isinstance(spacing, numbers.Real):
            raise InvalidArgumentError(
                f'spacing must be a real scalar, got {spacing!r}')
        if not (math.isfinite(spacing) and spacing > 0):
            raise InvalidArgumentError(
                f'spacing must be finite and strictly positive, '
                f'got {spacing!r}')
        object.__setattr__(self, 'spacing', float(spacing))
        object.__setattr__(self, 'kind', TransformKind.parse(self.kind))
        object.__setattr__(self, 'shift', Shift.parse(self.shift))
        object.__setattr__(self, 'align_output', bool(self.align_output))

    @property
    def rule(self) -> GradientRule:
        return SymmetryTable.rule(self.kind, self.shift)

    @property
    def min_length(self) -> int:
        return SymmetryTable.min_length(self.kind, self.shift)

    def output_length(self, n: int) -> int:
        """Length of the gradient of a length-`n` input."""
        rule = self.rule
        n = rule.pre_inverse.length(n)
        return rule.align.length(n) if self.align_output else n

    def check_length(self, n: int, dim: int = -1):
        if n < self.min_length:
            raise InvalidArgumentError(
                f'{self.kind.label} gradient with shift {int(self.shift)} '
                f'requires at least {self.min_length} sample(s) along dim '
                f'{dim}, got {n}')


def differentiate(
    f: Tensor,
    request: GradientRequest,
    dim: int = -1,
    backend: str = 'torch',
) -> Tensor:
    """Spectral derivative of `f` along `dim`.

    Parameters
    ----------
    f : tensor_like
        Real input array.
    request : GradientRequest
        Spacing, kind, shift and alignment.
    dim : int
        Dimension along which to differentiate. Every fiber along this
        dimension is differentiated.
    backend : {'torch', 'scipy'}

    Returns
    -------
    dfdx : tensor
        Derivative, with length `request.output_length(f.shape[dim])`
        along `dim`.

    """
    f = as_real_tensor(f)
    spec = AxisSpec.from_tensor(f, dim)
    request.check_length(spec.length, spec.dim)
    rule = request.rule
    kind = request.kind

    n = spec.length
    period = SymmetryTable.period(kind, n)
    kx = SymmetryTable.wavenumbers(kind, n, request.spacing, device=f.device)
    kx *= SymmetryTable.derivative_sign(kind)

    # forward transform and weight by the wavenumbers
    coeff = execute(f, kind, spec.dim, backend)
    coeff = coeff * spec.broadcast(kx)

    # match the length expected by the inverse transform
    coeff = rule.pre_inverse.apply(coeff, spec.dim)

    # inverse transform and normalize by the implied period
    deriv = execute(coeff, rule.inverse_kind, spec.dim, backend)
    deriv = deriv / period

    if request.align_output:
        deriv = rule.align.apply(deriv, spec.dim)
    return deriv


def gradient(
    f: Tensor,
    dx: float,
    kind: KindLike,
    shift: ShiftLike = 0,
    align_output: bool = True,
    dim: int = -1,
    backend: str = 'torch',
) -> Tensor:
    """Gradient of a sequence using discrete trigonometric transforms.

    The kind should correspond to the assumed symmetry of `f`:

        1: DCT-I    WSWS        5: DST-I    WAWA
        2: DCT-II   HSHS        6: DST-II   HAHA
        3: DCT-III  WSWA        7: DST-III  WAWS
        4: DCT-IV   HSHA        8: DST-IV   HAHS

    !!! note
        The group I kinds (DCT-I, DCT-II, DST-I, DST-II) have wavenumber
        vectors whose DC and/or Nyquist components are implied by the
        symmetry. Their weighted coefficients are therefore trimmed or
        padded before the inverse transform, and the natural length of
        the gradient may differ from the input length by one or two.
        With `align_output=True`, the missing (or extra) values, which
        are known from the symmetry of the output, are added (or
        removed).

    Parameters
    ----------
    f : tensor_like
        Input array.
    dx : float
        Grid spacing.
    kind : TransformKind or {1..8} or str
        Kind of the transform.
    shift : {0, 1, 2}
        0: no shift, 1: shift by +dx/2, 2: shift by -dx/2.
    align_output : bool
        Return an output with the same length as the input.
        If False, shift 1 and 2 return the same values.
    dim : int
        Dimension along which to differentiate.
    backend : {'torch', 'scipy'}

    Returns
    -------
    dfdx : tensor
        Gradient of the input.

    """
    request = GradientRequest(dx, kind, shift, align_output)
    return differentiate(f, request, dim, backend)


def gradient_n(
    f: Tensor,
    dx: OneOrSeveral[float],
    kind: OneOrSeveral[KindLike],
    shift: OneOrSeveral[ShiftLike] = 0,
    align_output: bool = True,
    backend: str = 'torch',
) -> List[Tensor]:
    """Gradient of an N-D array along each of its dimensions.

    Parameters
    ----------
    f : (*shape) tensor_like
        Input array.
    dx : [sequence of] float
        Grid spacing, shared or one per dimension.
    kind : [sequence of] TransformKind or {1..8} or str
        Kind of the transform, shared or one per dimension.
    shift : [sequence of] {0, 1, 2}
        Shift, shared or one per dimension.
    align_output : bool
        Return outputs with the same shape as the input.
    backend : {'torch', 'scipy'}

    Returns
    -------
    grad : list[tensor]
        Derivative along each dimension, in order.

    """
    f = as_real_tensor(f)
    ndim = f.dim()
    if ndim == 0:
        raise InvalidArgumentError('Input array must have at least one '
                                   'dimension')
    dx = _per_dim(dx, ndim, 'dx')
    kind = _per_dim(kind, ndim, 'kind')
    shift = _per_dim(shift, ndim, 'shift')
    requests = [GradientRequest(*args, align_output)
                for args in zip(dx, kind, shift)]
    for d, request in enumerate(requests):
        request.check_length(f.shape[d], d)
    return [differentiate(f, request, d, backend)
            for d, request in enumerate(requests)]


def _per_dim(value, ndim, name):
    if isinstance(value, Tensor):
        value = value.tolist()
    if isinstance(value, (str, numbers.Number)):
        return [value] * ndim
    value = list(value)
    if len(value) != ndim:
        raise InvalidArgumentError(
            f'Expected {ndim} value(s) for {name} (one per dimension), '
            f'got {len(value)}')
    return value
