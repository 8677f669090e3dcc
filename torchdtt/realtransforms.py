"""
## Overview

Discrete trigonometric transforms (DTTs) of real arrays.

The eight DCT/DST kinds are identified by a `TransformKind` (or by
its integer code 1 to 8, or its name). All forward transforms are
*unnormalized* and follow FFTW's r2r conventions, which are also those
of `scipy.fft.dct` / `scipy.fft.dst` with `norm="backward"`. The
inverse transforms (`idtt`, `idttn`) apply the paired kind and divide
by the implied period `M` of the sequence.

A 1D transform is applied to every fiber of the input along the
chosen dimension at once, so there is no need to transpose the input
to transform a dimension other than the last one. Multidimensional
transforms chain 1D transforms, with one kind per dimension if needed.

Inputs are promoted to double precision; complex inputs are rejected.

---
"""
__all__ = [
    'dtt', 'idtt', 'dttn', 'idttn',
    'dtt1', 'dtt2', 'dtt3',
]
from torch import Tensor
from typing import Optional
from ._impl.realtransforms import AxisSpec, execute, execute_n, kinds_per_dim
from .errors import InvalidArgumentError
from .kinds import TransformKind, SymmetryTable
from .typing import KindLike, OneOrSeveral
from .utils import as_real_tensor, normalize_dims


def dtt(
    x: Tensor,
    kind: KindLike,
    dim: int = -1,
    backend: str = 'torch',
) -> Tensor:
    """Return the Discrete Trigonometric Transform along one dimension

    Parameters
    ----------
    x : tensor_like
        The input array.
    kind : TransformKind or {1..8} or str
        Kind of the transform.
        1: DCT-I, 2: DCT-II, 3: DCT-III, 4: DCT-IV,
        5: DST-I, 6: DST-II, 7: DST-III, 8: DST-IV.
    dim : int
        Dimension over which the transform is computed.
        Default is the last one.
    backend : {'torch', 'scipy'}
        Default is 'torch'.

    Returns
    -------
    y : tensor
        The transformed tensor (float64, same shape as `x`).

    """
    return execute(x, kind, dim, backend)


def idtt(
    x: Tensor,
    kind: KindLike,
    dim: int = -1,
    backend: str = 'torch',
) -> Tensor:
    """Return the Inverse Discrete Trigonometric Transform along one dimension

    `idtt(dtt(x, kind), kind) == x`

    Parameters
    ----------
    x : tensor_like
        The input array.
    kind : TransformKind or {1..8} or str
        Kind of the *forward* transform being inverted.
    dim : int
        Dimension over which the transform is computed.
        Default is the last one.
    backend : {'torch', 'scipy'}
        Default is 'torch'.

    Returns
    -------
    y : tensor
        The transformed tensor.

    """
    kind = TransformKind.parse(kind)
    x = as_real_tensor(x)
    spec = AxisSpec.from_tensor(x, dim)
    period = SymmetryTable.period(kind, spec.length)
    y = execute(x, SymmetryTable.inverse_kind(kind), spec.dim, backend)
    return y / period


def dttn(
    x: Tensor,
    kind: OneOrSeveral[KindLike],
    dim: Optional[OneOrSeveral[int]] = None,
    backend: str = 'torch',
) -> Tensor:
    """Return the multidimensional Discrete Trigonometric Transform

    Parameters
    ----------
    x : tensor_like
        The input array.
    kind : [sequence of] TransformKind or {1..8} or str
        Kind of the transform, shared by all dimensions or one per
        dimension in `dim`.
    dim : [sequence of] int
        Dimensions over which the transform is computed.
        If not given, all dimensions are used.
    backend : {'torch', 'scipy'}
        Default is 'torch'.

    Returns
    -------
    y : tensor
        The transformed tensor.

    """
    return execute_n(x, kind, dim, backend)


def idttn(
    x: Tensor,
    kind: OneOrSeveral[KindLike],
    dim: Optional[OneOrSeveral[int]] = None,
    backend: str = 'torch',
) -> Tensor:
    """Return the multidimensional Inverse Discrete Trigonometric Transform

    Parameters
    ----------
    x : tensor_like
        The input array.
    kind : [sequence of] TransformKind or {1..8} or str
        Kind of the *forward* transform being inverted, shared by all
        dimensions or one per dimension in `dim`.
    dim : [sequence of] int
        Dimensions over which the transform is computed.
        If not given, all dimensions are used.
    backend : {'torch', 'scipy'}
        Default is 'torch'.

    Returns
    -------
    y : tensor
        The transformed tensor.

    """
    x = as_real_tensor(x)
    dims = normalize_dims(dim, x.dim())
    kinds = kinds_per_dim(kind, len(dims))
    period = 1
    for d, k in zip(dims, kinds):
        period *= SymmetryTable.period(k, x.shape[d])
    inverse = [SymmetryTable.inverse_kind(k) for k in kinds]
    return execute_n(x, inverse, dims, backend) / period


def dtt1(
    x: Tensor,
    kind: KindLike,
    dim: Optional[int] = None,
    backend: str = 'torch',
) -> Tensor:
    """Discrete Trigonometric Transform of a vector or of a matrix

    If `x` is a vector (1D, or 2D with a singleton dimension), the
    transform is computed along its non-singleton dimension and `dim`
    is ignored. Otherwise, it is computed along `dim`, which defaults to
    the first dimension (i.e., the transform is applied to every column).

    Parameters
    ----------
    x : (n,) or (n, m) tensor_like
        The input array.
    kind : TransformKind or {1..8} or str
        Kind of the transform.
    dim : {0, 1, -1, -2}, optional
        Dimension over which the transform is computed.
    backend : {'torch', 'scipy'}
        Default is 'torch'.

    Returns
    -------
    y : tensor
        The transformed tensor.

    """
    x = as_real_tensor(x)
    if x.dim() not in (1, 2):
        raise InvalidArgumentError(
            f'Input array must be 1D or 2D, got {x.dim()}D')
    if x.dim() == 1:
        dim = 0
    elif x.shape[0] == 1:
        dim = 1
    elif x.shape[1] == 1:
        dim = 0
    elif dim is None:
        dim = 0
    return execute(x, kind, dim, backend)


def dtt2(
    x: Tensor,
    kind: OneOrSeveral[KindLike],
    backend: str = 'torch',
) -> Tensor:
    """Two-dimensional Discrete Trigonometric Transform

    Parameters
    ----------
    x : (n0, n1) tensor_like
        The input array.
    kind : TransformKind or {1..8} or str or pair of them
        Kind of the transform, shared by both dimensions or one
        per dimension.
    backend : {'torch', 'scipy'}
        Default is 'torch'.

    Returns
    -------
    y : (n0, n1) tensor
        The transformed tensor.

    """
    return _dtt_fixed_rank(x, kind, 2, backend)


def dtt3(
    x: Tensor,
    kind: OneOrSeveral[KindLike],
    backend: str = 'torch',
) -> Tensor:
    """Three-dimensional Discrete Trigonometric Transform

    Parameters
    ----------
    x : (n0, n1, n2) tensor_like
        The input array.
    kind : TransformKind or {1..8} or str or triplet of them
        Kind of the transform, shared by all dimensions or one
        per dimension.
    backend : {'torch', 'scipy'}
        Default is 'torch'.

    Returns
    -------
    y : (n0, n1, n2) tensor
        The transformed tensor.

    """
    return _dtt_fixed_rank(x, kind, 3, backend)


def _dtt_fixed_rank(x, kind, rank, backend):
    x = as_real_tensor(x)
    if x.dim() != rank:
        raise InvalidArgumentError(
            f'Input array must be {rank}D, got {x.dim()}D')
    return execute_n(x, kind, list(range(rank)), backend)
