__all__ = ['AxisSpec', 'execute', 'execute_n', 'kinds_per_dim']
import numbers
from torch import Tensor
from typing import List, NamedTuple, Optional, Sequence, Union
from .realtransforms_autograd import DTT
from .._wrap import realtransforms_scipy as scipy_backend
from ..errors import InvalidArgumentError
from ..kinds import TransformKind, SymmetryTable
from ..utils import as_real_tensor, ensure_list, normalize_dim, normalize_dims

_BACKENDS = ('torch', 'scipy')


class AxisSpec(NamedTuple):
    """Layout of the fibers of a tensor along one dimension.

    A fiber is the 1D sequence obtained by fixing all indices but `dim`.
    There are `batch` fibers of `length` samples each. Transforms index
    `dim` in place, so fibers are never gathered into a transposed copy.
    """
    dim: int
    ndim: int
    length: int
    batch: int

    @classmethod
    def from_tensor(cls, x: Tensor, dim: int = -1) -> 'AxisSpec':
        if x.dim() == 0:
            raise InvalidArgumentError('Input array must have at least one '
                                       'dimension')
        dim = normalize_dim(dim, x.dim())
        batch = 1
        for d, s in enumerate(x.shape):
            if d != dim:
                batch *= s
        return cls(dim, x.dim(), x.shape[dim], batch)

    def broadcast(self, vector: Tensor) -> Tensor:
        """Reshape a vector so that it broadcasts along `dim`."""
        shape = [1] * self.ndim
        shape[self.dim] = -1
        return vector.reshape(shape)


def _check_backend(backend):
    if backend not in _BACKENDS:
        raise InvalidArgumentError(
            f'Unknown backend {backend!r}, should be one of {_BACKENDS}')


def _check_length(spec: AxisSpec, kind: TransformKind):
    minlen = SymmetryTable.info(kind).min_length
    if spec.length < minlen:
        raise InvalidArgumentError(
            f'{kind.label} requires at least {minlen} sample(s) along '
            f'dim {spec.dim}, got {spec.length}')


def execute(
    x: Tensor,
    kind: Union[TransformKind, int, str],
    dim: int = -1,
    backend: str = 'torch',
) -> Tensor:
    """Apply one DTT to every fiber of `x` along `dim`.

    Parameters
    ----------
    x : tensor_like
        Real input array (promoted to float64).
    kind : TransformKind or int or str
        Transform kind.
    dim : int
        Dimension along which the transform is computed.
    backend : {'torch', 'scipy'}
        `'torch'` uses FFT-based kernels written with `torch.fft`,
        `'scipy'` uses `scipy.fft` on the CPU.

    Returns
    -------
    y : tensor
        Unnormalized transform, with the same shape as `x`.

    """
    kind = TransformKind.parse(kind)
    _check_backend(backend)
    x = as_real_tensor(x)
    spec = AxisSpec.from_tensor(x, dim)
    _check_length(spec, kind)
    if spec.batch == 0:
        # torch.fft rejects empty batches
        return x.clone()
    if backend == 'scipy':
        return scipy_backend.DTT.apply(x, kind, spec.dim)
    return DTT.apply(x, kind, spec.dim)


def execute_n(
    x: Tensor,
    kind: Union[TransformKind, int, str, Sequence],
    dim: Optional[Union[int, Sequence[int]]] = None,
    backend: str = 'torch',
) -> Tensor:
    """Apply a DTT along several dimensions, one dimension at a time.

    Parameters
    ----------
    x : tensor_like
        Real input array.
    kind : [sequence of] TransformKind or int or str
        Transform kind, shared by all dimensions or one per dimension
        in `dim`.
    dim : [sequence of] int, optional
        Dimensions to transform. All dimensions by default.
    backend : {'torch', 'scipy'}

    Returns
    -------
    y : tensor
        Transformed array, with the same shape as `x`.

    """
    _check_backend(backend)
    x = as_real_tensor(x)
    if x.dim() == 0:
        raise InvalidArgumentError('Input array must have at least one '
                                   'dimension')
    dims = normalize_dims(dim, x.dim())
    kinds = kinds_per_dim(kind, len(dims))
    for d, k in zip(dims, kinds):
        _check_length(AxisSpec.from_tensor(x, d), k)
    for d, k in zip(dims, kinds):
        x = execute(x, k, d, backend)
    return x


def kinds_per_dim(kind, ndim: int) -> List[TransformKind]:
    if isinstance(kind, (str, numbers.Number)):
        return [TransformKind.parse(kind)] * ndim
    kinds = [TransformKind.parse(k) for k in ensure_list(kind)]
    if len(kinds) != ndim:
        raise InvalidArgumentError(
            f'Expected one transform kind per transformed dimension '
            f'({ndim}), got {len(kinds)}')
    return kinds
