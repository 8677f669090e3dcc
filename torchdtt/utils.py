import operator
import torch
from torch import Tensor
from types import GeneratorType as generator
from .errors import InvalidArgumentError


def ensure_list(x):
    """Ensure that an object is a list

    If x is a list, nothing is done (no copy triggered).
    If it is a tuple, range or generator, it is converted into a list.
    Otherwise, it is placed inside a list.
    """
    if not isinstance(x, (list, tuple, range, generator)):
        x = [x]
    elif not isinstance(x, list):
        x = list(x)
    return x


def as_real_tensor(x) -> Tensor:
    """Convert to a float64 tensor, rejecting complex inputs.

    Tensors that already are float64 are returned as is (no copy).
    """
    x = torch.as_tensor(x)
    if x.dtype.is_complex:
        raise InvalidArgumentError(
            f'Input array must be real, got dtype {x.dtype}')
    return x.to(torch.float64, copy=False)


def normalize_dim(dim, ndim: int) -> int:
    """Convert a (possibly negative) dimension index to a positive one."""
    try:
        dim = operator.index(dim)
    except TypeError as e:
        raise InvalidArgumentError(
            f'dim must be an integer, got {dim!r}') from e
    if not -ndim <= dim < ndim:
        raise InvalidArgumentError(
            f'dim {dim} is out of range for an array with {ndim} '
            f'dimension(s)')
    return dim + ndim if dim < 0 else dim


def normalize_dims(dims, ndim: int):
    """Handles dims arguments for nd transforms (None means all)."""
    if dims is None:
        return list(range(ndim))
    dims = [normalize_dim(d, ndim) for d in ensure_list(dims)]
    if len(set(dims)) != len(dims):
        raise InvalidArgumentError(f'all dims must be unique, got {dims}')
    return dims
