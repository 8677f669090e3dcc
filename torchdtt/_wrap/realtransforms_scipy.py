from warnings import warn
import scipy.fft as F
import torch
from .._impl.realtransforms_from_fft import (
    adjoint_prescale_, adjoint_postscale_,
)
from ..kinds import SymmetryTable


class DTT(torch.autograd.Function):
    """DTT along one dimension, computed by `scipy.fft` on the CPU."""

    @staticmethod
    def forward(ctx, x, kind, dim):
        ctx.kind = kind
        ctx.dim = dim
        return from_numpy(scipy_dtt(to_numpy(x), kind, dim), x.device)

    @staticmethod
    def backward(ctx, x):
        kind = SymmetryTable.inverse_kind(ctx.kind)
        x = adjoint_prescale_(x.clone(), kind, ctx.dim)
        x = from_numpy(scipy_dtt(to_numpy(x), kind, ctx.dim), x.device)
        x = adjoint_postscale_(x, kind, ctx.dim)
        return x, None, None


def scipy_dtt(x, kind, dim):
    fn = F.dct if kind.is_cosine else F.dst
    return fn(x, type=kind.type, axis=dim, norm='backward')


def to_numpy(x):
    if x.device.type != 'cpu':
        warn(f'The scipy backend runs on the CPU: moving a tensor '
             f'from {x.device} to the CPU and back', RuntimeWarning)
    return x.detach().cpu().numpy()


def from_numpy(x, device=None):
    return torch.as_tensor(x, device=device)
