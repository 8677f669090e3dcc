import torch
from . import realtransforms_from_fft as F
from ..kinds import SymmetryTable


class DTT(torch.autograd.Function):
    """DTT along one dimension, with its exact adjoint as backward."""

    @staticmethod
    def forward(ctx, x, kind, dim):
        ctx.kind = kind
        ctx.dim = dim
        return F.dtt_along(x, kind, dim).contiguous()

    @staticmethod
    def backward(ctx, x):
        # the transposed matrix is the matrix of the inverse kind,
        # up to a factor 2 on some end samples
        kind = SymmetryTable.inverse_kind(ctx.kind)
        x = F.adjoint_prescale_(x.clone(), kind, ctx.dim)
        x = F.dtt_along(x, kind, ctx.dim)
        x = F.adjoint_postscale_(x, kind, ctx.dim)
        return x, None, None
