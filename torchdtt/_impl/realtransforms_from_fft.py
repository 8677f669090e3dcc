# Types I-III adapted from
#   https://github.com/cupy/cupy/blob/v12.0.0/cupyx/scipy/fft/_realtransforms.py
#   https://github.com/cupy/cupy/blob/v12.0.0/LICENSE
"""Real-to-real transforms computed with complex FFTs

All kernels act on the last dimension of a real tensor and use the
unnormalized conventions of FFTW's r2r interface (which are also
`scipy.fft`'s conventions with `norm="backward"`):

    DCT-I   (REDFT00)  y[k] = x[0] + (-1)^k x[N-1]
                              + 2 sum_{n=1}^{N-2} x[n] cos(pi n k / (N-1))
    DCT-II  (REDFT10)  y[k] = 2 sum x[n] cos(pi (2n+1) k / (2N))
    DCT-III (REDFT01)  y[k] = x[0] + 2 sum_{n=1}^{N-1} x[n] cos(pi n (2k+1) / (2N))
    DCT-IV  (REDFT11)  y[k] = 2 sum x[n] cos(pi (2n+1) (2k+1) / (4N))
    DST-I   (RODFT00)  y[k] = 2 sum x[n] sin(pi (n+1) (k+1) / (N+1))
    DST-II  (RODFT10)  y[k] = 2 sum x[n] sin(pi (2n+1) (k+1) / (2N))
    DST-III (RODFT01)  y[k] = (-1)^k x[N-1]
                              + 2 sum_{n=0}^{N-2} x[n] sin(pi (n+1) (2k+1) / (2N))
    DST-IV  (RODFT11)  y[k] = 2 sum x[n] sin(pi (2n+1) (2k+1) / (4N))

Types II and III use a length N FFT and some additional multiplications
and reordering of entries, as in [1]_, [2]_ (see also [3]_, [4]_). The
modifications to turn a type II or III DCT to a DST are described in [5]_.
Type I uses the symmetric (or antisymmetric) extension of the input and a
length 2(N-1) (or 2(N+1)) FFT. Type IV uses pre- and post-twiddles around
a length 2N FFT.

.. [1] J. Makhoul, "A fast cosine transform in one and two dimensions," in
    IEEE Transactions on Acoustics, Speech, and Signal Processing, vol. 28,
    no. 1, pp. 27-34, February 1980.

.. [2] M.J. Narasimha and A.M. Peterson, “On the computation of the discrete
    cosine  transform,” IEEE Trans. Commun., vol. 26, no. 6, pp. 934–936, 1978.

.. [3] http://fourier.eng.hmc.edu/e161/lectures/dct/node2.html

.. [4] https://dsp.stackexchange.com/questions/2807/fast-cosine-transform-via-fft  # noqa

.. [5] X. Shao, S. G. Johnson. Type-II/III DCT/DST algorithms with reduced
    number of arithmetic operations, Signal Processing, Volume 88, Issue 6,
    pp. 1553-1564, 2008.
"""
__all__ = ['dtt_along', 'adjoint_prescale_', 'adjoint_postscale_']
import math
import torch
from torch import fft as _fft
from ..kinds import TransformKind


def dtt_along(x, kind, dim=-1):
    """Apply a DTT along one dimension of a real tensor.

    The transformed dimension is indexed in place: the input is never
    transposed and never modified.

    Parameters
    ----------
    x : tensor
        Real input.
    kind : TransformKind
    dim : int
        Dimension along which the transform is computed.

    Returns
    -------
    y : tensor
        Unnormalized transform, with the same shape as `x`.

    """
    if dim < 0:
        dim += x.ndim
    dst = not kind.is_cosine
    if kind.type == 1:
        return _dst_type1(x, dim) if dst else _dct_type1(x, dim)
    elif kind.type == 2:
        return _dct_or_dst_type2(x, dim, dst=dst)
    elif kind.type == 3:
        return _dct_or_dst_type3(x, dim, dst=dst)
    else:
        return _dct_or_dst_type4(x, dim, dst=dst)


def _slice(ndim, dim, *args):
    """Index that slices `dim` with `slice(*args)` and keeps other dims"""
    sl = [slice(None)] * ndim
    sl[dim] = slice(*args)
    return tuple(sl)


def _broadcast(vector, ndim, dim):
    """Reshape a vector so that it broadcasts along `dim`"""
    shape = [1] * ndim
    shape[dim] = -1
    return vector.reshape(shape)


def _twiddle(n, sign, scale, dtype, device):
    """`scale * exp(sign * 1j * pi * k / (2n))` for k in [0, n)"""
    real = torch.zeros(n, dtype=dtype, device=device)
    imag = torch.arange(n, dtype=dtype, device=device)
    imag *= sign * math.pi / (2 * n)
    return torch.complex(real, imag).exp_().mul_(scale)


def _reshuffle_dct2(x, dim, dst=False):
    """Reorder entries to allow computation of DCT/DST-II via FFT."""
    even = x[_slice(x.ndim, dim, 0, None, 2)]
    odd = x[_slice(x.ndim, dim, 1, None, 2)].flip(dim)
    if dst:
        odd = -odd
    return torch.cat((even, odd), dim=dim)


def _dct_or_dst_type2(x, dim, dst=False):
    """DCT/DST-II along a single dim"""
    n = x.shape[dim]
    x = _reshuffle_dct2(x, dim, dst)
    x = _fft.fft(x, dim=dim)
    x *= _broadcast(_twiddle(n, -1, 2, x.real.dtype, x.device), x.ndim, dim)
    x = torch.real(x)
    if dst:
        x = x.flip(dim)
    return x


def _reshuffle_dct3(y, dim, dst=False):
    """Reorder entries to allow computation of DCT/DST-III via FFT."""
    n = y.shape[dim]
    n_half = (n + 1) // 2
    sl_even = _slice(y.ndim, dim, 0, None, 2)
    sl_odd = _slice(y.ndim, dim, 1, None, 2)
    x = torch.empty_like(y)
    # first half of y goes to the even entries of the output,
    # second half (reversed) to the odd entries
    x[sl_even] = y[_slice(y.ndim, dim, 0, n_half)]
    x[sl_odd] = y[_slice(y.ndim, dim, n_half, None)].flip(dim)
    if dst:
        x[sl_odd] *= -1
    return x


def _dct_or_dst_type3(x, dim, dst=False):
    """DCT/DST-III along a single dim"""
    n = x.shape[dim]
    if dst:
        x = x.flip(dim)
    x = x * _broadcast(_twiddle(n, 1, 2 * n, x.dtype, x.device), x.ndim, dim)
    x[_slice(x.ndim, dim, 0, 1)] *= 0.5
    x = _fft.ifft(x, dim=dim)
    x = torch.real(x)
    return _reshuffle_dct3(x, dim, dst)


def _dct_or_dst_type4(x, dim, dst=False):
    """DCT/DST-IV along a single dim

    With `w = exp(-1j * pi / (4n))`,
        sum x[j] w^((2j+1)(2k+1)) = w^(2k+1) * FFT_2n(x[j] w^(2j))[k]
    The DCT is twice the real part of this sum and the DST is minus
    twice its imaginary part.
    """
    n = x.shape[dim]
    x = x * _broadcast(_twiddle(n, -1, 1, x.dtype, x.device), x.ndim, dim)
    x = _fft.fft(x, n=2 * n, dim=dim)[_slice(x.ndim, dim, 0, n)]
    post = torch.arange(n, dtype=x.real.dtype, device=x.device)
    post = post.mul_(2).add_(1).mul_(-math.pi / (4 * n))
    post = torch.complex(torch.zeros_like(post), post).exp_()
    x = x * _broadcast(post, x.ndim, dim)
    if dst:
        return torch.imag(x).mul(-2)
    return torch.real(x).mul(2)


def _dct_type1(x, dim):
    """DCT-I along a single dim (requires n >= 2)"""
    n = x.shape[dim]
    # even extension: x[0], ..., x[n-1], x[n-2], ..., x[1]
    x = torch.cat([x, x[_slice(x.ndim, dim, 1, -1)].flip(dim)], dim=dim)
    x = _fft.fft(x, dim=dim)
    return torch.real(x[_slice(x.ndim, dim, 0, n)])


def _dst_type1(x, dim):
    """DST-I along a single dim"""
    n = x.shape[dim]
    # odd extension: 0, x[0], ..., x[n-1], 0, -x[n-1], ..., -x[0]
    bigshape = list(x.shape)
    bigshape[dim] = 2 * (n + 1)
    y = x.new_zeros(bigshape)
    y[_slice(x.ndim, dim, 1, n + 1)] = x
    y[_slice(x.ndim, dim, n + 2, None)] = -x.flip(dim)
    y = _fft.fft(y, dim=dim)
    return torch.imag(y[_slice(x.ndim, dim, 1, n + 1)]).neg()


def adjoint_prescale_(x, kind, dim=-1):
    """Scaling applied before the transposed transform (in-place)

    The transposed matrix of the unnormalized DCT-I, DCT-II and DST-II
    differs from the matrix of DCT-I, DCT-III and DST-III (respectively)
    by a factor 2 on one or both end columns.
    """
    first = _slice(x.ndim, dim, 0, 1)
    last = _slice(x.ndim, dim, -1, None)
    if kind == TransformKind.DCT1:
        x[first] *= 2
        x[last] *= 2
    elif kind == TransformKind.DCT3:
        x[first] *= 2
    elif kind == TransformKind.DST3:
        x[last] *= 2
    return x


def adjoint_postscale_(x, kind, dim=-1):
    """Scaling applied after the transposed transform (in-place)"""
    first = _slice(x.ndim, dim, 0, 1)
    last = _slice(x.ndim, dim, -1, None)
    if kind == TransformKind.DCT1:
        x[first] /= 2
        x[last] /= 2
    elif kind == TransformKind.DCT2:
        x[first] /= 2
    elif kind == TransformKind.DST2:
        x[last] /= 2
    return x
