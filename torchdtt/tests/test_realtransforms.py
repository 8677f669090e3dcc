from .utils import get_test_devices, init_device
from torchdtt import InvalidArgumentError, TransformKind, SymmetryTable
from torchdtt.realtransforms import (
    dtt, idtt, dttn, idttn, dtt1, dtt2, dtt3,
)
from torchdtt._impl.realtransforms import AxisSpec
from scipy.fft import dct as scipy_dct, dst as scipy_dst
import numpy as np
import torch
import pytest

devices = get_test_devices()
kinds = list(TransformKind)
backends = ('torch', 'scipy')


def scipy_dtt(x, kind, dim=-1):
    fn = scipy_dct if kind.is_cosine else scipy_dst
    y = fn(x.cpu().numpy(), type=kind.type, axis=dim, norm='backward')
    return torch.as_tensor(y)


@pytest.mark.parametrize("device", devices)
@pytest.mark.parametrize("kind", kinds)
@pytest.mark.parametrize("backend", backends)
def test_dtt_matches_scipy(device, kind, backend):
    device = init_device(device)
    backend_ = dict(dtype=torch.double, device=device)

    def check(x, dim=-1):
        out = dtt(x, kind, dim=dim, backend=backend).cpu()
        ref = scipy_dtt(x, kind, dim)
        return torch.allclose(out, ref)

    mat = torch.randn([4, 5], **backend_)
    assert check(mat, dim=-1), "dim=-1"
    assert check(mat, dim=0), "dim=0"
    assert check(mat, dim=1), "dim=1"
    vol = torch.randn([3, 6, 5], **backend_)
    assert check(vol, dim=1), "3d, dim=1"


@pytest.mark.parametrize("kind", kinds)
def test_dtt_odd_and_even_lengths(kind):
    for n in (2, 3, 7, 8, 17, 64):
        x = torch.randn([n], dtype=torch.double)
        assert torch.allclose(dtt(x, kind), scipy_dtt(x, kind)), f"n={n}"


@pytest.mark.parametrize("kind", kinds)
def test_dtt_length_one(kind):
    x = torch.randn([1], dtype=torch.double)
    if kind == TransformKind.DCT1:
        with pytest.raises(InvalidArgumentError):
            dtt(x, kind)
    else:
        assert torch.allclose(dtt(x, kind), scipy_dtt(x, kind))


@pytest.mark.parametrize("kind", kinds)
def test_round_trip(kind):
    minlen = SymmetryTable.info(kind).min_length
    for n in range(minlen, 65):
        x = torch.randn([n], dtype=torch.double)
        y = dtt(x, kind)
        inverse = SymmetryTable.inverse_kind(kind)
        back = dtt(y, inverse) / SymmetryTable.period(kind, n)
        assert torch.allclose(back, x), f"n={n}"
        assert torch.allclose(idtt(y, kind), x), f"n={n}"


@pytest.mark.parametrize("kind", kinds)
def test_linearity(kind):
    x = torch.randn([3, 12], dtype=torch.double)
    y = torch.randn([3, 12], dtype=torch.double)
    a, b = 2.5, -0.75
    lhs = dtt(a * x + b * y, kind)
    rhs = a * dtt(x, kind) + b * dtt(y, kind)
    assert torch.allclose(lhs, rhs)


@pytest.mark.parametrize("kind", kinds)
def test_shape_and_out_of_place(kind):
    x = torch.randn([5, 6, 7], dtype=torch.double)
    x0 = x.clone()
    for dim in range(3):
        y = dtt(x, kind, dim=dim)
        assert y.shape == x.shape
        assert y.dtype == torch.double
        assert y.data_ptr() != x.data_ptr()
    assert torch.equal(x, x0)


def test_dtt_promotes_and_accepts_array_like():
    x = np.arange(6, dtype=np.float32)
    y = dtt(x, 2)
    assert y.dtype == torch.double
    assert torch.allclose(y, scipy_dtt(torch.as_tensor(x, dtype=torch.double),
                                       TransformKind.DCT2))
    assert torch.allclose(dtt([1., 2., 3.], 'dst-ii'), dtt([1, 2, 3], 6))


def test_dtt_non_finite_passthrough():
    x = torch.tensor([1., float('nan'), 3., 4.], dtype=torch.double)
    y = dtt(x, TransformKind.DCT2)
    assert torch.isnan(y).all()


@pytest.mark.parametrize("kind", kinds)
def test_dttn_matches_chained(kind):
    x = torch.randn([4, 5, 6], dtype=torch.double)
    ref = x
    for d in range(3):
        ref = scipy_dtt(ref, kind, d)
    assert torch.allclose(dttn(x, kind), ref)
    assert torch.allclose(dttn(x, kind, dim=[0, 2]),
                          scipy_dtt(scipy_dtt(x, kind, 0), kind, 2))
    assert torch.allclose(dtt3(x, kind), ref)
    assert torch.allclose(idttn(dttn(x, kind), kind), x)


def test_per_axis_kinds():
    mat = torch.randn([6, 7], dtype=torch.double)
    ref = scipy_dtt(scipy_dtt(mat, TransformKind.DCT1, 0),
                    TransformKind.DST4, 1)
    assert torch.allclose(dtt2(mat, (1, 8)), ref)
    assert torch.allclose(dttn(mat, ['dct1', 'dst4']), ref)
    assert torch.allclose(idttn(ref, (1, 8)), mat)

    vol = torch.randn([3, 4, 5], dtype=torch.double)
    ref = scipy_dtt(scipy_dtt(scipy_dtt(vol, TransformKind.DCT2, 0),
                              TransformKind.DST3, 1),
                    TransformKind.DCT4, 2)
    assert torch.allclose(dtt3(vol, [2, 7, 4]), ref)


def test_per_axis_kinds_length_mismatch():
    mat = torch.randn([6, 7], dtype=torch.double)
    with pytest.raises(InvalidArgumentError):
        dtt2(mat, (1, 2, 3))
    with pytest.raises(InvalidArgumentError):
        dtt3(torch.randn([2, 3, 4]), (1, 2))
    with pytest.raises(InvalidArgumentError):
        dttn(mat, [1], dim=[0, 1])


def test_fixed_rank_wrappers_check_rank():
    with pytest.raises(InvalidArgumentError):
        dtt2(torch.randn([4]), 2)
    with pytest.raises(InvalidArgumentError):
        dtt3(torch.randn([4, 4]), 2)
    with pytest.raises(InvalidArgumentError):
        dtt1(torch.randn([2, 3, 4]), 2)


def test_dtt1_vector_axis():
    row = torch.randn([1, 9], dtype=torch.double)
    col = row.T
    assert torch.allclose(dtt1(row, 2, dim=0), scipy_dtt(row, TransformKind.DCT2, 1))
    assert torch.allclose(dtt1(col, 2, dim=1), scipy_dtt(col, TransformKind.DCT2, 0))
    mat = torch.randn([4, 5], dtype=torch.double)
    assert torch.allclose(dtt1(mat, 7), scipy_dtt(mat, TransformKind.DST3, 0))
    assert torch.allclose(dtt1(mat, 7, dim=1), scipy_dtt(mat, TransformKind.DST3, 1))


def test_axis_spec():
    x = torch.zeros([4, 5, 6])
    spec = AxisSpec.from_tensor(x, 1)
    assert spec.dim == 1
    assert spec.ndim == 3
    assert spec.length == 5
    assert spec.batch == 24
    spec = AxisSpec.from_tensor(x, -1)
    assert (spec.dim, spec.length, spec.batch) == (2, 6, 20)
    vec = torch.arange(6.)
    assert spec.broadcast(vec).shape == (1, 1, 6)
    assert AxisSpec.from_tensor(x, 0).broadcast(torch.arange(4.)).shape == (4, 1, 1)
    assert AxisSpec.from_tensor(torch.zeros([0, 8]), 1).batch == 0


@pytest.mark.parametrize("kind", kinds)
@pytest.mark.parametrize("backend", backends)
def test_dtt_empty_batch(kind, backend):
    x = torch.zeros([0, 8], dtype=torch.double)
    assert dtt(x, kind, backend=backend).shape == (0, 8)
    assert idtt(x, kind, backend=backend).shape == (0, 8)
    x = torch.zeros([3, 0, 5], dtype=torch.double)
    assert dtt(x, kind, dim=-1, backend=backend).shape == (3, 0, 5)
    assert dttn(x, kind, dim=[0, 2], backend=backend).shape == (3, 0, 5)


def test_fixed_rank_wrappers_backend():
    mat = torch.randn([6, 7], dtype=torch.double)
    vol = torch.randn([3, 4, 5], dtype=torch.double)
    assert torch.allclose(dtt2(mat, (1, 8), backend='scipy'), dtt2(mat, (1, 8)))
    assert torch.allclose(dtt3(vol, [2, 7, 4], backend='scipy'),
                          dtt3(vol, [2, 7, 4]))
    assert torch.allclose(dtt1(mat, 3, dim=1, backend='scipy'),
                          dtt1(mat, 3, dim=1))
    with pytest.raises(InvalidArgumentError):
        dtt2(mat, 1, backend='fftw')


def test_dtt_non_contiguous_input():
    base = torch.randn([7, 6], dtype=torch.double)
    x = base.T
    assert not x.is_contiguous()
    for kind in kinds:
        for dim in (0, 1):
            ref = scipy_dtt(x.contiguous(), kind, dim)
            assert torch.allclose(dtt(x, kind, dim=dim), ref)


@pytest.mark.parametrize("bad", [0, 9, -1, 2.5, 'dct5', None, True])
def test_invalid_kind(bad):
    with pytest.raises(InvalidArgumentError):
        dtt(torch.randn([4]), bad)


def test_invalid_arguments():
    x = torch.randn([4, 5])
    with pytest.raises(InvalidArgumentError):
        dtt(x, 1, dim=2)
    with pytest.raises(InvalidArgumentError):
        dtt(x, 1, dim=-3)
    with pytest.raises(InvalidArgumentError):
        dtt(torch.tensor(1.), 1)
    with pytest.raises(InvalidArgumentError):
        dtt(torch.randn([4], dtype=torch.complex128), 2)
    with pytest.raises(InvalidArgumentError):
        dtt(x, 1, backend='fftw')
    with pytest.raises(InvalidArgumentError):
        dttn(x, 1, dim=[0, 0])
    # nothing is transformed if one of the dimensions is too short
    with pytest.raises(InvalidArgumentError):
        dttn(torch.randn([4, 1]), 1)
    # errors are also value errors
    with pytest.raises(ValueError):
        dtt(x, 0)
