from .utils import get_test_devices, init_device
from torchdtt import TransformKind, gradient
from torchdtt.realtransforms import dtt, dttn, idtt
from torch.autograd import gradcheck
import inspect
import torch
import pytest

devices = get_test_devices()
kinds = list(TransformKind)
backends = ('torch', 'scipy')


# set gradcheck options
if hasattr(torch, 'use_deterministic_algorithms'):
    torch.use_deterministic_algorithms(True)
kwargs = dict(
    raise_exception=True,
    check_grad_dtypes=True,
)
if 'check_undefined_grad' in inspect.signature(gradcheck).parameters:
    kwargs['check_undefined_grad'] = False
if 'nondet_tol' in inspect.signature(gradcheck).parameters:
    kwargs['nondet_tol'] = float('inf')


@pytest.mark.parametrize("device", devices)
@pytest.mark.parametrize("kind", kinds)
@pytest.mark.parametrize("backend", backends)
def test_dtt_gradcheck(device, kind, backend):
    device = init_device(device)
    backend_ = dict(dtype=torch.double, device=device)

    def check(x, dim=-1):
        if isinstance(dim, int):
            return gradcheck(dtt, (x, kind, dim, backend), **kwargs)
        return gradcheck(dttn, (x, kind, dim, backend), **kwargs)

    mat = torch.randn([4, 5], **backend_)
    mat.requires_grad = True
    assert check(mat, dim=-1), "dim=-1"
    assert check(mat, dim=0), "dim=0"
    assert check(mat, dim=None), "dim=all"
    assert check(mat, dim=[0, 1]), "dim=[0, 1]"


@pytest.mark.parametrize("kind", kinds)
def test_idtt_gradcheck(kind):
    vec = torch.randn([6], dtype=torch.double, requires_grad=True)
    assert gradcheck(idtt, (vec, kind), **kwargs)


@pytest.mark.parametrize("kind", kinds)
@pytest.mark.parametrize("shift", (0, 1, 2))
def test_gradient_gradcheck(kind, shift):
    vec = torch.randn([7], dtype=torch.double, requires_grad=True)
    assert gradcheck(gradient, (vec, 0.1, kind, shift), **kwargs)
