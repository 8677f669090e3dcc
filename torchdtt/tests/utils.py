import torch


def get_test_devices():
    return [('cpu', 1), ('cpu', 4)]


def init_device(device):
    if isinstance(device, (list, tuple)):
        device, param = device
    else:
        param = 1
    assert device == 'cpu'
    torch.set_num_threads(param)
    return torch.device(device)
