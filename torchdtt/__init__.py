"""
Discrete trigonometric transforms and symmetry-aware spectral gradients.
"""
from .errors import InvalidArgumentError
from .kinds import TransformKind, Shift, SymmetryTable
from .realtransforms import dtt, idtt, dttn, idttn, dtt1, dtt2, dtt3
from .gradient import GradientRequest, differentiate, gradient, gradient_n

__version__ = '0.1.0'
