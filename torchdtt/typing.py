from typing import TypeVar, Union, Sequence
from .kinds import KindLike, ShiftLike  # noqa: F401

T = TypeVar('T')
OneOrSeveral = Union[T, Sequence[T]]
