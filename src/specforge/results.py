"""Tagged result values returned by the fallible pipeline steps."""

from dataclasses import dataclass
from typing import Generic, TypeVar, Union

from specforge.errors.exceptions import SpecForgeError

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: SpecForgeError


Result = Union[Ok[T], Err]
