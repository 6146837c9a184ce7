from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .errors import ErrorCode, exception_for

T = TypeVar("T")


@dataclass(frozen=True)
class CallContext:
    """
    Окружение вызова: кто вызывает и текущее значение логических часов.
    Часы задаёт хост, здесь они только читаются.
    """
    actor: str
    clock: int


@dataclass(frozen=True)
class Result(Generic[T]):
    value: Optional[T] = None
    error: Optional[ErrorCode] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise exception_for(self.error)
        return self.value


@dataclass(frozen=True)
class Eligibility:
    eligible: bool
    certification_status: str


@dataclass(frozen=True)
class Suitability:
    suitable: bool
    verification_status: str
