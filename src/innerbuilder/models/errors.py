from dataclasses import dataclass
from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    STRUCTURE = "structure"
    TOOLING = "tooling"
    UNCLASSIFIED = "unclassified"

    @property
    def recoverable(self) -> bool:
        return self is ErrorKind.TOOLING


class GenerationError(Exception):
    """Fault raised while building or mutating the class model. The kind decides how the host reacts."""

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.UNCLASSIFIED):
        super().__init__(message)
        self.kind = kind

    @classmethod
    def structure(cls, message: str) -> 'GenerationError':
        return cls(message, ErrorKind.STRUCTURE)

    @classmethod
    def tooling(cls, message: str) -> 'GenerationError':
        return cls(message, ErrorKind.TOOLING)


def classify(error: BaseException) -> ErrorKind:
    if isinstance(error, GenerationError):
        return error.kind
    return ErrorKind.UNCLASSIFIED


@dataclass
class GenerationResult:
    ok: bool
    kind: Optional[ErrorKind] = None
    error: Optional[BaseException] = None
    message: str = ""

    @classmethod
    def success(cls, message: str = "") -> 'GenerationResult':
        return cls(ok=True, message=message)

    @classmethod
    def failure(cls, error: BaseException) -> 'GenerationResult':
        return cls(ok=False, kind=classify(error), error=error, message=str(error))

    @property
    def recoverable(self) -> bool:
        return self.kind is not None and self.kind.recoverable
