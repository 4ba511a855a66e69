import logging
import sys
from abc import ABC, abstractmethod
from typing import Iterable, Iterator, List, Optional, Union

from innerbuilder.models.domain_models import Field, JavaClass
from innerbuilder.models.errors import ErrorKind, GenerationResult
from innerbuilder.services.builder_synthesizer import InnerBuilderSynthesizer

logger = logging.getLogger(__name__)

LogLike = Union[logging.Logger, logging.LoggerAdapter]


class BaseNotifier(ABC):
    """Shows the outcome of a generation to the user."""

    @abstractmethod
    def show_message(self, title: str, message: str, level: str) -> None:
        pass


class ConsoleNotifier(BaseNotifier):
    def __init__(self, stream=None):
        self.stream = stream or sys.stderr

    def show_message(self, title: str, message: str, level: str) -> None:
        print(f"{title}: {message}", file=self.stream)


class LoggingNotifier(BaseNotifier):
    def __init__(self, log: Optional[LogLike] = None):
        self.log = log or logger

    def show_message(self, title: str, message: str, level: str) -> None:
        self.log.log(logging.WARNING if level == "warning" else logging.ERROR, f"{title}: {message}")


class ModelTransaction:
    """Exclusive, undoable mutation of the class tree containing a target class.

    On entry the mutable state of the outermost class and every nested class
    is recorded; if the block raises, that state is restored before the
    exception propagates.
    """

    def __init__(self, target: JavaClass, name: str):
        self.target = target
        self.name = name
        self._snapshot: List[tuple] = []

    def __enter__(self) -> "ModelTransaction":
        self._snapshot = [
            (cls, list(cls.members), list(cls.modifiers), cls.extends, cls.superclass)
            for cls in self._walk(self.target.outermost_class)
        ]
        logger.debug(f"Started {self.name} on {self.target.qualified_name}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is not None:
            for cls, members, modifiers, extends, superclass in self._snapshot:
                cls.members = members
                cls.modifiers = modifiers
                cls.extends = extends
                cls.superclass = superclass
            logger.debug(f"Rolled back {self.name} on {self.target.qualified_name}")
        return False

    def _walk(self, cls: JavaClass) -> Iterator[JavaClass]:
        yield cls
        for inner in cls.inner_classes:
            yield from self._walk(inner)


def execute_generate_action(target: JavaClass, selected_fields: Iterable[Field],
                            synthesizer: InnerBuilderSynthesizer,
                            command_name: str = "GenerateBuilder") -> GenerationResult:
    """Run the synthesizer inside one transaction and report the outcome as a value."""
    try:
        with ModelTransaction(target, command_name):
            builder_class = synthesizer.execute(target, selected_fields)
    except Exception as e:
        return GenerationResult.failure(e)
    return GenerationResult.success(f"Generated {builder_class.qualified_name}")


def handle_result(result: GenerationResult, notifier: BaseNotifier,
                  log: Optional[LogLike] = None) -> GenerationResult:
    """Report a failed generation; recoverable faults are shown, anything else is re-raised."""
    if result.ok:
        return result
    log = log or logger
    log.info(f"{result.kind.value} fault during builder generation", exc_info=result.error)

    if result.kind is ErrorKind.TOOLING:
        notifier.show_message(
            "Warning",
            "A tooling error occurred while generating the builder - see the log for details:\n"
            f"{result.message}",
            "warning",
        )
        return result

    notifier.show_message(
        "Error",
        "An unrecoverable error occurred while generating the builder - see the log for details:\n"
        f"{result.message}",
        "error",
    )
    raise result.error
