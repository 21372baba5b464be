"""
Failure records: one normalized exception raised by a test case.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Tuple, Type

from .backtrace import BacktraceFormatter
from .exceptions import MissingExceptionError
from .models import FailureKind
from .naming import description_for


# Result fields probed for the raised exception, in order of preference.
EXCEPTION_FIELDS = ("exception", "exception_encountered")

LOCATION_INDENT = " " * 5


@dataclass(frozen=True)
class AssertionFramework:
    """Describes which exceptions count as assertion failures.

    ``types`` decides classification. ``markers`` are substrings of a type
    name that already identify it as an assertion, so the location text does
    not repeat the type name.
    """

    types: Tuple[Type[BaseException], ...]
    markers: Tuple[str, ...]


PYTHON_ASSERTIONS = AssertionFramework(types=(AssertionError,), markers=("AssertionError",))


def _result_field(result: Any, key: str) -> Any:
    if isinstance(result, Mapping):
        return result.get(key)
    return getattr(result, key, None)


def _first_exception(result: Any) -> Optional[BaseException]:
    if result is None:
        return None
    for key in EXCEPTION_FIELDS:
        exception = _result_field(result, key)
        if exception is not None:
            return exception
    return None


class ExampleAdapter(ABC):
    """Reads the raised exception out of one shape of example object."""

    def __init__(self, example: Any):
        self.example = example

    @classmethod
    @abstractmethod
    def supports(cls, example: Any) -> bool:
        """Return True if the example has the shape this adapter reads."""
        pass

    @abstractmethod
    def exception(self) -> Optional[BaseException]:
        pass


class ExecutionResultAdapter(ExampleAdapter):
    """Examples exposing an ``execution_result`` mapping or object."""

    @classmethod
    def supports(cls, example: Any) -> bool:
        return hasattr(example, "execution_result")

    def exception(self) -> Optional[BaseException]:
        return _first_exception(self.example.execution_result)


class MetadataAdapter(ExampleAdapter):
    """Older examples keeping the result under ``metadata["execution_result"]``."""

    @classmethod
    def supports(cls, example: Any) -> bool:
        return isinstance(getattr(example, "metadata", None), Mapping)

    def exception(self) -> Optional[BaseException]:
        return _first_exception(self.example.metadata.get("execution_result"))


ADAPTERS = (ExecutionResultAdapter, MetadataAdapter)


def adapter_for(example: Any) -> ExampleAdapter:
    """
    Pick the adapter matching the example's shape.

    Raises:
        MissingExceptionError: If no known shape matches
    """
    for adapter_class in ADAPTERS:
        if adapter_class.supports(example):
            return adapter_class(example)
    raise MissingExceptionError(description_for(example), "unsupported example shape")


def exception_type_name(exception: BaseException) -> str:
    """Return the type name, module-qualified unless it is a builtin."""
    exc_type = type(exception)
    module = exc_type.__module__
    if module in (None, "builtins"):
        return exc_type.__qualname__
    return f"{module}.{exc_type.__qualname__}"


class Failure:
    """One exception raised by a test case, classified and formatted."""

    def __init__(
        self,
        exception: BaseException,
        backtrace_formatter: Optional[BacktraceFormatter] = None,
        assertions: AssertionFramework = PYTHON_ASSERTIONS,
    ):
        self.exception = exception
        self._name = exception_type_name(exception)
        self._message = str(exception)
        if isinstance(exception, assertions.types):
            self._kind = FailureKind.ASSERTION
        else:
            self._kind = FailureKind.ERROR
        self._location = self._build_location(
            backtrace_formatter or BacktraceFormatter(), assertions
        )

    @classmethod
    def from_example(
        cls,
        example: Any,
        backtrace_formatter: Optional[BacktraceFormatter] = None,
        assertions: AssertionFramework = PYTHON_ASSERTIONS,
    ) -> "Failure":
        """
        Build a failure from the exception stored on an example.

        Args:
            example: Example object in any shape known to ``adapter_for``
            backtrace_formatter: Formatter used for the location text
            assertions: Which exception types count as assertion failures

        Returns:
            Failure for the stored exception

        Raises:
            MissingExceptionError: If the example holds no exception
        """
        exception = adapter_for(example).exception()
        if exception is None:
            raise MissingExceptionError(
                description_for(example),
                f"none of the fields {', '.join(EXCEPTION_FIELDS)} is set",
            )
        return cls(exception, backtrace_formatter, assertions)

    @property
    def name(self) -> str:
        return self._name

    @property
    def message(self) -> str:
        return self._message

    @property
    def kind(self) -> FailureKind:
        return self._kind

    @property
    def is_failure(self) -> bool:
        return self._kind is FailureKind.ASSERTION

    @property
    def is_error(self) -> bool:
        return not self.is_failure

    @property
    def location(self) -> str:
        return self._location

    def _build_location(
        self, backtrace_formatter: BacktraceFormatter, assertions: AssertionFramework
    ) -> str:
        output = []
        if not any(marker in self._name for marker in assertions.markers):
            output.append(f"{self._name}:")
        output.append(self._message)
        for entry in backtrace_formatter.format_backtrace(self.exception):
            for line in entry.splitlines():
                output.append(f"{LOCATION_INDENT}{line}")
        return "\n".join(output)

    def __repr__(self) -> str:
        return f"Failure(name={self._name!r}, kind={self._kind.name}, message={self._message!r})"
