"""Base exception class for application errors.

Every application error carries an *error code*, an *internal message*, an
optional *cause* (the next exception in the chain, of any type) and a
*localized message*:

- The error code is a short string codifying the condition
  (e.g. ``error.unauthenticated``).
- The internal message describes the condition for developers; it is not
  meant for end users.
- The cause is the root cause or a related exception. It may be another
  application error or any other exception.
- The localized message is looked up by error code in the installed message
  catalog. Without a catalog it equals the rendered envelope.

All four are fixed at construction.
"""

from collections.abc import Iterator
from enum import StrEnum
from typing import Any, ClassVar

from .catalog import localize
from .envelope import ErrorEnvelope, parse_envelope, render_envelope
from .schemas import ErrorResponse

# Marks an argument that was not passed; an explicit None is kept as given.
_UNSET: Any = object()


class ErrorCategory(StrEnum):
    """Who is expected to act on an error."""

    USER = "user"
    SYSTEM = "system"


class BaseError(Exception):
    """Base class for all application errors.

    Features:
    - ``str(error)`` and ``error.message`` return the JSON envelope
    - Chained cause, also exposed as ``__cause__`` for tracebacks
    - Localized message resolved once from the message catalog
    - Concrete conditions pin ``default_code`` / ``default_message`` and are
      registered by code; a missing ``default_message`` comes from the
      docstring
    """

    category: ClassVar[ErrorCategory | None] = None
    status_code: ClassVar[int] = 500
    default_code: ClassVar[str | None] = None
    default_message: ClassVar[str | None] = None

    _registry: ClassVar[dict[str, type["BaseError"]]] = {}

    def __init__(
        self,
        code: str | None = _UNSET,
        message: str | None = _UNSET,
        cause: BaseException | None = None,
    ) -> None:
        if code is _UNSET:
            code = self.default_code
        if message is _UNSET:
            message = self.default_message

        rendered = render_envelope(code, message)
        super().__init__(rendered)

        self._code = code
        self._internal_message = message
        self._cause = cause
        self._message = rendered

        if cause is not None:
            self.__cause__ = cause

        localized = localize(code)
        self._is_localized = localized is not None
        self._localized_message = localized if localized is not None else rendered

    def __init_subclass__(cls, **kwargs: Any) -> None:
        """Register concrete conditions and derive default messages."""
        super().__init_subclass__(**kwargs)

        if "default_code" not in cls.__dict__ or cls.default_code is None:
            return

        if "default_message" not in cls.__dict__ and cls.__doc__:
            cls.default_message = cls.__doc__.strip().split("\n")[0]

        BaseError._registry[cls.default_code] = cls

    @property
    def code(self) -> str | None:
        """Error code given at construction."""
        return self._code

    @property
    def internal_message(self) -> str | None:
        """Internal message given at construction."""
        return self._internal_message

    @property
    def cause(self) -> BaseException | None:
        """Next exception in the chain, the same object passed in."""
        return self._cause

    @property
    def message(self) -> str:
        """Rendered envelope of code and internal message."""
        return self._message

    @property
    def localized_message(self) -> str:
        """Catalog text for the code, or the rendered envelope."""
        return self._localized_message

    @property
    def is_localized(self) -> bool:
        """Whether ``localized_message`` came from the message catalog."""
        return self._is_localized

    @property
    def root_cause(self) -> BaseException:
        """Last exception in the chain (``self`` when there is no cause)."""
        last: BaseException = self
        for last in self.chain():
            pass
        return last

    def chain(self) -> Iterator[BaseException]:
        """Iterate over this error and each successive cause.

        Application errors are followed through ``cause``; other exceptions
        through ``__cause__`` or, unless suppressed, ``__context__``.
        Stops when an exception repeats.
        """
        seen: set[int] = set()
        current: BaseException | None = self
        while current is not None and id(current) not in seen:
            seen.add(id(current))
            yield current
            if isinstance(current, BaseError):
                current = current.cause
            elif current.__cause__ is not None:
                current = current.__cause__
            elif not current.__suppress_context__:
                current = current.__context__
            else:
                current = None

    def to_envelope(self) -> ErrorEnvelope:
        """Return the envelope model for this error."""
        return ErrorEnvelope(errorcode=self._code, errormsg=self._internal_message)

    @classmethod
    def from_envelope(cls, text: str | bytes) -> "BaseError":
        """Rebuild an error from a transported envelope.

        Uses the condition registered for the envelope's code when it is a
        subclass of ``cls``, otherwise ``cls`` itself.
        """
        envelope = parse_envelope(text)
        error_type: type[BaseError] = cls
        registered = cls._registry.get(envelope.errorcode) if envelope.errorcode else None
        if registered is not None and issubclass(registered, cls):
            error_type = registered
        return error_type(envelope.errorcode, envelope.errormsg)

    @classmethod
    def registered_types(cls) -> dict[str, type["BaseError"]]:
        """Concrete conditions by default code."""
        return dict(cls._registry)

    @classmethod
    def openapi_response(cls) -> dict[str, Any]:
        """Generate OpenAPI schema for this exception type."""
        return {
            "model": ErrorResponse,
            "description": cls.default_message or cls.__name__,
            "content": {
                "application/json": {
                    "example": {
                        "error": cls.default_code,
                        "message": cls.default_message,
                        "trace_id": "example-trace-id",
                    }
                }
            },
        }

    def __reduce__(self) -> tuple[Any, ...]:
        return (
            self.__class__,
            (self._code, self._internal_message, self._cause),
            self.__dict__.copy(),
        )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(code={self._code!r}, "
            f"message={self._internal_message!r}, cause={self._cause!r})"
        )
