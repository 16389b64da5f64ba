"""Error envelope serialization.

The envelope is the canonical message string of every application error:
a compact JSON object with exactly two nullable keys, ``errorcode`` and
``errormsg``. The same string goes to logs and over the wire.
"""

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class ErrorEnvelope(BaseModel):
    """Wire representation of an error code and message."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    errorcode: StrictStr | None = Field(default=None, description="Machine-readable error code")
    errormsg: StrictStr | None = Field(default=None, description="Internal error message")


def render_envelope(code: str | None, message: str | None) -> str:
    """Render ``(code, message)`` as the compact JSON envelope.

    Deterministic: keys are always emitted in the order ``errorcode``,
    ``errormsg`` and absent values become JSON ``null``.

    Example:
        >>> render_envelope("error.unauthenticated", "Not authenticated.")
        '{"errorcode":"error.unauthenticated","errormsg":"Not authenticated."}'
    """
    return ErrorEnvelope(errorcode=code, errormsg=message).model_dump_json()


def parse_envelope(text: str | bytes) -> ErrorEnvelope:
    """Parse an envelope produced by :func:`render_envelope`.

    Raises:
        pydantic.ValidationError: if ``text`` is not a valid envelope.
    """
    return ErrorEnvelope.model_validate_json(text)
