"""Community - Event Logger.

Structured event logging for application errors.
Provides type-safe logging functions for observability.
"""

from typing import Any

from loguru import logger


def describe_chain(error: BaseException) -> list[str]:
    """Return the type names along the cause chain of ``error``.

    Uses ``error.chain()`` when available, otherwise follows ``__cause__``.
    """
    chain = getattr(error, "chain", None)
    if callable(chain):
        return [type(link).__name__ for link in chain()]

    names: list[str] = []
    seen: set[int] = set()
    current: BaseException | None = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        names.append(type(current).__name__)
        current = current.__cause__
    return names


def log_error(error: BaseException, **context: Any) -> None:
    """Log a raised application error.

    User-caused errors are logged at WARNING without traceback; everything
    else at ERROR with the traceback of the whole chain.

    Args:
        error: The error being reported
        **context: Extra fields (path, method, ...)
    """
    category = getattr(error, "category", None)
    category_name = str(category) if category is not None else None
    fields: dict[str, Any] = {
        "event": f"error.{category_name or 'uncategorized'}",
        "code": getattr(error, "code", None),
        "category": category_name,
        "error_type": type(error).__name__,
        "chain": describe_chain(error),
        **context,
    }

    if category_name == "user":
        logger.warning("Request rejected: {code}", **fields)
    else:
        logger.opt(exception=error).error("Request failed: {code}", **fields)
