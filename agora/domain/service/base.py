"""Base service class for domain services."""

from collections.abc import Iterator
from contextlib import contextmanager

import logfire
from sqlalchemy.exc import SQLAlchemyError

from agora.domain.error import RemoteOperationError


class Service:
    """Base class for all domain services.

    Domain services hold logic that spans several entities, such as
    aggregating votes into scores or nesting comments into a tree.
    """

    pass


@contextmanager
def remote_operation(operation: str, **attributes: object) -> Iterator[None]:
    """Translate store failures inside the block into RemoteOperationError.

    Args:
        operation: Name of the operation, used in the error and the log
        **attributes: Extra structured fields for the error log
    """
    try:
        yield
    except SQLAlchemyError as e:
        logfire.error(
            "Remote store operation failed",
            operation=operation,
            error=str(e),
            **attributes,
        )
        raise RemoteOperationError(operation, type(e).__name__) from e
