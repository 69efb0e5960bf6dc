"""
ShopAPI Backend — Shared Service Helpers
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Tuple, Type

from sqlalchemy.exc import SQLAlchemyError

from shop_api.exceptions import DatabaseError

logger = logging.getLogger(__name__)


@contextmanager
def datastore_errors(
    action: str,
    errors: Tuple[Type[BaseException], ...] = (SQLAlchemyError,),
) -> Iterator[None]:
    """
    Translate driver exceptions raised inside the block into DatabaseError.

    Usage:
        with datastore_errors("create order"):
            await db.flush()

    The driver's message is kept as DatabaseError.reason so the 500 response
    can carry it. Application exceptions pass through untouched.
    """
    try:
        yield
    except errors as e:
        logger.error("Datastore error while trying to %s: %s", action, str(e), exc_info=True)
        raise DatabaseError(
            message=f"Failed to {action}",
            reason=str(e),
            context={"error_type": type(e).__name__},
        ) from e
