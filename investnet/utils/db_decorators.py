"""
Database decorators for session-level helpers.

Helpers that take an ``AsyncSession`` as their first argument (or as the
``session`` keyword) get the session rolled back when they raise.
"""

from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession


T = TypeVar("T")


def _find_session(args: tuple[Any, ...], kwargs: dict[str, Any]) -> Any:
    session = kwargs.get("session")
    if session is None and args and isinstance(args[0], AsyncSession):
        session = args[0]
    return session


def with_rollback_on_error(func: Callable[..., T]) -> Callable[..., T]:
    """
    Roll the session back when the wrapped helper raises.

    The original exception is always re-raised. A failing rollback is
    logged and does not replace it.

    Usage:
        @with_rollback_on_error
        async def replay_investment(session: AsyncSession, investment_id: int):
            ...
    """
    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> T:
        session = _find_session(args, kwargs)

        if session is None:
            logger.warning(
                f"{func.__name__} has no session argument, "
                f"rollback will not be performed"
            )
            return await func(*args, **kwargs)

        try:
            return await func(*args, **kwargs)
        except Exception as e:
            try:
                await session.rollback()
                logger.info(
                    f"Rollback performed in {func.__name__} due to error: "
                    f"{type(e).__name__}"
                )
            except Exception as rollback_error:
                logger.error(
                    f"Failed to rollback in {func.__name__}: {rollback_error}",
                    exc_info=True,
                )
            raise

    return wrapper
