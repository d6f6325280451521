"""
Database engine and session factory.

Used by scripts and by the surrounding application to open sessions
for the referral services.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from investnet.config.settings import settings


def create_engine() -> AsyncEngine:
    """
    Create async engine from settings.

    Returns:
        Engine bound to DATABASE_URL (asyncpg driver)
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.database_echo,
        pool_pre_ping=True,
    )


def create_session_maker(
    engine: AsyncEngine | None = None,
) -> async_sessionmaker[AsyncSession]:
    """
    Create session maker bound to the engine.

    Args:
        engine: Engine to bind (a new one is created if omitted)

    Returns:
        Session factory with expire_on_commit disabled
    """
    if engine is None:
        engine = create_engine()
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
