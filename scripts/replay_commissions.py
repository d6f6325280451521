#!/usr/bin/env python3
"""
Replay referral commissions for an investment.

Levels already recorded for the investment are skipped, so this only
fills levels that failed on the first run.

Usage:
    python scripts/replay_commissions.py INVESTMENT_ID
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from loguru import logger  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: E402

from investnet.initialization.database import (  # noqa: E402
    create_engine,
    create_session_maker,
)
from investnet.models import Commission  # noqa: E402
from investnet.repositories.investment_repository import (  # noqa: E402
    InvestmentRepository,
)
from investnet.services.referral import CommissionEngine  # noqa: E402
from investnet.utils.db_decorators import with_rollback_on_error  # noqa: E402

# Configure logging
logger.remove()
logger.add(
    sys.stdout,
    format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}",
    level="INFO",
)


@with_rollback_on_error
async def replay_investment(
    session: AsyncSession, investment_id: int
) -> list[Commission] | None:
    """
    Re-apply commissions for one investment.

    Returns:
        Created commissions, or None if the investment does not exist
    """
    investment = await InvestmentRepository(session).get_by_id(investment_id)
    if not investment:
        return None

    engine_service = CommissionEngine(session)
    return await engine_service.apply_commissions(
        investment.user_id, investment.amount, investment.id
    )


async def replay(investment_id: int) -> int:
    """
    Replay commissions for one investment.

    Returns:
        Process exit code
    """
    engine = create_engine()
    session_maker = create_session_maker(engine)

    try:
        async with session_maker() as session:
            created = await replay_investment(session, investment_id)
    finally:
        await engine.dispose()

    if created is None:
        logger.error(f"Investment {investment_id} not found")
        return 1

    if created:
        levels = ", ".join(str(c.level) for c in created)
        logger.success(f"Created {len(created)} commission(s), levels: {levels}")
    else:
        logger.info("Nothing to replay: all populated levels already paid")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("investment_id", type=int)
    args = parser.parse_args()
    sys.exit(asyncio.run(replay(args.investment_id)))


if __name__ == "__main__":
    main()
