"""
Investment repository.

Data access layer for Investment model.
"""

from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.models.investment import Investment
from investnet.repositories.base import BaseRepository


class InvestmentRepository(BaseRepository[Investment]):
    """Investment repository with aggregation queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize investment repository."""
        super().__init__(Investment, session)

    async def sum_by_users(
        self, user_ids: list[int]
    ) -> dict[int, Decimal]:
        """
        Sum invested amounts per user in a single query.

        Users without investments are absent from the result.

        Args:
            user_ids: User IDs

        Returns:
            Dict mapping user ID to total invested
        """
        if not user_ids:
            return {}

        stmt = (
            select(
                Investment.user_id,
                func.coalesce(
                    func.sum(Investment.amount), Decimal("0")
                ).label("total"),
            )
            .where(Investment.user_id.in_(user_ids))
            .group_by(Investment.user_id)
        )

        result = await self.session.execute(stmt)
        return {row.user_id: Decimal(row.total) for row in result.all()}
