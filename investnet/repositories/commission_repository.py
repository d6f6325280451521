"""
Commission repository.

Data access layer for Commission model.
"""

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from investnet.models.commission import Commission
from investnet.repositories.base import BaseRepository


class CommissionRepository(BaseRepository[Commission]):
    """Commission repository with specific queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize commission repository."""
        super().__init__(Commission, session)

    async def get_levels_for_investment(
        self, investment_id: int
    ) -> set[int]:
        """
        Get levels already paid for an investment.

        Args:
            investment_id: Investment ID

        Returns:
            Set of recorded levels
        """
        stmt = select(Commission.level).where(
            Commission.investment_id == investment_id
        )
        result = await self.session.execute(stmt)
        return {row[0] for row in result.all()}

    async def find_by_beneficiary(
        self, beneficiary_id: int
    ) -> list[Commission]:
        """
        Get all commissions paid to a user.

        Args:
            beneficiary_id: Beneficiary user ID

        Returns:
            List of commissions
        """
        return await self.find_by(beneficiary_id=beneficiary_id)

    async def get_page_for_beneficiary(
        self, beneficiary_id: int, limit: int, offset: int
    ) -> tuple[list[Commission], int]:
        """
        Get commissions paid to a user, newest first.

        Source users are eager loaded to avoid N+1.

        Args:
            beneficiary_id: Beneficiary user ID
            limit: Items per page
            offset: Items to skip

        Returns:
            Tuple of (commissions, total_count)
        """
        stmt = (
            select(Commission)
            .options(selectinload(Commission.source_user))
            .where(Commission.beneficiary_id == beneficiary_id)
            .order_by(Commission.created_at.desc(), Commission.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)
        commissions = list(result.scalars().all())

        count_stmt = select(func.count(Commission.id)).where(
            Commission.beneficiary_id == beneficiary_id
        )
        count_result = await self.session.execute(count_stmt)
        total = count_result.scalar() or 0

        return commissions, total
