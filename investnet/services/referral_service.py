"""
Referral service.

Single entry point used by the purchase flow and the team page.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from investnet.models.commission import Commission
from investnet.models.investment import Investment
from investnet.services.base_service import BaseService
from investnet.services.referral import (
    CommissionEngine,
    ReferralChainManager,
    ReferralQueryManager,
    ReferralStatisticsManager,
)


class ReferralService(BaseService):
    """Referral service for chains, commissions and team statistics."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize referral service."""
        super().__init__(session)
        self.chain_manager = ReferralChainManager(session)
        self.commission_engine = CommissionEngine(session)
        self.query_manager = ReferralQueryManager(session)
        self.statistics = ReferralStatisticsManager(session)

    async def resolve_chain(self, user_id: int) -> list[int]:
        """Get up to 7 upline IDs, nearest first."""
        return await self.chain_manager.resolve_chain(user_id)

    async def assign_referrer(
        self, user_id: int, referral_code: str
    ) -> tuple[bool, str | None]:
        """Attach user to the owner of a referral code."""
        return await self.chain_manager.assign_referrer(user_id, referral_code)

    async def apply_commissions(
        self, investor_id: int, investment_amount: Decimal, investment_id: int
    ) -> list[Commission]:
        """Create and credit commissions for an investment."""
        return await self.commission_engine.apply_commissions(
            investor_id, investment_amount, investment_id
        )

    async def on_investment_created(
        self, investment: Investment
    ) -> list[Commission]:
        """Purchase hook: commission failures never fail the purchase."""
        return await self.commission_engine.process_investment(investment)

    async def expand_descendants(self, user_id: int) -> dict[int, list[dict]]:
        """Get team members per level."""
        return await self.query_manager.expand_descendants(user_id)

    async def get_user_commissions(
        self, user_id: int, page: int = 1, limit: int = 20
    ) -> dict:
        """Get paginated commission history."""
        return await self.query_manager.get_user_commissions(
            user_id, page=page, limit=limit
        )

    async def team_stats(self, user_id: int) -> dict:
        """Get team counts per level."""
        return await self.statistics.team_stats(user_id)

    async def commission_stats(
        self, user_id: int, now: datetime | None = None
    ) -> dict:
        """Get commission totals per level and for the current month."""
        return await self.statistics.commission_stats(user_id, now=now)
