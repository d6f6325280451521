"""
Referral statistics module.

Team size and commission totals per level, as shown on the team page.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from investnet.config.settings import settings
from investnet.repositories.commission_repository import CommissionRepository
from investnet.services.base_service import BaseService
from investnet.services.referral.config import REFERRAL_DEPTH
from investnet.services.referral.query_manager import ReferralQueryManager
from investnet.utils.datetime_utils import same_calendar_month, utc_now


class ReferralStatisticsManager(BaseService):
    """Manages team and commission statistics."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize statistics manager."""
        super().__init__(session)
        self.query_manager = ReferralQueryManager(session)
        self.commission_repo = CommissionRepository(session)

    async def team_stats(self, user_id: int) -> dict:
        """
        Get team size per level.

        Uses the same expansion as ``expand_descendants`` but keeps only
        counts and invested totals.

        Args:
            user_id: Root user ID

        Returns:
            Dict with level1_count..level7_count, total_team_size,
            total_team_invested
        """
        stats: dict = {
            f"level{level}_count": 0 for level in range(1, REFERRAL_DEPTH + 1)
        }
        total_team_size = 0
        total_team_invested = Decimal("0")
        parent_ids = [user_id]

        for level in range(1, REFERRAL_DEPTH + 1):
            members = await self.query_manager.fetch_team_level(level, parent_ids)
            if not members:
                break

            stats[f"level{level}_count"] = len(members)
            total_team_size += len(members)
            total_team_invested += sum(
                (invested for _, invested in members), Decimal("0")
            )
            parent_ids = [member.id for member, _ in members]

        stats["total_team_size"] = total_team_size
        stats["total_team_invested"] = total_team_invested

        return stats

    async def commission_stats(
        self, user_id: int, now: datetime | None = None
    ) -> dict:
        """
        Get commission totals for a beneficiary.

        "This month" is the calendar month of ``now`` in STATS_TIMEZONE.

        Args:
            user_id: Beneficiary user ID
            now: Reference instant (defaults to current UTC time)

        Returns:
            Dict with total_commissions, level1_total..level7_total,
            this_month_total, commissions_count
        """
        if now is None:
            now = utc_now()
        tz = settings.stats_tzinfo

        commissions = await self.commission_repo.find_by_beneficiary(user_id)

        stats: dict = {"total_commissions": Decimal("0")}
        for level in range(1, REFERRAL_DEPTH + 1):
            stats[f"level{level}_total"] = Decimal("0")
        stats["this_month_total"] = Decimal("0")
        stats["commissions_count"] = len(commissions)

        for commission in commissions:
            stats["total_commissions"] += commission.amount

            key = f"level{commission.level}_total"
            if key in stats:
                stats[key] += commission.amount

            if same_calendar_month(commission.created_at, now, tz):
                stats["this_month_total"] += commission.amount

        return stats
