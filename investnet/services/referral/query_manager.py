"""
Referral query management module.

Handles team (descendant) expansion and commission history queries.
"""

from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.config.settings import settings
from investnet.models.user import User
from investnet.repositories.commission_repository import CommissionRepository
from investnet.repositories.investment_repository import InvestmentRepository
from investnet.repositories.user_repository import UserRepository
from investnet.services.base_service import BaseService
from investnet.services.referral.config import REFERRAL_DEPTH
from investnet.utils.exceptions import TeamQueryError


class ReferralQueryManager(BaseService):
    """Manages team and commission query operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize query manager."""
        super().__init__(session)
        self.user_repo = UserRepository(session)
        self.investment_repo = InvestmentRepository(session)
        self.commission_repo = CommissionRepository(session)

    async def fetch_team_level(
        self, level: int, parent_ids: list[int]
    ) -> list[tuple[User, Decimal]]:
        """
        Load one level of a team with each member's invested total.

        Both queries run in a savepoint, so a failure leaves the session
        usable. A failure on level 1 raises; a failure on a deeper level is
        logged and reported as an empty level, which ends the expansion.

        Args:
            level: Team level being loaded (1-7)
            parent_ids: Member IDs of the previous level (the root for level 1)

        Returns:
            List of (member, total_invested) pairs

        Raises:
            TeamQueryError: If the level 1 query fails
        """
        limit = (
            settings.team_level1_limit if level == 1
            else settings.team_level_limit
        )

        try:
            async with self.session.begin_nested():
                members = await self.user_repo.list_referred_by(
                    parent_ids, limit=limit
                )
                totals = await self.investment_repo.sum_by_users(
                    [m.id for m in members]
                )
        except SQLAlchemyError as e:
            if level == 1:
                self.logger.error(
                    "Failed to load direct referrals",
                    extra={"parent_ids": parent_ids, "error": str(e)},
                )
                raise TeamQueryError("Failed to load team") from e

            self.logger.warning(
                "Team level query failed, expansion stopped",
                extra={"level": level, "error": str(e)},
            )
            return []

        return [(m, totals.get(m.id, Decimal("0"))) for m in members]

    async def expand_descendants(
        self, user_id: int
    ) -> dict[int, list[dict]]:
        """
        Get user's team partitioned by level.

        Breadth-first over ``referred_by``: level 1 is capped at
        TEAM_LEVEL1_LIMIT members, deeper levels at TEAM_LEVEL_LIMIT.
        Expansion stops at the first empty level.

        Args:
            user_id: Root user ID

        Returns:
            Dict mapping every level 1-7 to a list of
            {"user", "total_invested", "joined_at"} dicts
        """
        tree: dict[int, list[dict]] = {
            level: [] for level in range(1, REFERRAL_DEPTH + 1)
        }
        parent_ids = [user_id]

        for level in range(1, REFERRAL_DEPTH + 1):
            members = await self.fetch_team_level(level, parent_ids)
            if not members:
                break

            tree[level] = [
                {
                    "user": member,
                    "total_invested": total_invested,
                    "joined_at": member.created_at,
                }
                for member, total_invested in members
            ]
            parent_ids = [member.id for member, _ in members]

        self.logger.debug(
            "Team expanded",
            extra={
                "user_id": user_id,
                "sizes": {level: len(m) for level, m in tree.items()},
            },
        )

        return tree

    async def get_user_commissions(
        self, user_id: int, page: int = 1, limit: int = 20
    ) -> dict:
        """
        Get commissions paid to user, newest first.

        Args:
            user_id: Beneficiary user ID
            page: Page number
            limit: Items per page

        Returns:
            Dict with commissions, total, page, pages
        """
        page = max(page, 1)
        limit = max(limit, 1)
        offset = (page - 1) * limit

        commissions, total = await self.commission_repo.get_page_for_beneficiary(
            user_id, limit=limit, offset=offset
        )

        items = []
        for commission in commissions:
            source = commission.source_user  # Already loaded via selectinload
            items.append({
                "commission": commission,
                "level": commission.level,
                "amount": commission.amount,
                "source_email": source.email if source else None,
                "source_referral_code": source.referral_code if source else None,
                "created_at": commission.created_at,
            })

        pages = (total + limit - 1) // limit

        return {
            "commissions": items,
            "total": total,
            "page": page,
            "pages": pages,
        }
