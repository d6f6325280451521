"""Integration tests for the referral service facade."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest

from investnet.services.referral_service import ReferralService


@pytest.fixture
def service(mock_session, store):
    """ReferralService with every manager reading the store."""
    service = ReferralService(mock_session)
    service.chain_manager.user_repo = store
    service.commission_engine.chain_manager.user_repo = store
    service.commission_engine.user_repo = store
    service.commission_engine.commission_repo = store
    service.query_manager.user_repo = store
    service.query_manager.investment_repo = store
    service.query_manager.commission_repo = store
    service.statistics.query_manager = service.query_manager
    service.statistics.commission_repo = store
    return service


@pytest.mark.slow
class TestReferralService:
    """Purchase to team page flow."""

    @pytest.mark.asyncio
    async def test_signup_purchase_and_team_page(self, service, store):
        """Referrals joined by code, a purchase pays the upline, stats reflect it."""
        sponsor = store.add_user()
        middle = store.add_user()
        investor = store.add_user()

        assert await service.assign_referrer(middle.id, sponsor.referral_code) == (True, None)
        assert await service.assign_referrer(investor.id, middle.referral_code) == (True, None)
        assert await service.resolve_chain(investor.id) == [middle.id, sponsor.id]

        investment = store.add_investment(investor.id, "1000")
        created = await service.on_investment_created(investment)

        assert [c.amount for c in created] == [Decimal("100"), Decimal("40")]
        assert middle.balance == Decimal("100")
        assert sponsor.balance == Decimal("40")

        team = await service.team_stats(sponsor.id)
        assert team["level1_count"] == 1
        assert team["level2_count"] == 1
        assert team["total_team_size"] == 2
        assert team["total_team_invested"] == Decimal("1000")

        tree = await service.expand_descendants(sponsor.id)
        assert tree[2][0]["user"] is investor
        assert tree[2][0]["total_invested"] == Decimal("1000")

        stats = await service.commission_stats(
            sponsor.id, now=datetime.now(UTC)
        )
        assert stats["level2_total"] == Decimal("40")
        assert stats["this_month_total"] == Decimal("40")
        assert stats["commissions_count"] == 1

    @pytest.mark.asyncio
    async def test_apply_commissions_twice(self, service, store):
        """Facade keeps the deduplicated behaviour."""
        users = store.add_chain(1)

        await service.apply_commissions(users[1].id, Decimal("10"), 1)
        again = await service.apply_commissions(users[1].id, Decimal("10"), 1)

        assert again == []
        assert users[0].balance == Decimal("1")
