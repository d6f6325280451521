"""
Commission engine.

Turns an investment into one commission per populated upline level and
credits each beneficiary.
"""

from decimal import Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.models.commission import Commission
from investnet.models.investment import Investment
from investnet.repositories.commission_repository import CommissionRepository
from investnet.repositories.user_repository import UserRepository
from investnet.services.base_service import BaseService, log_operation
from investnet.services.referral.chain_manager import ReferralChainManager
from investnet.services.referral.config import REFERRAL_RATES
from investnet.utils.exceptions import (
    COMMISSION_LEVEL_ERRORS,
    BeneficiaryNotFoundError,
    ReferralError,
)


def calculate_level_commission(amount: Decimal, level: int) -> Decimal:
    """
    Calculate commission for a referral level.

    Args:
        amount: Investment amount
        level: Referral level (1-7)

    Returns:
        Commission amount (0 if level not configured)
    """
    rate = REFERRAL_RATES.get(level, Decimal("0"))

    if rate == Decimal("0"):
        return Decimal("0")

    return amount * rate


class CommissionEngine(BaseService):
    """
    Multi-level commission processor.

    Each level is written in its own savepoint: the commission row and
    the balance credit succeed or fail together, and a failed level does
    not stop the remaining ones. Levels already recorded for the
    investment are skipped, so repeated calls never pay twice.
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize commission engine.

        Args:
            session: Async database session
        """
        super().__init__(session)
        self.chain_manager = ReferralChainManager(session)
        self.commission_repo = CommissionRepository(session)
        self.user_repo = UserRepository(session)

    @log_operation
    async def apply_commissions(
        self,
        investor_id: int,
        investment_amount: Decimal,
        investment_id: int,
    ) -> list[Commission]:
        """
        Create and credit commissions for an investment.

        Args:
            investor_id: User who made the investment
            investment_amount: Invested amount
            investment_id: Investment that triggers the commissions

        Returns:
            Commissions created by this call
        """
        investment_amount = Decimal(str(investment_amount))

        if investment_amount <= 0:
            self.logger.warning(
                "Non-positive investment amount, no commissions",
                extra={
                    "investor_id": investor_id,
                    "investment_id": investment_id,
                    "amount": str(investment_amount),
                },
            )
            return []

        chain = await self.chain_manager.resolve_chain(investor_id)

        if not chain:
            self.logger.debug(
                "No referrers found for investor",
                extra={"investor_id": investor_id, "investment_id": investment_id},
            )
            return []

        paid_levels = await self.commission_repo.get_levels_for_investment(
            investment_id
        )

        created: list[Commission] = []
        for level, beneficiary_id in enumerate(chain, start=1):
            if level in paid_levels:
                self.logger.info(
                    "Commission level already paid, skipping",
                    extra={"investment_id": investment_id, "level": level},
                )
                continue

            commission = await self._pay_level(
                level=level,
                beneficiary_id=beneficiary_id,
                investor_id=investor_id,
                investment_amount=investment_amount,
                investment_id=investment_id,
            )
            if commission is not None:
                created.append(commission)

        await self.commit()

        total = sum((c.amount for c in created), Decimal("0"))
        self.logger.info(
            "Commissions processed",
            extra={
                "investor_id": investor_id,
                "investment_id": investment_id,
                "chain_length": len(chain),
                "commissions_count": len(created),
                "total_commissions": str(total),
            },
        )

        return created

    async def _pay_level(
        self,
        level: int,
        beneficiary_id: int,
        investor_id: int,
        investment_amount: Decimal,
        investment_id: int,
    ) -> Commission | None:
        """
        Record and credit a single level inside a savepoint.

        Returns:
            Created commission, or None if the level was skipped
        """
        rate = REFERRAL_RATES[level]
        amount = calculate_level_commission(investment_amount, level)

        try:
            async with self.session.begin_nested():
                commission = await self.commission_repo.create(
                    beneficiary_id=beneficiary_id,
                    source_user_id=investor_id,
                    investment_id=investment_id,
                    level=level,
                    percentage=rate * 100,
                    amount=amount,
                )
                credited = await self.user_repo.credit_balance(
                    beneficiary_id, amount
                )
                if not credited:
                    raise BeneficiaryNotFoundError(beneficiary_id)
        except COMMISSION_LEVEL_ERRORS as e:
            self.logger.error(
                "Commission level skipped",
                extra={
                    "investment_id": investment_id,
                    "beneficiary_id": beneficiary_id,
                    "level": level,
                    "amount": str(amount),
                    "error": str(e),
                },
            )
            return None

        self.logger.info(
            "Referral commission credited",
            extra={
                "beneficiary_id": beneficiary_id,
                "investor_id": investor_id,
                "investment_id": investment_id,
                "level": level,
                "rate": str(rate),
                "amount": str(amount),
            },
        )

        return commission

    async def process_investment(
        self, investment: Investment
    ) -> list[Commission]:
        """
        Apply commissions after a purchase without failing the purchase.

        Args:
            investment: Newly created investment

        Returns:
            Created commissions, empty if processing failed
        """
        try:
            return await self.apply_commissions(
                investment.user_id, investment.amount, investment.id
            )
        except (SQLAlchemyError, ReferralError) as e:
            await self.rollback()
            self.logger.error(
                "Commission processing failed for investment",
                extra={
                    "investment_id": investment.id,
                    "investor_id": investment.user_id,
                    "error": str(e),
                },
            )
            return []
