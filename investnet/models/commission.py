"""
Commission model.

One row per (investment, ancestor level) paid to a beneficiary.
Rows are never updated after creation.
"""

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    Integer,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from investnet.models.base import Base
from investnet.models.types import MoneyType, RatePercentType

if TYPE_CHECKING:
    from investnet.models.investment import Investment
    from investnet.models.user import User


class Commission(Base):
    """Commission model - multi-level referral commissions."""

    __tablename__ = "commissions"
    __table_args__ = (
        CheckConstraint(
            'level >= 1 AND level <= 7',
            name='check_commission_level_range'
        ),
        CheckConstraint(
            'amount >= 0', name='check_commission_amount_non_negative'
        ),
        UniqueConstraint(
            'investment_id', 'level',
            name='uq_commission_investment_level'
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    beneficiary_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    source_user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    investment_id: Mapped[int] = mapped_column(
        ForeignKey("investments.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )

    level: Mapped[int] = mapped_column(Integer, nullable=False)  # 1-7
    percentage: Mapped[Decimal] = mapped_column(
        RatePercentType, nullable=False
    )
    amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(UTC),
        nullable=False,
        index=True,
    )

    beneficiary: Mapped["User"] = relationship(
        "User", foreign_keys=[beneficiary_id]
    )
    source_user: Mapped["User"] = relationship(
        "User", foreign_keys=[source_user_id]
    )
    investment: Mapped["Investment"] = relationship("Investment")

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<Commission(id={self.id}, beneficiary_id={self.beneficiary_id}, "
            f"level={self.level}, amount={self.amount})>"
        )
