"""
Investment model.

A product purchase made by a user. Created by the purchase flow and
read-only for commission purposes.
"""

from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    DateTime,
    ForeignKey,
    String,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from investnet.models.base import Base
from investnet.models.types import MoneyType

if TYPE_CHECKING:
    from investnet.models.user import User


class Investment(Base):
    """Investment model - purchased investment products."""

    __tablename__ = "investments"
    __table_args__ = (
        CheckConstraint(
            'amount > 0', name='check_investment_amount_positive'
        ),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    amount: Mapped[Decimal] = mapped_column(MoneyType, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default="active", nullable=False, index=True
    )  # active, completed

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False
    )

    user: Mapped["User"] = relationship(
        "User",
        back_populates="investments",
    )

    def __repr__(self) -> str:
        """String representation."""
        return (
            f"<Investment(id={self.id}, user_id={self.user_id}, "
            f"amount={self.amount})>"
        )
