"""
User repository.

Data access layer for User model.
"""

from decimal import Decimal

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.models.user import User
from investnet.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """User repository with referral-tree queries."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize user repository."""
        super().__init__(User, session)

    async def get_by_referral_code(
        self, referral_code: str
    ) -> User | None:
        """
        Get user by referral code.

        Args:
            referral_code: Referral code

        Returns:
            User or None
        """
        return await self.get_by(referral_code=referral_code)

    async def get_referrer_id(self, user_id: int) -> int | None:
        """
        Get the upline of a user.

        Only the ``referred_by`` column is loaded.

        Args:
            user_id: User ID

        Returns:
            Referrer user ID, or None if the user is a root or does not exist
        """
        stmt = select(User.referred_by).where(User.id == user_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_referred_by(
        self, referrer_ids: list[int], limit: int
    ) -> list[User]:
        """
        Get users whose upline is one of ``referrer_ids``.

        Args:
            referrer_ids: Upline user IDs
            limit: Max number of users returned

        Returns:
            List of users, oldest first
        """
        if not referrer_ids:
            return []

        stmt = (
            select(User)
            .where(User.referred_by.in_(referrer_ids))
            .order_by(User.created_at.asc(), User.id.asc())
            .limit(limit)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def credit_balance(self, user_id: int, amount: Decimal) -> bool:
        """
        Atomically add ``amount`` to the user's balance.

        Executed as ``balance = balance + amount`` on the server so
        concurrent credits cannot overwrite each other.

        Args:
            user_id: User ID
            amount: Amount to add

        Returns:
            True if a row was updated, False if the user does not exist
        """
        stmt = (
            update(User)
            .where(User.id == user_id)
            .values(balance=User.balance + amount)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def set_referrer(self, user_id: int, referrer_id: int) -> bool:
        """
        Set the upline of a user that has none yet.

        Args:
            user_id: User ID
            referrer_id: Upline user ID

        Returns:
            True if updated, False if user is missing or already has a referrer
        """
        stmt = (
            update(User)
            .where(User.id == user_id, User.referred_by.is_(None))
            .values(referred_by=referrer_id)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0
