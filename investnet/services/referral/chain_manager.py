"""
Referral chain management module.

Handles upline chain resolution and referrer assignment.
"""

import secrets

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from investnet.repositories.user_repository import UserRepository
from investnet.services.base_service import BaseService, transaction
from investnet.services.referral.config import (
    REFERRAL_CODE_ALPHABET,
    REFERRAL_CODE_LENGTH,
    REFERRAL_DEPTH,
)


def generate_referral_code() -> str:
    """Generate a random referral code (uppercase letters and digits)."""
    return "".join(
        secrets.choice(REFERRAL_CODE_ALPHABET)
        for _ in range(REFERRAL_CODE_LENGTH)
    )


class ReferralChainManager(BaseService):
    """Manages referral chain operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize chain manager."""
        super().__init__(session)
        self.user_repo = UserRepository(session)

    async def resolve_chain(
        self, user_id: int, depth: int = REFERRAL_DEPTH
    ) -> list[int]:
        """
        Get upline chain of a user, nearest first.

        Follows ``referred_by`` one hop at a time. Stops at ``depth``
        ancestors, at a root user, or at the first failed lookup. Each hop
        runs in its own savepoint so a failed lookup leaves the session
        usable. There is no cycle detection: ``depth`` is the only bound.

        Args:
            user_id: User ID
            depth: Max number of ancestors

        Returns:
            Ancestor user IDs; index 0 is the level 1 referrer
        """
        chain: list[int] = []
        current_id = user_id

        for _ in range(depth):
            try:
                async with self.session.begin_nested():
                    referrer_id = await self.user_repo.get_referrer_id(
                        current_id
                    )
            except SQLAlchemyError as e:
                self.logger.warning(
                    "Referral chain lookup failed, chain truncated",
                    extra={
                        "user_id": user_id,
                        "failed_at": current_id,
                        "chain_length": len(chain),
                        "error": str(e),
                    },
                )
                break

            if referrer_id is None:
                break

            chain.append(referrer_id)
            current_id = referrer_id

        self.logger.debug(
            "Referral chain resolved",
            extra={
                "user_id": user_id,
                "depth": depth,
                "chain_length": len(chain),
            },
        )

        return chain

    async def is_in_upline(self, user_id: int, candidate_id: int) -> bool:
        """
        Check whether ``user_id`` is an ancestor of ``candidate_id``.

        Walks the whole upline (not capped at REFERRAL_DEPTH) and stops
        on a repeated node.

        Args:
            user_id: Possible ancestor
            candidate_id: User whose upline is walked

        Returns:
            True if ``user_id`` is found in the upline
        """
        visited = {candidate_id}
        current_id = candidate_id

        while True:
            referrer_id = await self.user_repo.get_referrer_id(current_id)
            if referrer_id is None:
                return False
            if referrer_id == user_id:
                return True
            if referrer_id in visited:
                self.logger.error(
                    "Existing referral cycle found",
                    extra={"start_user_id": candidate_id, "repeated_id": referrer_id},
                )
                return False
            visited.add(referrer_id)
            current_id = referrer_id

    @transaction
    async def assign_referrer(
        self, user_id: int, referral_code: str
    ) -> tuple[bool, str | None]:
        """
        Attach a user to the owner of ``referral_code``.

        Rejects unknown codes, self-referral, users that already have an
        upline and assignments that would close a cycle.

        Args:
            user_id: User being referred
            referral_code: Referral code of the upline

        Returns:
            Tuple of (success, error_message)
        """
        referrer = await self.user_repo.get_by_referral_code(referral_code)
        if not referrer:
            return False, "Referral code not found"

        if referrer.id == user_id:
            return False, "Users cannot refer themselves"

        if await self.is_in_upline(user_id, referrer.id):
            self.logger.warning(
                "Referral loop detected",
                extra={
                    "user_id": user_id,
                    "referrer_id": referrer.id,
                    "referral_code": referral_code,
                },
            )
            return False, "Referral would create a cycle"

        updated = await self.user_repo.set_referrer(user_id, referrer.id)
        if not updated:
            return False, "User not found or already has a referrer"

        self.logger.info(
            "Referrer assigned",
            extra={"user_id": user_id, "referrer_id": referrer.id},
        )

        return True, None

    async def allocate_referral_code(self, max_attempts: int = 10) -> str:
        """
        Generate a referral code not used by any user.

        Args:
            max_attempts: Generation attempts before giving up

        Returns:
            Unused referral code

        Raises:
            RuntimeError: If every attempt collided
        """
        for _ in range(max_attempts):
            code = generate_referral_code()
            if not await self.user_repo.get_by_referral_code(code):
                return code

        raise RuntimeError("Could not allocate a unique referral code")
