"""
Exception types for the referral core.

Lookup misses in the referral chain are not exceptions; these cover
the failures that callers must see or that drive skip-and-log policy.
"""

from sqlalchemy.exc import SQLAlchemyError


class ReferralError(Exception):
    """Base error for referral and commission operations."""
    pass


class TeamQueryError(ReferralError):
    """Raised when the first level of a team query fails."""
    pass


class BeneficiaryNotFoundError(ReferralError):
    """Raised when a commission beneficiary row could not be credited."""

    def __init__(self, beneficiary_id: int) -> None:
        super().__init__(f"Beneficiary {beneficiary_id} not found")
        self.beneficiary_id = beneficiary_id


# Failures that abort a single commission level but not the fan-out
COMMISSION_LEVEL_ERRORS = (
    SQLAlchemyError,
    BeneficiaryNotFoundError,
)
