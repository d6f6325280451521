"""
Services.

Business logic layer.
"""

from investnet.services.base_service import (
    BaseService,
    log_operation,
    transaction,
)
from investnet.services.referral_service import ReferralService

__all__ = [
    "BaseService",
    "log_operation",
    "transaction",
    "ReferralService",
]
