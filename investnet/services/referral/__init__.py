"""
Referral services package.

Contains modular services for the referral core:
- config: Configuration constants (REFERRAL_DEPTH, REFERRAL_RATES)
- chain_manager: Upline chain resolution and referrer assignment
- commission_engine: Per-level commission creation and crediting
- query_manager: Team expansion and commission history
- statistics: Team and commission statistics
"""

from investnet.services.referral.chain_manager import (
    ReferralChainManager,
    generate_referral_code,
)
from investnet.services.referral.commission_engine import (
    CommissionEngine,
    calculate_level_commission,
)
from investnet.services.referral.config import REFERRAL_DEPTH, REFERRAL_RATES
from investnet.services.referral.query_manager import ReferralQueryManager
from investnet.services.referral.statistics import ReferralStatisticsManager


__all__ = [
    # Configuration
    "REFERRAL_DEPTH",
    "REFERRAL_RATES",
    # Managers
    "ReferralChainManager",
    "ReferralQueryManager",
    "ReferralStatisticsManager",
    # Commission processing
    "CommissionEngine",
    "calculate_level_commission",
    "generate_referral_code",
]
