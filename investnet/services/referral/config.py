"""
Referral system configuration.

Contains constants and configuration for the referral system.
"""

from decimal import Decimal

# 7-level commission program paid on every investment purchase
REFERRAL_DEPTH = 7
REFERRAL_RATES = {
    1: Decimal("0.10"),  # 10% for level 1 (direct referrals)
    2: Decimal("0.04"),  # 4% for level 2
    3: Decimal("0.02"),  # 2% for level 3
    4: Decimal("0.01"),
    5: Decimal("0.01"),
    6: Decimal("0.01"),
    7: Decimal("0.01"),
}

REFERRAL_CODE_LENGTH = 8
REFERRAL_CODE_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
