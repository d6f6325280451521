"""
Database models.

Exports all SQLAlchemy models for easy imports.
"""

from investnet.models.base import Base
from investnet.models.commission import Commission
from investnet.models.investment import Investment
from investnet.models.user import User

__all__ = [
    "Base",
    "User",
    "Investment",
    "Commission",
]
