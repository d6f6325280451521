"""
Shared fixtures for unit tests.

Service instances wired to the in-memory ``store`` fixture in place of
their repositories.
"""

import pytest

from investnet.services.referral import (
    CommissionEngine,
    ReferralChainManager,
    ReferralQueryManager,
    ReferralStatisticsManager,
)


@pytest.fixture
def chain_manager(mock_session, store):
    """ReferralChainManager reading from the store."""
    manager = ReferralChainManager(mock_session)
    manager.user_repo = store
    return manager


@pytest.fixture
def commission_engine(mock_session, store):
    """CommissionEngine reading and writing the store."""
    engine = CommissionEngine(mock_session)
    engine.chain_manager.user_repo = store
    engine.commission_repo = store
    engine.user_repo = store
    return engine


@pytest.fixture
def query_manager(mock_session, store):
    """ReferralQueryManager reading from the store."""
    manager = ReferralQueryManager(mock_session)
    manager.user_repo = store
    manager.investment_repo = store
    manager.commission_repo = store
    return manager


@pytest.fixture
def statistics_manager(mock_session, store, query_manager):
    """ReferralStatisticsManager reading from the store."""
    manager = ReferralStatisticsManager(mock_session)
    manager.query_manager = query_manager
    manager.commission_repo = store
    return manager
