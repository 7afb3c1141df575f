"""
Shared fixtures for engine tests.
"""
from decimal import Decimal

import pytest

from tripsplit.models import (
    Expense, Family, FamiliesDistribution, IndividualsDistribution,
    MixedDistribution, Participant, ParticipantBalance, Settlement
)


@pytest.fixture
def alice():
    return Participant(id="p-alice", name="Alice")


@pytest.fixture
def bob():
    return Participant(id="p-bob", name="Bob")


@pytest.fixture
def carol():
    return Participant(id="p-carol", name="Carol")


@pytest.fixture
def trio(alice, bob, carol):
    return [alice, bob, carol]


@pytest.fixture
def family_roster():
    """Smiths: two adults and a child. Jones: one adult. Dana: on her own."""
    families = [
        Family(id="f-smith", family_name="Smiths", adults=2, children=1),
        Family(id="f-jones", family_name="Jones", adults=1, children=0),
    ]
    participants = [
        Participant(id="p-john", name="John Smith", family_id="f-smith"),
        Participant(id="p-jane", name="Jane Smith", family_id="f-smith"),
        Participant(id="p-kid", name="Kid Smith", family_id="f-smith", is_adult=False),
        Participant(id="p-tom", name="Tom Jones", family_id="f-jones"),
        Participant(id="p-dana", name="Dana"),
    ]
    return participants, families


@pytest.fixture
def make_expense():
    """Build an expense; distribution keyword picks the variant."""
    def _make(amount, paid_by, participants=None, families=None, currency="EUR",
              split_mode="equal", participant_splits=None, family_splits=None,
              account_for_family_size=False, expense_id=None, category=None):
        amount = Decimal(str(amount))
        participant_splits = {
            k: Decimal(str(v)) for k, v in (participant_splits or {}).items()
        }
        family_splits = {
            k: Decimal(str(v)) for k, v in (family_splits or {}).items()
        }

        if families is not None and participants is not None:
            distribution = MixedDistribution(
                families=families,
                participants=participants,
                split_mode=split_mode,
                family_splits=family_splits,
                participant_splits=participant_splits,
                account_for_family_size=account_for_family_size,
            )
        elif families is not None:
            distribution = FamiliesDistribution(
                families=families,
                split_mode=split_mode,
                family_splits=family_splits,
                account_for_family_size=account_for_family_size,
            )
        else:
            distribution = IndividualsDistribution(
                participants=participants or [],
                split_mode=split_mode,
                participant_splits=participant_splits,
            )

        return Expense(
            id=expense_id,
            description="Test expense",
            amount=amount,
            currency=currency,
            paid_by=paid_by,
            distribution=distribution,
            category=category,
        )
    return _make


@pytest.fixture
def make_settlement():
    def _make(from_id, to_id, amount, currency="EUR", settlement_id=None):
        return Settlement(
            id=settlement_id,
            from_participant_id=from_id,
            to_participant_id=to_id,
            amount=Decimal(str(amount)),
            currency=currency,
        )
    return _make


@pytest.fixture
def make_balance():
    def _make(entity_id, balance, name=None, is_family=False):
        return ParticipantBalance(
            id=entity_id,
            name=name or entity_id,
            is_family=is_family,
            balance=Decimal(str(balance)),
        )
    return _make
