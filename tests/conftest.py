"""Shared fixtures for diffy tests."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

import pytest

from sample_models import AddressInfo, DeliveryInfo, DeliveryStatus


@pytest.fixture
def delivery() -> DeliveryInfo:
    """A delivered record with every attribute populated."""
    return DeliveryInfo(
        id=1,
        gid="G-100",
        type=3,
        status=DeliveryStatus.DELIVERED,
        balance=1.0000547,
        description="first drop",
        codes=[3, 6, 2, 6],
        addresses=[AddressInfo(street="1 Main St", city="Springfield")],
        created_at=datetime(2024, 1, 1, 9, 30),
        updated_at=datetime(2024, 1, 2, 10, 0),
    )


@pytest.fixture
def same_delivery(delivery: DeliveryInfo) -> DeliveryInfo:
    """A distinct record equal in every attribute to ``delivery``."""
    return replace(
        delivery,
        codes=list(delivery.codes),
        addresses=[replace(a) for a in delivery.addresses],
    )


@pytest.fixture
def pending_delivery(same_delivery: DeliveryInfo) -> DeliveryInfo:
    """Same record, only the status differs."""
    return replace(same_delivery, status=DeliveryStatus.PENDING)
