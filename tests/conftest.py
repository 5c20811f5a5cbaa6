"""
Shared fixtures.
"""

import random

import pytest

from campaign_studio.core.llm_service import LLMService, MockLLMProvider
from campaign_studio.data.models import CampaignBrief, ReferenceCampaign


def make_campaign(id, industry="Retail", emotional_appeal=("Empathy",), **kwargs):
    """Build a reference campaign with sensible defaults."""
    fields = {
        "id": id,
        "name": kwargs.pop("name", f"Campaign {id}"),
        "brand": kwargs.pop("brand", f"Brand {id}"),
        "year": kwargs.pop("year", 2020),
        "industry": industry,
        "emotional_appeal": emotional_appeal,
    }
    fields.update(kwargs)
    return ReferenceCampaign(**fields)


@pytest.fixture
def campaign_factory():
    return make_campaign


@pytest.fixture
def small_catalog():
    """Six entries across four industries."""
    return (
        make_campaign("r1", "Retail", ("Empathy", "Hope"), target_audience=("Youth",), objectives=("Awareness",)),
        make_campaign("r2", "Retail", ("Empathy",), target_audience=("Youth",), objectives=("Awareness",)),
        make_campaign("f1", "Finance", ("Trust",), target_audience=("Adults",), objectives=("Conversion",)),
        make_campaign("t1", "Technology", ("Surprise",), target_audience=("Gamers",), objectives=("Engagement",)),
        make_campaign("n1", "Nonprofit", ("Urgency", "Anger"), key_message="A protest against silence"),
        make_campaign("n2", "Nonprofit", ("Empathy",), strategy="Confess the truth about privilege in society"),
    )


@pytest.fixture
def retail_brief():
    return CampaignBrief(
        brand="Acme",
        industry="retail",
        target_audience=["Youth culture"],
        objectives=["Awareness"],
        emotional_appeal=["Empathy"],
    )


@pytest.fixture
def mock_provider():
    return MockLLMProvider(rng=random.Random(7))


@pytest.fixture
def mock_llm(mock_provider):
    return LLMService(provider=mock_provider, timeout=5)
