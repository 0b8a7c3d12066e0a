"""Common fixtures."""

from datetime import datetime, timezone

import pytest

from parley.config import PersonaConfig
from parley.domain.entities import Attachment, DirectMessage, User


@pytest.fixture
def persona_config() -> PersonaConfig:
    """Create test persona config."""
    return PersonaConfig(
        name="parley",
        system_prompt="You are a friendly assistant.",
    )


@pytest.fixture
def sample_user() -> User:
    """Create test user."""
    return User(
        id="U123",
        name="testuser",
        is_bot=False,
        profile={"id": "U123", "name": "testuser", "tz": "Asia/Tokyo"},
    )


@pytest.fixture
def bot_user() -> User:
    """Create test bot."""
    return User(
        id="UBOT",
        name="parley",
        is_bot=True,
        profile={"id": "UBOT", "name": "parley", "is_bot": True},
    )


@pytest.fixture
def timestamp() -> datetime:
    """Create test timestamp."""
    return datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def image_attachment() -> Attachment:
    """Create an image attachment."""
    return Attachment(
        name="cat.png",
        url="https://files.example.com/cat.png",
        content_type="image/png",
        size=2048,
    )


@pytest.fixture
def voice_attachment() -> Attachment:
    """Create a voice message attachment."""
    return Attachment(
        name="voice-message.ogg",
        url="https://files.example.com/voice-message.ogg",
        content_type="audio/ogg",
        size=4096,
    )


@pytest.fixture
def direct_message(sample_user: User, timestamp: datetime) -> DirectMessage:
    """Create test direct message."""
    return DirectMessage(
        id="1704110400.000100",
        channel_id="D123",
        user=sample_user,
        text="hello",
        timestamp=timestamp,
    )
