"""Tests for SystemPromptBuilder."""

from parley.config import PersonaConfig
from parley.domain.entities import User
from parley.infrastructure.llm import SystemPromptBuilder


class TestSystemPromptBuilder:
    """SystemPromptBuilder tests."""

    def test_build(
        self, persona_config: PersonaConfig, bot_user: User, sample_user: User
    ) -> None:
        """Test the rendered preamble."""
        builder = SystemPromptBuilder(persona_config, bot_user)

        prompt = builder.build(sample_user)

        assert prompt.startswith("You are a friendly assistant.\n")
        assert "Your name is parley." in prompt
        assert '{"id":"UBOT","name":"parley","is_bot":true}' in prompt
        assert '{"id":"U123","name":"testuser","tz":"Asia/Tokyo"}' in prompt
        assert prompt.rstrip().endswith(
            "Any message beginning with |SYSTEM| is a system message."
        )

    def test_build_without_profile(
        self, persona_config: PersonaConfig, bot_user: User
    ) -> None:
        """Test that a user without a profile gets a minimal record."""
        builder = SystemPromptBuilder(persona_config, bot_user)

        prompt = builder.build(User(id="U9", name="someone"))

        assert '{"id":"U9","name":"someone","is_bot":false}' in prompt
