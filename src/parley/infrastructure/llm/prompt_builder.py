"""System preamble construction."""

from parley.config import PersonaConfig
from parley.domain.entities import User
from parley.infrastructure.llm.templates import create_jinja_env


class SystemPromptBuilder:
    """Renders the system turn that opens every conversation.

    The preamble is rebuilt from the template whenever a conversation is
    (re)initialized, so it always carries the current identities.
    """

    def __init__(self, persona: PersonaConfig, bot: User) -> None:
        """Initialize the builder.

        Args:
            persona: Bot persona configuration.
            bot: The bot's own user record.
        """
        self._persona = persona
        self._bot = bot
        self._template = create_jinja_env().get_template("system_prompt.j2")

    def build(self, user: User) -> str:
        """Render the preamble for a conversation with a user.

        Args:
            user: The person the bot is talking to.

        Returns:
            System prompt text.
        """
        return self._template.render(
            persona=self._persona,
            bot=self._bot.identity(),
            user=user.identity(),
        )
