"""In-memory conversation store."""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from parley.domain.entities import Conversation, Role, Turn
from parley.domain.services import ConversationSummarizer

logger = logging.getLogger(__name__)

SUMMARY_HEADER = "\n\nThis is a summary of the conversation thus far:\n\n"


class UserLockRegistry:
    """Hands out one asyncio.Lock per user.

    Holding a user's lock serializes that user's turns; different users
    never wait on each other.

    Locks live as long as the process, like the conversations they guard,
    so the registry grows by one lock per user ever seen.
    """

    def __init__(self) -> None:
        self._locks: dict[str, asyncio.Lock] = {}

    def get(self, user_id: str) -> asyncio.Lock:
        """Get the lock of a user, creating it on first use.

        Args:
            user_id: User identity.

        Returns:
            The user's lock.
        """
        lock = self._locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[user_id] = lock
        return lock


class ConversationStore:
    """Process-wide mapping from user identity to Conversation.

    Owns the summarization policy: once the token usage reported for a
    conversation exceeds the threshold, the next turn starts from a single
    system turn holding a summary of everything before it.

    Callers must hold ``lock(user_id)`` around a read-modify-write sequence.
    """

    def __init__(
        self,
        summarizer: ConversationSummarizer,
        summarize_threshold: int = 3700,
    ) -> None:
        """Initialize the store.

        Args:
            summarizer: Service condensing a conversation.
            summarize_threshold: Token usage above which a conversation is
                summarized before its next user turn.
        """
        self._summarizer = summarizer
        self._summarize_threshold = summarize_threshold
        self._conversations: dict[str, Conversation] = {}
        self._locks = UserLockRegistry()

    @asynccontextmanager
    async def lock(self, user_id: str) -> AsyncIterator[None]:
        """Serialize turns of one user.

        Args:
            user_id: User identity.
        """
        async with self._locks.get(user_id):
            yield

    def get(self, user_id: str) -> Conversation | None:
        """Get the conversation of a user, if any."""
        return self._conversations.get(user_id)

    def get_or_create(self, user_id: str, preamble: str) -> Conversation:
        """Get the conversation of a user, starting one if needed.

        Args:
            user_id: User identity.
            preamble: System prompt used if a conversation is started.

        Returns:
            The user's conversation.
        """
        conversation = self._conversations.get(user_id)
        if conversation is None:
            conversation = Conversation.start(user_id, preamble)
            self._conversations[user_id] = conversation
            logger.info("Started conversation: user=%s", user_id)
        return conversation

    def append_user(self, user_id: str, text: str) -> Conversation:
        """Append a user turn.

        Args:
            user_id: User identity.
            text: Normalized user input.

        Returns:
            The updated conversation.

        Raises:
            KeyError: If the user has no conversation.
        """
        return self._append(user_id, Turn(Role.USER, text))

    def append_assistant(
        self,
        user_id: str,
        text: str,
        total_tokens: int,
    ) -> Conversation:
        """Append an assistant turn and record the token usage of the call.

        Args:
            user_id: User identity.
            text: Assistant reply.
            total_tokens: Token usage reported by the completion.

        Returns:
            The updated conversation.

        Raises:
            KeyError: If the user has no conversation.
        """
        conversation = self._append(user_id, Turn(Role.ASSISTANT, text))
        conversation = conversation.with_token_usage(total_tokens)
        self._conversations[user_id] = conversation
        logger.debug(
            "Conversation tokens: user=%s tokens=%d", user_id, total_tokens
        )
        return conversation

    def needs_summary(self, user_id: str) -> bool:
        """Check if a user's conversation is over the token threshold."""
        conversation = self._conversations.get(user_id)
        return (
            conversation is not None
            and conversation.token_usage > self._summarize_threshold
        )

    async def maybe_summarize(self, user_id: str, preamble: str) -> bool:
        """Replace a conversation by its summary if it is over the threshold.

        The new conversation holds a single system turn: the preamble
        followed by the summary. Previous user and assistant turns are
        discarded.

        Args:
            user_id: User identity.
            preamble: Freshly rendered system prompt.

        Returns:
            True if the conversation was summarized.

        Raises:
            LLMError: If summarization fails. The conversation is unchanged.
        """
        if not self.needs_summary(user_id):
            return False

        conversation = self._conversations[user_id]
        logger.info(
            "Conversation is being summarized: user=%s turns=%d tokens=%d",
            user_id,
            len(conversation),
            conversation.token_usage,
        )
        summary = await self._summarizer.summarize(conversation)
        self._conversations[user_id] = Conversation.start(
            user_id, f"{preamble}{SUMMARY_HEADER}{summary}"
        )
        logger.debug("Summary for user=%s: %s", user_id, summary)
        return True

    def restore(self, user_id: str, snapshot: Conversation | None) -> None:
        """Put back a conversation taken with get().

        Args:
            user_id: User identity.
            snapshot: Conversation to restore. None removes the conversation.
        """
        if snapshot is None:
            self._conversations.pop(user_id, None)
        else:
            self._conversations[user_id] = snapshot

    def _append(self, user_id: str, turn: Turn) -> Conversation:
        conversation = self._conversations[user_id].append(turn)
        self._conversations[user_id] = conversation
        return conversation
