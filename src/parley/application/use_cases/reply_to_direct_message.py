"""Reply to direct message use case."""

import asyncio
import logging

from parley.application.services import ConversationStore, MessageNormalizer
from parley.domain.entities import CompletionResult, DirectMessage, User
from parley.domain.services import CompletionClient, MessagingService, chunk_reply
from parley.infrastructure.llm import SystemPromptBuilder
from parley.infrastructure.llm.exceptions import LLMError

logger = logging.getLogger(__name__)

APOLOGY_MESSAGE = (
    "`Whoops... There was an error generating a response to that. Sorry!`"
)


class ReplyToDirectMessageUseCase:
    """Use case for answering a direct message.

    Runs the whole pipeline for one message: normalize the input, update
    the user's conversation, ask the model for a reply, and send it back in
    chunks. At most one message per user is processed at a time.
    """

    def __init__(
        self,
        messaging_service: MessagingService,
        completion_client: CompletionClient,
        normalizer: MessageNormalizer,
        conversation_store: ConversationStore,
        prompt_builder: SystemPromptBuilder,
        bot_user: User,
        *,
        max_message_length: int = 2000,
        turn_timeout_seconds: float | None = 300.0,
    ) -> None:
        """Initialize the use case.

        Args:
            messaging_service: Service for sending messages.
            completion_client: Chat completion client.
            normalizer: Message normalizer.
            conversation_store: Per-user conversation store.
            prompt_builder: Builder of the system preamble.
            bot_user: The bot's own user record.
            max_message_length: Maximum length of one sent message.
            turn_timeout_seconds: Time limit for normalizing and answering
                one message. None disables the limit.
        """
        self._messaging_service = messaging_service
        self._completion_client = completion_client
        self._normalizer = normalizer
        self._conversation_store = conversation_store
        self._prompt_builder = prompt_builder
        self._bot_user = bot_user
        self._max_message_length = max_message_length
        self._turn_timeout = turn_timeout_seconds

    async def execute(self, message: DirectMessage) -> None:
        """Execute the use case.

        Processing flow:
        1. Ignore messages from the bot itself
        2. Show that a reply is being prepared
        3. Under the user's lock, normalize the message and update the
           conversation around one completion call
        4. Send the reply in chunks

        A failed completion keeps the user turn and sends an apology.
        A timeout, a cancellation or any other unexpected error restores the
        conversation as it was before the message and sends an apology.

        Args:
            message: The received message.
        """
        # 1. Ignore messages from the bot itself
        if message.user.id == self._bot_user.id:
            return

        # 2. Show that a reply is being prepared
        await self._send_typing(message)

        # 3. Generate the reply
        user_id = message.user.id
        async with self._conversation_store.lock(user_id):
            snapshot = self._conversation_store.get(user_id)
            try:
                result = await asyncio.wait_for(
                    self._run_turn(message),
                    timeout=self._turn_timeout,
                )
            except LLMError:
                logger.exception("Error generating response: user=%s", user_id)
                await self._send_apology(message)
                return
            except asyncio.TimeoutError:
                logger.warning("Response timed out: user=%s", user_id)
                self._conversation_store.restore(user_id, snapshot)
                await self._send_apology(message)
                return
            except asyncio.CancelledError:
                logger.warning("Response cancelled: user=%s", user_id)
                self._conversation_store.restore(user_id, snapshot)
                await asyncio.shield(self._send_apology(message))
                raise
            except Exception:
                logger.exception("Unexpected error in turn: user=%s", user_id)
                self._conversation_store.restore(user_id, snapshot)
                await self._send_apology(message)
                return

        # 4. Send the reply
        logger.info("%s: %s", self._bot_user.name, result.text)
        for chunk in chunk_reply(result.text, self._max_message_length):
            await self._messaging_service.send_message(message.channel_id, chunk)

    async def _run_turn(self, message: DirectMessage) -> CompletionResult:
        """Normalize a message and complete one conversation turn.

        Raises:
            LLMError: If summarization or the completion fails.
        """
        user_id = message.user.id
        normalized = await self._normalizer.normalize(
            message.text, message.attachments
        )
        if normalized.is_degraded:
            logger.info(
                "Message normalized with %d omitted parts: user=%s",
                len(normalized.failures),
                user_id,
            )
        logger.info("%s: %s", message.user.name, normalized.text)

        preamble = self._prompt_builder.build(message.user)
        await self._conversation_store.maybe_summarize(user_id, preamble)
        self._conversation_store.get_or_create(user_id, preamble)
        conversation = self._conversation_store.append_user(user_id, normalized.text)

        result = await self._completion_client.complete(conversation.to_messages())

        self._conversation_store.append_assistant(
            user_id, result.text, result.total_tokens
        )
        logger.info("Current tokens: user=%s tokens=%d", user_id, result.total_tokens)
        return result

    async def _send_typing(self, message: DirectMessage) -> None:
        try:
            await self._messaging_service.send_typing(message.channel_id, message.id)
        except Exception:
            logger.warning("Could not send typing indicator", exc_info=True)

    async def _send_apology(self, message: DirectMessage) -> None:
        try:
            await self._messaging_service.send_message(
                message.channel_id, APOLOGY_MESSAGE
            )
        except Exception:
            logger.exception("Error sending apology")
