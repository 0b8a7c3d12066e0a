"""アプリケーションのエントリポイント"""

import asyncio
import logging
import os
import signal
import sys
from pathlib import Path

from google.cloud import speech, storage, vision

from parley.application.services import (
    AttachmentSummarizer,
    ConversationStore,
    MessageNormalizer,
)
from parley.application.use_cases import ReplyToDirectMessageUseCase
from parley.config import Config, ConfigError, LoggingConfig, load_config
from parley.infrastructure.google import (
    GCSObjectStorage,
    GoogleSpeechTranscriber,
    GoogleVisionAnnotator,
)
from parley.infrastructure.http import HttpContentFetcher, MediaDownloader
from parley.infrastructure.llm import (
    LLMClient,
    LLMConversationSummarizer,
    SystemPromptBuilder,
)
from parley.infrastructure.slack import (
    SlackAppRunner,
    SlackEventAdapter,
    SlackMessagingService,
    create_slack_app,
)
from parley.presentation import register_handlers

# Default logging for early startup
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "PARLEY_CONFIG"


def configure_logging(config: LoggingConfig | None) -> None:
    """Configure logging based on config.

    Args:
        config: Logging configuration. If None, uses defaults.
    """
    if config is None:
        return

    # Get root logger
    root_logger = logging.getLogger()

    # Set root level
    level = getattr(logging, config.level.upper(), logging.INFO)
    root_logger.setLevel(level)

    # Update handler format if specified
    if root_logger.handlers:
        formatter = logging.Formatter(config.format)
        for handler in root_logger.handlers:
            handler.setFormatter(formatter)

    # Configure individual loggers
    if config.loggers:
        for logger_name, logger_level in config.loggers.items():
            individual_logger = logging.getLogger(logger_name)
            individual_level = getattr(logging, logger_level.upper(), logging.INFO)
            individual_logger.setLevel(individual_level)
            logger.debug(
                "Set logger '%s' to level %s", logger_name, logger_level.upper()
            )


def build_normalizer(
    config: Config,
    llm_client: LLMClient,
    downloader: MediaDownloader,
) -> MessageNormalizer:
    """Wire the message normalizer and its Google Cloud collaborators.

    Args:
        config: Application configuration.
        llm_client: Completion client narrating image annotations.
        downloader: Authenticated downloader for attachment files.

    Returns:
        MessageNormalizer instance.
    """
    annotator = GoogleVisionAnnotator(
        client=vision.ImageAnnotatorAsyncClient(),
        downloader=downloader,
        timeout_seconds=config.google.timeout_seconds,
    )
    object_storage = GCSObjectStorage(
        client=storage.Client(project=config.google.project_id),
        bucket_name=config.google.bucket_name,
        timeout_seconds=config.google.timeout_seconds,
    )
    transcriber = GoogleSpeechTranscriber(
        client=speech.SpeechAsyncClient(),
        storage=object_storage,
        downloader=downloader,
        config=config.media,
        timeout_seconds=config.google.timeout_seconds,
    )
    return MessageNormalizer(
        content_fetcher=HttpContentFetcher(config.links),
        attachment_summarizer=AttachmentSummarizer(annotator, llm_client),
        transcriber=transcriber,
        voice_message_names=config.media.voice_message_names,
    )


async def main() -> None:
    """アプリケーションを起動する"""
    config_path = Path(os.environ.get(CONFIG_PATH_ENV, "config.yaml"))
    if not config_path.exists():
        logger.error("%s not found", config_path)
        sys.exit(1)

    try:
        config = load_config(config_path)
    except ConfigError as e:
        logger.error("Failed to load config: %s", e)
        sys.exit(1)

    # Apply logging configuration
    configure_logging(config.logging)

    app = create_slack_app(config.slack)

    # Get bot user
    messaging_service = SlackMessagingService(app.client)
    bot_user = await messaging_service.get_bot_user()
    logger.info("Bot user ID: %s", bot_user.id)

    # Build dependencies
    debug_llm_messages = bool(config.logging and config.logging.debug_llm_messages)
    llm_client = LLMClient(
        config.llm["default"],
        debug_llm_messages=debug_llm_messages,
    )
    # Use summary LLM config if available, otherwise use default
    summary_llm_client = LLMClient(
        config.llm.get("summary", config.llm["default"]),
        debug_llm_messages=debug_llm_messages,
    )

    downloader = MediaDownloader(
        headers={"Authorization": f"Bearer {config.slack.bot_token}"},
        timeout_seconds=config.media.download_timeout_seconds,
        scratch_dir=config.media.scratch_dir,
    )
    conversation_store = ConversationStore(
        summarizer=LLMConversationSummarizer(summary_llm_client),
        summarize_threshold=config.conversation.summarize_threshold,
    )

    reply_use_case = ReplyToDirectMessageUseCase(
        messaging_service=messaging_service,
        completion_client=llm_client,
        normalizer=build_normalizer(config, llm_client, downloader),
        conversation_store=conversation_store,
        prompt_builder=SystemPromptBuilder(config.persona, bot_user),
        bot_user=bot_user,
        max_message_length=config.slack.max_message_length,
        turn_timeout_seconds=config.conversation.turn_timeout_seconds,
    )

    register_handlers(
        app,
        reply_use_case,
        SlackEventAdapter(app.client),
        bot_user.id,
    )

    runner = SlackAppRunner(app, config.slack.app_token)

    logger.info("Starting %s...", config.persona.name)
    logger.info("Starting Socket Mode handler...")

    runner_task = asyncio.create_task(runner.start())

    # Setup signal handlers for graceful shutdown
    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()

    def shutdown_handler() -> None:
        logger.info("Received shutdown signal...")
        stop_event.set()

    loop.add_signal_handler(signal.SIGINT, shutdown_handler)
    loop.add_signal_handler(signal.SIGTERM, shutdown_handler)

    # Wait for shutdown signal
    await stop_event.wait()

    # Graceful shutdown
    logger.info("Shutting down...")

    closed = await runner.close(timeout=5.0)
    if not closed:
        logger.warning("Runner close timed out, cancelling tasks...")

    runner_task.cancel()
    await asyncio.gather(runner_task, return_exceptions=True)

    logger.info("Shutdown complete")


def run() -> None:
    """Run the async main function."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Shutting down...")


if __name__ == "__main__":
    run()
