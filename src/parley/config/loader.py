"""YAML設定ファイルの読み込みと環境変数展開"""

import os
import re
from pathlib import Path
from typing import Any

import yaml
from google.cloud import speech

from parley.config.models import (
    Config,
    ConversationConfig,
    GoogleCloudConfig,
    LinkEmbedConfig,
    LLMConfig,
    LoggingConfig,
    MediaConfig,
    PersonaConfig,
    SlackConfig,
)


class ConfigError(Exception):
    """設定関連の基底例外"""


class ConfigValidationError(ConfigError):
    """設定値のバリデーションエラー"""


class EnvironmentVariableError(ConfigError):
    """環境変数が見つからないエラー"""


# 環境変数パターン: ${VAR_NAME}
ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def expand_env_vars(value: str) -> str:
    """文字列中の ${VAR_NAME} を環境変数の値に置換する

    Args:
        value: 置換対象の文字列

    Returns:
        環境変数が展開された文字列

    Raises:
        EnvironmentVariableError: 環境変数が未設定
    """
    if not value:
        return value

    def replace_var(match: re.Match[str]) -> str:
        var_name = match.group(1)
        env_value = os.environ.get(var_name)
        if env_value is None:
            raise EnvironmentVariableError(
                f"Environment variable '{var_name}' is not set"
            )
        return env_value

    return ENV_VAR_PATTERN.sub(replace_var, value)


def _expand_recursive(data: Any) -> Any:
    """データ構造を再帰的に走査し、文字列中の環境変数を展開する"""
    if isinstance(data, dict):
        return {key: _expand_recursive(value) for key, value in data.items()}
    elif isinstance(data, list):
        return [_expand_recursive(item) for item in data]
    elif isinstance(data, str):
        return expand_env_vars(data)
    else:
        return data


def _validate_required_field(data: dict[str, Any], field: str, parent: str = "") -> Any:
    """必須フィールドの存在を検証する

    Args:
        data: 検証対象のdict
        field: フィールド名
        parent: 親フィールド名（エラーメッセージ用）

    Returns:
        フィールドの値

    Raises:
        ConfigValidationError: フィールドが存在しない、または空文字列
    """
    if field not in data or data[field] is None or data[field] == "":
        full_path = f"{parent}.{field}" if parent else field
        raise ConfigValidationError(f"Required field '{full_path}' is missing")
    return data[field]


def _load_links(data: dict[str, Any] | None) -> LinkEmbedConfig:
    if not data:
        return LinkEmbedConfig()
    defaults = LinkEmbedConfig()
    return LinkEmbedConfig(
        allowed_content_types=data.get(
            "allowed_content_types", defaults.allowed_content_types
        ),
        timeout_seconds=data.get("timeout_seconds", defaults.timeout_seconds),
        max_content_length=data.get(
            "max_content_length", defaults.max_content_length
        ),
    )


def _load_media(data: dict[str, Any] | None) -> MediaConfig:
    if not data:
        return MediaConfig()
    defaults = MediaConfig()
    config = MediaConfig(
        voice_message_names=data.get(
            "voice_message_names", defaults.voice_message_names
        ),
        scratch_dir=data.get("scratch_dir", defaults.scratch_dir),
        download_timeout_seconds=data.get(
            "download_timeout_seconds", defaults.download_timeout_seconds
        ),
        audio_encoding=data.get("audio_encoding", defaults.audio_encoding),
        audio_sample_rate_hertz=data.get(
            "audio_sample_rate_hertz", defaults.audio_sample_rate_hertz
        ),
        audio_language_code=data.get(
            "audio_language_code", defaults.audio_language_code
        ),
    )
    if config.audio_encoding not in speech.RecognitionConfig.AudioEncoding.__members__:
        raise ConfigValidationError(
            f"'media.audio_encoding' is not a known encoding: {config.audio_encoding}"
        )
    return config


def _load_conversation(data: dict[str, Any] | None) -> ConversationConfig:
    if not data:
        return ConversationConfig()
    config = ConversationConfig(
        summarize_threshold=data.get("summarize_threshold", 3700),
        turn_timeout_seconds=data.get("turn_timeout_seconds", 300.0),
    )
    if config.summarize_threshold <= 0:
        raise ConfigValidationError(
            "'conversation.summarize_threshold' must be positive"
        )
    return config


def load_config(path: str | Path) -> Config:
    """設定ファイルを読み込む

    Args:
        path: config.yaml のパス

    Returns:
        Config オブジェクト

    Raises:
        FileNotFoundError: ファイルが存在しない
        ConfigValidationError: 必須項目が欠落
        EnvironmentVariableError: 環境変数が未設定
        yaml.YAMLError: YAML構文エラー
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, encoding="utf-8") as f:
        raw_data = yaml.safe_load(f)

    # 環境変数を展開
    data = _expand_recursive(raw_data or {})

    # 必須セクションの検証
    slack_data = _validate_required_field(data, "slack")
    llm_data = _validate_required_field(data, "llm")
    persona_data = _validate_required_field(data, "persona")
    google_data = _validate_required_field(data, "google")

    # SlackConfig
    slack = SlackConfig(
        bot_token=_validate_required_field(slack_data, "bot_token", "slack"),
        app_token=_validate_required_field(slack_data, "app_token", "slack"),
        max_message_length=slack_data.get("max_message_length", 2000),
    )
    if slack.max_message_length <= 0:
        raise ConfigValidationError("'slack.max_message_length' must be positive")

    # LLMConfig (defaultは必須)
    _validate_required_field(llm_data, "default", "llm")
    llm: dict[str, LLMConfig] = {}
    for key, llm_item in llm_data.items():
        model = _validate_required_field(llm_item, "model", f"llm.{key}")
        llm[key] = LLMConfig(
            model=model,
            temperature=llm_item.get("temperature", 0.7),
            max_tokens=llm_item.get("max_tokens", 1000),
            timeout_seconds=llm_item.get("timeout_seconds", 60.0),
        )

    # PersonaConfig
    persona = PersonaConfig(
        name=_validate_required_field(persona_data, "name", "persona"),
        system_prompt=_validate_required_field(
            persona_data, "system_prompt", "persona"
        ),
    )

    # GoogleCloudConfig
    google = GoogleCloudConfig(
        project_id=_validate_required_field(google_data, "project_id", "google"),
        bucket_name=_validate_required_field(google_data, "bucket_name", "google"),
        timeout_seconds=google_data.get("timeout_seconds", 60.0),
    )

    # LoggingConfig (optional)
    logging_config: LoggingConfig | None = None
    logging_data = data.get("logging")
    if logging_data:
        logging_config = LoggingConfig(
            level=logging_data.get("level", "INFO"),
            format=logging_data.get(
                "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            ),
            loggers=logging_data.get("loggers"),
            debug_llm_messages=logging_data.get("debug_llm_messages", False),
        )

    return Config(
        slack=slack,
        llm=llm,
        persona=persona,
        google=google,
        links=_load_links(data.get("links")),
        media=_load_media(data.get("media")),
        conversation=_load_conversation(data.get("conversation")),
        logging=logging_config,
    )
