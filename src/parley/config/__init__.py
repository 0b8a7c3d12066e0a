"""設定管理モジュール"""

from parley.config.loader import (
    ConfigError,
    ConfigValidationError,
    EnvironmentVariableError,
    expand_env_vars,
    load_config,
)
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

__all__ = [
    "Config",
    "ConfigError",
    "ConfigValidationError",
    "ConversationConfig",
    "EnvironmentVariableError",
    "GoogleCloudConfig",
    "LLMConfig",
    "LinkEmbedConfig",
    "LoggingConfig",
    "MediaConfig",
    "PersonaConfig",
    "SlackConfig",
    "expand_env_vars",
    "load_config",
]
