"""設定データクラス"""

from dataclasses import dataclass, field


@dataclass
class SlackConfig:
    """Slack接続設定"""

    bot_token: str
    app_token: str
    max_message_length: int = 2000


@dataclass
class LLMConfig:
    """LLM設定（LiteLLMのcompletionに渡すdict）"""

    model: str
    temperature: float = 0.7
    max_tokens: int = 1000
    timeout_seconds: float = 60.0


@dataclass
class PersonaConfig:
    """ペルソナ設定"""

    name: str
    system_prompt: str


@dataclass
class GoogleCloudConfig:
    """Google Cloud (Vision / Speech / Storage) 設定"""

    project_id: str
    bucket_name: str
    timeout_seconds: float = 60.0


@dataclass
class LinkEmbedConfig:
    """メッセージ中のリンク展開設定

    Attributes:
        allowed_content_types: 展開を許可する Content-Type の接頭辞
        timeout_seconds: 取得タイムアウト秒数
        max_content_length: 展開する本文の最大文字数
    """

    allowed_content_types: list[str] = field(
        default_factory=lambda: [
            "application/json",
            "application/xml",
            "text/plain",
        ]
    )
    timeout_seconds: float = 10.0
    max_content_length: int = 20000


@dataclass
class MediaConfig:
    """添付ファイル処理設定

    Attributes:
        voice_message_names: 音声メッセージとして扱うファイル名
        scratch_dir: 音声ファイルの一時保存先（None でシステムの一時ディレクトリ）
        download_timeout_seconds: 添付ファイル取得のタイムアウト秒数
        audio_encoding: 音声認識に渡すエンコーディング
        audio_sample_rate_hertz: 音声認識に渡すサンプリングレート
        audio_language_code: 音声認識の言語コード
    """

    voice_message_names: list[str] = field(
        default_factory=lambda: ["voice-message.ogg"]
    )
    scratch_dir: str | None = None
    download_timeout_seconds: float = 30.0
    audio_encoding: str = "OGG_OPUS"
    audio_sample_rate_hertz: int = 48000
    audio_language_code: str = "en-US"


@dataclass
class ConversationConfig:
    """会話履歴設定

    Attributes:
        summarize_threshold: この値を超えるトークン数で会話を要約する
        turn_timeout_seconds: 1メッセージの処理全体のタイムアウト秒数
    """

    summarize_threshold: int = 3700
    turn_timeout_seconds: float = 300.0


@dataclass
class LoggingConfig:
    """ログ設定"""

    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    loggers: dict[str, str] | None = None
    debug_llm_messages: bool = False


@dataclass
class Config:
    """アプリケーション設定"""

    slack: SlackConfig
    llm: dict[str, LLMConfig]
    persona: PersonaConfig
    google: GoogleCloudConfig
    links: LinkEmbedConfig = field(default_factory=LinkEmbedConfig)
    media: MediaConfig = field(default_factory=MediaConfig)
    conversation: ConversationConfig = field(default_factory=ConversationConfig)
    logging: LoggingConfig | None = None
