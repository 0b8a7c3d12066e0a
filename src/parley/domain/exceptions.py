"""Domain exceptions."""


class IngestionError(Exception):
    """入力の取り込み（リンク展開・添付ファイル処理）に失敗した場合の基底例外

    取り込み処理の失敗はメッセージ全体の失敗にはならず、
    該当部分を省略して処理を続行する。
    """

    def __init__(self, source: str, message: str = "") -> None:
        """初期化

        Args:
            source: 失敗した対象（URL など）
            message: エラーメッセージ（オプション）
        """
        self.source = source
        super().__init__(message or f"Failed to ingest {source}")


class FetchError(IngestionError):
    """メッセージ中のリンクを取得・展開できない"""


class AnnotationError(IngestionError):
    """画像の解析に失敗した"""


class TranscriptionError(IngestionError):
    """音声メッセージの文字起こしに失敗した"""


class UploadError(IngestionError):
    """オブジェクトストレージへのアップロードに失敗した"""
