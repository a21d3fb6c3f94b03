"""Application Settings"""
from functools import lru_cache

from pydantic_settings import BaseSettings


class ConfigurationError(Exception):
    """必須設定の欠落エラー"""

    pass


class Settings(BaseSettings):
    """
    アプリケーション設定

    12-Factor App の Config 原則に従い、
    すべての設定は環境変数から取得する。
    起動時に一度だけ構築し、各ハンドラへ注入する。
    """

    # Service
    service_name: str = "chime-integration"
    environment: str = "development"
    log_level: str = "INFO"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 8000

    # AWS
    aws_region: str = ""
    media_region: str = ""

    # Chime SDK Messaging
    app_instance_arn: str = ""

    # STS（クライアント向け短期認証情報）
    messaging_role_arn: str = ""
    credential_ttl_seconds: int = 900

    # CORS
    cors_origins: list[str] = []

    class Config:
        env_file = ".env"
        case_sensitive = False

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    def require_region(self) -> str:
        """AWS リージョンを取得（未設定ならエラー）"""
        if not self.aws_region:
            raise ConfigurationError("AWS_REGION is not configured")
        return self.aws_region

    def require_media_region(self) -> str:
        """メディアリージョンを取得（未設定なら AWS リージョン）"""
        return self.media_region or self.require_region()

    def require_app_instance_arn(self) -> str:
        """App Instance ARN を取得（未設定ならエラー）"""
        if not self.app_instance_arn:
            raise ConfigurationError("APP_INSTANCE_ARN is not configured")
        return self.app_instance_arn

    def missing_settings(self) -> list[str]:
        """未設定の必須項目（環境変数名）"""
        missing = []
        if not self.aws_region:
            missing.append("AWS_REGION")
        if not self.app_instance_arn:
            missing.append("APP_INSTANCE_ARN")
        return missing


@lru_cache()
def get_settings() -> Settings:
    """設定のシングルトンインスタンスを取得"""
    return Settings()
