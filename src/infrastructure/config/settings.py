"""アプリケーション設定（Pydantic Settings）"""
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """アプリケーション設定"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Project
    project_name: str = Field(
        default="minetrack-maps-resolver",
        description="プロジェクト名",
    )
    environment: str = Field(
        default="development",
        description="環境 (development, staging, production)",
    )

    # Expansion client
    expander_base_url: str = Field(
        default="http://localhost:3001",
        description="短縮リンク展開サービスのベースURL",
    )
    expander_timeout: float = Field(
        default=10.0,
        description="展開サービス呼び出しのタイムアウト（秒）",
    )
    direct_fallback_enabled: bool = Field(
        default=True,
        description="展開サービスに到達できない場合に短縮リンクを直接取得するか",
    )

    # Expansion service
    redirect_fetch_timeout: float = Field(
        default=10.0,
        description="リダイレクト先取得（1ホップ目）のタイムアウト（秒）",
    )
    html_fetch_timeout: float = Field(
        default=10.0,
        description="リダイレクト先HTML取得のタイムアウト（秒）",
    )
    user_agent: str = Field(
        default="Mozilla/5.0 (compatible; MineTrackMapsResolver/1.0)",
        description="HTTPリクエストのUser-Agent",
    )
    cors_allow_origins: str = Field(
        default="*",
        description="CORSで許可するオリジン（カンマ区切り）",
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="ログレベル (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )

    # Server
    host: str = Field(
        default="0.0.0.0",
        description="HTTPサーバーのバインドアドレス",
    )
    port: int = Field(
        default=3001,
        description="HTTPサーバーのポート番号",
    )

    def get_cors_origins(self) -> list[str]:
        """CORS許可オリジンのリストを取得"""
        return [origin.strip() for origin in self.cors_allow_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """本番環境かどうか"""
        return self.environment.lower() == "production"
