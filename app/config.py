from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "Multilingual CMS"
    app_version: str = "1.0.0"
    debug: bool = False
    environment: str = "development"

    # Database settings
    database_url: str = "sqlite+aiosqlite:///./cms.db"

    # Language used when a request names none (must be one of SUPPORTED_LANGUAGES)
    default_language: str = "en"

    # Admin HTTP Basic credentials (admin is open when either is unset)
    admin_user: str | None = None
    admin_password: str | None = None

    # Uploads
    upload_dir: str = "public/uploads"
    upload_url_prefix: str = "/uploads"
    max_upload_size: int = 10 * 1024 * 1024
    max_team_photo_size: int = 2 * 1024 * 1024

    # Logging
    log_json: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def admin_auth_enabled(self) -> bool:
        return bool(self.admin_user and self.admin_password)


settings = Settings()
