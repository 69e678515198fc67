from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""  # anon key; row-level security applies per signed-in user
    oauth_provider: str = "google"

    # Browser session cookie
    session_secret: str = "change-me"
    session_cookie_name: str = "vtboard_session"
    session_cookie_secure: bool = False
    session_max_age: int = 60 * 60 * 24 * 14

    # App
    app_name: str = "vtboard"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    display_timezone: str = "Asia/Seoul"
    rate_limit: str = "60/minute"  # slowapi format, e.g. "60/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def missing_required(self) -> List[str]:
        """Names of the endpoint/credential values the board cannot start without."""
        missing = []
        if not self.supabase_url.strip():
            missing.append("SUPABASE_URL")
        if not self.supabase_key.strip():
            missing.append("SUPABASE_KEY")
        return missing

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
