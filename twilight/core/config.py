from pydantic import BaseModel
import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


class Settings(BaseModel):
    database_url: str
    access_token_secret: str
    refresh_token_secret: str
    jwt_algorithm: str = "HS256"
    access_token_minutes: int = 1
    refresh_token_days: int = 7
    link_validity_hours: int = 24
    reset_password_token_hours: int = 1
    max_nb_tweets: int = 20
    max_nb_hashtags: int = 10
    tweets_sample_size: int = 100
    smtp_host: str | None = None
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_pass: str | None = None
    smtp_from: str | None = None
    application_email_name: str = "TWILIGHT application admin"
    public_frontend_url: str = "http://localhost:3000"
    public_backend_url: str = "http://localhost:8000"
    env: str = "development"
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.env == "production"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        access_token_secret = os.getenv("ACCESS_TOKEN_SECRET", "")
        refresh_token_secret = os.getenv("REFRESH_TOKEN_SECRET", "")
        if not access_token_secret:
            raise RuntimeError("ACCESS_TOKEN_SECRET is not set")
        if not refresh_token_secret:
            raise RuntimeError("REFRESH_TOKEN_SECRET is not set")
        _settings = Settings(
            database_url=os.getenv("DATABASE_URL", ""),
            access_token_secret=access_token_secret,
            refresh_token_secret=refresh_token_secret,
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            access_token_minutes=int(os.getenv("ACCESS_TOKEN_MINUTES", "1")),
            refresh_token_days=int(os.getenv("REFRESH_TOKEN_DAYS", "7")),
            link_validity_hours=int(os.getenv("LINK_VALIDITY_HOURS", "24")),
            reset_password_token_hours=int(os.getenv("RESET_PASSWORD_TOKEN_HOURS", "1")),
            max_nb_tweets=int(os.getenv("MAX_NB_TWEETS", "20")),
            max_nb_hashtags=int(os.getenv("MAX_NB_HASHTAGS", "10")),
            tweets_sample_size=int(os.getenv("TWEETS_SAMPLE_SIZE", "100")),
            smtp_host=os.getenv("SMTP_HOST"),
            smtp_port=int(os.getenv("SMTP_PORT", "587")),
            smtp_user=os.getenv("SMTP_USER"),
            smtp_pass=os.getenv("SMTP_PASS"),
            smtp_from=os.getenv("SMTP_FROM"),
            application_email_name=os.getenv("APPLICATION_EMAIL_NAME", "TWILIGHT application admin"),
            public_frontend_url=os.getenv("PUBLIC_FRONTEND_URL", "http://localhost:3000"),
            public_backend_url=os.getenv("PUBLIC_BACKEND_URL", "http://localhost:8000"),
            env=os.getenv("ENV", "development"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )
    return _settings
