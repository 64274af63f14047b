from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AnyUrl, Field, field_validator
import secrets


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables or .env.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"  # Ignore extra fields in .env file
    )

    # -------------------------
    # Database
    # -------------------------
    DATABASE_URL: AnyUrl

    # -------------------------
    # Security / Auth
    # -------------------------
    # Shared secret used to verify user access tokens issued by the auth provider
    SECRET_KEY: str = Field(default_factory=lambda: secrets.token_urlsafe(32))
    ALGORITHM: str = "HS256"

    # Credential the scheduler / sync pipeline presents on trigger endpoints
    SERVICE_ROLE_KEY: Optional[str] = None

    # -------------------------
    # Application
    # -------------------------
    PROJECT_NAME: str = "FitCoach API"
    API_V1_PREFIX: str = "/api/v1"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    TIMEZONE: str = "UTC"

    CORS_ORIGINS: List[str] = Field(default_factory=lambda: ["http://localhost:5173"])

    SQLALCHEMY_ECHO: bool = False
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10

    # -------------------------
    # Redis (for ARQ task queue)
    # -------------------------
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL for the background job queue"
    )

    # Minutes of every hour at which the worker triggers the reminder run
    REMINDER_CRON_MINUTE: int = Field(default=0, ge=0, le=59)

    # =========================================================
    # LLM Configuration
    # =========================================================
    # gateway: OpenAI-compatible chat-completions endpoint (default)
    # gemini:  Google Gemini through the google-genai SDK
    # =========================================================
    LLM_PROVIDER: str = Field(
        default="gateway",
        description="Text generation backend: 'gateway' or 'gemini'"
    )

    LLM_GATEWAY_URL: str = Field(
        default="https://ai.gateway.lovable.dev/v1/chat/completions",
        description="Chat-completions endpoint used for notification text"
    )

    LLM_GATEWAY_API_KEY: Optional[str] = Field(
        default=None,
        description="Bearer credential for the LLM gateway"
    )

    LLM_MODEL: str = Field(
        default="google/gemini-2.5-flash",
        description="Model identifier sent to the gateway"
    )

    GEMINI_API_KEY: Optional[str] = Field(
        default=None,
        description="Google Gemini API key (LLM_PROVIDER=gemini)"
    )

    GEMINI_MODEL: str = Field(
        default="gemini-2.5-flash",
        description="Gemini model used when LLM_PROVIDER=gemini"
    )

    # Short notifications only need a few sentences
    LLM_MAX_TOKENS: int = Field(
        default=100,
        ge=16,
        le=8192,
        description="Maximum tokens in a generated notification"
    )

    LLM_COACH_MAX_TOKENS: int = Field(
        default=1024,
        ge=100,
        le=8192,
        description="Maximum tokens in an AI coach reply"
    )

    LLM_TEMPERATURE: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="LLM temperature for response generation"
    )

    LLM_TIMEOUT_SECONDS: float = Field(default=30.0, gt=0)

    # -------------------------
    # Notifications
    # -------------------------
    NOTIFICATION_LOCALE: str = Field(
        default="es",
        description="Language of generated notifications and fixed titles"
    )

    RECENT_ACTIVITY_LIMIT: int = Field(default=10, ge=1, le=100)

    PUSH_NOTIFICATIONS_ENABLED: bool = False
    FIREBASE_SERVICE_ACCOUNT_KEY_PATH: Optional[str] = None

    # =========================================================
    # Health alert thresholds (wearable analysis)
    # =========================================================
    STEP_ALERT_HOUR: int = Field(default=18, ge=0, le=23)
    STEP_ALERT_MIN_STEPS: int = Field(default=5000, ge=0)
    HEART_RATE_HIGH_BPM: float = 100
    HEART_RATE_LOW_BPM: float = 50
    SLEEP_MIN_HOURS: float = 6

    # -------------------------
    # Fitness providers
    # -------------------------
    FITBIT_API_URL: str = "https://api.fitbit.com"
    FITBIT_CLIENT_ID: Optional[str] = None
    FITBIT_CLIENT_SECRET: Optional[str] = None
    FITBIT_REDIRECT_URI: Optional[str] = None

    @field_validator("LLM_PROVIDER")
    def validate_llm_provider(cls, v):
        allowed = {"gateway", "gemini"}
        if v not in allowed:
            raise ValueError(f"LLM_PROVIDER must be one of: {allowed}")
        return v

    @field_validator("NOTIFICATION_LOCALE")
    def validate_locale(cls, v):
        allowed = {"es", "en"}
        if v not in allowed:
            raise ValueError(f"NOTIFICATION_LOCALE must be one of: {allowed}")
        return v


settings = Settings()
