"""
coolshot/core/config.py

Purpose: Application configuration

- Loads environment variables
- Centralizes config values (admin number, AI endpoints, storage paths, etc.)
- Validates configuration on startup
- Environment-specific settings
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from typing import List, Optional, Literal


DEFAULT_PRIMARY_APIS = [
    "https://api.giftedtech.co.ke/api/ai/gpt4o",
    "https://api.giftedtech.co.ke/api/ai/geminiaipro",
    "https://api.giftedtech.co.ke/api/ai/meta-llama",
    "https://api.giftedtech.co.ke/api/ai/copilot",
    "https://api.giftedtech.co.ke/api/ai/ai",
]


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.
    Validates all required configs on startup.
    """

    # Environment
    ENVIRONMENT: Literal["development", "staging", "production"] = "development"

    # Bot identity
    BOT_NAME: str = Field(
        default="Cool Shot AI",
        description="Assistant name used in replies and brand normalization"
    )
    BOT_VERSION: str = Field(default="1.0.0", description="Bot version shown in status messages")
    COMPANY_NAME: str = Field(
        default="Cool Shot Systems",
        description="Company name used in replies and brand normalization"
    )
    SUPPORT_EMAIL: str = Field(default="support@coolshotsystems.com")
    TIMEZONE: str = Field(
        default="Africa/Lagos",
        description="Timezone for timestamps shown to users"
    )

    # Admin / connection
    PRIMARY_ADMIN_NUMBER: str = Field(
        default="2348000000000",
        description="Primary admin WhatsApp number with country code, digits only"
    )
    PHONE_NUMBER: str = Field(
        default="2349000000000",
        description="WhatsApp number the bot runs on, digits only"
    )

    # Server
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=3000, description="HTTP port for the webhook server")
    API_PREFIX: str = Field(default="/api/v1", description="API route prefix")
    CORS_ORIGINS: list = Field(default=["*"], description="Allowed CORS origins")

    # Storage
    USERS_FILE: str = Field(default="./data/users.json", description="User table JSON document")
    ANALYTICS_FILE: str = Field(default="./data/analytics.json", description="Analytics JSON document")

    # AI providers
    AI_PRIMARY_APIS: List[str] = Field(
        default_factory=lambda: list(DEFAULT_PRIMARY_APIS),
        description="Ordered primary AI endpoints, tried first to last"
    )
    AI_API_KEY: str = Field(default="gifted", description="API key for the primary endpoints")
    AI_TIMEOUT_SECONDS: float = Field(default=8.0, description="Per-request timeout for AI calls")
    AI_STATUS_TIMEOUT_SECONDS: float = Field(default=5.0, description="Timeout for /apistatus probes")
    GOOGLE_API_KEY: Optional[str] = Field(
        default=None,
        description="Gemini API key; the fallback provider is disabled when unset"
    )
    GEMINI_MODEL: str = Field(default="gemini-1.5-flash")
    GEMINI_API_URL: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta/models",
        description="Base URL of the Gemini generateContent API"
    )

    # Defaults for per-session selections
    DEFAULT_ROLE: str = Field(default="Brain Master")
    DEFAULT_LANGUAGE: str = Field(default="en")

    # Broadcast pacing
    BROADCAST_DELAY_SECONDS: float = Field(
        default=0.1,
        description="Pause between broadcast sends to respect transport rate limits"
    )

    # Twilio WhatsApp transport
    TWILIO_ACCOUNT_SID: Optional[str] = Field(default=None)
    TWILIO_AUTH_TOKEN: Optional[str] = Field(default=None)
    TWILIO_WHATSAPP_NUMBER: Optional[str] = Field(
        default=None,
        description="Sender number, e.g. whatsapp:+14155238886"
    )

    # Application
    DEBUG: bool = Field(default=False, description="Enable debug mode")
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    LOG_TO_FILE: bool = Field(default=False, description="Also write rotating log files")
    LOG_DIR: str = Field(default="./logs")

    @field_validator("PRIMARY_ADMIN_NUMBER", "PHONE_NUMBER")
    @classmethod
    def validate_phone_number(cls, v: str) -> str:
        """Numbers are stored without '+' or spaces."""
        cleaned = v.strip().lstrip("+").replace(" ", "")
        if not cleaned.isdigit():
            raise ValueError("Phone numbers must contain digits only (country code included)")
        return cleaned

    @property
    def PRIMARY_ADMIN_ID(self) -> str:
        """WhatsApp JID of the primary admin."""
        return f"{self.PRIMARY_ADMIN_NUMBER}@s.whatsapp.net"

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"

    @property
    def fallback_configured(self) -> bool:
        return bool(self.GOOGLE_API_KEY)

    class Config:
        env_file = ".env"
        case_sensitive = True
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()


def validate_settings(config: Optional[Settings] = None) -> bool:
    """
    Validates critical settings on application startup.
    Raises ValueError if any required setting is missing or invalid.
    """
    config = config or settings
    errors = []

    if not config.AI_PRIMARY_APIS and not config.fallback_configured:
        errors.append("At least one of AI_PRIMARY_APIS or GOOGLE_API_KEY is required")

    if not config.USERS_FILE or not config.ANALYTICS_FILE:
        errors.append("USERS_FILE and ANALYTICS_FILE are required")

    # Production-specific validations
    if config.is_production:
        if not config.TWILIO_ACCOUNT_SID or not config.TWILIO_AUTH_TOKEN:
            errors.append("TWILIO_ACCOUNT_SID and TWILIO_AUTH_TOKEN are required in production")
        if not config.TWILIO_WHATSAPP_NUMBER:
            errors.append("TWILIO_WHATSAPP_NUMBER is required in production")

    if errors:
        raise ValueError(f"Configuration validation failed: {', '.join(errors)}")

    return True
