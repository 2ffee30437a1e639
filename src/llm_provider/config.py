"""Environment-driven settings and client factories."""

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .clients import Client
from .retry import RetryConfig
from .transports import Vendor


class ProviderSettings(BaseSettings):
    """Credentials and client tuning loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Credentials
    anthropic_api_key: SecretStr | None = Field(default=None, description="Anthropic API key")
    openai_api_key: SecretStr | None = Field(default=None, description="OpenAI API key")
    moonshot_api_key: SecretStr | None = Field(default=None, description="Moonshot API key")
    deepseek_api_key: SecretStr | None = Field(default=None, description="DeepSeek API key")
    llm_compat_base_url: str | None = Field(
        default=None,
        description="Overrides the vendor base URL of OpenAI-compatible clients",
    )

    # Client tuning
    llm_requests_per_minute: int = Field(default=50, ge=1, description="Request budget per minute")
    llm_timeout: float = Field(default=120.0, gt=0, description="Per-attempt timeout in seconds")
    llm_max_attempts: int = Field(default=3, ge=1, description="Attempts per call, including the first")
    llm_initial_delay: float = Field(default=1.0, ge=0, description="Backoff after the first failure")
    llm_max_delay: float = Field(default=10.0, ge=0, description="Backoff ceiling in seconds")

    def retry_config(self) -> RetryConfig:
        return RetryConfig(
            max_attempts=self.llm_max_attempts,
            initial_delay=self.llm_initial_delay,
            max_delay=self.llm_max_delay,
        )

    def api_key_for(self, vendor: Vendor | str) -> str | None:
        """Return the credential for an OpenAI-compatible vendor, if set."""
        secret = getattr(self, f"{Vendor(vendor).value}_api_key")
        return secret.get_secret_value() if secret else None

    def client_options(self) -> dict:
        return {
            "retry_config": self.retry_config(),
            "requests_per_window": self.llm_requests_per_minute,
            "rate_window": 60.0,
            "timeout": self.llm_timeout,
        }


def create_native_client(settings: ProviderSettings | None = None, **kwargs) -> Client:
    """
    Build an Anthropic client from settings.

    Raises:
        MissingCredentialError: If ANTHROPIC_API_KEY is not set
    """
    settings = settings or ProviderSettings()
    key = settings.anthropic_api_key.get_secret_value() if settings.anthropic_api_key else None
    return Client.native(key, **{**settings.client_options(), **kwargs})


def create_compat_client(
    vendor: Vendor | str = Vendor.OPENAI,
    settings: ProviderSettings | None = None,
    **kwargs,
) -> Client:
    """
    Build an OpenAI-compatible client for `vendor` from settings.

    Raises:
        ConfigurationError: If the vendor is unknown
        MissingCredentialError: If the vendor's API key is not set
    """
    settings = settings or ProviderSettings()
    try:
        api_key = settings.api_key_for(vendor)
    except ValueError:
        api_key = None  # CompatTransport reports the unsupported vendor
    return Client.compat(
        api_key,
        vendor,
        settings.llm_compat_base_url,
        **{**settings.client_options(), **kwargs},
    )
