from typing import Optional
from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Export .env values to os.environ as well, so the OpenAI client sees OPENAI_API_KEY
load_dotenv()

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class Settings(BaseSettings):
    """Importer settings with environment variable support"""

    # API Keys
    openai_api_key: Optional[str] = None

    # Completion service
    openai_model: str = "gpt-4o-mini"
    openai_model_fallback: Optional[str] = None
    assisted_temperature: float = 0.3
    assisted_max_tokens: int = 2000

    # Extraction thresholds
    assisted_max_chars: int = 4000
    assisted_min_chars: int = 100
    density_min_chars: int = 500

    # Source fetching
    fetch_timeout: float = 15.0
    fetch_user_agent: str = DEFAULT_USER_AGENT

    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False  # Allow OPENAI_API_KEY or openai_api_key


# Create singleton instance
settings = Settings()
