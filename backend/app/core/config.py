from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Server
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"

    # Firebase service account
    firebase_project_id: str = Field(min_length=1)
    firebase_client_email: str = Field(min_length=1)
    firebase_private_key: str = Field(min_length=1)

    # Firestore layout
    users_collection: str = "users"
    chat_history_collection: str = "chat_history"
    chat_history_limit: int = 5

    # DeepSeek (OpenAI-compatible)
    deepseek_api_key: str = Field(min_length=1)
    deepseek_base_url: str = "https://api.deepseek.com"
    llm_model: str = "deepseek-chat"
    llm_temperature: float = 0.3
    llm_max_tokens: int = 500

    # Assistant prompt
    assistant_name: str = "REMI"
    answer_general_questions: bool = True
    timezone: str = "Africa/Nairobi"  # EAT, UTC+3

    class Config:
        env_file = ".env"
        case_sensitive = False

    @field_validator("firebase_private_key")
    @classmethod
    def unescape_private_key(cls, value: str) -> str:
        # Keys pasted into a single env line carry literal "\n" sequences
        return value.replace("\\n", "\n")

    @property
    def firebase_credentials(self) -> dict[str, str]:
        """Service-account mapping accepted by ``credentials.Certificate``."""
        return {
            "type": "service_account",
            "project_id": self.firebase_project_id,
            "client_email": self.firebase_client_email,
            "private_key": self.firebase_private_key,
            "token_uri": "https://oauth2.googleapis.com/token",
        }


@lru_cache()
def get_settings() -> Settings:
    return Settings()
