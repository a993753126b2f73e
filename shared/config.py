import os
from typing import List, Tuple
from pydantic import BaseModel, Field
from dotenv import load_dotenv

load_dotenv()

DEFAULT_LANGUAGES = (
    "Hindi", "Bengali", "Telugu", "Tamil", "Marathi",
    "Gujarati", "Kannada", "Malayalam", "Punjabi", "Urdu",
)

def _csv(value: str) -> List[str]:
    return [v.strip() for v in value.split(",") if v.strip()]

class Settings(BaseModel):
    app_env: str = Field(default=os.getenv("APP_ENV", "dev"))
    data_dir: str = Field(default=os.getenv("DATA_DIR", "./storage_data"))
    log_level: str = Field(default=os.getenv("LOG_LEVEL", "INFO"))
    cors_origins: List[str] = Field(default=_csv(os.getenv("CORS_ORIGINS", "*")))

    # Azure OpenAI
    az_endpoint: str = Field(default=os.getenv("AZURE_OPENAI_ENDPOINT", ""))
    az_api_key: str = Field(default=os.getenv("AZURE_OPENAI_API_KEY", ""))
    az_api_version: str = Field(default=os.getenv("AZURE_OPENAI_API_VERSION", "2024-06-01"))
    az_deployment: str = Field(default=os.getenv("AZURE_OPENAI_DEPLOYMENT", "gpt-4o"))
    az_model: str = Field(default=os.getenv("AZURE_OPENAI_MODEL", "gpt-4.1-2025-04-14"))

    # Bearer credentials are issued by the auth service; we only verify them
    jwt_secret: str = Field(default=os.getenv("ACCESS_TOKEN_SECRET", "dev-secret-change-me"))
    jwt_algorithm: str = Field(default=os.getenv("ACCESS_TOKEN_ALGORITHM", "HS256"))

    # Pipeline limits
    upload_field_name: str = "PolicyPdf"
    max_upload_bytes: int = Field(default=int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024))))
    max_prompt_chars: int = Field(default=int(os.getenv("MAX_PROMPT_CHARS", "120000")))
    supported_languages: Tuple[str, ...] = Field(
        default=tuple(_csv(os.getenv("SUPPORTED_LANGUAGES", ""))) or DEFAULT_LANGUAGES
    )

    # LangSmith
    langsmith_api_key: str = Field(default=os.getenv("LANGSMITH_API_KEY", ""))
    langsmith_project: str = Field(default=os.getenv("LANGSMITH_PROJECT", "policy-summaries"))
    langsmith_tracing: bool = Field(default=os.getenv("LANGSMITH_TRACING", "0") == "1")

settings = Settings()
os.makedirs(settings.data_dir, exist_ok=True)
