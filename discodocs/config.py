"""
Generator config loaded from environment and .env via Pydantic Settings.
"""
from typing import Annotated

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

DEFAULT_OPENAI_MODEL = "gpt-4o-mini"
DISCOVERY_DIRECTORY_URL = "https://www.googleapis.com/discovery/v1/apis"


class Settings(BaseSettings):
    # Settings from environment (and .env).

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    openai_api_key: str | None = None
    openai_model: str = DEFAULT_OPENAI_MODEL
    discovery_directory_url: str = DISCOVERY_DIRECTORY_URL
    default_discovery_url: str | None = None
    allowed_discovery_origins: Annotated[list[str], NoDecode] = []
    fetch_timeout: float = 10.0

    generator_version: str = "5.0.2"
    site_url_template: str = "http://byron.github.io/google-apis-rs/{crate}"
    repo_url_template: str = "https://github.com/Byron/google-apis-rs/tree/main/gen/{directory}"
    docs_base_url: str = "http://byron.github.io/google-apis-rs"
    copyright: str = "Copyright &copy; 2015-2020, `Sebastian Thiel`"
    author: str = "Sebastian Thiel <byronimo@gmail.com>"
    theme: str = "readthedocs"
    cli_config_dir: str = "~/.google-service-cli"

    @field_validator("allowed_discovery_origins", mode="before")
    @classmethod
    def parse_allowed_origins(cls, v: str | list[str] | None) -> list[str]:
        if v is None:
            return []
        if isinstance(v, list):
            return [x.strip() for x in v if isinstance(x, str) and x.strip()]
        s = str(v).strip()
        if not s:
            return []
        return [x.strip() for x in s.split(",") if x.strip()]


settings = Settings()
