from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from pathlib import Path

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    output_dir: Path = Field(default=Path("./out"), alias="SCHEMA_ERD_OUTPUT_DIR")
    # 설정 시 output_dir 와 central_dir/diagrams 두 곳에 기록
    central_dir: Path | None = Field(default=None, alias="SCHEMA_ERD_CENTRAL_DIR")

    schema_file_prefix: str = Field(default="postgres-schema-", alias="SCHEMA_ERD_SCHEMA_PREFIX")
    max_age_hours: float = Field(default=24.0, alias="SCHEMA_ERD_MAX_AGE_HOURS")
    default_format: str = Field(default="mermaid", alias="SCHEMA_ERD_DEFAULT_FORMAT")

settings = Settings()
