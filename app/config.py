# app/config.py
from __future__ import annotations
from pathlib import Path
from typing import Any, Optional
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DefaultWorkflowEngineParameterSettings(BaseModel):
    name: str
    type: str
    default_value: Optional[str] = None


class ServiceInfoSettings(BaseModel):
    """Static WES service-info metadata. Pure data."""
    auth_instructions_url: str = ""
    contact_info_url: str = ""
    supported_filesystem_protocols: list[str] = Field(default_factory=lambda: ["file", "s3", "score"])
    supported_wes_versions: list[str] = Field(default_factory=lambda: ["1.0.0"])
    tags: dict[str, str] = Field(default_factory=dict)
    workflow_type_versions: dict[str, Any] = Field(default_factory=lambda: {"NFL": {"workflow_type_version": ["1.0"]}})
    workflow_engine_versions: dict[str, str] = Field(default_factory=lambda: {"nextflow": "20.10.0"})
    default_workflow_engine_parameters: list[DefaultWorkflowEngineParameterSettings] = Field(default_factory=list)


class Settings(BaseSettings):
    # --- Elasticsearch ---
    elasticsearch_host: str = "http://localhost:9200"
    elasticsearch_username: Optional[str] = None
    elasticsearch_password: Optional[str] = None
    workflow_index: str = "workflow"
    task_index: str = "task"

    # --- Query tuning ---
    # minimum_should_match values handed straight to the engine
    analysis_id_minimum_should_match: str = "100%"
    text_minimum_should_match: str = "80%"
    default_page_size: int = 10

    # --- Workflow management (run submission / cancel) ---
    workflow_management_url: str = "http://localhost:8081"
    workflow_management_timeout_s: float = 20.0

    # --- WES service-info ---
    service_info: ServiceInfoSettings = Field(default_factory=ServiceInfoSettings)

    # --- Logging ---
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=str(Path(__file__).resolve().parent.parent / ".env"),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",   # SERVICE_INFO__CONTACT_INFO_URL=...
        extra="ignore",
    )

    @field_validator("analysis_id_minimum_should_match", "text_minimum_should_match")
    @classmethod
    def _validate_percentage(cls, v: str) -> str:
        v = v.strip()
        if not v.endswith("%") or not v[:-1].lstrip("-").isdigit():
            raise ValueError("minimum_should_match must look like '80%'")
        return v

    @field_validator("default_page_size")
    @classmethod
    def _validate_page_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("DEFAULT_PAGE_SIZE must be positive")
        return v

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        return v.upper()

# Singleton
settings = Settings()
