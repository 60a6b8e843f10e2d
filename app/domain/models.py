from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Any, Generic, TypeVar
from enum import Enum

T = TypeVar("T")

# Documents in the indices are camelCase; python attributes stay snake_case.
CamelConfig = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class State(str, Enum):
    UNKNOWN = "UNKNOWN"
    QUEUED = "QUEUED"
    INITIALIZING = "INITIALIZING"
    RUNNING = "RUNNING"
    PAUSED = "PAUSED"
    COMPLETE = "COMPLETE"
    EXECUTOR_ERROR = "EXECUTOR_ERROR"
    SYSTEM_ERROR = "SYSTEM_ERROR"
    CANCELED = "CANCELED"
    CANCELING = "CANCELING"

    @classmethod
    def parse(cls, value: str | None) -> "State":
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class EntityKind(str, Enum):
    """Federated entity types this service can resolve."""
    RUN = "Run"
    ANALYSIS = "Analysis"
    WORKFLOW = "Workflow"


class SortOrder(str, Enum):
    asc = "asc"
    desc = "desc"


class Sort(BaseModel):
    model_config = CamelConfig

    field_name: str
    order: SortOrder = SortOrder.asc

    @field_validator("order", mode="before")
    @classmethod
    def _lower(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v


class Page(BaseModel):
    """offset/limit pair; wire names are `from`/`size`."""
    model_config = ConfigDict(populate_by_name=True)

    offset: int | None = Field(default=None, alias="from")
    limit: int | None = Field(default=None, alias="size")

    @classmethod
    def of(cls, page: "Page | dict[str, Any] | None") -> "Page":
        if page is None:
            return cls()
        if isinstance(page, Page):
            return page
        return cls.model_validate(page)

    def is_empty(self) -> bool:
        return self.offset is None and self.limit is None


class SearchResult(BaseModel, Generic[T]):
    items: list[T] = Field(default_factory=list)
    has_next: bool = False
    total_hits: int = 0


class AggregationResult(BaseModel):
    total_hits: int = 0


class EngineParameters(BaseModel):
    model_config = CamelConfig

    default_container: str | None = None
    launch_dir: str | None = None
    project_dir: str | None = None
    resume: str | None = None
    revision: str | None = None
    work_dir: str | None = None
    latest: bool | None = None


class Run(BaseModel):
    model_config = CamelConfig

    run_id: str
    session_id: str | None = None
    state: str | None = None
    repository: str | None = None
    parameters: dict[str, Any] | None = None
    engine_parameters: EngineParameters | None = None
    start_time: str | int | None = None
    complete_time: str | int | None = None
    duration: int | None = None
    success: bool | None = None
    exit_status: int | None = None
    error_report: str | None = None
    command_line: str | None = None


class Task(BaseModel):
    model_config = CamelConfig

    run_id: str
    task_id: int
    session_id: str | None = None
    name: str | None = None
    process: str | None = None
    tag: str | None = None
    container: str | None = None
    attempt: int | None = None
    state: str | None = None
    submit_time: str | int | None = None
    start_time: str | int | None = None
    complete_time: str | int | None = None
    exit: int | None = None
    script: str | None = None
    workdir: str | None = None
    cpus: int | None = None
    memory: int | None = None
    duration: int | None = None
    realtime: int | None = None
    rss: int | None = None
    peak_rss: int | None = None
    vmem: int | None = None
    peak_vmem: int | None = None
    read_bytes: int | None = None
    write_bytes: int | None = None
