# WES 1.0 wire models (snake_case JSON)
from pydantic import BaseModel, Field
from typing import Any

from app.domain.models import State

class RunRequest(BaseModel):
    workflow_url: str
    workflow_params: dict[str, Any] | None = None
    workflow_type: str | None = None
    workflow_type_version: str | None = None
    tags: dict[str, str] | None = None
    workflow_engine_parameters: dict[str, Any] | None = None

class RunId(BaseModel):
    run_id: str

class RunStatus(BaseModel):
    run_id: str
    state: State = State.UNKNOWN

class RunListResponse(BaseModel):
    runs: list[RunStatus] = Field(default_factory=list)
    # numeric offset of the next page as a string, "" when there is none
    next_page_token: str = ""

class Log(BaseModel):
    name: str | None = None
    cmd: list[str] | None = None
    start_time: str | None = None
    end_time: str | None = None
    stdout: str | None = None
    stderr: str | None = None
    exit_code: int | None = None

class TaskLog(Log):
    task_id: int | None = None
    process: str | None = None
    tag: str | None = None
    state: str | None = None
    container: str | None = None
    attempt: int | None = None
    submit_time: str | None = None
    workdir: str | None = None

class RunResponse(BaseModel):
    run_id: str
    request: RunRequest | None = None
    state: State = State.UNKNOWN
    run_log: Log | None = None
    task_logs: list[TaskLog] = Field(default_factory=list)
    outputs: Any = None

class DefaultWorkflowEngineParameter(BaseModel):
    name: str
    type: str
    default_value: str | None = None

class ServiceInfo(BaseModel):
    workflow_type_versions: dict[str, Any] = Field(default_factory=dict)
    supported_wes_versions: list[str] = Field(default_factory=list)
    supported_filesystem_protocols: list[str] = Field(default_factory=list)
    workflow_engine_versions: dict[str, str] = Field(default_factory=dict)
    default_workflow_engine_parameters: list[DefaultWorkflowEngineParameter] = Field(default_factory=list)
    system_state_counts: dict[str, int] = Field(default_factory=dict)
    auth_instructions_url: str = ""
    contact_info_url: str = ""
    tags: dict[str, str] = Field(default_factory=dict)
