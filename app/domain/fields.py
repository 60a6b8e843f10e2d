# Logical field names accepted in filters and sorts. They match the
# document attribute names in the workflow and task indices.
from __future__ import annotations

RUN_ID = "runId"
SESSION_ID = "sessionId"
STATE = "state"
ANALYSIS_ID = "analysisId"
REPOSITORY = "repository"
START_TIME = "startTime"
COMPLETE_TIME = "completeTime"

TASK_ID = "taskId"
TAG = "tag"
NAME = "name"
PROCESS = "process"
SUBMIT_TIME = "submitTime"

ANALYSIS_SEARCH_FIELDS = (
    "parameters.analysis_id",
    "parameters.normal_aln_analysis_id",
    "parameters.tumour_aln_analysis_id",
)

# engine default page size
ES_PAGE_DEFAULT_SIZE = 10

STATES_AGGREGATION = "states"
