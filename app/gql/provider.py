# app/gql/provider.py
"""
Federated GraphQL schema.

Entities arriving through `_entities` are dispatched on their `__typename`
to one resolver per EntityKind. The returned dicts carry `__typename` so the
`_Entity` union resolves without inspecting python types.
"""
from __future__ import annotations
import asyncio
import logging
from pathlib import Path
from typing import Any

from ariadne import load_schema_from_path
from ariadne.asgi import GraphQL
from ariadne.contrib.federation import make_federated_schema
from graphql import GraphQLSchema

from app.domain.errors import BadRequestError
from app.domain.models import EntityKind
from app.gql.fetchers import bindables, run_to_dict
from app.singletons import get_run_service, get_task_service

log = logging.getLogger("workflow_search")

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.graphql"


async def resolve_entity(info, representation: dict[str, Any]) -> dict[str, Any] | None:
    typename = representation.get("__typename")
    try:
        kind = EntityKind(typename)
    except ValueError:
        raise BadRequestError(f"Unknown entity type '{typename}'")

    if kind is EntityKind.RUN:
        run = await info.context["runs"].get_run_by_id(representation["runId"])
        entity = run_to_dict(run)
    elif kind is EntityKind.ANALYSIS:
        entity = {"analysisId": representation["analysisId"]}
    elif kind is EntityKind.WORKFLOW:
        entity = {"runId": representation["runId"]}
    else:
        raise BadRequestError(f"Unsupported entity type '{typename}'")

    if entity is None:
        return None
    entity["__typename"] = kind.value
    return entity


async def resolve_entities(_, info, representations):
    # wait for every lookup, then surface the first failure
    results = await asyncio.gather(
        *(resolve_entity(info, r) for r in representations), return_exceptions=True
    )
    for result in results:
        if isinstance(result, Exception):
            raise result
    return results


def build_schema() -> GraphQLSchema:
    type_defs = load_schema_from_path(str(SCHEMA_PATH))
    schema = make_federated_schema(type_defs, *bindables)
    # replace the default reference lookup with the EntityKind dispatch
    schema.query_type.fields["_entities"].resolve = resolve_entities
    return schema


def get_context(request, data=None) -> dict[str, Any]:
    return {
        "request": request,
        "runs": get_run_service(),
        "tasks": get_task_service(),
    }


def create_graphql_app(debug: bool = False) -> GraphQL:
    schema = build_schema()
    log.info("[graphql] schema loaded from %s", SCHEMA_PATH.name)
    return GraphQL(schema, context_value=get_context, debug=debug)
