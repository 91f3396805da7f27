from __future__ import annotations

import json
from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query
from fastapi.encoders import jsonable_encoder

from meeting_assistant.deps import get_context
from meeting_assistant.errors import MethodNotSupportedError, ValidationError
from meeting_assistant.procedures import MUTATION, QUERY, ProcedureContext, call_procedure, get_procedure


router = APIRouter(prefix="/rpc", tags=["rpc"])


def _envelope(data: Any) -> Dict[str, Any]:
    return {"result": {"data": jsonable_encoder(data)}}


def _require_kind(name: str, kind: str) -> None:
    procedure = get_procedure(name)
    if procedure.kind != kind:
        verb = "GET" if procedure.kind == QUERY else "POST"
        raise MethodNotSupportedError(f'Procedure "{name}" is a {procedure.kind}; call it with {verb}')


@router.get("/{name}")
def run_query(
    name: str,
    input: Optional[str] = Query(default=None),
    ctx: ProcedureContext = Depends(get_context),
) -> Dict[str, Any]:
    _require_kind(name, QUERY)
    raw: Any = None
    if input:
        try:
            raw = json.loads(input)
        except json.JSONDecodeError as exc:
            raise ValidationError(f"input is not valid JSON: {exc.msg}") from exc
    return _envelope(call_procedure(ctx, name, raw))


@router.post("/{name}")
def run_mutation(
    name: str,
    body: Any = Body(default=None),
    ctx: ProcedureContext = Depends(get_context),
) -> Dict[str, Any]:
    _require_kind(name, MUTATION)
    return _envelope(call_procedure(ctx, name, body))
