from __future__ import annotations
from dotenv import load_dotenv

load_dotenv()

import os, logging

from fastapi import Depends, FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, List
import jsonschema

from .filters import (
    FieldType,
    FieldDefinition,
    FilterGroup,
    operator_choices,
    parse_filter_groups_json,
)
from .registry import FieldRegistry
from .engine import configured_groups, evaluate_expression, filter_records
from .auth import require_auth, require_roles_access
from .routes import router as saved_filters_router, store as saved_filters_store
from .validation import (
    _assert_group_count_allowed,
    _assert_conditions_allowed,
    _advisory_issues,
)

log = logging.getLogger("filters.api")


def configure_logging() -> None:
    level = os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


app = FastAPI(title="CDP Filter Service", version="1.0.0")

app.include_router(saved_filters_router)

origins_raw = os.getenv("CORS_ALLOW_ORIGINS", "")
origins = [o.strip() for o in origins_raw.split(",") if o.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_methods=["*"],
    allow_headers=["*"],
    allow_credentials=True,
)

REG = FieldRegistry()


class FilterIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    field_set: str = Field(..., alias="fieldSet")
    filters: List[Dict[str, Any]] = Field(default_factory=list)


class FilterRecordsIn(FilterIn):
    records: List[Dict[str, Any]] = Field(default_factory=list)


class EvaluateIn(FilterIn):
    record: Dict[str, Any] = Field(default_factory=dict)


def _prepare(body: FilterIn, strict: bool) -> tuple[List[FilterGroup], List[FieldDefinition], List[str]]:
    """
    Parse and check the submitted groups against the field set.
    Unconfigured groups are dropped, as the filter builder does.
    """
    fields = REG.field_set(body.field_set)
    groups = parse_filter_groups_json(body.filters, validate=strict)
    _assert_group_count_allowed(groups)
    if strict:
        _assert_conditions_allowed(body.field_set, groups, fields)
    warnings = _advisory_issues(groups, fields)
    return configured_groups(groups), fields, warnings


def _raise_http(e: Exception):
    if isinstance(e, KeyError):
        raise HTTPException(status_code=404, detail=str(e.args[0]) if e.args else "Not found")
    if isinstance(e, jsonschema.ValidationError):
        raise HTTPException(status_code=400, detail=e.message)
    raise HTTPException(status_code=400, detail=str(e))


@app.on_event("startup")
def _startup():
    configure_logging()
    REG.load_fields()
    saved_filters_store.load()


@app.get("/healthz")
def health():
    return {"ok": True, "fieldSets": REG.set_names(), "loadedAt": REG.loaded_at}


@app.get("/fields", dependencies=[Depends(require_roles_access(["read:data"]))])
def list_field_sets():
    return {
        "fieldSets": [
            {"name": name, "fields": [fd.to_dict() for fd in REG.field_set(name)]}
            for name in REG.set_names()
        ]
    }


@app.get("/fields/{set_name}", dependencies=[Depends(require_roles_access(["read:data"]))])
def get_field_set(set_name: str):
    try:
        return {"name": set_name, "fields": [fd.to_dict() for fd in REG.field_set(set_name)]}
    except KeyError as e:
        _raise_http(e)


@app.get("/operators", dependencies=[Depends(require_roles_access(["read:data"]))])
def list_operators():
    return {t.value: operator_choices(t) for t in FieldType}


@app.get("/operators/{field_type}", dependencies=[Depends(require_roles_access(["read:data"]))])
def get_operators(field_type: str):
    try:
        return {"type": field_type, "operators": operator_choices(field_type)}
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown field type: {field_type}")


@app.post("/filter", dependencies=[Depends(require_roles_access(["read:data"]))])
def filter_collection(body: FilterRecordsIn, strict: bool = True):
    try:
        groups, fields, warnings = _prepare(body, strict)
    except (KeyError, ValueError, TypeError, AttributeError, jsonschema.ValidationError) as e:
        _raise_http(e)

    matched = filter_records(body.records, groups, fields)
    log.debug(
        "Filtered %s records: %d of %d matched (%d groups)",
        body.field_set, len(matched), len(body.records), len(groups),
    )
    return {
        "records": matched,
        "total": len(body.records),
        "matched": len(matched),
        "warnings": warnings,
    }


@app.post("/evaluate", dependencies=[Depends(require_roles_access(["read:data"]))])
def evaluate_record(body: EvaluateIn, strict: bool = True):
    try:
        groups, fields, _ = _prepare(body, strict)
    except (KeyError, ValueError, TypeError, AttributeError, jsonschema.ValidationError) as e:
        _raise_http(e)
    return {"matches": evaluate_expression(groups, body.record, fields)}


@app.post("/validate", dependencies=[Depends(require_roles_access(["read:data"]))])
def validate_filters(body: FilterIn):
    try:
        fields = REG.field_set(body.field_set)
    except KeyError as e:
        _raise_http(e)

    errors: List[str] = []
    warnings: List[str] = []
    try:
        groups = parse_filter_groups_json(body.filters, validate=True)
        _assert_group_count_allowed(groups)
        _assert_conditions_allowed(body.field_set, groups, fields)
        warnings = _advisory_issues(groups, fields)
    except jsonschema.ValidationError as e:
        errors.append(e.message)
    except ValueError as e:
        errors.append(str(e))
    return {"valid": not errors, "errors": errors, "warnings": warnings}


@app.post("/reload", dependencies=[Depends(require_roles_access(["admin"]))])
def reload_registry():
    try:
        REG.load_fields()
        return {"reloaded": REG.summary()}
    except (OSError, RuntimeError, ValueError) as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.get("/me")
def me(claims=Depends(require_auth)):
    return {
        "sub": claims["sub"],
        "email": claims.get("email"),
        "roles": claims.get("roles", []),
        "accountId": claims.get("account_id"),
    }
