"""
FastAPI endpoints for saved filters.
"""

from typing import Any, Dict, List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Response
from pydantic import BaseModel, ConfigDict, Field
import jsonschema

from ..auth.require import require_auth
from ..filters import parse_filter_groups_json
from ..store import SavedFilterStore


router = APIRouter(prefix="/saved-filters", tags=["saved-filters"])

store = SavedFilterStore()


def get_store() -> SavedFilterStore:
    return store


class SavedFilterIn(BaseModel):
    """Request model for creating a saved filter."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: Optional[str] = None
    filter_data: List[Dict[str, Any]] = Field(default_factory=list, alias="filterData")
    is_public: bool = Field(False, alias="isPublic")
    tags: List[str] = Field(default_factory=list)


class SavedFilterPatch(BaseModel):
    """Request model for updating a saved filter. Omitted fields are unchanged."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    description: Optional[str] = None
    filter_data: Optional[List[Dict[str, Any]]] = Field(None, alias="filterData")
    is_public: Optional[bool] = Field(None, alias="isPublic")
    tags: Optional[List[str]] = None


def _raise_http(e: Exception):
    if isinstance(e, KeyError):
        raise HTTPException(status_code=404, detail=str(e.args[0]) if e.args else "Not found")
    if isinstance(e, PermissionError):
        raise HTTPException(status_code=403, detail=str(e))
    if isinstance(e, jsonschema.ValidationError):
        raise HTTPException(status_code=400, detail=e.message)
    raise HTTPException(status_code=400, detail=str(e))


@router.get("")
def list_saved_filters(claims: dict = Depends(require_auth), sf_store: SavedFilterStore = Depends(get_store)):
    return {"filters": [sf.to_dict() for sf in sf_store.list_for_user(claims["sub"])]}


@router.post("", status_code=201)
def create_saved_filter(
    body: SavedFilterIn,
    claims: dict = Depends(require_auth),
    sf_store: SavedFilterStore = Depends(get_store),
):
    try:
        groups = parse_filter_groups_json(body.filter_data, validate=True)
        sf = sf_store.create(
            claims["sub"],
            body.name,
            groups,
            description=body.description,
            is_public=body.is_public,
            tags=body.tags,
        )
        return sf.to_dict()
    except (ValueError, jsonschema.ValidationError) as e:
        _raise_http(e)


@router.get("/popular")
def popular_saved_filters(
    limit: int = Query(10, ge=1, le=100),
    claims: dict = Depends(require_auth),
    sf_store: SavedFilterStore = Depends(get_store),
):
    return {"filters": [sf.to_dict() for sf in sf_store.popular(limit)]}


@router.get("/{filter_id}")
def get_saved_filter(
    filter_id: str,
    claims: dict = Depends(require_auth),
    sf_store: SavedFilterStore = Depends(get_store),
):
    try:
        return sf_store.get_visible(filter_id, claims["sub"]).to_dict()
    except (KeyError, PermissionError) as e:
        _raise_http(e)


@router.patch("/{filter_id}")
def update_saved_filter(
    filter_id: str,
    body: SavedFilterPatch,
    claims: dict = Depends(require_auth),
    sf_store: SavedFilterStore = Depends(get_store),
):
    # only description may be cleared with an explicit null
    changes = {
        k: v for k, v in body.model_dump(exclude_unset=True).items()
        if v is not None or k == "description"
    }
    try:
        if "filter_data" in changes:
            changes["filter_data"] = parse_filter_groups_json(changes["filter_data"] or [], validate=True)
        return sf_store.update(filter_id, claims["sub"], **changes).to_dict()
    except (KeyError, PermissionError, ValueError, jsonschema.ValidationError) as e:
        _raise_http(e)


@router.delete("/{filter_id}", status_code=204)
def delete_saved_filter(
    filter_id: str,
    claims: dict = Depends(require_auth),
    sf_store: SavedFilterStore = Depends(get_store),
):
    try:
        sf_store.delete(filter_id, claims["sub"])
    except (KeyError, PermissionError) as e:
        _raise_http(e)
    return Response(status_code=204)


@router.post("/{filter_id}/use")
def use_saved_filter(
    filter_id: str,
    claims: dict = Depends(require_auth),
    sf_store: SavedFilterStore = Depends(get_store),
):
    try:
        sf_store.get_visible(filter_id, claims["sub"])
        return sf_store.mark_used(filter_id).to_dict()
    except (KeyError, PermissionError) as e:
        _raise_http(e)
