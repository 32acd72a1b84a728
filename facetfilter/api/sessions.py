"""
Filter session endpoints.

A session is one user's filter state. Clients create a session, render the
returned facets, and post a toggle each time a control is activated.
"""

from collections.abc import Hashable
from typing import Annotated

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from facetfilter.api.deps import get_session_store
from facetfilter.filtering.state_machine import FilterStateMachine
from facetfilter.filtering.value_index import ValueIndex, dimension_name
from facetfilter.models.errors import UnknownValueError
from facetfilter.services.session_store import FilterSessionStore

router = APIRouter(tags=["sessions"])


class CatalogResponse(BaseModel):
    """Dimensions and values of the loaded catalog."""

    dimensions: list[str]
    item_count: int
    values: dict[str, list[str]] = Field(
        default_factory=dict,
        description="Values per dimension in first-appearance order",
    )


class FacetValueResponse(BaseModel):
    """One control: a value and its flags."""

    value: str
    selected: bool
    disabled: bool


class FacetRowResponse(BaseModel):
    """All controls of one dimension."""

    dimension: str
    values: list[FacetValueResponse] = Field(default_factory=list)


class SessionResponse(BaseModel):
    """Current selection and facets of a session."""

    session_id: str
    selection: dict[str, str | None] = Field(default_factory=dict)
    facets: list[FacetRowResponse] = Field(default_factory=list)


class ToggleRequest(BaseModel):
    """Request model for activating or clearing a value."""

    dimension: str = Field(..., examples=["colors"])
    value: str = Field(..., examples=["red"])


class ToggleResponse(SessionResponse):
    """Session state after a toggle."""

    changed: bool = Field(
        ...,
        description="False when the value was disabled and the toggle was ignored",
    )


class DeleteResponse(BaseModel):
    """Response model for delete operations."""

    session_id: str
    deleted: bool


StoreDep = Annotated[FilterSessionStore, Depends(get_session_store)]


def _wire(value: Hashable | None) -> str | None:
    return None if value is None else str(value)


def _session_response(session_id: str, machine: FilterStateMachine) -> SessionResponse:
    return SessionResponse(
        session_id=session_id,
        selection={
            dimension: _wire(value) for dimension, value in machine.active_selection().items()
        },
        facets=[
            FacetRowResponse(
                dimension=machine.index.dimensions[slot],
                values=[
                    FacetValueResponse(
                        value=str(button.value),
                        selected=button.selected,
                        disabled=button.disabled,
                    )
                    for button in row
                ],
            )
            for slot, row in enumerate(machine.buttons())
        ],
    )


def _resolve_wire_value(index: ValueIndex, dimension: str, raw: str) -> Hashable:
    """
    Map a value received as text to the indexed token.

    Raises:
        UnknownValueError: If no indexed value has that string form
    """
    name = dimension_name(dimension)
    if name not in index.dimensions:
        raise UnknownValueError(name, raw)
    for value in index.values(name):
        if str(value) == raw:
            return value
    raise UnknownValueError(name, raw)


@router.get("/catalog", response_model=CatalogResponse)
async def get_catalog(store: StoreDep) -> CatalogResponse:
    """Describe the loaded catalog."""
    index = store.index
    return CatalogResponse(
        dimensions=list(index.dimensions),
        item_count=index.item_count,
        values={
            dimension: [str(value) for value in index.values(dimension)]
            for dimension in index.dimensions
        },
    )


@router.post("/sessions", response_model=SessionResponse, status_code=status.HTTP_201_CREATED)
async def create_session(store: StoreDep) -> SessionResponse:
    """Start a filter session with nothing selected."""
    session_id, machine = store.create()
    return _session_response(session_id, machine)


@router.get("/sessions/{session_id}", response_model=SessionResponse)
async def get_session(session_id: str, store: StoreDep) -> SessionResponse:
    """Current selection and facets for a session."""
    return _session_response(session_id, store.get(session_id))


@router.post("/sessions/{session_id}/toggle", response_model=ToggleResponse)
async def toggle_value(
    session_id: str,
    request: ToggleRequest,
    store: StoreDep,
) -> ToggleResponse:
    """
    Activate a value, or clear it if it is already active.

    Toggling a disabled value leaves the session unchanged and reports
    changed=false. Unknown values return 404.
    """
    machine = store.get(session_id)
    value = _resolve_wire_value(machine.index, request.dimension, request.value)

    before = machine.selection
    machine.toggle(request.dimension, value)

    payload = _session_response(session_id, machine)
    return ToggleResponse(**payload.model_dump(), changed=machine.selection != before)


@router.post("/sessions/{session_id}/clear", response_model=SessionResponse)
async def clear_session(session_id: str, store: StoreDep) -> SessionResponse:
    """Drop every selection in a session."""
    machine = store.get(session_id)
    machine.clear()
    return _session_response(session_id, machine)


@router.delete("/sessions/{session_id}", response_model=DeleteResponse)
async def delete_session(session_id: str, store: StoreDep) -> DeleteResponse:
    """End a session."""
    store.delete(session_id)
    return DeleteResponse(session_id=session_id, deleted=True)
