"""
View endpoints: filter, search, sort, selection, favorites, view mode and
CSV export of the visible rows.
"""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import PlainTextResponse

from api.dependencies import get_session_data, require_data
from api.session_store import SessionData
from api.models.requests import (
    FilterTypeRequest,
    RecordRequest,
    SearchRequest,
    SelectAllRequest,
    SortRequest,
    ViewModeRequest,
)
from api.models.responses import EquipmentRowResponse, ViewResponse
from core.comparison import MIN_COMPARISON_SIZE
from core.export import export_filename, to_delimited_text
from core.view_state import ViewStateController

router = APIRouter(prefix="/api/view", tags=["view"])


def build_view_response(controller: ViewStateController) -> ViewResponse:
    """Serialise the controller's current derived view."""
    view = controller.view
    state = controller.state
    selected = set(state.selected_ids)
    favorites = state.favorite_ids
    rows = [
        EquipmentRowResponse(
            **record.to_dict(),
            status=view.statuses[record.id],
            performance_score=view.performance_scores[record.id],
            selected=record.id in selected,
            favorite=record.id in favorites,
        )
        for record in view.visible_records
    ]
    return ViewResponse(
        dataset_id=controller.dataset_id,
        state=state.to_dict(),
        filter_types=controller.filter_types(),
        rows=rows,
        visible_count=view.visible_count,
        total_count=view.total_count,
        comparison_available=len(state.selected_ids) >= MIN_COMPARISON_SIZE,
    )


@router.get("", response_model=ViewResponse)
def get_view(session: SessionData = Depends(get_session_data)):
    """Current table rows and view state."""
    return build_view_response(session.controller)


@router.post("/filter", response_model=ViewResponse)
def set_filter(body: FilterTypeRequest, session: SessionData = Depends(require_data)):
    session.controller.set_filter_type(body.filter_type)
    return build_view_response(session.controller)


@router.post("/search", response_model=ViewResponse)
def set_search(body: SearchRequest, session: SessionData = Depends(require_data)):
    session.controller.set_search_term(body.term)
    return build_view_response(session.controller)


@router.post("/sort", response_model=ViewResponse)
def toggle_sort(body: SortRequest, session: SessionData = Depends(require_data)):
    """Sort by a column; repeating the same column flips the direction."""
    try:
        session.controller.toggle_sort(body.key)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return build_view_response(session.controller)


@router.post("/select", response_model=ViewResponse)
def toggle_select(body: RecordRequest, session: SessionData = Depends(require_data)):
    session.controller.toggle_select(body.id)
    return build_view_response(session.controller)


@router.post("/select-all", response_model=ViewResponse)
def select_all(body: SelectAllRequest, session: SessionData = Depends(require_data)):
    session.controller.select_all(body.ids)
    return build_view_response(session.controller)


@router.delete("/selection", response_model=ViewResponse)
def clear_selection(session: SessionData = Depends(require_data)):
    session.controller.clear_selection()
    return build_view_response(session.controller)


@router.post("/favorite", response_model=ViewResponse)
def toggle_favorite(body: RecordRequest, session: SessionData = Depends(get_session_data)):
    session.controller.toggle_favorite(body.id)
    return build_view_response(session.controller)


@router.post("/mode", response_model=ViewResponse)
def set_view_mode(body: ViewModeRequest, session: SessionData = Depends(get_session_data)):
    session.controller.set_view_mode(body.mode)
    return build_view_response(session.controller)


@router.get("/export", response_class=PlainTextResponse)
def export_visible(quote: bool = False, session: SessionData = Depends(require_data)):
    """Visible rows as comma-separated text, ready to save."""
    text = to_delimited_text(session.controller.view.visible_records, quote=quote)
    return PlainTextResponse(
        text,
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )
