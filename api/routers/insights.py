"""
Insight endpoints: flowrate trend, insight cards, performance scores and
the comparison of selected equipment.
"""

from fastapi import APIRouter, Depends, HTTPException

from api.dependencies import require_data
from api.session_store import SessionData
from api.models.responses import ComparisonResponse, InsightsResponse, ScoresResponse
from core.comparison import MIN_COMPARISON_SIZE
from core.statistics import performance_scores

router = APIRouter(prefix="/api/insights", tags=["insights"])


@router.get("", response_model=InsightsResponse)
def get_insights(session: SessionData = Depends(require_data)):
    """Trend and insight cards for the whole dataset."""
    view = session.controller.view
    return InsightsResponse(
        trend=view.trend.to_dict(),
        insights=[insight.to_dict() for insight in view.insights],
        flowrate_series=view.flowrate_series,
    )


@router.get("/scores", response_model=ScoresResponse)
def get_scores(session: SessionData = Depends(require_data)):
    """Performance score of every record, visible or not."""
    controller = session.controller
    scores = performance_scores(
        controller.records, controller.summary, controller.config.score_weight
    )
    return ScoresResponse(scores={str(record_id): score for record_id, score in scores.items()})


@router.get("/compare", response_model=ComparisonResponse)
def compare_selected(session: SessionData = Depends(require_data)):
    """Per-dimension vectors for the selected equipment, in selection order."""
    if len(session.controller.state.selected_ids) < MIN_COMPARISON_SIZE:
        raise HTTPException(status_code=400, detail="Please select at least 2 items to compare")
    return ComparisonResponse(
        vectors=[vector.to_dict() for vector in session.controller.view.comparison_vectors]
    )
