"""
Risk Assessment API Endpoints
Entity listing and activity updates, assessment, portfolio scores, model diagnostics and weight tuning
"""

import logging
from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, status
from fastapi.responses import JSONResponse

from riskengine.api.dependencies import get_assessor, get_refresher
from riskengine.core.exceptions import EntityNotFoundError, ComputationError, InvalidWeightUpdate
from riskengine.models.schemas import (
    AssessmentResponse,
    DashboardStats,
    EntityActivity,
    EntityListResponse,
    ErrorResponse,
    ModelPerformance,
    RiskSummary,
    WeightUpdateRequest,
    WeightUpdateResponse
)
from riskengine.services.recommendations import generate_recommendations
from riskengine.services.risk_assessor import RiskAssessor

logger = logging.getLogger(__name__)

router = APIRouter()

@router.post(
    "/assess/{entity_id}",
    response_model=AssessmentResponse,
    responses={404: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
def assess_entity(entity_id: str, assessor: RiskAssessor = Depends(get_assessor)):
    try:
        assessment = assessor.assess(entity_id)
    except EntityNotFoundError as e:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=ErrorResponse(error=e.message, entity_id=entity_id).model_dump()
        )
    except ComputationError as e:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=e.to_payload()
        )

    return AssessmentResponse(
        assessment=assessment,
        recommendations=generate_recommendations(assessment)
    )

@router.get("/entities", response_model=EntityListResponse)
def list_entities(assessor: RiskAssessor = Depends(get_assessor)):
    entities = []
    for entity_id in assessor.store.entity_ids():
        activity = assessor.store.get(entity_id)
        if activity is not None:
            entities.append(EntityActivity(entity_id=entity_id, activity=activity))
    return EntityListResponse(entities=entities, total=len(entities))

@router.patch(
    "/entities/{entity_id}/activity",
    response_model=EntityActivity,
    responses={404: {"model": ErrorResponse}}
)
def update_entity_activity(
    entity_id: str,
    changes: Dict[str, Any] = Body(...),
    assessor: RiskAssessor = Depends(get_assessor)
):
    if not assessor.store.update(entity_id, changes):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content=ErrorResponse(error=f"Entity not found: {entity_id}", entity_id=entity_id).model_dump()
        )

    logger.info(f"Updated activity for {entity_id}: {sorted(changes)}")
    return EntityActivity(entity_id=entity_id, activity=assessor.store.get(entity_id))

@router.get("/dashboard/stats", response_model=DashboardStats)
def get_dashboard_stats(assessor: RiskAssessor = Depends(get_assessor)):
    return assessor.dashboard_stats()

@router.get("/scores", response_model=RiskSummary)
def get_risk_scores(assessor: RiskAssessor = Depends(get_assessor)):
    return assessor.assess_all()

@router.get("/model-performance", response_model=ModelPerformance)
def get_model_performance(assessor: RiskAssessor = Depends(get_assessor)):
    return assessor.model_performance()

@router.post("/models/{model_name}/weights", response_model=WeightUpdateResponse)
def update_model_weight(
    model_name: str,
    update: WeightUpdateRequest,
    assessor: RiskAssessor = Depends(get_assessor)
):
    try:
        weights = assessor.update_weight(model_name, update.feature_name, update.value)
    except InvalidWeightUpdate as e:
        logger.warning(f"Rejected weight update: {e}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=e.message
        )

    return WeightUpdateResponse(
        model_name=model_name,
        feature_name=update.feature_name,
        value=update.value,
        weights=weights
    )

@router.get("/refresher")
def get_refresher_status(refresher=Depends(get_refresher)):
    if refresher is None:
        return {"enabled": False}
    return {"enabled": True, **refresher.get_worker_status()}
