"""
API v1 alert routes.

Exposes the alert severity model. The model is a black box to this
service: one call, no retry or fallback.
"""

from fastapi import APIRouter, Depends

from src.api.dependencies import get_alert_prediction_service
from src.api.models import AlertPredictionRequest, AlertPredictionResponse
from src.domain.services import AlertPredictionService

router = APIRouter(prefix="/alerts", tags=["alerts"])


@router.post(
    "/predict",
    response_model=AlertPredictionResponse,
    summary="Predict alert severity",
    description="Score an alert from its three numeric features.",
)
def predict(
    request_data: AlertPredictionRequest,
    service: AlertPredictionService = Depends(get_alert_prediction_service),
) -> AlertPredictionResponse:
    severity = service.predict_severity(
        request_data.feature1, request_data.feature2, request_data.feature3
    )
    return AlertPredictionResponse(severity=severity)
