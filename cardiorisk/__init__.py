# cardiorisk/__init__.py
from .schemas import (
    AssessmentInput, PredictionOutcome, HistoryEntry, FieldError,
    Gender, Level, RiskClass,
)
from .validation import validate_assessment, InvalidAssessment
from .predictor import PredictorClient, PredictionError, TransportError, ResponseError
from .history import HistoryStore, MemoryBackend, SessionStateBackend
from .controller import AssessmentFormController, Notification

__all__ = [
    "AssessmentInput", "PredictionOutcome", "HistoryEntry", "FieldError",
    "Gender", "Level", "RiskClass",
    "validate_assessment", "InvalidAssessment",
    "PredictorClient", "PredictionError", "TransportError", "ResponseError",
    "HistoryStore", "MemoryBackend", "SessionStateBackend",
    "AssessmentFormController", "Notification",
]
