# cardiorisk/controller.py
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional

from .display import format_confidence, risk_label
from .history import HistoryStore
from .predictor import PredictionError, PredictorClient
from .schemas import FORM_DEFAULTS, AssessmentInput, FieldError, PredictionOutcome
from .validation import InvalidAssessment, validate_assessment

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    level: str  # "success" | "error"
    title: str
    message: str


class AssessmentFormController:
    """Owns the form state and runs validate -> predict -> record."""

    def __init__(self, predictor: PredictorClient, history: HistoryStore,
                 notify: Callable[[Notification], None] = None):
        self.predictor = predictor
        self.history = history
        self.notify = notify or (lambda n: None)
        self.values: Dict[str, Any] = dict(FORM_DEFAULTS)
        self.errors: Dict[str, str] = {}
        self.in_flight = False
        self.result: Optional[PredictionOutcome] = None

    def update(self, field: str, value: Any) -> None:
        if field not in FORM_DEFAULTS:
            raise KeyError(f"Unknown form field: {field}")
        self.values[field] = value

    def reset(self) -> None:
        self.values = dict(FORM_DEFAULTS)
        self.errors = {}

    def validate(self, values: Mapping = None) -> List[FieldError]:
        """Return every field error for ``values`` (the current form by default)."""
        try:
            validate_assessment(self.values if values is None else values)
        except InvalidAssessment as e:
            self.errors = e.by_field()
            return e.errors
        self.errors = {}
        return []

    def submit(self, values: Mapping = None) -> Optional[PredictionOutcome]:
        if self.in_flight:
            log.debug("Submit ignored: a prediction is already in flight")
            return None

        if values is not None:
            unknown = set(values) - set(FORM_DEFAULTS)
            if unknown:
                raise KeyError(f"Unknown form field(s): {', '.join(sorted(unknown))}")
            for field, value in values.items():
                self.update(field, value)
        try:
            assessment = validate_assessment(self.values)
        except InvalidAssessment as e:
            self.errors = e.by_field()
            return None
        self.errors = {}

        self.in_flight = True
        try:
            outcome = self.predictor.predict(assessment)
        except PredictionError as e:
            log.warning("Prediction failed: %s", e)
            self.notify(Notification("error", "Error", str(e)))
            return None
        else:
            self._record(assessment, outcome)
            return outcome
        finally:
            self.in_flight = False

    def _record(self, assessment: AssessmentInput, outcome: PredictionOutcome) -> None:
        self.result = outcome
        self.history.append(assessment, outcome)
        log.info("Prediction: %s risk, confidence=%.3f", outcome.risk_class.value, outcome.confidence)
        self.notify(Notification(
            "success",
            "Prediction Complete",
            f"Risk level: {risk_label(outcome)} ({format_confidence(outcome.confidence)} confidence)",
        ))
