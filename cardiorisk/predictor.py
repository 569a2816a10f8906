# cardiorisk/predictor.py
import logging
from typing import Optional

import requests
from pydantic import ValidationError

from . import config
from .schemas import AssessmentInput, PredictionOutcome, PredictRequest, PredictResponse

log = logging.getLogger(__name__)


class PredictionError(Exception):
    """Base for every failure talking to the remote predictor."""


class TransportError(PredictionError):
    pass


class ResponseError(PredictionError):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class PredictorClient:
    def __init__(self, base_url: str = None, timeout: float = None,
                 session: requests.Session = None):
        self.base_url = (base_url or config.API_URL).rstrip("/")
        self.timeout = config.PREDICTOR_TIMEOUT if timeout is None else timeout
        self.session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/predict"

    def predict(self, assessment: AssessmentInput) -> PredictionOutcome:
        payload = PredictRequest.from_assessment(assessment).model_dump()
        log.debug("POST %s payload=%s", self.endpoint, payload)

        try:
            r = self.session.post(self.endpoint, json=payload, timeout=self.timeout)
        except requests.Timeout as e:
            raise TransportError(f"Prediction request timed out after {self.timeout:g}s") from e
        except requests.RequestException as e:
            raise TransportError(f"Failed to reach prediction service: {e}") from e

        if not r.ok:
            raise ResponseError(f"HTTP error! status: {r.status_code}", status_code=r.status_code)

        try:
            body = r.json()
        except ValueError as e:
            raise ResponseError("Prediction service returned invalid JSON", status_code=r.status_code) from e

        try:
            out = PredictResponse.model_validate(body)
        except ValidationError as e:
            raise ResponseError(
                f"Unexpected prediction response: {e.error_count()} invalid field(s)",
                status_code=r.status_code,
            ) from e

        return out.to_outcome()
