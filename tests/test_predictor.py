import pytest
import requests

from cardiorisk.predictor import PredictorClient, ResponseError, TransportError
from cardiorisk.schemas import PredictRequest, RiskClass
from cardiorisk.validation import validate_assessment

from .conftest import FakeSession, make_response


def client_for(session):
    return PredictorClient(base_url="http://predictor.test/", timeout=5, session=session)


def test_wire_format_uses_integer_codes(sample_form):
    form = dict(sample_form, gender="female", cholesterol="wellAboveNormal",
                glucose="aboveNormal", smoker=True, physically_active=False)
    wire = PredictRequest.from_assessment(validate_assessment(form)).model_dump()
    assert wire == {
        "age": 9125, "gender": 2, "height": 170, "weight": 70,
        "ap_hi": 120, "ap_lo": 80, "cholesterol": 3, "gluc": 2,
        "smoke": 1, "alco": 0, "active": 0,
    }


def test_predict_posts_once_and_parses(sample_form, fake_session, predictor):
    outcome = predictor.predict(validate_assessment(sample_form))
    assert outcome.risk_class is RiskClass.LOW
    assert outcome.confidence == pytest.approx(0.82)

    assert len(fake_session.calls) == 1
    call = fake_session.calls[0]
    assert call["url"] == "http://predictor.test/predict"
    assert call["timeout"] == 5
    assert call["json"]["ap_hi"] == 120


def test_high_risk(sample_form):
    session = FakeSession(make_response(200, {"prediction": 1, "probability": 0.64}))
    outcome = client_for(session).predict(validate_assessment(sample_form))
    assert outcome.risk_class is RiskClass.HIGH


def test_http_error_status(sample_form):
    session = FakeSession(make_response(500, {"detail": "boom"}))
    with pytest.raises(ResponseError) as exc:
        client_for(session).predict(validate_assessment(sample_form))
    assert exc.value.status_code == 500
    assert "500" in str(exc.value)


def test_invalid_json_body(sample_form):
    session = FakeSession(make_response(200, raw="<html>oops</html>"))
    with pytest.raises(ResponseError, match="invalid JSON"):
        client_for(session).predict(validate_assessment(sample_form))


@pytest.mark.parametrize("body", [
    {"prediction": 2, "probability": 0.5},
    {"prediction": 1, "probability": 1.5},
    {"prediction": 0},
    {"prediction": True, "probability": 0.5},
    {"prediction": 1.0, "probability": 0.5},
    ["not", "an", "object"],
])
def test_malformed_body(sample_form, body):
    session = FakeSession(make_response(200, body))
    with pytest.raises(ResponseError):
        client_for(session).predict(validate_assessment(sample_form))


def test_connection_error(sample_form):
    session = FakeSession(error=requests.ConnectionError("connection refused"))
    with pytest.raises(TransportError, match="connection refused"):
        client_for(session).predict(validate_assessment(sample_form))


def test_timeout(sample_form):
    session = FakeSession(error=requests.Timeout())
    with pytest.raises(TransportError, match="timed out after 5s"):
        client_for(session).predict(validate_assessment(sample_form))
