import json

import pytest
import requests

from cardiorisk.history import HistoryStore, MemoryBackend
from cardiorisk.predictor import PredictorClient


def make_response(status=200, body=None, raw=None):
    r = requests.Response()
    r.status_code = status
    r.reason = "OK" if status < 400 else "Error"
    r.url = "http://predictor.test/predict"
    if raw is not None:
        r._content = raw.encode("utf-8")
    else:
        r._content = json.dumps(body).encode("utf-8")
    r.headers["Content-Type"] = "application/json"
    return r


class FakeSession:
    """Stands in for requests.Session: records posts, replays a canned reply."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, json=None, timeout=None):
        self.calls.append({"url": url, "json": json, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def sample_form():
    return {
        "age": 9125,
        "gender": "male",
        "height": 170,
        "weight": 70,
        "systolic_bp": 120,
        "diastolic_bp": 80,
        "cholesterol": "normal",
        "glucose": "normal",
        "smoker": False,
        "alcohol": False,
        "physically_active": True,
    }


@pytest.fixture
def backend():
    return MemoryBackend()


@pytest.fixture
def store(backend):
    return HistoryStore(backend)


@pytest.fixture
def fake_session():
    return FakeSession(make_response(200, {"prediction": 0, "probability": 0.82}))


@pytest.fixture
def predictor(fake_session):
    return PredictorClient(base_url="http://predictor.test", timeout=5, session=fake_session)
