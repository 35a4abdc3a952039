import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="neuralarch-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ["CACHE_ENABLED"] = "false"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ.setdefault("ENVIRONMENT", "development")

import uuid

import pytest
from fastapi.testclient import TestClient

from neuralarch.main import app


@pytest.fixture
def client():
    # the lifespan creates the tables on startup
    with TestClient(app) as c:
        yield c


@pytest.fixture
def experiment(client):
    resp = client.post("/api/experiments", json={
        "name": f"Experiment {uuid.uuid4().hex[:8]}",
        "description": "CIFAR-10 latency search",
        "strategy": "bayesian",
        "dataset": "cifar10",
        "search_budget": 40,
        "target_accuracy": 92.5,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def make_architecture(client, experiment_id=None, **fields):
    payload = {"name": f"Arch {uuid.uuid4().hex[:8]}", "experiment_id": experiment_id}
    payload.update(fields)
    resp = client.post("/api/architectures", json=payload)
    assert resp.status_code == 201, resp.text
    return resp.json()
