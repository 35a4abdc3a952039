import re

import pytest

from neuralarch.nas_engine import search_simulator

SEARCH_SPACE = {"layers": ["conv2d", "dense", "dropout"], "optimizers": ["adam"]}
OBJECTIVES = {"accuracy": 0.7, "latency": 0.3}


def start(client, algorithm, parallel=4, **extra):
    body = {
        "algorithm": algorithm,
        "searchSpace": SEARCH_SPACE,
        "objectives": OBJECTIVES,
        "budget": {"maxEvaluations": 200, "maxTime": 4, "parallel": parallel},
    }
    body.update(extra)
    return client.post("/api/optimization", json=body)


@pytest.mark.parametrize("algorithm", search_simulator.ALGORITHMS)
@pytest.mark.parametrize("parallel", [1, 3, 8])
def test_start_is_initialized_and_bounded(client, algorithm, parallel):
    resp = start(client, algorithm, parallel)
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "initialized"
    assert data["algorithm"] == algorithm
    assert len(data["candidates"]) <= parallel
    assert re.fullmatch(rf"nas_{algorithm}_\d+_[0-9a-z]{{9}}", data["searchId"])


def test_start_seeds_population_with_current_best(client):
    seed = {"id": "seed-1", "layers": [], "score": 0.99}
    data = start(client, "evolutionary", parallel=5, currentBest=[seed]).json()
    assert data["candidates"][0]["id"] == "seed-1"
    assert data["progress"]["bestScore"] == 0.99


def test_random_candidates_use_search_space():
    population = search_simulator.generate_population(6, SEARCH_SPACE)
    assert len(population) == 6
    scores = [candidate["score"] for candidate in population]
    assert scores == sorted(scores, reverse=True)
    for candidate in population:
        assert 5 <= len(candidate["layers"]) <= 19
        assert {layer["type"] for layer in candidate["layers"]} <= set(SEARCH_SPACE["layers"])
        assert candidate["optimizer"] == "adam"


def test_start_requires_all_fields(client):
    resp = client.post("/api/optimization", json={"algorithm": "bayesian"})
    assert resp.status_code == 400


def test_start_rejects_unknown_algorithm(client):
    resp = start(client, "simulated_annealing")
    assert resp.status_code == 400
    assert "Unsupported algorithm" in resp.json()["error"]["message"]


def test_status_recovers_algorithm_from_id(client):
    search_id = start(client, "gradient").json()["searchId"]
    resp = client.get("/api/optimization", params={"searchId": search_id})
    assert resp.status_code == 200
    data = resp.json()
    assert data["algorithm"] == "gradient"
    assert data["status"] == "running"
    assert 0 <= data["progress"]["convergence"] <= 0.95


def test_status_requires_search_id(client):
    assert client.get("/api/optimization").status_code == 400


def test_update_actions(client):
    resp = client.put("/api/optimization", params={"searchId": "nas_random_1_abc"}, json={"action": "pause"})
    assert resp.status_code == 200
    assert resp.json()["algorithm"] == "random"

    resp = client.put("/api/optimization", params={"searchId": "nas_random_1_abc"}, json={"action": "rewind"})
    assert resp.status_code == 400


def test_stop_completes(client):
    resp = client.delete("/api/optimization", params={"searchId": "nas_bayesian_1_abc"})
    assert resp.status_code == 200
    assert resp.json()["status"] == "completed"
    assert resp.json()["progress"]["estimatedRemaining"] == 0


def test_unknown_id_defaults_to_evolutionary():
    assert search_simulator.algorithm_from_search_id("whatever") == "evolutionary"


@pytest.mark.parametrize("algorithm", ["gradient", "random"])
def test_non_numeric_max_time_is_400(client, algorithm):
    resp = client.post("/api/optimization", json={
        "algorithm": algorithm,
        "searchSpace": SEARCH_SPACE,
        "objectives": OBJECTIVES,
        "budget": {"parallel": 2, "maxTime": "4h"},
    })
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


def test_parallel_above_limit_is_400(client):
    resp = start(client, "gradient", parallel=10 ** 7)
    assert resp.status_code == 400


def test_parallel_at_limit_is_accepted(client):
    resp = start(client, "gradient", parallel=search_simulator.MAX_PARALLEL)
    assert resp.status_code == 200
    assert len(resp.json()["candidates"]) == search_simulator.MAX_PARALLEL


def test_simulator_caps_parallel_for_direct_callers():
    session = search_simulator.start_search(
        "gradient", SEARCH_SPACE, OBJECTIVES, {"parallel": 10 ** 6, "maxTime": 1},
    )
    assert len(session["candidates"]) == search_simulator.MAX_PARALLEL
