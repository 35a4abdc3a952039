def test_evaluate_empty_layers(client):
    resp = client.post("/api/nas-ai", json={
        "operation": "evaluate",
        "architecture": {"layers": []},
        "dataset": "cifar10",
    })
    assert resp.status_code == 200
    metrics = resp.json()["metrics"]
    assert metrics["parameterCount"] == 0
    assert metrics["estimatedAccuracy"] == 0.85


def test_evaluate_without_architecture_is_400(client):
    resp = client.post("/api/nas-ai", json={"operation": "evaluate"})
    assert resp.status_code == 400
    assert resp.json()["error"]["message"] == "Architecture specification required"


def test_suggest_accepts_camel_case_fields(client):
    resp = client.post("/api/nas-ai", json={
        "operation": "suggest",
        "searchSpace": {"layers": ["conv2d"]},
        "constraints": {"targetAccuracy": 0.86},
    })
    assert resp.status_code == 200
    assert [arch["name"] for arch in resp.json()["result"]] == ["EfficientNet-B0 Variant"]


def test_compare_uses_current_best(client):
    resp = client.post("/api/nas-ai", json={
        "operation": "compare",
        "currentBest": [{"name": "A"}, {"name": "B"}, {"name": "C"}],
    })
    assert resp.status_code == 200
    assert len(resp.json()["result"]["comparison"]) == 3


def test_compare_with_one_is_400(client):
    resp = client.post("/api/nas-ai", json={"operation": "compare", "currentBest": [{"name": "A"}]})
    assert resp.status_code == 400


def test_unknown_operation_is_400(client):
    resp = client.post("/api/nas-ai", json={"operation": "train"})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


def test_layer_with_non_numeric_filters_is_400(client):
    resp = client.post("/api/nas-ai", json={
        "operation": "evaluate",
        "architecture": {"layers": [{"type": "conv2d", "filters": "sixty-four"}]},
    })
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"


def test_numeric_string_filters_evaluate_like_numbers(client):
    def evaluate(filters):
        return client.post("/api/nas-ai", json={
            "operation": "evaluate",
            "architecture": {"layers": [{"type": "conv2d", "filters": filters, "kernel_size": 3}]},
        })

    as_string = evaluate("64")
    assert as_string.status_code == 200
    assert as_string.json()["metrics"]["parameterCount"] == evaluate(64).json()["metrics"]["parameterCount"]


def test_layer_that_is_not_an_object_is_400(client):
    resp = client.post("/api/nas-ai", json={
        "operation": "evaluate",
        "architecture": {"layers": ["conv2d"]},
    })
    assert resp.status_code == 400


def test_null_batch_dimension_is_accepted(client):
    resp = client.post("/api/nas-ai", json={
        "operation": "evaluate",
        "architecture": {"layers": [{"type": "conv2d", "filters": 8, "input_shape": [None, 32, 32, 3]}]},
    })
    assert resp.status_code == 200
    assert resp.json()["metrics"]["flops"] == 8 * 3 * 9 * 32 * 32


def test_non_numeric_constraint_is_400(client):
    resp = client.post("/api/nas-ai", json={
        "operation": "optimize",
        "architecture": {"layers": [{"type": "conv2d", "filters": 64}], "parameters": 2_000_000},
        "constraints": {"maxParams": "small"},
    })
    assert resp.status_code == 400


def test_compare_with_non_numeric_accuracy_is_400(client):
    resp = client.post("/api/nas-ai", json={
        "operation": "compare",
        "currentBest": [{"name": "A", "accuracy": "high"}, {"name": "B"}],
    })
    assert resp.status_code == 400
