from .conftest import make_architecture

LAYERS = [
    {"type": "conv2d", "filters": 32, "kernel_size": 3, "input_shape": [3, 224, 224]},
    {"type": "batch_norm"},
    {"type": "dense", "units": 10, "parameters_count": 10250},
]


def test_layers_are_stored_in_order(client, experiment):
    created = make_architecture(client, experiment["id"], layers=LAYERS, total_parameters=11_114)
    assert created["layer_count"] == 3
    assert created["architecture_json"] == {"layers": LAYERS}

    detail = client.get(f"/api/architectures/{created['id']}").json()
    layers = detail["layers"]
    assert [layer["layer_index"] for layer in layers] == [0, 1, 2]
    assert [layer["layer_type"] for layer in layers] == ["conv2d", "batch_norm", "dense"]
    assert layers[0]["layer_config"] == {"filters": 32, "kernel_size": 3}
    assert layers[0]["input_shape"] == [3, 224, 224]
    assert layers[2]["parameters_count"] == 10250


def test_explicit_architecture_json_is_kept(client, experiment):
    blob = {"architecture": "resnet", "depth": 50}
    created = make_architecture(client, experiment["id"], architecture_json=blob, layer_count=50)
    assert created["architecture_json"] == blob
    assert created["layer_count"] == 50
    assert client.get(f"/api/architectures/{created['id']}").json()["layers"] == []


def test_list_filters_and_orders(client, experiment):
    low = make_architecture(client, experiment["id"], overall_score=10.0)
    unscored = make_architecture(client, experiment["id"])
    high = make_architecture(client, experiment["id"], overall_score=60.0, parent_ids=[low["id"]])

    listed = client.get("/api/architectures", params={"experiment_id": experiment["id"]}).json()
    assert [arch["id"] for arch in listed] == [high["id"], low["id"], unscored["id"]]
    assert listed[0]["parent_ids"] == [low["id"]]


def test_architecture_for_unknown_experiment_is_404(client):
    resp = client.post("/api/architectures", json={"name": "orphan", "experiment_id": "missing"})
    assert resp.status_code == 404


def test_unknown_architecture_is_404(client):
    resp = client.get("/api/architectures/missing")
    assert resp.status_code == 404
    assert resp.json()["error"]["details"] == {"architecture_id": "missing"}


def test_leaderboard_lists_completed_best_first(client, experiment):
    second = make_architecture(client, experiment["id"], status="completed", overall_score=9000.0, top1_accuracy=91.0)
    first = make_architecture(client, experiment["id"], status="completed", overall_score=9000.0, top1_accuracy=95.0)
    pending = make_architecture(client, experiment["id"], status="pending", overall_score=99999.0)

    board = client.get("/api/architectures/leaderboard", params={"limit": 2}).json()
    assert [entry["id"] for entry in board] == [first["id"], second["id"]]
    assert board[0]["experiment_name"] == experiment["name"]
    assert board[0]["dataset"] == "cifar10"
    assert pending["id"] not in [entry["id"] for entry in client.get("/api/architectures/leaderboard").json()]


def test_leaderboard_limit_is_validated(client):
    assert client.get("/api/architectures/leaderboard", params={"limit": 0}).status_code == 400


def test_layer_with_non_integer_shape_is_rejected(client, experiment):
    resp = client.post("/api/architectures", json={
        "name": "Unbatched conv",
        "experiment_id": experiment["id"],
        "layers": [{"type": "conv2d", "filters": 32, "input_shape": [None, 224, 224, 3]}],
    })
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"
    listed = client.get("/api/architectures", params={"experiment_id": experiment["id"]}).json()
    assert listed == []


def test_layer_with_non_object_config_is_rejected(client):
    resp = client.post("/api/architectures", json={
        "name": "Bad config",
        "layers": [{"layer_type": "dense", "layer_config": [128]}],
    })
    assert resp.status_code == 400


def test_every_accepted_layer_reads_back(client, experiment):
    layers = [
        {"layer_type": "mb_conv", "layer_config": {"expansion": 6}, "output_shape": [24, 56, 56]},
        {"type": "dropout", "rate": 0.3, "flops_count": 0},
    ]
    created = make_architecture(client, experiment["id"], layers=layers)

    resp = client.get(f"/api/architectures/{created['id']}")
    assert resp.status_code == 200
    stored = resp.json()["layers"]
    assert stored[0]["layer_type"] == "mb_conv"
    assert stored[0]["layer_config"] == {"expansion": 6}
    assert stored[0]["output_shape"] == [24, 56, 56]
    assert stored[1]["layer_config"] == {"rate": 0.3}
    assert stored[1]["flops_count"] == 0
