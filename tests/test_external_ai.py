import pytest

from neuralarch.nas_engine.external_ai import render_pytorch_module, SERVICES, DEFAULT_MODEL_CODE


def test_openai_code_generation_renders_layers(client):
    resp = client.post("/api/external-ai", json={
        "service": "openai",
        "task": "code_generation",
        "input": {"architecture": {
            "name": "tiny net",
            "layers": [
                {"type": "conv2d", "filters": 16, "kernel_size": 3},
                {"type": "global_avg_pool"},
                {"type": "dense", "units": 10},
            ],
        }},
    })
    assert resp.status_code == 200
    data = resp.json()
    code = data["result"]["code"]
    assert "class TinyNet(nn.Module):" in code
    assert "nn.Conv2d(3, 16, 3, padding=1)," in code
    assert "nn.LazyLinear(10)," in code
    assert data["metadata"]["model_used"] == "gpt-4"
    assert data["metadata"]["tokens_used"] == 1500


def test_code_generation_without_layers_returns_reference_network():
    assert render_pytorch_module({}) == DEFAULT_MODEL_CODE


def test_class_name_never_starts_with_digit():
    code = render_pytorch_module({"name": "3x3 stack", "layers": [{"type": "batch_norm"}]})
    assert "class Net3X3Stack(nn.Module):" in code


@pytest.mark.parametrize("service", [s for s in SERVICES if s != "openai"])
def test_other_providers(client, service):
    resp = client.post("/api/external-ai", json={
        "service": service,
        "task": "research_synthesis",
        "input": {},
        "parameters": {"model": "custom-model"},
    })
    assert resp.status_code == 200
    data = resp.json()
    assert data["service"] == service
    assert data["metadata"]["model_used"] == "custom-model"
    assert data["result"]["suggestions"]
    assert 0 < data["result"]["confidence"] < 1


def test_unsupported_service(client):
    resp = client.post("/api/external-ai", json={"service": "mistral", "task": "code_generation", "input": {}})
    assert resp.status_code == 400


def test_unsupported_task(client):
    resp = client.post("/api/external-ai", json={"service": "openai", "task": "translation", "input": {}})
    assert resp.status_code == 400


def test_missing_input(client):
    resp = client.post("/api/external-ai", json={"service": "openai", "task": "code_generation"})
    assert resp.status_code == 400


def test_code_generation_with_malformed_layers_is_400(client):
    resp = client.post("/api/external-ai", json={
        "service": "openai",
        "task": "code_generation",
        "input": {"architecture": {"layers": ["conv2d", {"type": "dense", "units": "wide"}]}},
    })
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"
