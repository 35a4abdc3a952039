import uuid

from neuralarch.db.nas_db import SYSTEM_OWNER

from .conftest import make_architecture


def test_conversation_log_is_chronological(client):
    session_id = f"session-{uuid.uuid4()}"
    for role, content in (("user", "hello"), ("ai", "Hi there!"), ("user", "compare two models")):
        resp = client.post("/api/conversations", json={
            "session_id": session_id,
            "message_role": role,
            "message_content": content,
            "tokens_used": len(content),
            "user_id": "spoofed",
        })
        assert resp.status_code == 201
        assert resp.json()["user_id"] == SYSTEM_OWNER

    log = client.get(f"/api/conversations/{session_id}").json()
    assert [entry["message_content"] for entry in log] == ["hello", "Hi there!", "compare two models"]
    assert log[1]["message_role"] == "ai"
    assert log[0]["ai_model"] == "neuralarch-assistant"


def test_conversation_role_is_validated(client):
    resp = client.post("/api/conversations", json={
        "session_id": "s", "message_role": "assistant", "message_content": "x",
    })
    assert resp.status_code == 400


def test_unknown_session_has_empty_log(client):
    assert client.get("/api/conversations/never-used").json() == []


def test_global_stats_count_rows(client):
    before = client.get("/api/stats").json()
    for key in ("total_experiments", "total_architectures", "total_ai_conversations"):
        assert isinstance(before[key], int) and before[key] >= 0

    experiment = client.post("/api/experiments", json={"name": "stats"}).json()
    make_architecture(client, experiment["id"])
    make_architecture(client, experiment["id"])
    client.post("/api/conversations", json={
        "session_id": "stats", "message_role": "user", "message_content": "count me",
    })

    after = client.get("/api/stats").json()
    assert after["total_experiments"] == before["total_experiments"] + 1
    assert after["total_architectures"] == before["total_architectures"] + 2
    assert after["total_ai_conversations"] == before["total_ai_conversations"] + 1


def test_profile_upsert_and_read(client):
    profile_id = f"user-{uuid.uuid4()}"
    assert client.get(f"/api/profiles/{profile_id}").status_code == 404

    created = client.put(f"/api/profiles/{profile_id}", json={
        "email": "ada@example.com",
        "full_name": "Ada",
        "preferred_dataset": "cifar10",
    })
    assert created.status_code == 200
    assert created.json()["preferred_strategy"] == "evolutionary"

    updated = client.put(f"/api/profiles/{profile_id}", json={"full_name": "Ada L."}).json()
    assert updated["full_name"] == "Ada L."
    assert updated["email"] == "ada@example.com"
    assert updated["preferred_dataset"] == "cifar10"
    assert client.get(f"/api/profiles/{profile_id}").json() == updated


def test_profile_email_is_validated(client):
    resp = client.put("/api/profiles/bad-email", json={"email": "not-an-email"})
    assert resp.status_code == 400


def test_refresh_profile_stats(client):
    profile_id = f"user-{uuid.uuid4()}"
    client.put(f"/api/profiles/{profile_id}", json={"full_name": "Grace"})
    experiment = client.post("/api/experiments", json={"name": "owned", "user_id": profile_id}).json()
    make_architecture(client, experiment["id"], user_id=profile_id, top1_accuracy=88.0)
    make_architecture(client, experiment["id"], user_id=profile_id, top1_accuracy=91.5)
    make_architecture(client, experiment["id"], user_id="someone-else", top1_accuracy=99.0)

    refreshed = client.post(f"/api/profiles/{profile_id}/refresh-stats")
    assert refreshed.status_code == 200
    data = refreshed.json()
    assert data["total_experiments"] == 1
    assert data["total_architectures"] == 2
    assert data["best_accuracy"] == 91.5


def test_refresh_unknown_profile_is_404(client):
    assert client.post("/api/profiles/nobody/refresh-stats").status_code == 404
