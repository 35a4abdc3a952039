def test_discovery_document(client):
    resp = client.get("/api")
    assert resp.status_code == 200
    data = resp.json()
    assert data["name"] == "NeuralArch Search API"
    assert "POST /api/chat" in data["endpoints"]
    assert data["chat_example"]["body"]["messages"][0]["role"] == "user"


def test_ping(client):
    assert client.get("/api/ping").json() == {"message": "ping"}


def test_root(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"


def test_health_reports_dependencies(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    data = resp.json()
    assert data["status"] == "healthy"
    assert data["database"] == "healthy"
    assert data["cache"] == "disabled"


def test_unknown_route_uses_error_body(client):
    resp = client.get("/api/does-not-exist", headers={"X-Request-ID": "req-42"})
    assert resp.status_code == 404
    error = resp.json()["error"]
    assert error["code"] == "HTTP_404"
    assert error["request_id"] == "req-42"
    assert error["timestamp"]
    assert resp.headers["X-Request-ID"] == "req-42"


def test_request_id_is_generated(client):
    resp = client.get("/api")
    assert len(resp.headers["X-Request-ID"]) == 36


def test_cors_preflight(client):
    resp = client.options("/api/chat", headers={
        "Origin": "http://localhost:3000",
        "Access-Control-Request-Method": "POST",
        "Access-Control-Request-Headers": "Content-Type",
    })
    assert resp.status_code == 200
    assert resp.headers["access-control-allow-origin"] == "*"
    assert "POST" in resp.headers["access-control-allow-methods"]


def test_cors_on_simple_request(client):
    resp = client.get("/api", headers={"Origin": "http://example.com"})
    assert resp.headers["access-control-allow-origin"] == "*"


def test_error_monitoring_counts_not_found(client):
    client.get("/api/experiments/not-there")
    data = client.get("/monitoring/errors").json()
    assert data["in_memory"]["resource_not_found"]["total_count"] >= 1
    assert data["redis"] == {"redis_available": False}


def test_performance_monitoring_times_store_calls(client):
    client.get("/api/experiments")
    operations = client.get("/monitoring/performance").json()["operations"]["operations"]
    assert operations["db.get_experiments"]["count"] >= 1
    assert operations["db.get_experiments"]["success_count"] >= 1


def test_cache_monitoring_without_redis(client):
    data = client.get("/monitoring/cache").json()
    assert data["cache_available"] is False
    assert "hits" in data["decorator_stats"]
