def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_ready_reports_database(client):
    response = client.get("/ready")
    assert response.status_code == 200
    assert response.json() == {"ready": True, "details": {"db": "ok"}}


def test_smoke_route(client):
    assert client.get("/test").json() == {"message": "Backend is working!"}
