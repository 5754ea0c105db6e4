def test_create_plan_with_defaults(client):
    resp = client.post("/api/trading-plans", json={"name": "Swing plan"})
    assert resp.status_code == 201
    data = resp.json()
    assert data["name"] == "Swing plan"
    assert data["isActive"] is True
    assert data["riskPercentage"] is None
    assert data["createdAt"]


def test_create_plan_full(client):
    body = {
        "name": "Scalping EUR/USD",
        "description": "London session scalps",
        "objectives": "Consistent small gains",
        "strategy": "EMA pullbacks on M5",
        "riskPercentage": 1,
        "targetReturn": "12.5",
        "isActive": False,
    }
    resp = client.post("/api/trading-plans", json=body)
    assert resp.status_code == 201
    data = resp.json()
    assert data["riskPercentage"] == "1.00"
    assert data["targetReturn"] == "12.50"
    assert data["isActive"] is False
    assert data["strategy"] == "EMA pullbacks on M5"


def test_plan_requires_name(client):
    resp = client.post("/api/trading-plans", json={"description": "no name"})
    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid plan data"

    resp = client.post("/api/trading-plans", json={"name": "   "})
    assert resp.status_code == 400


def test_plan_risk_percentage_bounds(client):
    assert client.post("/api/trading-plans", json={"name": "x", "riskPercentage": 101}).status_code == 400
    assert client.post("/api/trading-plans", json={"name": "x", "riskPercentage": -1}).status_code == 400
    assert client.post("/api/trading-plans", json={"name": "x", "targetReturn": -5}).status_code == 400
    assert client.post("/api/trading-plans", json={"name": "x", "riskPercentage": 100}).status_code == 201


def test_list_get_update_delete_plan(client):
    first = client.post("/api/trading-plans", json={"name": "first"}).json()
    second = client.post("/api/trading-plans", json={"name": "second"}).json()

    listed = client.get("/api/trading-plans").json()
    assert [p["id"] for p in listed] == [second["id"], first["id"]]

    assert client.get(f"/api/trading-plans/{first['id']}").json()["name"] == "first"

    resp = client.put(f"/api/trading-plans/{first['id']}", json={"isActive": False, "riskPercentage": "2"})
    assert resp.status_code == 200
    updated = resp.json()
    assert updated["isActive"] is False
    assert updated["riskPercentage"] == "2.00"
    assert updated["name"] == "first"
    assert updated["createdAt"] == first["createdAt"]

    assert client.delete(f"/api/trading-plans/{first['id']}").status_code == 204
    assert client.get(f"/api/trading-plans/{first['id']}").status_code == 404


def test_update_plan_rejects_created_at(client):
    plan = client.post("/api/trading-plans", json={"name": "immutable"}).json()
    resp = client.put(f"/api/trading-plans/{plan['id']}", json={"createdAt": "2020-01-01T00:00:00"})
    assert resp.status_code == 400


def test_missing_plan_is_404(client):
    assert client.get("/api/trading-plans/5").json() == {"message": "Trading plan not found"}
    assert client.put("/api/trading-plans/5", json={"name": "x"}).status_code == 404
    assert client.delete("/api/trading-plans/5").status_code == 404


def test_plan_storage_failure_is_500(client, storage, monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(storage, "delete_trading_plan", boom)
    resp = client.delete("/api/trading-plans/1")
    assert resp.status_code == 500
    assert resp.json() == {"message": "Failed to delete trading plan"}
