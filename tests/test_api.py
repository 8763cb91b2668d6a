NEW_REQUEST = {
    "userId": 1,
    "type": "Annual Leave",
    "startDate": "2026-01-05",
    "endDate": "2026-01-07",
    "days": 3,
    "reason": "Trip",
}


def test_health(client):
    resp = client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "OK"
    assert "timestamp" in resp.json()


def test_get_user(client):
    resp = client.get("/api/user/1")
    assert resp.status_code == 200
    assert resp.json() == {
        "id": 1, "name": "John Doe", "email": "john.doe@uob.com", "role": "employee", "managerId": 3,
    }
    assert client.get("/api/user/99").status_code == 404


def test_get_balance(client):
    assert client.get("/api/leave-balance/1").json() == {"annual": 14, "medical": 12, "compassionate": 3}
    assert client.get("/api/leave-balance/99").status_code == 404


def test_list_requests_newest_first(client):
    body = client.get("/api/leave-requests/1").json()
    assert [r["id"] for r in body] == [1, 2, 3]
    assert body[0]["dates"] == "Dec 20-22, 2025"
    assert body[0]["startDate"] == "2025-12-20"
    assert body[0]["createdAt"].startswith("2025-12-10T10:00:00")


def test_submit_then_approve(client):
    resp = client.post("/api/leave-requests", json=NEW_REQUEST)
    assert resp.status_code == 201
    created = resp.json()
    assert created["status"] == "Pending"
    assert created["dates"] == "Jan 5-7, 2026"
    assert client.get("/api/leave-balance/1").json()["annual"] == 14

    resp = client.patch(f"/api/leave-requests/{created['id']}", json={"status": "Approved", "managerId": 3})
    assert resp.status_code == 200
    assert resp.json()["status"] == "Approved"
    assert client.get("/api/leave-balance/1").json()["annual"] == 11


def test_submit_insufficient_balance(client):
    resp = client.post("/api/leave-requests", json={**NEW_REQUEST, "type": "Compassionate Leave", "days": 4})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Insufficient compassionate leave balance"
    assert len(client.get("/api/leave-requests/1").json()) == 3


def test_submit_validation(client):
    assert client.post("/api/leave-requests", json={"userId": 1}).status_code == 400
    bad_range = {**NEW_REQUEST, "startDate": "2026-01-07", "endDate": "2026-01-05"}
    assert client.post("/api/leave-requests", json=bad_range).status_code == 400
    assert client.post("/api/leave-requests", json={**NEW_REQUEST, "userId": 99}).status_code == 404


def test_decision_errors(client):
    assert client.patch("/api/leave-requests/99", json={"status": "Approved", "managerId": 3}).status_code == 404
    assert client.patch("/api/leave-requests/1", json={"status": "Approved", "managerId": 1}).status_code == 403
    assert client.patch("/api/leave-requests/1", json={"status": "Approved", "managerId": 99}).status_code == 403
    assert client.patch("/api/leave-requests/1", json={"status": "Maybe", "managerId": 3}).status_code == 400
    assert client.patch("/api/leave-requests/1", json={"status": "Approved"}).status_code == 403
    assert client.patch("/api/leave-requests/99", json={"status": "Approved"}).status_code == 404
    assert client.get("/api/leave-requests/1").json()[0]["status"] == "Pending"


def test_reject_keeps_balance(client):
    resp = client.patch("/api/leave-requests/4", json={"status": "Rejected", "managerId": 3})
    assert resp.json()["status"] == "Rejected"
    assert client.get("/api/leave-balance/2").json()["annual"] == 10


def test_team_requests(client):
    body = client.get("/api/team-requests/3").json()
    assert [(r["id"], r["employee"]) for r in body] == [(1, "John Doe"), (4, "Sarah Chen"), (5, "Alice Wong")]
    assert client.get("/api/team-requests/1").json() == []

    client.patch("/api/leave-requests/4", json={"status": "Approved", "managerId": 3})
    assert [r["id"] for r in client.get("/api/team-requests/3").json()] == [1, 5]


def test_ai_chat(client):
    resp = client.post("/api/ai-chat", json={"message": "What's my balance?", "userId": 1})
    assert resp.status_code == 200
    body = resp.json()
    assert body["role"] == "assistant"
    assert "Annual Leave: 14 days" in body["content"]
    assert "timestamp" in body


def test_ai_chat_requires_fields(client):
    assert client.post("/api/ai-chat", json={"userId": 1}).status_code == 400
    assert client.post("/api/ai-chat", json={"message": "", "userId": 1}).status_code == 400
    assert client.post("/api/ai-chat", json={"message": "balance"}).status_code == 400
    assert client.post("/api/ai-chat", json={"message": "balance", "userId": 99}).status_code == 404


def test_statistics(client):
    assert client.get("/api/statistics/1").json() == {
        "totalRequests": 3, "pending": 1, "approved": 2, "rejected": 0, "totalDaysTaken": 4,
    }
    assert client.get("/api/statistics/99").json()["totalRequests"] == 0


def test_error_bodies_carry_error_message(client):
    resp = client.get("/api/user/99")
    assert resp.json()["error"] == "User not found"

    resp = client.patch("/api/leave-requests/1", json={"status": "Approved", "managerId": 2})
    assert resp.status_code == 403
    assert resp.json()["error"] == "Unauthorized"

    resp = client.post("/api/ai-chat", json={"userId": 1})
    assert resp.json()["error"] == "Message and userId are required"

    resp = client.post("/api/leave-requests", json={"userId": 1})
    assert resp.status_code == 400
    assert resp.json()["error"] == "Invalid request"
