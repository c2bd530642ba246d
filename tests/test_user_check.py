from tests.conftest import auth_headers, create_user


def test_check_in_is_idempotent(client, db):
    user = create_user(db)
    headers = auth_headers(user.id)

    first = client.post("/api/user/check/add", headers=headers, json={"date": "2024-03-01"}).json()
    second = client.post("/api/user/check/add", headers=headers, json={"date": "2024-03-01"}).json()

    assert first["message"] == "Check-in recorded"
    assert second["message"] == "Already checked in today"
    assert second["data"] == ["2024-03-01"]


def test_check_in_history(client, db):
    user = create_user(db)
    headers = auth_headers(user.id)
    client.post("/api/user/check/add", headers=headers, json={"date": "2024-03-01"})
    client.post("/api/user/check/add", headers=headers, json={"date": "2024-03-02"})

    body = client.post("/api/user/check/get", headers=headers).json()

    assert body["data"] == ["2024-03-01", "2024-03-02"]


def test_check_in_rejects_bad_date(client, db):
    user = create_user(db)
    body = client.post("/api/user/check/add", headers=auth_headers(user.id), json={"date": "yesterday"}).json()
    assert body["code"] == 400
