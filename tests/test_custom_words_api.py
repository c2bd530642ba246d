import pytest

from tests.conftest import auth_headers, create_user

CATEGORY = {
    "category": "mine",
    "categoryName": "My lists",
    "subcategory": "fruits",
    "subcategoryName": "Fruits",
    "emoji": "🍎",
    "words": [
        {"id": 1, "word": "apple", "meaning": "a fruit"},
        {"id": 2, "word": "pear", "meaning": "another fruit", "exampleCn": "  "},
    ],
}


@pytest.fixture
def headers(db):
    return auth_headers(create_user(db).id)


def test_create_list_and_delete(client, headers):
    created = client.post("/api/customWordCategory/create", headers=headers, json=CATEGORY).json()
    assert created["code"] == 200
    assert created["data"]["wordCount"] == 2

    listed = client.post("/api/customWordCategory/get", headers=headers).json()["data"]["categories"]
    assert [c["subcategory"] for c in listed] == ["fruits"]

    words = client.post(
        "/api/customWords/get", headers=headers, json={"category": "mine", "subcategory": "fruits"}
    ).json()["data"]
    assert [w["word"] for w in words["words"]] == ["apple", "pear"]
    assert words["words"][1]["exampleCn"] == ""
    assert words["stats"]["total"] == 2

    deleted = client.post(
        "/api/customWordCategory/delete", headers=headers, json={"category": "mine", "subcategory": "fruits"}
    ).json()
    assert deleted["code"] == 200

    gone = client.post(
        "/api/customWords/get", headers=headers, json={"category": "mine", "subcategory": "fruits"}
    ).json()
    assert gone["code"] == 404


def test_duplicate_word_ids_rejected(client, headers):
    payload = {**CATEGORY, "words": [{"id": 1, "word": "a", "meaning": "a"}, {"id": 1, "word": "b", "meaning": "b"}]}
    body = client.post("/api/customWordCategory/create", headers=headers, json=payload).json()
    assert body["code"] == 400


def test_duplicate_category_rejected(client, headers):
    client.post("/api/customWordCategory/create", headers=headers, json=CATEGORY)
    body = client.post("/api/customWordCategory/create", headers=headers, json=CATEGORY).json()
    assert body["code"] == 400


def test_mark_and_filter_custom_words(client, headers):
    client.post("/api/customWordCategory/create", headers=headers, json=CATEGORY)
    key = {"category": "mine", "subcategory": "fruits", "id": 2}

    marked = client.post("/api/customWords/mark", headers=headers, json={**key, "status": "known"}).json()
    assert marked["code"] == 200
    client.post("/api/customWords/mistakes/add", headers=headers, json={**key, "mistakes": ["2024-04-01"]})

    known = client.post(
        "/api/customWords/status/get", headers=headers, json={"status": "known", "subcategory": "fruits"}
    ).json()["data"]
    assert [(w["word"], w["mistakes"]) for w in known["words"]] == [("pear", ["2024-04-01"])]

    unmarked = client.post(
        "/api/customWords/status/get", headers=headers, json={"status": "unmarked", "subcategory": "fruits"}
    ).json()["data"]
    assert [w["word"] for w in unmarked["words"]] == ["apple"]


def test_custom_mistakes_show_in_global_feed(client, headers):
    client.post("/api/customWordCategory/create", headers=headers, json=CATEGORY)
    client.post(
        "/api/customWords/mistakes/add",
        headers=headers,
        json={"category": "mine", "subcategory": "fruits", "id": 1, "mistakes": ["2024-04-01"]},
    )

    feed = client.post("/api/userWords/mistakes/get", headers=headers, json={}).json()["data"]

    assert [w["word"] for w in feed["words"]] == ["apple"]


def test_mark_unknown_custom_word(client, headers):
    client.post("/api/customWordCategory/create", headers=headers, json=CATEGORY)
    body = client.post(
        "/api/customWords/mark",
        headers=headers,
        json={"category": "mine", "subcategory": "fruits", "id": 42, "status": "known"},
    ).json()
    assert body["code"] == 404
