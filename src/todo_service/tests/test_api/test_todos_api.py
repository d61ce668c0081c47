def test_root_says_hello(client):
    resp = client.get("/")

    assert resp.status_code == 200
    assert resp.text == "hello world"


def test_create_and_get_todo(client):
    resp = client.post("/todos", json={"text": "buy milk"})

    assert resp.status_code == 201
    assert resp.json() == {"id": 1, "text": "buy milk", "completed": False}
    assert client.get("/todos/1").json() == resp.json()


def test_list_todos(client):
    client.post("/todos", json={"text": "a"})
    client.post("/todos", json={"text": "b", "labels": [1]})

    resp = client.get("/todos")

    assert resp.status_code == 200
    assert [t["text"] for t in resp.json()] == ["a", "b"]


def test_patch_todo(client):
    client.post("/todos", json={"text": "buy milk"})

    resp = client.patch("/todos/1", json={"completed": True})

    assert resp.status_code == 200
    assert resp.json() == {"id": 1, "text": "buy milk", "completed": True}


def test_delete_todo(client):
    client.post("/todos", json={"text": "bye"})

    assert client.delete("/todos/1").status_code == 204
    assert client.delete("/todos/1").status_code == 404


def test_missing_todo_is_404(client):
    resp = client.get("/todos/9")

    assert resp.status_code == 404
    assert resp.json() == {"detail": "Todo with ID 9 not found", "code": "not_found", "id": 9}


def test_empty_text_is_400(client):
    resp = client.post("/todos", json={"text": ""})

    assert resp.status_code == 400
    assert "Can not be empty" in resp.text


def test_too_long_text_is_400(client):
    resp = client.post("/todos", json={"text": "x" * 101})

    assert resp.status_code == 400
    assert "Over name length" in resp.text


def test_non_integer_id_is_400(client):
    assert client.get("/todos/abc").status_code == 400


def test_id_wider_than_32_bits_is_400(client):
    assert client.get("/todos/2147483648").status_code == 400
    assert client.delete("/todos/9223372036854775808").status_code == 400


def test_id_at_32_bit_limit_is_404(client):
    assert client.get("/todos/2147483647").status_code == 404
