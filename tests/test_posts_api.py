import pytest

API = "/api/v1"


@pytest.fixture
def as_user(client, auth_headers):
    """Call the API as a given user: as_user("alice").get(...)"""

    class Caller:
        def __init__(self, user_id):
            self.headers = auth_headers(user_id)

        def __getattr__(self, method):
            request = getattr(client, method)
            return lambda path, **kwargs: request(f"{API}{path}", headers=self.headers, **kwargs)

    return Caller


def test_root(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.json()["version"]


def test_requests_without_token_are_rejected(client):
    response = client.get(f"{API}/posts")

    assert response.status_code == 401
    assert response.json() == {"msg": "No token, authorization denied"}


def test_requests_with_bad_token_are_rejected(client):
    response = client.get(f"{API}/posts", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == 401
    assert response.json() == {"msg": "Token is not valid"}


def test_full_post_lifecycle(as_user):
    alice, bob, carol = as_user("alice"), as_user("bob"), as_user("carol")

    response = alice.post("/posts", json={"text": "hello"})
    assert response.status_code == 200
    post = response.json()
    assert post["author_id"] == "alice"
    assert post["author_name"] == "Alice"
    post_id = post["id"]

    assert bob.get("/posts").json()[0]["id"] == post_id

    response = bob.put(f"/posts/like/{post_id}")
    assert response.status_code == 200
    assert response.json() == [{"user_id": "bob"}]

    response = bob.put(f"/posts/like/{post_id}")
    assert response.status_code == 400
    assert response.json() == {"msg": "Post already liked"}

    assert bob.put(f"/posts/unlike/{post_id}").json() == []

    response = carol.post(f"/posts/comment/{post_id}", json={"text": "nice"})
    assert response.status_code == 200
    comments = response.json()
    assert [(c["author_id"], c["author_name"], c["text"]) for c in comments] == [("carol", "Carol", "nice")]
    comment_id = comments[0]["id"]

    response = alice.delete(f"/posts/comment/{post_id}/{comment_id}")
    assert response.status_code == 403
    assert response.json() == {"msg": "User is not authorized"}

    response = carol.delete(f"/posts/comment/{post_id}/{comment_id}")
    assert response.status_code == 200
    assert response.json() == []

    response = bob.delete(f"/posts/{post_id}")
    assert response.status_code == 403

    response = alice.delete(f"/posts/{post_id}")
    assert response.status_code == 200
    assert response.json() == {"msg": "Post is removed"}

    response = alice.get(f"/posts/{post_id}")
    assert response.status_code == 404
    assert response.json() == {"msg": "Post not found"}


def test_empty_text_is_a_client_error(as_user):
    response = as_user("alice").post("/posts", json={"text": ""})

    assert response.status_code == 400
    assert response.json() == {"msg": "Text is required"}


def test_missing_body_is_rejected_by_request_validation(as_user):
    response = as_user("alice").post("/posts", json={})

    assert response.status_code == 422


def test_unlike_without_like(as_user):
    post_id = as_user("alice").post("/posts", json={"text": "hello"}).json()["id"]

    response = as_user("bob").put(f"/posts/unlike/{post_id}")

    assert response.status_code == 400
    assert response.json() == {"msg": "User has not liked the post previously!"}


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/posts/missing"),
        ("delete", "/posts/missing"),
        ("put", "/posts/like/missing"),
        ("put", "/posts/unlike/missing"),
        ("delete", "/posts/comment/missing/whatever"),
    ],
)
def test_missing_post(as_user, method, path):
    response = getattr(as_user("alice"), method)(path)

    assert response.status_code == 404
    assert response.json() == {"msg": "Post not found"}


def test_comment_on_missing_post(as_user):
    response = as_user("alice").post("/posts/comment/missing", json={"text": "hi"})

    assert response.status_code == 404


def test_delete_missing_comment(as_user):
    post_id = as_user("alice").post("/posts", json={"text": "hello"}).json()["id"]

    response = as_user("alice").delete(f"/posts/comment/{post_id}/missing")

    assert response.status_code == 404
    assert response.json() == {"msg": "Comment does not exist"}


def test_unknown_user_cannot_post(as_user):
    response = as_user("mallory").post("/posts", json={"text": "hello"})

    assert response.status_code == 404
    assert response.json() == {"msg": "User not found"}


def test_read_user_me(as_user):
    response = as_user("bob").get("/users/me")

    assert response.status_code == 200
    assert response.json()["name"] == "Bob"
