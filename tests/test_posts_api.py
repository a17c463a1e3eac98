"""Tests for post, timeline and like endpoints."""

import pytest
from sqlalchemy import func, select

from minisocial.models import PostLike
from minisocial.crud import crud_post_like


@pytest.fixture
def alice_auth(register):
    return register("alice")


@pytest.fixture
def bob_auth(register):
    return register("bob")


def _create_post(client, headers, content="hello"):
    response = client.post("/api/posts", json={"content": content}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["post"]


def test_like_lifecycle_scenario(client, alice_auth, bob_auth):
    alice_id, alice_headers = alice_auth
    _, bob_headers = bob_auth

    created = client.post("/api/posts", json={"content": "hello"}, headers=alice_headers)
    assert created.status_code == 201
    post = created.json()["post"]
    assert post["likeCount"] == 0
    assert post["author"]["_id"] == alice_id
    post_id = post["_id"]

    liked = client.post(f"/api/posts/{post_id}/like", headers=bob_headers)
    assert liked.status_code == 200
    assert liked.json() == {
        "message": "Post liked successfully",
        "action": "liked",
        "liked": True,
        "post": {"_id": post_id, "likeCount": 1, "hasLiked": True},
    }

    unliked = client.post(f"/api/posts/{post_id}/like", headers=bob_headers)
    assert unliked.status_code == 200
    assert unliked.json()["action"] == "unliked"
    assert unliked.json()["liked"] is False
    assert unliked.json()["post"]["likeCount"] == 0

    deleted = client.delete(f"/api/posts/{post_id}", headers=alice_headers)
    assert deleted.status_code == 200
    assert deleted.json() == {"message": "Post deleted successfully"}

    assert client.get(f"/api/posts/{post_id}", headers=alice_headers).status_code == 404


def test_post_object_shape(client, alice_auth):
    _, headers = alice_auth
    post = _create_post(client, headers, "  padded  ")

    assert post["content"] == "padded"
    assert set(post) == {
        "_id", "content", "author", "likeCount", "hasLiked",
        "isActive", "createdAt", "updatedAt",
    }
    assert set(post["author"]) == {"_id", "username", "profileInfo"}
    assert post["isActive"] is True
    assert post["hasLiked"] is False


@pytest.mark.parametrize("content", ["", "   ", "x" * 501])
def test_create_post_rejects_bad_content(client, alice_auth, content):
    _, headers = alice_auth
    response = client.post("/api/posts", json={"content": content}, headers=headers)
    assert response.status_code == 400


def test_create_post_accepts_500_chars(client, alice_auth):
    _, headers = alice_auth
    assert len(_create_post(client, headers, "x" * 500)["content"]) == 500


def test_posts_require_token(client):
    assert client.get("/api/posts").status_code == 401
    assert client.post("/api/posts", json={"content": "hi"}).status_code == 401
    assert client.post("/api/posts/1/like").status_code == 401


def test_timeline_pagination(client, alice_auth):
    _, headers = alice_auth
    for i in range(25):
        _create_post(client, headers, f"post {i}")

    pages = [
        client.get("/api/posts", params={"page": page, "limit": 10}, headers=headers).json()
        for page in (1, 2, 3)
    ]

    assert [len(p["posts"]) for p in pages] == [10, 10, 5]
    assert [p["pagination"]["hasNextPage"] for p in pages] == [True, True, False]
    assert [p["pagination"]["hasPrevPage"] for p in pages] == [False, True, True]
    assert pages[0]["pagination"] == {
        "currentPage": 1,
        "totalPages": 3,
        "totalPosts": 25,
        "hasNextPage": True,
        "hasPrevPage": False,
    }
    # newest first
    assert pages[0]["posts"][0]["content"] == "post 24"
    assert pages[2]["posts"][-1]["content"] == "post 0"


@pytest.mark.parametrize("params", [
    {"page": 0},
    {"limit": 0},
    {"limit": 51},
    {"page": "abc"},
])
def test_timeline_rejects_bad_pagination(client, alice_auth, params):
    _, headers = alice_auth
    response = client.get("/api/posts", params=params, headers=headers)
    assert response.status_code == 400


def test_timeline_marks_viewer_likes(client, alice_auth, bob_auth):
    _, alice_headers = alice_auth
    _, bob_headers = bob_auth
    first = _create_post(client, alice_headers, "first")
    _create_post(client, alice_headers, "second")
    client.post(f"/api/posts/{first['_id']}/like", headers=bob_headers)

    bob_view = client.get("/api/posts", headers=bob_headers).json()["posts"]
    alice_view = client.get("/api/posts", headers=alice_headers).json()["posts"]

    assert {p["content"]: p["hasLiked"] for p in bob_view} == {"first": True, "second": False}
    assert all(not p["hasLiked"] for p in alice_view)
    assert {p["content"]: p["likeCount"] for p in alice_view} == {"first": 1, "second": 0}


def test_get_single_post_has_liked(client, alice_auth, bob_auth):
    _, alice_headers = alice_auth
    _, bob_headers = bob_auth
    post = _create_post(client, alice_headers)
    client.post(f"/api/posts/{post['_id']}/like", headers=bob_headers)

    response = client.get(f"/api/posts/{post['_id']}", headers=bob_headers)
    assert response.status_code == 200
    assert response.json()["post"]["hasLiked"] is True
    assert response.json()["post"]["likeCount"] == 1


def test_get_post_bad_id_and_missing(client, alice_auth):
    _, headers = alice_auth
    assert client.get("/api/posts/not-an-id", headers=headers).status_code == 400
    missing = client.get("/api/posts/12345", headers=headers)
    assert missing.status_code == 404
    assert missing.json()["detail"] == "Post not found"


def test_user_posts_listing(client, alice_auth, bob_auth):
    alice_id, alice_headers = alice_auth
    _, bob_headers = bob_auth
    _create_post(client, alice_headers, "by alice")
    _create_post(client, bob_headers, "by bob")

    response = client.get(f"/api/posts/user/{alice_id}", headers=bob_headers)
    assert response.status_code == 200
    body = response.json()
    assert [p["content"] for p in body["posts"]] == ["by alice"]
    assert body["user"]["_id"] == alice_id
    assert body["user"]["username"] == "alice"
    assert body["pagination"]["totalPosts"] == 1


def test_user_posts_bad_id_and_unknown_user(client, alice_auth):
    _, headers = alice_auth
    assert client.get("/api/posts/user/abc", headers=headers).status_code == 400
    missing = client.get("/api/posts/user/9999", headers=headers)
    assert missing.status_code == 404
    assert missing.json()["detail"] == "User not found"


def test_soft_delete_hides_post_but_keeps_likes(client, db, alice_auth, bob_auth):
    alice_id, alice_headers = alice_auth
    _, bob_headers = bob_auth
    post = _create_post(client, alice_headers)
    _create_post(client, alice_headers, "still here")
    client.post(f"/api/posts/{post['_id']}/like", headers=bob_headers)

    assert client.delete(f"/api/posts/{post['_id']}", headers=alice_headers).status_code == 200

    timeline = client.get("/api/posts", headers=alice_headers).json()
    assert [p["content"] for p in timeline["posts"]] == ["still here"]
    assert timeline["pagination"]["totalPosts"] == 1
    user_posts = client.get(f"/api/posts/user/{alice_id}", headers=alice_headers).json()
    assert [p["content"] for p in user_posts["posts"]] == ["still here"]

    likes = db.scalar(select(func.count(PostLike.id)).where(PostLike.post_id == post["_id"]))
    assert likes == 1


def test_delete_requires_author(client, alice_auth, bob_auth):
    _, alice_headers = alice_auth
    _, bob_headers = bob_auth
    post = _create_post(client, alice_headers)

    response = client.delete(f"/api/posts/{post['_id']}", headers=bob_headers)
    assert response.status_code == 403
    assert response.json()["detail"] == "You can only delete your own posts"
    assert client.get(f"/api/posts/{post['_id']}", headers=alice_headers).status_code == 200


def test_delete_missing_or_already_deleted(client, alice_auth):
    _, headers = alice_auth
    assert client.delete("/api/posts/999", headers=headers).status_code == 404

    post = _create_post(client, headers)
    client.delete(f"/api/posts/{post['_id']}", headers=headers)
    assert client.delete(f"/api/posts/{post['_id']}", headers=headers).status_code == 404


def test_like_missing_or_deleted_post(client, alice_auth, bob_auth):
    _, alice_headers = alice_auth
    _, bob_headers = bob_auth
    assert client.post("/api/posts/999/like", headers=bob_headers).status_code == 404

    post = _create_post(client, alice_headers)
    client.delete(f"/api/posts/{post['_id']}", headers=alice_headers)
    assert client.post(f"/api/posts/{post['_id']}/like", headers=bob_headers).status_code == 404


def test_like_race_loser_gets_conflict(client, alice_auth, bob_auth, monkeypatch):
    _, alice_headers = alice_auth
    _, bob_headers = bob_auth
    post = _create_post(client, alice_headers)
    client.post(f"/api/posts/{post['_id']}/like", headers=bob_headers)

    monkeypatch.setattr(crud_post_like, "get_like", lambda db, **kwargs: None)
    response = client.post(f"/api/posts/{post['_id']}/like", headers=bob_headers)

    assert response.status_code == 409
    assert response.json()["detail"] == "You have already liked this post"
    monkeypatch.undo()
    after = client.get(f"/api/posts/{post['_id']}", headers=bob_headers).json()["post"]
    assert after["likeCount"] == 1
    assert after["hasLiked"] is True


def test_unlike_race_loser_gets_no_longer_liked_conflict(client, alice_auth, bob_auth, monkeypatch):
    _, alice_headers = alice_auth
    _, bob_headers = bob_auth
    post = _create_post(client, alice_headers)

    # Bob looks like a liker, but a concurrent unlike already removed the row
    monkeypatch.setattr(crud_post_like, "get_like", lambda db, **kwargs: object())
    response = client.post(f"/api/posts/{post['_id']}/like", headers=bob_headers)

    assert response.status_code == 409
    assert response.json()["detail"] == "This post is no longer liked"
    monkeypatch.undo()
    after = client.get(f"/api/posts/{post['_id']}", headers=bob_headers).json()["post"]
    assert after["likeCount"] == 0
    assert after["hasLiked"] is False


def test_post_likers(client, alice_auth, bob_auth, register):
    _, alice_headers = alice_auth
    bob_id, bob_headers = bob_auth
    carol_id, carol_headers = register("carol")
    post = _create_post(client, alice_headers)
    client.post(f"/api/posts/{post['_id']}/like", headers=bob_headers)
    client.post(f"/api/posts/{post['_id']}/like", headers=carol_headers)

    response = client.get(f"/api/posts/{post['_id']}/likes", headers=alice_headers)
    assert response.status_code == 200
    body = response.json()
    assert [u["_id"] for u in body["users"]] == [carol_id, bob_id]
    assert body["users"][0]["likedAt"]
    assert body["pagination"]["totalPosts"] == 2

    assert client.get("/api/posts/999/likes", headers=alice_headers).status_code == 404
