"""
Comment endpoint tests — listing an article's comments, posting new ones,
vote updates and deletion.

Posting is the most guarded write in the API: the body must be non-empty,
the author a registered user and the article real, and all three checks
happen before anything is inserted.
"""
import pytest
from httpx import AsyncClient


# ---------------------------------------------------------------------------
# List comments for an article
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_list_comments(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/1/comments")
    assert resp.status_code == 200
    comments = resp.json()
    assert len(comments) == 11
    for comment in comments:
        assert comment["article_id"] == 1
        assert set(comment) == {"comment_id", "article_id", "author", "body", "votes", "created_at"}


@pytest.mark.asyncio
async def test_list_comments_newest_first(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/1/comments")
    dates = [c["created_at"] for c in resp.json()]
    assert dates == sorted(dates, reverse=True)
    assert resp.json()[0]["comment_id"] == 5


@pytest.mark.asyncio
async def test_list_comments_empty_for_article_without_comments(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/7/comments")
    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.asyncio
async def test_list_comments_malformed_id(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/invalidID/comments")
    assert resp.status_code == 400
    assert resp.json() == {"msg": "400: Bad request"}


@pytest.mark.asyncio
async def test_list_comments_article_not_found(async_client: AsyncClient):
    resp = await async_client.get("/api/articles/9999/comments")
    assert resp.status_code == 404
    assert resp.json() == {"msg": "404: Article doesn't exist"}


# ---------------------------------------------------------------------------
# Post comment — happy path
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_post_comment(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/articles/1/comments",
        json={"username": "butter_bridge", "body": "This is a comment"},
    )
    assert resp.status_code == 201
    comment = resp.json()["comment"]
    assert comment["body"] == "This is a comment"
    assert comment["author"] == "butter_bridge"
    assert comment["article_id"] == 1
    assert comment["votes"] == 0
    assert comment["comment_id"] == 19
    assert comment["created_at"]


@pytest.mark.asyncio
async def test_post_comment_ignores_extra_properties(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/articles/1/comments",
        json={"username": "butter_bridge", "body": "This is a comment", "fruit": "apple"},
    )
    assert resp.status_code == 201
    comment = resp.json()["comment"]
    assert comment["body"] == "This is a comment"
    assert "fruit" not in comment


@pytest.mark.asyncio
async def test_posted_comment_is_listed_and_counted(async_client: AsyncClient):
    """POST then GET: the new comment shows up with its server-assigned fields."""
    posted = await async_client.post(
        "/api/articles/7/comments",
        json={"username": "lurker", "body": "First!"},
    )
    comment = posted.json()["comment"]

    resp = await async_client.get("/api/articles/7/comments")
    assert resp.json() == [comment]

    article = await async_client.get("/api/articles/7")
    assert article.json()["comment_count"] == 1


# ---------------------------------------------------------------------------
# Post comment — error paths
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_post_comment_malformed_id(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/articles/invalidID/comments",
        json={"username": "butter_bridge", "body": "This is a comment"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"msg": "400: Bad request"}


@pytest.mark.asyncio
async def test_post_comment_article_not_found(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/articles/9999/comments",
        json={"username": "butter_bridge", "body": "This is a comment"},
    )
    assert resp.status_code == 404
    assert resp.json() == {"msg": "404: Article doesn't exist"}


@pytest.mark.asyncio
async def test_post_comment_missing_body(async_client: AsyncClient):
    resp = await async_client.post("/api/articles/1/comments", json={"username": "butter_bridge"})
    assert resp.status_code == 400
    assert resp.json() == {"msg": "400: Field cannot be empty!"}


@pytest.mark.asyncio
async def test_post_comment_blank_body(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/articles/1/comments",
        json={"username": "butter_bridge", "body": "   "},
    )
    assert resp.status_code == 400
    assert resp.json() == {"msg": "400: Field cannot be empty!"}


@pytest.mark.asyncio
async def test_post_comment_missing_username(async_client: AsyncClient):
    resp = await async_client.post("/api/articles/1/comments", json={"body": "Anonymous"})
    assert resp.status_code == 400
    assert resp.json() == {"msg": "400: Field cannot be empty!"}


@pytest.mark.asyncio
async def test_post_comment_invalid_username(async_client: AsyncClient):
    resp = await async_client.post(
        "/api/articles/1/comments",
        json={"username": "user123", "body": "ABC"},
    )
    assert resp.status_code == 400
    assert resp.json() == {"msg": "400: Invalid username"}


@pytest.mark.asyncio
async def test_post_comment_rejected_writes_nothing(async_client: AsyncClient):
    await async_client.post("/api/articles/7/comments", json={"username": "user123", "body": "ABC"})
    await async_client.post("/api/articles/7/comments", json={"username": "lurker"})

    resp = await async_client.get("/api/articles/7/comments")
    assert resp.json() == []


# ---------------------------------------------------------------------------
# Patch comment votes
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_patch_comment_votes(async_client: AsyncClient):
    resp = await async_client.patch("/api/comments/13", json={"inc_votes": 1})
    assert resp.status_code == 200
    comment = resp.json()
    assert comment["comment_id"] == 13
    assert comment["body"] == "Fruit pastilles"
    assert comment["author"] == "icellusedkars"
    assert comment["article_id"] == 1
    assert comment["votes"] == 1
    assert comment["created_at"].startswith("2020-06-15T11:25:00")


@pytest.mark.asyncio
async def test_patch_comment_votes_zero_is_noop(async_client: AsyncClient):
    resp = await async_client.patch("/api/comments/13", json={"inc_votes": 0})
    assert resp.status_code == 200
    assert resp.json()["votes"] == 0


@pytest.mark.asyncio
async def test_patch_comment_votes_negative(async_client: AsyncClient):
    resp = await async_client.patch("/api/comments/4", json={"inc_votes": -200, "fruit": "tomato"})
    assert resp.status_code == 200
    comment = resp.json()
    assert comment["votes"] == -300
    assert comment["body"] == "I carry a log — yes. Is it funny to you? It is not to me."


@pytest.mark.asyncio
async def test_patch_comment_malformed_id(async_client: AsyncClient):
    resp = await async_client.patch("/api/comments/olive", json={"inc_votes": 50})
    assert resp.status_code == 400
    assert resp.json() == {"msg": "400: Bad request"}


@pytest.mark.asyncio
async def test_patch_comment_non_numeric_delta(async_client: AsyncClient):
    resp = await async_client.patch("/api/comments/5", json={"inc_votes": "notanum"})
    assert resp.status_code == 400
    assert resp.json() == {"msg": "400: Bad request"}


@pytest.mark.asyncio
async def test_patch_comment_not_found(async_client: AsyncClient):
    resp = await async_client.patch("/api/comments/91919190", json={"inc_votes": 50})
    assert resp.status_code == 404
    assert resp.json() == {"msg": "404: Comment doesn't exist"}


# ---------------------------------------------------------------------------
# Delete comment
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_delete_comment(async_client: AsyncClient):
    resp = await async_client.delete("/api/comments/1")
    assert resp.status_code == 204
    assert resp.content == b""


@pytest.mark.asyncio
async def test_delete_comment_twice(async_client: AsyncClient):
    """Deleting the same comment again reports it missing."""
    assert (await async_client.delete("/api/comments/1")).status_code == 204

    resp = await async_client.delete("/api/comments/1")
    assert resp.status_code == 404
    assert resp.json() == {"msg": "404: Comment doesn't exist"}


@pytest.mark.asyncio
async def test_delete_comment_removes_exactly_one_row(async_client: AsyncClient):
    await async_client.delete("/api/comments/2")

    resp = await async_client.get("/api/articles/1/comments")
    ids = [c["comment_id"] for c in resp.json()]
    assert len(ids) == 10
    assert 2 not in ids
    assert (await async_client.get("/api/articles/1")).json()["comment_count"] == 10


@pytest.mark.asyncio
async def test_delete_comment_not_found(async_client: AsyncClient):
    resp = await async_client.delete("/api/comments/9999")
    assert resp.status_code == 404
    assert resp.json() == {"msg": "404: Comment doesn't exist"}


@pytest.mark.asyncio
async def test_delete_comment_malformed_id(async_client: AsyncClient):
    resp = await async_client.delete("/api/comments/banana")
    assert resp.status_code == 400
    assert resp.json() == {"msg": "400: Bad request"}


@pytest.mark.asyncio
async def test_patch_comment_boolean_delta(async_client: AsyncClient):
    resp = await async_client.patch("/api/comments/13", json={"inc_votes": False})
    assert resp.status_code == 400
    assert resp.json() == {"msg": "400: Bad request"}
