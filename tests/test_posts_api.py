"""
SocialHub Backend - Posts API Tests
=====================================

What:  End-to-end tests of /api/posts against a real (SQLite) database.
How:   HTTPX AsyncClient over ASGITransport; users seeded directly, tokens
       issued with create_access_token.

What we test:
    ✅ Create: validation, snapshot of author name/avatar
    ✅ List: newest first
    ✅ Get: found, absent, malformed id
    ✅ Delete: owner only; non-owner leaves the post in place
    ✅ Like/unlike: one like per user, not-yet-liked rejection
    ✅ Comments: add newest first, delete by id, owner only
    ✅ Auth guard: missing and invalid tokens
"""

import uuid

import pytest
from sqlalchemy import select

from socialhub.models.post import Comment, Like, Post


async def _create_post(client, headers, text="Hello world"):
    response = await client.post("/api/posts", json={"text": text}, headers=headers)
    assert response.status_code == 200, response.text
    return response.json()


class TestCreatePost:

    @pytest.mark.asyncio
    async def test_create_post_snapshots_author(self, test_client, make_user, headers_for):
        """The post carries the author's name and avatar as they were at creation."""
        user = await make_user("Jane Doe", avatar="//gravatar/jane")

        post = await _create_post(test_client, headers_for(user), "First post")

        assert post["text"] == "First post"
        assert post["user"] == str(user.id)
        assert post["name"] == "Jane Doe"
        assert post["avatar"] == "//gravatar/jane"
        assert post["likes"] == []
        assert post["comments"] == []
        assert "date" in post

    @pytest.mark.asyncio
    async def test_snapshot_survives_profile_change(
        self, test_client, make_user, headers_for, db_session
    ):
        user = await make_user("Jane Doe", avatar="//gravatar/old")
        post = await _create_post(test_client, headers_for(user))

        user.name = "Jane Smith"
        user.avatar = "//gravatar/new"
        await db_session.commit()

        response = await test_client.get(f"/api/posts/{post['id']}", headers=headers_for(user))
        assert response.json()["name"] == "Jane Doe"
        assert response.json()["avatar"] == "//gravatar/old"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{"text": ""}, {"text": "   \n\t"}, {}])
    async def test_blank_text_rejected_and_nothing_saved(
        self, test_client, make_user, headers_for, db_session, body
    ):
        user = await make_user()

        response = await test_client.post("/api/posts", json=body, headers=headers_for(user))

        assert response.status_code == 400
        payload = response.json()
        assert payload["error"] == "validation_error"
        assert payload["errors"][0]["field"] == "text"

        rows = (await db_session.execute(select(Post))).scalars().all()
        assert rows == []

    @pytest.mark.asyncio
    async def test_blank_text_message(self, test_client, make_user, headers_for):
        user = await make_user()
        response = await test_client.post("/api/posts", json={"text": " "}, headers=headers_for(user))
        assert response.json()["errors"] == [
            {"field": "text", "message": "Text is required", "location": "body"}
        ]


    @pytest.mark.asyncio
    async def test_malformed_json_reports_body(self, test_client, make_user, headers_for):
        user = await make_user()
        headers = {**headers_for(user), "Content-Type": "application/json"}

        response = await test_client.post("/api/posts", content=b'{"text": "hi"', headers=headers)

        assert response.status_code == 400
        errors = response.json()["errors"]
        assert errors[0]["field"] == "body"
        assert errors[0]["location"] == "body"


class TestListAndGet:

    @pytest.mark.asyncio
    async def test_list_newest_first(self, test_client, make_user, headers_for):
        user = await make_user()
        headers = headers_for(user)
        a = await _create_post(test_client, headers, "A")
        b = await _create_post(test_client, headers, "B")
        c = await _create_post(test_client, headers, "C")

        response = await test_client.get("/api/posts", headers=headers)

        assert response.status_code == 200
        assert [p["id"] for p in response.json()] == [c["id"], b["id"], a["id"]]

    @pytest.mark.asyncio
    async def test_list_empty(self, test_client, make_user, headers_for):
        user = await make_user()
        response = await test_client.get("/api/posts", headers=headers_for(user))
        assert response.status_code == 200
        assert response.json() == []

    @pytest.mark.asyncio
    async def test_get_post(self, test_client, make_user, headers_for):
        user = await make_user()
        post = await _create_post(test_client, headers_for(user))

        response = await test_client.get(f"/api/posts/{post['id']}", headers=headers_for(user))

        assert response.status_code == 200
        assert response.json()["id"] == post["id"]

    @pytest.mark.asyncio
    async def test_get_unknown_post_is_404(self, test_client, make_user, headers_for):
        user = await make_user()
        response = await test_client.get(f"/api/posts/{uuid.uuid4()}", headers=headers_for(user))
        assert response.status_code == 404
        assert response.json()["message"] == "Post not found"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("bad_id", ["not-an-id", "5d7a", "12345"])
    async def test_get_malformed_id_is_404_not_500(self, test_client, make_user, headers_for, bad_id):
        user = await make_user()
        response = await test_client.get(f"/api/posts/{bad_id}", headers=headers_for(user))
        assert response.status_code == 404
        assert response.json()["error"] == "not_found"


    @pytest.mark.asyncio
    async def test_trailing_slash_create_and_list(self, test_client, make_user, headers_for):
        """`/api/posts/` answers directly rather than redirecting."""
        user = await make_user()
        headers = headers_for(user)

        created = await test_client.post("/api/posts/", json={"text": "hi"}, headers=headers)
        assert created.status_code == 200
        assert created.json()["text"] == "hi"

        listed = await test_client.get("/api/posts/", headers=headers)
        assert listed.status_code == 200
        assert [p["id"] for p in listed.json()] == [created.json()["id"]]


class TestDeletePost:

    @pytest.mark.asyncio
    async def test_owner_deletes_post(self, test_client, make_user, headers_for):
        user = await make_user()
        post = await _create_post(test_client, headers_for(user))

        response = await test_client.delete(f"/api/posts/{post['id']}", headers=headers_for(user))

        assert response.status_code == 200
        assert response.json() == {"msg": "Post removed"}
        gone = await test_client.get(f"/api/posts/{post['id']}", headers=headers_for(user))
        assert gone.status_code == 404

    @pytest.mark.asyncio
    async def test_non_owner_cannot_delete(self, test_client, make_user, headers_for):
        owner = await make_user("Owner")
        other = await make_user("Other")
        post = await _create_post(test_client, headers_for(owner))

        response = await test_client.delete(f"/api/posts/{post['id']}", headers=headers_for(other))

        assert response.status_code == 401
        assert response.json()["message"] == "User not authorized"
        still_there = await test_client.get(f"/api/posts/{post['id']}", headers=headers_for(owner))
        assert still_there.status_code == 200

    @pytest.mark.asyncio
    async def test_delete_unknown_and_malformed(self, test_client, make_user, headers_for):
        user = await make_user()
        for post_id in (str(uuid.uuid4()), "garbage"):
            response = await test_client.delete(f"/api/posts/{post_id}", headers=headers_for(user))
            assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_removes_likes_and_comments(
        self, test_client, make_user, headers_for, db_session
    ):
        user = await make_user()
        headers = headers_for(user)
        post = await _create_post(test_client, headers)
        await test_client.put(f"/api/posts/like/{post['id']}", headers=headers)
        await test_client.post(f"/api/posts/comment/{post['id']}", json={"text": "hi"}, headers=headers)

        await test_client.delete(f"/api/posts/{post['id']}", headers=headers)

        assert (await db_session.execute(select(Like))).scalars().all() == []
        assert (await db_session.execute(select(Comment))).scalars().all() == []


class TestLikes:

    @pytest.mark.asyncio
    async def test_like_then_duplicate_rejected(self, test_client, make_user, headers_for):
        user = await make_user()
        headers = headers_for(user)
        post = await _create_post(test_client, headers)

        first = await test_client.put(f"/api/posts/like/{post['id']}", headers=headers)
        assert first.status_code == 200
        assert [like["user"] for like in first.json()] == [str(user.id)]

        second = await test_client.put(f"/api/posts/like/{post['id']}", headers=headers)
        assert second.status_code == 400
        assert second.json()["message"] == "Post already liked"

        fetched = await test_client.get(f"/api/posts/{post['id']}", headers=headers)
        assert len(fetched.json()["likes"]) == 1

    @pytest.mark.asyncio
    async def test_likes_are_newest_first(self, test_client, make_user, headers_for):
        author = await make_user("Author")
        fan1 = await make_user("Fan One")
        fan2 = await make_user("Fan Two")
        post = await _create_post(test_client, headers_for(author))

        await test_client.put(f"/api/posts/like/{post['id']}", headers=headers_for(fan1))
        response = await test_client.put(f"/api/posts/like/{post['id']}", headers=headers_for(fan2))

        assert [like["user"] for like in response.json()] == [str(fan2.id), str(fan1.id)]

        fetched = await test_client.get(f"/api/posts/{post['id']}", headers=headers_for(author))
        assert [like["user"] for like in fetched.json()["likes"]] == [str(fan2.id), str(fan1.id)]

    @pytest.mark.asyncio
    async def test_unlike_without_like_rejected(self, test_client, make_user, headers_for):
        author = await make_user("Author")
        fan = await make_user("Fan")
        post = await _create_post(test_client, headers_for(author))
        await test_client.put(f"/api/posts/like/{post['id']}", headers=headers_for(author))

        response = await test_client.put(f"/api/posts/unlike/{post['id']}", headers=headers_for(fan))

        assert response.status_code == 400
        assert response.json()["message"] == "Post has not yet been liked"
        fetched = await test_client.get(f"/api/posts/{post['id']}", headers=headers_for(author))
        assert [like["user"] for like in fetched.json()["likes"]] == [str(author.id)]

    @pytest.mark.asyncio
    async def test_unlike_removes_only_own_like(self, test_client, make_user, headers_for):
        author = await make_user("Author")
        fan = await make_user("Fan")
        post = await _create_post(test_client, headers_for(author))
        await test_client.put(f"/api/posts/like/{post['id']}", headers=headers_for(author))
        await test_client.put(f"/api/posts/like/{post['id']}", headers=headers_for(fan))

        response = await test_client.put(f"/api/posts/unlike/{post['id']}", headers=headers_for(fan))

        assert response.status_code == 200
        assert [like["user"] for like in response.json()] == [str(author.id)]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("action", ["like", "unlike"])
    async def test_like_unknown_post_is_400(self, test_client, make_user, headers_for, action):
        user = await make_user()
        for post_id in (str(uuid.uuid4()), "garbage"):
            response = await test_client.put(f"/api/posts/{action}/{post_id}", headers=headers_for(user))
            assert response.status_code == 400
            assert response.json()["message"] == "Post not found"


class TestComments:

    @pytest.mark.asyncio
    async def test_add_comment_newest_first_with_snapshot(self, test_client, make_user, headers_for):
        author = await make_user("Author")
        commenter = await make_user("Commenter", avatar="//gravatar/c")
        post = await _create_post(test_client, headers_for(author))

        await test_client.post(
            f"/api/posts/comment/{post['id']}", json={"text": "first"}, headers=headers_for(commenter)
        )
        response = await test_client.post(
            f"/api/posts/comment/{post['id']}", json={"text": "second"}, headers=headers_for(commenter)
        )

        assert response.status_code == 200
        comments = response.json()
        assert [c["text"] for c in comments] == ["second", "first"]
        assert comments[0]["user"] == str(commenter.id)
        assert comments[0]["name"] == "Commenter"
        assert comments[0]["avatar"] == "//gravatar/c"

    @pytest.mark.asyncio
    async def test_comment_blank_text_rejected(self, test_client, make_user, headers_for):
        user = await make_user()
        post = await _create_post(test_client, headers_for(user))

        response = await test_client.post(
            f"/api/posts/comment/{post['id']}", json={"text": "  "}, headers=headers_for(user)
        )

        assert response.status_code == 400
        assert response.json()["error"] == "validation_error"

    @pytest.mark.asyncio
    async def test_comment_on_unknown_post_is_400(self, test_client, make_user, headers_for):
        user = await make_user()
        response = await test_client.post(
            f"/api/posts/comment/{uuid.uuid4()}", json={"text": "hi"}, headers=headers_for(user)
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Post not found"

    @pytest.mark.asyncio
    async def test_delete_comment_removes_exactly_that_comment(self, test_client, make_user, headers_for):
        """With two comments by the same user, only the addressed one goes."""
        user = await make_user()
        headers = headers_for(user)
        post = await _create_post(test_client, headers)
        await test_client.post(f"/api/posts/comment/{post['id']}", json={"text": "older"}, headers=headers)
        added = await test_client.post(
            f"/api/posts/comment/{post['id']}", json={"text": "newer"}, headers=headers
        )
        older_id = added.json()[1]["id"]

        response = await test_client.delete(f"/api/posts/comment/{post['id']}/{older_id}", headers=headers)

        assert response.status_code == 200
        assert [c["text"] for c in response.json()] == ["newer"]

    @pytest.mark.asyncio
    async def test_non_owner_cannot_delete_comment(self, test_client, make_user, headers_for):
        author = await make_user("Author")
        other = await make_user("Other")
        post = await _create_post(test_client, headers_for(author))
        added = await test_client.post(
            f"/api/posts/comment/{post['id']}", json={"text": "mine"}, headers=headers_for(author)
        )
        comment_id = added.json()[0]["id"]

        response = await test_client.delete(
            f"/api/posts/comment/{post['id']}/{comment_id}", headers=headers_for(other)
        )

        assert response.status_code == 401
        fetched = await test_client.get(f"/api/posts/{post['id']}", headers=headers_for(author))
        assert [c["id"] for c in fetched.json()["comments"]] == [comment_id]

    @pytest.mark.asyncio
    async def test_delete_missing_comment_is_404(self, test_client, make_user, headers_for):
        user = await make_user()
        post = await _create_post(test_client, headers_for(user))
        for comment_id in (str(uuid.uuid4()), "garbage"):
            response = await test_client.delete(
                f"/api/posts/comment/{post['id']}/{comment_id}", headers=headers_for(user)
            )
            assert response.status_code == 404
            assert response.json()["message"] == "Comment does not exist"

    @pytest.mark.asyncio
    async def test_delete_comment_on_unknown_post_is_400(self, test_client, make_user, headers_for):
        user = await make_user()
        response = await test_client.delete(
            f"/api/posts/comment/{uuid.uuid4()}/{uuid.uuid4()}", headers=headers_for(user)
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Post not found"


class TestAuthGuard:

    @pytest.mark.asyncio
    async def test_missing_token(self, test_client):
        response = await test_client.get("/api/posts")
        assert response.status_code == 401
        assert response.json()["message"] == "No token, authorization denied"

    @pytest.mark.asyncio
    async def test_invalid_token(self, test_client):
        response = await test_client.get(
            "/api/posts", headers={"Authorization": "Bearer not.a.jwt"}
        )
        assert response.status_code == 401
        assert response.json()["message"] == "Token is not valid"
        assert response.headers["WWW-Authenticate"] == "Bearer"

    @pytest.mark.asyncio
    async def test_auth_checked_before_body(self, test_client):
        response = await test_client.post("/api/posts", json={"text": ""})
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_unknown_user_cannot_post(self, test_client, headers_for, database):
        class Ghost:
            id = uuid.uuid4()

        response = await test_client.post("/api/posts", json={"text": "boo"}, headers=headers_for(Ghost))
        assert response.status_code == 404
        assert response.json()["message"] == "User not found"
