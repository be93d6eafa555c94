"""Post, reply and like service tests against a real SQLite database."""
import pytest
from sqlalchemy import delete, func, select

from microblog.core.exceptions import ConflictError, NotFoundError, ValidationError
from microblog.models.engagement import Like
from microblog.models.post import Post
from microblog.models.reply import Reply
from microblog.models.user import User
from microblog.services import post_service
from microblog.services.post_service import validate_content


class TestValidateContent:
    @pytest.mark.parametrize("content", ["", "   ", "\n\t", None])
    def test_blank_content_is_rejected(self, content):
        with pytest.raises(ValidationError, match="Post content cannot be empty"):
            validate_content(content)

    def test_boundary_lengths(self):
        assert validate_content("a") == "a"
        assert validate_content("a" * 280) == "a" * 280
        with pytest.raises(ValidationError, match="280 characters or less"):
            validate_content("a" * 281)

    def test_length_is_measured_after_trimming(self):
        assert validate_content("  " + "a" * 280 + "  ") == "a" * 280

    def test_reply_wording(self):
        with pytest.raises(ValidationError, match="Reply content cannot be empty"):
            validate_content(" ", "Reply")


class TestCreatePost:
    @pytest.mark.asyncio
    async def test_create_post_starts_with_zero_counts(self, db_session, make_user):
        alice = await make_user("alice")
        post = await post_service.create_post(db_session, alice, "  hello world  ")
        await db_session.commit()

        assert post.content == "hello world"
        assert post.username == "alice"
        assert post.likes_count == 0
        assert post.replies_count == 0

    @pytest.mark.asyncio
    async def test_rejected_post_is_not_stored(self, db_session, make_user):
        alice = await make_user("alice")
        with pytest.raises(ValidationError):
            await post_service.create_post(db_session, alice, "a" * 281)
        count = (await db_session.execute(select(func.count(Post.id)))).scalar_one()
        assert count == 0


class TestFeed:
    @pytest.mark.asyncio
    async def test_feed_is_capped_and_newest_first(self, db_session, make_user):
        alice = await make_user("alice")
        for i in range(55):
            db_session.add(Post(user_id=alice.id, content=f"post {i}"))
        await db_session.commit()

        feed = await post_service.get_feed(db_session)

        assert len(feed) == 50
        assert feed[0].content == "post 54"
        ids = [p.id for p in feed]
        assert ids == sorted(ids, reverse=True)
        times = [p.created_at for p in feed]
        assert times == sorted(times, reverse=True)

    @pytest.mark.asyncio
    async def test_feed_counts_likes_and_replies(self, db_session, make_user):
        alice = await make_user("alice")
        bob = await make_user("bob")
        post = await post_service.create_post(db_session, alice, "hello")
        await db_session.commit()
        await post_service.like_post(db_session, alice, post.id)
        await post_service.like_post(db_session, bob, post.id)
        await post_service.reply_to_post(db_session, bob, post.id, "hi back")
        await db_session.commit()

        [item] = await post_service.get_feed(db_session)
        assert item.likes_count == 2
        assert item.replies_count == 1
        assert item.username == "alice"

    @pytest.mark.asyncio
    async def test_empty_feed(self, db_session):
        assert await post_service.get_feed(db_session) == []


class TestGetPost:
    @pytest.mark.asyncio
    async def test_missing_post_raises_not_found(self, db_session):
        with pytest.raises(NotFoundError, match="Post not found"):
            await post_service.get_post(db_session, 999)

    @pytest.mark.asyncio
    async def test_replies_are_oldest_first_with_usernames(self, db_session, make_user):
        alice = await make_user("alice")
        bob = await make_user("bob")
        post = await post_service.create_post(db_session, alice, "question?")
        await post_service.reply_to_post(db_session, bob, post.id, "first")
        await post_service.reply_to_post(db_session, alice, post.id, "second")
        await db_session.commit()

        detail = await post_service.get_post(db_session, post.id)

        assert [r.content for r in detail.replies] == ["first", "second"]
        assert [r.username for r in detail.replies] == ["bob", "alice"]
        assert detail.replies_count == 2
        assert detail.likes_count == 0


class TestLikes:
    @pytest.mark.asyncio
    async def test_second_like_conflicts(self, db_session, make_user):
        alice = await make_user("alice")
        post = await post_service.create_post(db_session, alice, "hello")
        await db_session.commit()
        alice_id, post_id = alice.id, post.id

        await post_service.like_post(db_session, alice, post_id)
        await db_session.commit()
        with pytest.raises(ConflictError, match="Post already liked"):
            await post_service.like_post(db_session, alice, post_id)

        count = (await db_session.execute(
            select(func.count(Like.id)).where(Like.post_id == post_id, Like.user_id == alice_id)
        )).scalar_one()
        assert count == 1

    @pytest.mark.asyncio
    async def test_like_missing_post_is_not_found(self, db_session, make_user):
        alice = await make_user("alice")
        with pytest.raises(NotFoundError):
            await post_service.like_post(db_session, alice, 12345)

    @pytest.mark.asyncio
    async def test_unlike_is_idempotent(self, db_session, make_user):
        alice = await make_user("alice")
        post = await post_service.create_post(db_session, alice, "hello")
        await post_service.like_post(db_session, alice, post.id)
        await db_session.commit()

        await post_service.unlike_post(db_session, alice, post.id)
        await post_service.unlike_post(db_session, alice, post.id)
        await post_service.unlike_post(db_session, alice, 999)
        await db_session.commit()

        detail = await post_service.get_post(db_session, post.id)
        assert detail.likes_count == 0


class TestReplies:
    @pytest.mark.asyncio
    async def test_reply_to_missing_post_is_not_found(self, db_session, make_user):
        alice = await make_user("alice")
        with pytest.raises(NotFoundError):
            await post_service.reply_to_post(db_session, alice, 404, "anyone there?")

    @pytest.mark.asyncio
    async def test_reply_validation_matches_posts(self, db_session, make_user):
        alice = await make_user("alice")
        post = await post_service.create_post(db_session, alice, "hello")
        with pytest.raises(ValidationError, match="Reply must be 280 characters or less"):
            await post_service.reply_to_post(db_session, alice, post.id, "b" * 281)


class TestCascade:
    @pytest.mark.asyncio
    async def test_deleting_a_user_removes_their_content(self, db_session, make_user):
        alice = await make_user("alice")
        bob = await make_user("bob")
        alice_id = alice.id
        post = await post_service.create_post(db_session, alice, "hello")
        await post_service.reply_to_post(db_session, bob, post.id, "hi")
        await post_service.like_post(db_session, bob, post.id)
        await db_session.commit()

        await db_session.execute(delete(User).where(User.id == alice_id))
        await db_session.commit()

        for model in (Post, Reply, Like):
            count = (await db_session.execute(select(func.count(model.id)))).scalar_one()
            assert count == 0


class TestOutOfRangeIds:
    TOO_BIG_ID = 2**63

    @pytest.mark.asyncio
    async def test_get_post_is_not_found(self, db_session):
        with pytest.raises(NotFoundError):
            await post_service.get_post(db_session, self.TOO_BIG_ID)

    @pytest.mark.asyncio
    async def test_like_and_reply_are_not_found(self, db_session, make_user):
        alice = await make_user("alice")
        with pytest.raises(NotFoundError):
            await post_service.like_post(db_session, alice, self.TOO_BIG_ID)
        with pytest.raises(NotFoundError):
            await post_service.reply_to_post(db_session, alice, self.TOO_BIG_ID, "hi")

    @pytest.mark.asyncio
    async def test_unlike_is_a_no_op(self, db_session, make_user):
        alice = await make_user("alice")
        await post_service.unlike_post(db_session, alice, self.TOO_BIG_ID)
        await post_service.unlike_post(db_session, alice, 0)
