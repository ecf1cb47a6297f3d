# =============================================================================
# tests/test_services.py - Service Layer Tests
# =============================================================================
# Profile upsert, profile entries and post likes/comments against mongomock.
# =============================================================================

from datetime import date
from unittest.mock import MagicMock

from bson import ObjectId
import pytest

from app.exceptions import (
    CommentNotFoundError,
    EntryNotFoundError,
    ForbiddenError,
    NoProfileError,
    PostAlreadyLikedError,
    PostNotFoundError,
    PostNotLikedError,
    ProfileConflictError,
)
from core.models.post import CommentCreate, PostCreate
from core.models.profile import EducationCreate, ExperienceCreate
from core.services.post_service import PostService
from core.services.profile_service import ProfileService, build_upsert_update
from lib.mongo_client import PROFILES, USERS, DuplicateDocumentError
from lib.profile_fields import build_profile_fields


@pytest.fixture
def user_id(store):
    """Id (str) of a user stored directly in the database."""
    user = store.create(USERS, {
        "name": "Jane Doe",
        "email": "jane@example.com",
        "avatar": "https://www.gravatar.com/avatar/x",
        "password": "hash",
    })
    return str(user["_id"])


@pytest.fixture
def other_user_id(store):
    user = store.create(USERS, {"name": "John Roe", "email": "john@example.com", "password": "hash"})
    return str(user["_id"])


# =============================================================================
# Upsert
# =============================================================================

class TestBuildUpsertUpdate:

    def test_social_links_as_paths(self):
        update = build_upsert_update({"status": "Dev", "social": {"twitter": "t"}}, now=None)

        assert update["$set"] == {"status": "Dev", "social.twitter": "t"}
        assert "social" not in update["$setOnInsert"]

    def test_defaults_only_for_unset(self):
        update = build_upsert_update({"skills": ["a"], "social": {}}, now=None)

        assert "skills" not in update["$setOnInsert"]
        assert update["$setOnInsert"]["social"] == {}
        assert update["$setOnInsert"]["experience"] == []
        assert update["$setOnInsert"]["education"] == []


class TestProfileUpsert:
    """Test create-or-update of profiles."""

    def test_creates_with_supplied_fields(self, store, user_id):
        service = ProfileService(store)

        profile = service.upsert(user_id, build_profile_fields({
            "status": "Developer",
            "skills": "a, b ,c",
            "company": "Acme",
        }))

        assert profile["user"] == ObjectId(user_id)
        assert profile["status"] == "Developer"
        assert profile["skills"] == ["a", "b", "c"]
        assert profile["company"] == "Acme"
        assert profile["social"] == {}
        assert profile["experience"] == []
        assert profile["education"] == []
        assert "bio" not in profile

    def test_second_upsert_updates_only_supplied(self, store, user_id):
        service = ProfileService(store)
        service.upsert(user_id, build_profile_fields({
            "status": "Developer",
            "skills": "py",
            "company": "Acme",
            "twitter": "https://twitter.com/jane",
        }))

        profile = service.upsert(user_id, build_profile_fields({
            "bio": "Hello",
            "youtube": "https://youtube.com/jane",
        }))

        assert profile["bio"] == "Hello"
        assert profile["status"] == "Developer"
        assert profile["company"] == "Acme"
        assert profile["skills"] == ["py"]
        assert profile["social"] == {
            "twitter": "https://twitter.com/jane",
            "youtube": "https://youtube.com/jane",
        }

    def test_single_profile_per_user(self, store, user_id):
        service = ProfileService(store)
        service.upsert(user_id, build_profile_fields({"status": "A"}))
        service.upsert(user_id, build_profile_fields({"status": "B"}))

        assert len(store.find(PROFILES, {"user": ObjectId(user_id)})) == 1

    def test_concurrent_create_is_conflict(self, user_id):
        """A unique-index violation from the store becomes a conflict."""
        store = MagicMock()
        store.find_one_and_update.side_effect = DuplicateDocumentError(PROFILES, "E11000")

        with pytest.raises(ProfileConflictError):
            ProfileService(store).upsert(user_id, {"status": "Dev", "social": {}})

    def test_populated_profile(self, store, user_id):
        service = ProfileService(store)
        service.upsert(user_id, build_profile_fields({"status": "Dev"}))

        profile = service.get_own_profile(user_id)

        assert profile["user"]["name"] == "Jane Doe"
        assert profile["user"]["avatar"] == "https://www.gravatar.com/avatar/x"
        assert "email" not in profile["user"]

    def test_no_profile(self, store, user_id):
        with pytest.raises(NoProfileError):
            ProfileService(store).get_own_profile(user_id)


# =============================================================================
# Experience & Education
# =============================================================================

class TestProfileEntries:

    @pytest.fixture
    def service(self, store, user_id):
        service = ProfileService(store)
        service.upsert(user_id, build_profile_fields({"status": "Dev", "skills": "py"}))
        return service

    def test_add_experience_newest_first(self, service, user_id):
        service.add_experience(user_id, ExperienceCreate(title="Junior", company="A", **{"from": date(2018, 1, 1)}))
        profile = service.add_experience(user_id, ExperienceCreate(title="Senior", company="B", **{"from": date(2021, 1, 1)}))

        assert [e["title"] for e in profile["experience"]] == ["Senior", "Junior"]
        assert profile["experience"][0]["from"].year == 2021

    def test_remove_experience_by_id(self, service, user_id):
        service.add_experience(user_id, ExperienceCreate(title="Junior", company="A", **{"from": date(2018, 1, 1)}))
        profile = service.add_experience(user_id, ExperienceCreate(title="Senior", company="A", **{"from": date(2021, 1, 1)}))
        junior_id = str(profile["experience"][1]["_id"])

        profile = service.remove_experience(user_id, junior_id)

        assert [e["title"] for e in profile["experience"]] == ["Senior"]

    def test_remove_unknown_experience(self, service, user_id):
        with pytest.raises(EntryNotFoundError):
            service.remove_experience(user_id, str(ObjectId()))

    def test_education(self, service, user_id):
        profile = service.add_education(user_id, EducationCreate(
            school="TU", degree="BSc", fieldofstudy="CS", **{"from": date(2015, 10, 1)}
        ))
        entry_id = profile["education"][0]["_id"]

        profile = service.remove_education(user_id, entry_id)

        assert profile["education"] == []

    def test_entry_without_profile(self, store, other_user_id):
        with pytest.raises(NoProfileError):
            ProfileService(store).add_experience(
                other_user_id, ExperienceCreate(title="X", company="Y", **{"from": date(2020, 1, 1)})
            )


# =============================================================================
# Posts
# =============================================================================

class TestPostService:

    @pytest.fixture
    def post(self, store, user_id):
        return PostService(store).create_post(user_id, PostCreate(text="Hello"))

    def test_create_snapshots_author(self, post, user_id):
        assert post["user"] == ObjectId(user_id)
        assert post["name"] == "Jane Doe"
        assert post["likes"] == []
        assert post["comments"] == []

    def test_get_unknown(self, store):
        with pytest.raises(PostNotFoundError):
            PostService(store).get_post(str(ObjectId()))

    def test_delete_requires_owner(self, store, post, other_user_id):
        with pytest.raises(ForbiddenError):
            PostService(store).delete_post(str(post["_id"]), other_user_id)

    def test_like_unlike(self, store, post, user_id, other_user_id):
        service = PostService(store)
        post_id = str(post["_id"])

        service.like_post(post_id, user_id)
        likes = service.like_post(post_id, other_user_id)
        assert [str(like["user"]) for like in likes] == [other_user_id, user_id]

        with pytest.raises(PostAlreadyLikedError):
            service.like_post(post_id, user_id)

        likes = service.unlike_post(post_id, user_id)
        assert [str(like["user"]) for like in likes] == [other_user_id]

        with pytest.raises(PostNotLikedError):
            service.unlike_post(post_id, user_id)

    def test_comment_removal_by_entry_id(self, store, post, user_id):
        """Two comments by the same author: removing the older keeps the newer."""
        service = PostService(store)
        post_id = str(post["_id"])
        service.add_comment(post_id, user_id, CommentCreate(text="first"))
        comments = service.add_comment(post_id, user_id, CommentCreate(text="second"))

        comments = service.remove_comment(post_id, str(comments[1]["_id"]), user_id)

        assert [c["text"] for c in comments] == ["second"]

    def test_comment_removal_rules(self, store, post, user_id, other_user_id):
        service = PostService(store)
        post_id = str(post["_id"])
        comments = service.add_comment(post_id, user_id, CommentCreate(text="mine"))

        with pytest.raises(CommentNotFoundError):
            service.remove_comment(post_id, str(ObjectId()), user_id)

        with pytest.raises(ForbiddenError):
            service.remove_comment(post_id, str(comments[0]["_id"]), other_user_id)
