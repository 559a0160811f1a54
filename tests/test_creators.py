# =============================================================================
# tests/test_creators.py - Explore Directory and Creator Page Tests
# =============================================================================
# Covers:
# - Directory join, preview truncation and AND filtering
# - Creator page not-found handling and interaction guards
# - Follow toggling and contact requests
# =============================================================================

import threading

from postgrest.exceptions import APIError

from kalakar.core.session import SessionContext
from kalakar.main import app
from kalakar.modules.creators.routes import get_follow_service
from kalakar.modules.creators.schemas import CreatorCard
from kalakar.modules.creators.service import (
    CreatorDirectoryService, filter_creators, latest_posts_by_creator, matches_search
)
from kalakar.modules.follows.service import FollowService
from kalakar.modules.posts.schemas import PostResponse


def add_post(fake_supabase, owner, title):
    return fake_supabase.seed(
        "posts", user_id=owner.id, title=title, description=None,
        image_url=f"https://cdn.example.com/{title}.jpg", category=None,
    )


def card(**fields):
    fields.setdefault("user_id", "c1")
    return CreatorCard(**fields)


class BlockingFollows:
    """Follow service whose toggle holds until released"""

    def __init__(self):
        self.entered = threading.Event()
        self.release = threading.Event()
        self.calls = 0

    def toggle(self, follower_id, creator_id):
        self.calls += 1
        self.entered.set()
        self.release.wait(5)
        return True


# =============================================================================
# Pure filtering helpers
# =============================================================================

class TestFiltering:
    def test_search_is_case_insensitive_across_name_bio_city(self):
        c = card(bio="Bridal mehendi", city="Lucknow")
        assert matches_search(c, "MEHENDI")
        assert matches_search(c, "luck")
        assert not matches_search(c, "pottery")

    def test_search_on_missing_profile_does_not_fail(self):
        assert not matches_search(card(profile=None), "meera")
        assert matches_search(card(profile=None), "")

    def test_search_and_category_combine_with_and(self):
        fashion_bio = card(bio="Sustainable fashion and upcycling", categories=["Fashion Design"])
        assert filter_creators([fashion_bio], "fashion", "Jewelry Making") == []
        assert filter_creators([fashion_bio], "fashion", "Fashion Design") == [fashion_bio]

    def test_all_or_empty_category_means_no_filter(self):
        cards = [card(user_id="a", categories=[]), card(user_id="b", categories=["Pottery"])]
        assert filter_creators(cards, None, "All") == cards
        assert filter_creators(cards, None, "") == cards

    def test_latest_posts_keeps_newest_three(self):
        posts = [
            PostResponse(id=str(i), user_id="c1", title=f"p{i}", image_url="u")
            for i in range(5)
        ]
        grouped = latest_posts_by_creator(posts, 3)
        assert [p.id for p in grouped["c1"]] == ["0", "1", "2"]


# =============================================================================
# Directory workflow
# =============================================================================

class TestDirectory:
    def test_preview_is_three_most_recent_posts(self, fake_supabase, creator):
        for title in ["bowl", "vase", "plate", "jug"]:
            add_post(fake_supabase, creator, title)

        cards = CreatorDirectoryService(fake_supabase).list_creators()

        assert len(cards) == 1
        assert [p.title for p in cards[0].posts] == ["jug", "plate", "vase"]
        assert cards[0].profile.full_name == "Meera Sharma"

    def test_creator_without_posts_has_empty_preview(self, fake_supabase, creator):
        cards = CreatorDirectoryService(fake_supabase).list_creators()
        assert cards[0].posts == []

    def test_creator_without_profile_row_is_listed_with_null_profile(self, fake_supabase):
        fake_supabase.seed("creator_profiles", user_id="orphan", bio="Candles", categories=["Candle Making"])

        cards = CreatorDirectoryService(fake_supabase).list_creators()

        assert cards[0].user_id == "orphan"
        assert cards[0].profile is None

    def test_order_follows_backend_row_order(self, fake_supabase):
        for user_id in ["z", "a", "m"]:
            fake_supabase.seed("creator_profiles", user_id=user_id, categories=[])

        cards = CreatorDirectoryService(fake_supabase).list_creators()

        assert [c.user_id for c in cards] == ["z", "a", "m"]

    def test_fetch_failure_leaves_list_empty(self, fake_supabase, creator):
        fake_supabase.fail("creator_profiles", "select")
        assert CreatorDirectoryService(fake_supabase).list_creators() == []

    def test_failed_profile_join_leaves_list_empty(self, fake_supabase, creator):
        fake_supabase.fail("profiles", "select")
        assert CreatorDirectoryService(fake_supabase).list_creators() == []

    def test_failed_post_fetch_leaves_list_empty(self, client, fake_supabase, creator):
        add_post(fake_supabase, creator, "bowl")
        fake_supabase.fail("posts", "select")

        response = client.get("/api/v1/creators")

        assert response.status_code == 200
        assert response.json() == []

    def test_empty_directory_issues_no_dependent_queries(self, fake_supabase):
        assert CreatorDirectoryService(fake_supabase).list_creators() == []
        assert fake_supabase.calls_to("profiles") == []
        assert fake_supabase.calls_to("posts") == []

    def test_marks_following_for_signed_in_viewer(self, fake_supabase, creator, viewer):
        fake_supabase.seed("follows", follower_id=viewer.id, following_id=creator.id)

        anonymous = CreatorDirectoryService(fake_supabase).list_creators()
        signed_in = CreatorDirectoryService(fake_supabase).list_creators(viewer=SessionContext(user_id=viewer.id))

        assert anonymous[0].is_following is False
        assert signed_in[0].is_following is True

    def test_route_filters_by_query_and_category(self, client, fake_supabase, creator):
        fake_supabase.add_account(
            "neha@example.com", "Neha Jain", user_type="creator",
            bio="Fashion-forward jewelry", city="Pune", categories=["Jewelry Making"],
        )

        response = client.get("/api/v1/creators", params={"q": "jaipur", "category": "Pottery"})
        assert [c["user_id"] for c in response.json()] == [creator.id]

        response = client.get("/api/v1/creators", params={"category": "Jewelry Making"})
        assert [c["profile"]["full_name"] for c in response.json()] == ["Neha Jain"]


# =============================================================================
# Creator page
# =============================================================================

class TestCreatorPage:
    def test_missing_profile_is_not_found_and_stops(self, client, fake_supabase):
        response = client.get("/api/v1/creators/nobody")

        assert response.status_code == 404
        assert response.json()["detail"] == "Creator not found"
        assert fake_supabase.calls_to("creator_profiles") == []
        assert fake_supabase.calls_to("posts") == []

    def test_anonymous_view_lists_all_posts_newest_first(self, client, fake_supabase, creator):
        for title in ["bowl", "vase", "plate", "jug"]:
            add_post(fake_supabase, creator, title)

        body = client.get(f"/api/v1/creators/{creator.id}").json()

        assert [p["title"] for p in body["posts"]] == ["jug", "plate", "vase", "bowl"]
        assert body["creator_profile"]["categories"] == ["Pottery", "Painting"]
        assert body["can_interact"] is False

    def test_viewer_can_interact(self, client, creator, viewer):
        body = client.get(f"/api/v1/creators/{creator.id}", headers=viewer.headers).json()
        assert body["can_interact"] is True
        assert body["is_following"] is False

    def test_creator_cannot_interact_with_self(self, client, creator):
        body = client.get(f"/api/v1/creators/{creator.id}", headers=creator.headers).json()
        assert body["can_interact"] is False


# =============================================================================
# Follow
# =============================================================================

class TestFollow:
    def test_toggle_twice_restores_follow_state(self, client, fake_supabase, creator, viewer):
        url = f"/api/v1/creators/{creator.id}/follow"

        first = client.post(url, headers=viewer.headers).json()
        assert first == {"creator_id": creator.id, "following": True}
        assert len(fake_supabase.tables["follows"]) == 1

        second = client.post(url, headers=viewer.headers).json()
        assert second["following"] is False
        assert fake_supabase.tables["follows"] == []

    def test_follow_is_idempotent(self, fake_supabase, creator, viewer):
        service = FollowService(fake_supabase)
        service.follow(viewer.id, creator.id)
        service.follow(viewer.id, creator.id)

        assert len(fake_supabase.tables["follows"]) == 1
        assert service.is_following(viewer.id, creator.id)

    def test_unique_violation_counts_as_following(self, fake_supabase, creator, viewer):
        fake_supabase.fail("follows", "insert", APIError({"code": "23505", "message": "duplicate key"}))
        assert FollowService(fake_supabase).follow(viewer.id, creator.id) is True

    def test_cannot_follow_self(self, client, creator):
        response = client.post(f"/api/v1/creators/{creator.id}/follow", headers=creator.headers)
        assert response.status_code == 400

    def test_follow_requires_session(self, client, creator):
        assert client.post(f"/api/v1/creators/{creator.id}/follow").status_code == 401

    def test_writes_carry_each_followers_own_token(self, client, fake_supabase, creator, viewer):
        other = fake_supabase.add_account("asha@example.com", "Asha Verma")
        url = f"/api/v1/creators/{creator.id}/follow"

        client.post(url, headers=viewer.headers)
        client.post(url, headers=other.headers)
        client.post(url, headers=viewer.headers)

        assert fake_supabase.authorizations("follows", "insert") == [
            viewer.headers["Authorization"], other.headers["Authorization"]
        ]
        assert fake_supabase.authorizations("follows", "delete") == [viewer.headers["Authorization"]]

    def test_duplicate_toggle_while_first_is_running_is_refused(self, client, creator, viewer):
        follows = BlockingFollows()
        app.dependency_overrides[get_follow_service] = lambda: follows
        url = f"/api/v1/creators/{creator.id}/follow"
        responses = {}
        first = threading.Thread(target=lambda: responses.setdefault("first", client.post(url, headers=viewer.headers)))

        first.start()
        assert follows.entered.wait(5)
        second = client.post(url, headers=viewer.headers)
        follows.release.set()
        first.join(5)

        assert second.status_code == 409
        assert responses["first"].status_code == 200
        assert follows.calls == 1


# =============================================================================
# Contact
# =============================================================================

class TestContact:
    def test_sends_pending_request_with_trimmed_message(self, client, fake_supabase, creator, viewer):
        response = client.post(
            f"/api/v1/creators/{creator.id}/contact",
            json={"message": "  Can you make a tea set?  "},
            headers=viewer.headers,
        )

        assert response.status_code == 201
        body = response.json()
        assert body["status"] == "pending"
        assert body["message"] == "Can you make a tea set?"
        assert fake_supabase.tables["contact_requests"][0]["sender_id"] == viewer.id
        assert fake_supabase.authorizations("contact_requests", "insert") == [viewer.headers["Authorization"]]

    def test_blank_message_is_rejected_before_any_insert(self, client, fake_supabase, creator, viewer):
        response = client.post(
            f"/api/v1/creators/{creator.id}/contact", json={"message": "   "}, headers=viewer.headers
        )

        assert response.status_code == 422
        assert fake_supabase.calls_to("contact_requests") == []

    def test_cannot_contact_self(self, client, creator):
        response = client.post(
            f"/api/v1/creators/{creator.id}/contact", json={"message": "hi"}, headers=creator.headers
        )
        assert response.status_code == 400

    def test_unknown_creator(self, client, viewer):
        response = client.post("/api/v1/creators/nobody/contact", json={"message": "hi"}, headers=viewer.headers)
        assert response.status_code == 404

    def test_insert_failure_reports_generic_error(self, client, fake_supabase, creator, viewer):
        fake_supabase.fail("contact_requests", "insert")

        response = client.post(
            f"/api/v1/creators/{creator.id}/contact", json={"message": "hello"}, headers=viewer.headers
        )

        assert response.status_code == 500
        assert response.json()["detail"] == "Failed to send message"
