import pytest

from vtboard.core.errors import RemoteOperationFailed
from vtboard.modules.likes.service import LikeService


@pytest.fixture
def post(supabase):
    return supabase.add("posts", vtuber_id=None, title="Clip", body="b", user_id="user-2")


def test_anonymous_like_is_blocked_without_remote_call(client, supabase, post):
    response = client.post(f"/posts/{post['id']}/like", follow_redirects=False)

    assert response.status_code == 303
    assert supabase.calls_to("likes") == []
    assert "Please sign in first." in client.get("/").text


def test_toggle_adds_then_removes(client, supabase, alice, post):
    page = client.post(f"/posts/{post['id']}/like").text
    assert "Unlike (1)" in page
    assert len(supabase.tables["likes"]) == 1

    page = client.post(f"/posts/{post['id']}/like").text
    assert "Like (0)" in page
    assert supabase.tables["likes"] == []


def test_toggle_counts_other_users(client, supabase, alice, post):
    supabase.add("likes", post_id=post["id"], user_id="user-2")

    page = client.post(f"/posts/{post['id']}/like").text

    assert "Unlike (2)" in page


def test_toggle_keeps_filter(client, supabase, alice, post):
    response = client.post(f"/posts/{post['id']}/like", params={"vtuber": "v-1"}, follow_redirects=False)

    assert response.headers["location"] == "/?vtuber=v-1"


def test_double_toggle_restores_state(supabase, post):
    service = LikeService(supabase)

    assert service.toggle_like(post["id"], "user-1") is True
    assert service.toggle_like(post["id"], "user-1") is False
    assert supabase.tables["likes"] == []


def test_racing_inserts_leave_one_like(supabase, post, monkeypatch):
    service = LikeService(supabase)
    # Both tabs read "no like" before either inserts.
    monkeypatch.setattr(service, "find_like_id", lambda post_id, user_id: None)

    assert service.toggle_like(post["id"], "user-1") is True
    with pytest.raises(RemoteOperationFailed):
        service.toggle_like(post["id"], "user-1")
    assert len(supabase.tables["likes"]) == 1


def test_lookup_failure_treated_as_not_liked(supabase, post):
    supabase.fail("likes", "select")

    assert LikeService(supabase).toggle_like(post["id"], "user-1") is True
    assert supabase.calls_to("likes") == ["select", "insert"]


def test_insert_failure_is_reported(client, supabase, alice, post):
    supabase.fail("likes", "insert")

    page = client.post(f"/posts/{post['id']}/like").text

    assert "Could not like the post." in page
    assert "Like (0)" in page
