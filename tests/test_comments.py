import base64
import json

import pytest

from vtboard.config import settings
from vtboard.core.session import DRAFTS_KEY, comment_draft


@pytest.fixture
def post(supabase):
    return supabase.add("posts", vtuber_id=None, title="Clip", body="b", user_id="user-2")


def comment_input(post_id, value):
    return f'<input class="input" name="body" placeholder="Write a comment" value="{value}">'


def session_drafts(client):
    signed = client.cookies.get(settings.session_cookie_name)
    data = json.loads(base64.b64decode(signed.split(".")[0]))
    return data.get(DRAFTS_KEY, {})


def test_comment_requires_login(client, supabase, post):
    response = client.post(f"/posts/{post['id']}/comments", data={"body": "hi"}, follow_redirects=False)

    assert response.status_code == 303
    assert supabase.calls_to("comments") == []
    assert "Please sign in first." in client.get("/").text
    assert "insert" not in supabase.calls_to("comments")


def test_blank_comment_rejected_locally(client, supabase, alice, post):
    page = client.post(f"/posts/{post['id']}/comments", data={"body": "   "}).text

    assert "Enter a comment." in page
    assert "insert" not in supabase.calls_to("comments")


def test_comment_added_and_listed(client, supabase, alice, post):
    page = client.post(f"/posts/{post['id']}/comments", data={"body": "  so good  "}).text

    row = supabase.tables["comments"][0]
    assert row["body"] == "so good"
    assert row["post_id"] == post["id"]
    assert row["user_id"] == "user-1"
    assert "Comments 1" in page
    assert "Alice · " in page
    assert comment_input(post["id"], "") in page


def test_comment_failure_keeps_typed_text(client, supabase, alice, post):
    supabase.fail("comments", "insert")

    page = client.post(f"/posts/{post['id']}/comments", data={"body": "keep me"}).text

    assert "Could not post the comment." in page
    assert comment_input(post["id"], "keep me") in page


def test_comments_render_oldest_first(client, supabase, post):
    supabase.add("comments", post_id=post["id"], user_id="user-1", body="early bird")
    supabase.add("comments", post_id=post["id"], user_id="user-1", body="late reply")

    page = client.get("/").text

    assert page.index("early bird") < page.index("late reply")
    assert "No comments yet." not in page


def test_comment_draft_dropped_when_post_disappears(client, supabase, alice, post):
    supabase.fail("comments", "insert")
    client.post(f"/posts/{post['id']}/comments", data={"body": "unsent"})
    assert comment_draft(post["id"]) in session_drafts(client)

    supabase.tables["posts"].clear()
    client.get("/")

    assert comment_draft(post["id"]) not in session_drafts(client)


def test_comment_draft_dropped_when_post_deleted(client, supabase, alice):
    mika = supabase.add("vtubers", name="Mika", channel_url=None)
    mine = supabase.add("posts", vtuber_id=mika["id"], title="Mine", body="b", user_id="user-1")
    supabase.fail("comments", "insert")
    client.post(f"/posts/{mine['id']}/comments", data={"body": "unsent"}, params={"vtuber": mika["id"]})
    assert comment_draft(mine["id"]) in session_drafts(client)

    client.post(f"/posts/{mine['id']}/delete", data={"confirmed": "yes"}, params={"vtuber": mika["id"]})

    assert supabase.tables["posts"] == []
    assert comment_draft(mine["id"]) not in session_drafts(client)
