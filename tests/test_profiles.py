from vtboard.modules.auth.schemas import SessionUser
from vtboard.modules.profiles.service import ProfileService, derive_nickname


def test_nickname_prefers_provider_name_fields():
    assert derive_nickname(SessionUser(id="u", email="a@b.c", user_metadata={"name": "N", "full_name": "F"})) == "N"
    assert derive_nickname(SessionUser(id="u", email="a@b.c", user_metadata={"full_name": "F", "nickname": "K"})) == "F"
    assert derive_nickname(SessionUser(id="u", email="a@b.c", user_metadata={"nickname": "K"})) == "K"


def test_nickname_falls_back_to_email_then_literal():
    assert derive_nickname(SessionUser(id="u", email="mika@example.com")) == "mika"
    assert derive_nickname(SessionUser(id="u")) == "user"


def test_profile_created_once_then_found(client, supabase, alice):
    client.get("/")
    client.get("/")

    assert supabase.calls_to("profiles") == ["select", "insert", "select"]
    assert supabase.tables["profiles"] == [
        {"id": "user-1", "nickname": "Alice", "avatar_url": None,
         "created_at": supabase.tables["profiles"][0]["created_at"]}
    ]


def test_avatar_taken_from_metadata(supabase):
    user = SessionUser(id="user-9", email="x@example.com", user_metadata={"avatar_url": "https://img.example/a.png"})

    profile = ProfileService(supabase).ensure_profile(user)

    assert profile.nickname == "x"
    assert profile.avatar_url == "https://img.example/a.png"


def test_existing_profile_is_not_refreshed(client, supabase, login):
    supabase.add("profiles", id="user-1", nickname="Old name", avatar_url=None)
    login(metadata={"name": "New name"})

    page = client.get("/").text

    assert "Old name" in page
    assert "insert" not in supabase.calls_to("profiles")


def test_lookup_failure_still_attempts_insert(supabase):
    supabase.fail("profiles", "select")

    profile = ProfileService(supabase).ensure_profile(SessionUser(id="user-1", email="a@example.com"))

    assert profile.nickname == "a"
    assert supabase.calls_to("profiles") == ["select", "insert"]


def test_insert_failure_means_no_profile_but_page_loads(client, supabase, alice):
    supabase.fail("profiles", "insert")

    response = client.get("/")

    assert response.status_code == 200
    assert "Signed in · alice@example.com" in response.text
