import pytest

from notes_client import ApiError, NotesClient, NotLoggedIn, SessionExpired
from notes_client.models import Note


@pytest.fixture
def api(client):
    return NotesClient(http=client)


def test_register_stores_token(api):
    result = api.register("alice", "secret1")
    assert result.user.username == "alice"
    assert api.is_logged_in
    assert api.token == result.token


def test_register_conflict(api):
    api.register("alice", "secret1")
    with pytest.raises(ApiError) as exc_info:
        api.register("alice", "secret1")
    assert exc_info.value.status_code == 409
    assert exc_info.value.message == "Username already exists"


def test_login_bad_credentials(api):
    with pytest.raises(ApiError) as exc_info:
        api.login("nobody", "secret1")
    assert exc_info.value.status_code == 401
    assert not isinstance(exc_info.value, SessionExpired)


def test_notes_round_trip(api):
    api.register("alice", "secret1")

    note = api.create_note("Shopping", "milk, eggs", tags="personal, shopping")
    assert note.tag_list() == ["personal", "shopping"]

    assert [n.id for n in api.get_notes()] == [note.id]
    assert api.get_note(note.id).title == "Shopping"

    updated = api.update_note(note.id, "Shopping", "milk, eggs, bread")
    assert updated.content == "milk, eggs, bread"
    assert updated.tags == ""

    api.delete_note(note.id)
    assert api.get_notes() == []
    with pytest.raises(ApiError) as exc_info:
        api.delete_note(note.id)
    assert exc_info.value.status_code == 404


def test_protected_call_without_token(api):
    with pytest.raises(NotLoggedIn):
        api.get_notes()


def test_rejected_token_is_session_expired(api):
    api.token = "not-a-jwt"
    with pytest.raises(SessionExpired) as exc_info:
        api.get_notes()
    assert exc_info.value.status_code == 403


def test_logout_clears_token(api):
    api.register("alice", "secret1")
    api.logout()
    assert not api.is_logged_in


def test_change_password_and_login(api):
    api.register("alice", "secret1")
    with pytest.raises(ApiError) as exc_info:
        api.change_password("wrong-old", "secret2")
    assert exc_info.value.status_code == 401
    assert not isinstance(exc_info.value, SessionExpired)

    api.change_password("secret1", "secret2")
    api.logout()
    assert api.login("alice", "secret2").user.username == "alice"


def test_delete_account(api):
    api.register("alice", "secret1")
    api.create_note("t", "c")
    api.delete_account("secret1")
    assert not api.is_logged_in
    with pytest.raises(ApiError):
        api.login("alice", "secret1")


def test_note_tag_list_ignores_blanks():
    note = Note(id=1, user_id=1, title="t", content="c", tags=" a, ,b ,")
    assert note.tag_list() == ["a", "b"]


def test_requires_base_url_or_http():
    with pytest.raises(ValueError):
        NotesClient()
