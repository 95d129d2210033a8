import pytest

from notes_database import CredentialStore, Note, NoteStore, User, UsernameTaken, pwd_context


@pytest.fixture
def users(db_session):
    return CredentialStore(db_session)


@pytest.fixture
def notes(db_session, clock):
    return NoteStore(db_session, clock=clock)


@pytest.fixture
def alice(users):
    return users.create("alice", "secret1")


@pytest.fixture
def bob(users):
    return users.create("bob", "hunter22")


# -------- CREDENTIAL STORE --------
def test_create_stores_only_hash(users, alice):
    assert alice.id is not None
    assert alice.password_hash != "secret1"
    assert pwd_context.identify(alice.password_hash) == "pbkdf2_sha256"


def test_create_duplicate_raises(users, db_session, alice):
    with pytest.raises(UsernameTaken):
        users.create("alice", "different1")
    assert db_session.query(User).count() == 1


def test_find_by_username_and_id(users, alice):
    assert users.find_by_username("alice").id == alice.id
    assert users.find_by_username("ALICE") is None
    assert users.find_by_id(alice.id).username == "alice"
    assert users.find_by_id(9999) is None


def test_verify(users, alice):
    assert users.verify("alice", "secret1").id == alice.id
    assert users.verify("alice", "wrong") is None
    assert users.verify("nobody", "secret1") is None


def test_update_password(users, alice):
    assert users.update_password(alice.id, "wrong", "newsecret") is False
    assert users.verify("alice", "secret1") is not None

    assert users.update_password(alice.id, "secret1", "newsecret") is True
    assert users.verify("alice", "secret1") is None
    assert users.verify("alice", "newsecret") is not None


def test_update_password_unknown_user(users):
    assert users.update_password(9999, "secret1", "newsecret") is False


def test_delete_user_requires_password(users, notes, db_session, alice):
    notes.create(alice.id, "t", "c")
    assert users.delete_user(alice.id, "wrong") is False
    assert db_session.query(User).count() == 1
    assert db_session.query(Note).count() == 1


def test_delete_user_cascades_to_notes(users, notes, db_session, alice, bob):
    notes.create(alice.id, "a1", "c")
    notes.create(alice.id, "a2", "c")
    notes.create(bob.id, "b1", "c")

    assert users.delete_user(alice.id, "secret1") is True

    assert users.find_by_username("alice") is None
    assert [n.title for n in db_session.query(Note).all()] == ["b1"]


# -------- NOTE STORE --------
def test_create_sets_equal_timestamps(notes, alice):
    note = notes.create(alice.id, "Title", "Body")
    fetched = notes.get_owned(note.id, alice.id)
    assert fetched.created_at == fetched.updated_at
    assert fetched.tags == ""


def test_update_refreshes_updated_at_only(notes, alice):
    note = notes.create(alice.id, "Title", "Body", "x")
    created_at = note.created_at

    updated = notes.update(note.id, alice.id, "T2", "B2", "y, z")
    assert updated.title == "T2"
    assert updated.content == "B2"
    assert updated.tags == "y, z"
    assert updated.created_at == created_at
    assert updated.updated_at > created_at


def test_list_by_owner_orders_by_updated_at(notes, alice, bob):
    first = notes.create(alice.id, "first", "c")
    notes.create(alice.id, "second", "c")
    notes.create(bob.id, "bob's", "c")
    notes.update(first.id, alice.id, "first", "edited")

    assert [n.title for n in notes.list_by_owner(alice.id)] == ["first", "second"]
    assert [n.title for n in notes.list_by_owner(bob.id)] == ["bob's"]


def test_ownership_isolation(notes, alice, bob):
    note = notes.create(alice.id, "private", "c")

    assert notes.get_owned(note.id, bob.id) is None
    assert notes.update(note.id, bob.id, "hax", "hax") is None
    assert notes.delete(note.id, bob.id) is False

    untouched = notes.get_owned(note.id, alice.id)
    assert untouched.title == "private"


def test_delete_is_true_once(notes, alice):
    note_id = notes.create(alice.id, "t", "c").id
    assert notes.delete(note_id, alice.id) is True
    assert notes.delete(note_id, alice.id) is False
    assert notes.get_owned(note_id, alice.id) is None


def test_ids_beyond_integer_range_are_not_found(notes, alice):
    notes.create(alice.id, "t", "c")
    huge = 2 ** 70
    assert notes.get_owned(huge, alice.id) is None
    assert notes.update(huge, alice.id, "t2", "c2") is None
    assert notes.delete(huge, alice.id) is False
    assert notes.delete(-huge, alice.id) is False
    assert len(notes.list_by_owner(alice.id)) == 1


def test_update_missing_note(notes, alice):
    assert notes.update(12345, alice.id, "t", "c") is None
