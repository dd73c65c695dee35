"""Unit tests for FileSessionPersistence."""

from travel_admin.application.interfaces import PersistenceMode
from travel_admin.domain.entities import Actor
from travel_admin.infrastructure.auth import FileSessionPersistence


def _actor() -> Actor:
    return Actor(uid="uid-1", email="sara@agency.ma", display_name="Sara", refresh_token="refresh-1", role="agent")


def test_durable_session_survives_a_new_instance(tmp_path):
    path = tmp_path / "session.json"
    FileSessionPersistence(path).save(_actor())

    restored = FileSessionPersistence(path).load()

    assert restored == _actor()


def test_ephemeral_session_is_not_written(tmp_path):
    path = tmp_path / "session.json"
    persistence = FileSessionPersistence(path)
    persistence.set_mode(PersistenceMode.EPHEMERAL)

    persistence.save(_actor())

    assert not path.exists()
    assert persistence.load() == _actor()
    assert FileSessionPersistence(path).load() is None


def test_ephemeral_save_forgets_durable_file(tmp_path):
    path = tmp_path / "session.json"
    FileSessionPersistence(path).save(_actor())
    persistence = FileSessionPersistence(path)

    persistence.set_mode(PersistenceMode.EPHEMERAL)
    assert path.exists()

    persistence.save(_actor())
    assert not path.exists()


def test_clear_and_corrupt_file(tmp_path):
    path = tmp_path / "session.json"
    persistence = FileSessionPersistence(path)
    persistence.save(_actor())
    persistence.clear()
    assert persistence.load() is None

    path.write_text("{not json", encoding="utf-8")
    assert FileSessionPersistence(path).load() is None
