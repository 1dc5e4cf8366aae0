import sqlite3

import highscore
from highscore import HighScoreStore
from settings import StorageConfig


def test_missing_file_loads_zero(store):
    assert not store.path.exists()
    assert store.load() == 0


def test_save_then_load(store):
    store.save(1234)
    assert store.load() == 1234


def test_save_never_lowers_the_stored_value(store):
    store.save(5000)
    store.save(100)
    assert store.load() == 5000
    store.save(7000)
    assert store.load() == 7000


def test_malformed_value_loads_zero_and_is_replaced(store, storage):
    store.save(10)
    with sqlite3.connect(storage.path) as conn:
        conn.execute("UPDATE kv SET value = 'abc' WHERE key = ?", (storage.high_score_key,))
    assert store.load() == 0
    store.save(50)
    assert store.load() == 50


def test_keys_are_independent(tmp_path):
    path = tmp_path / "shared.db"
    first = HighScoreStore(StorageConfig(path=path, high_score_key="a"))
    second = HighScoreStore(StorageConfig(path=path, high_score_key="b"))
    first.save(300)
    assert second.load() == 0
    assert first.load() == 300


def test_partially_numeric_value_is_replaced(store, storage):
    store.save(10)
    with sqlite3.connect(storage.path) as conn:
        conn.execute("UPDATE kv SET value = '5x' WHERE key = ?", (storage.high_score_key,))
    store.save(3)
    assert store.load() == 3


def test_every_connection_is_closed(store, monkeypatch):
    opened = []

    class TrackingConnection(sqlite3.Connection):
        closed = False

        def close(self):
            self.closed = True
            super().close()

    real_connect = sqlite3.connect

    def connect(path):
        conn = real_connect(path, factory=TrackingConnection)
        opened.append(conn)
        return conn

    monkeypatch.setattr(highscore.sqlite3, "connect", connect)
    store.save(10)
    store.load()
    store.save_sound_enabled(False)
    store.load_sound_enabled()
    assert len(opened) == 4
    assert all(conn.closed for conn in opened)


def test_sound_preference_defaults_on_and_persists(store, storage):
    assert store.load_sound_enabled()
    store.save_sound_enabled(False)
    assert not HighScoreStore(storage).load_sound_enabled()
    store.save_sound_enabled(True)
    assert store.load_sound_enabled()


def test_sound_preference_does_not_touch_the_high_score(store):
    store.save(700)
    store.save_sound_enabled(False)
    assert store.load() == 700
