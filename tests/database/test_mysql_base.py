from datetime import time, timedelta

import pytest

from src.workforce_attendance.workforce_attendance.database.connection import DBConfig
from src.workforce_attendance.workforce_attendance.database.mysql_base import db_cursor, normalize_mysql_time


class FakeCursor:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


class FakeConnection:
    def __init__(self):
        self.cursor_obj = FakeCursor()
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self.cursor_obj

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self):
        self.conn = FakeConnection()

    def connect(self):
        return self.conn


def test_db_cursor_commits_on_success():
    factory = FakeFactory()

    with db_cursor(factory) as (_, cur):
        assert cur is factory.conn.cursor_obj

    assert factory.conn.committed is True
    assert factory.conn.rolled_back is False
    assert factory.conn.closed is True


def test_db_cursor_rolls_back_on_error():
    factory = FakeFactory()

    with pytest.raises(RuntimeError):
        with db_cursor(factory):
            raise RuntimeError("duplicate key")

    assert factory.conn.committed is False
    assert factory.conn.rolled_back is True
    assert factory.conn.cursor_obj.closed is True
    assert factory.conn.closed is True


def test_normalize_mysql_time_from_timedelta():
    assert normalize_mysql_time(timedelta(hours=9, minutes=30)) == time(9, 30)
    assert normalize_mysql_time(time(18, 0)) == time(18, 0)
    assert normalize_mysql_time(None) is None


def test_normalize_mysql_time_rejects_strings():
    with pytest.raises(TypeError):
        normalize_mysql_time("09:00")


def test_db_config_from_settings_defaults():
    cfg = DBConfig.from_settings({"host": "db", "user": "app", "password": "pw", "database": "workforce_attendance"})

    assert cfg.port == 3306
    assert cfg.connect_timeout == 10
