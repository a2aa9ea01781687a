from __future__ import annotations

from pathlib import Path

import pymysql
import pytest

from greenfleet.sensors import MySQLSensor, StaticSensor, TextFileSensor
from greenfleet.sensors import mysql as mysql_module
from greenfleet.shared.database import DBConfig
from greenfleet.shared.errors import Unavailable
from greenfleet.shared.models import Period, Quantity


# ---------------------------------------------------------------------------
# StaticSensor
# ---------------------------------------------------------------------------


def test_static_sensor_windows() -> None:
    source = StaticSensor(Quantity.FLOW, range(30))
    assert source.current().value == 29
    assert source.window("all").values == tuple(range(30))
    assert source.window(Period.DAY).values == tuple(range(6, 30))


def test_static_sensor_empty_history() -> None:
    source = StaticSensor("flow")
    assert source.window("day").values == ()
    with pytest.raises(Unavailable):
        source.current()


def test_unknown_period_is_rejected() -> None:
    with pytest.raises(ValueError):
        StaticSensor(Quantity.FLOW, [1]).window("month")


# ---------------------------------------------------------------------------
# TextFileSensor
# ---------------------------------------------------------------------------


def _write(path: Path, text: str) -> Path:
    path.write_text(text)
    return path


def test_text_file_single_file(tmp_path: Path) -> None:
    path = _write(tmp_path / "speed.txt", "12 11 oops 5\n4 3\n\n1 1 2\n")
    source = TextFileSensor(Quantity.WIND_SPEED, path, kind=int, samples_per_day=3)

    assert source.window("all").values == (12, 11, 5, 4, 3, 1, 1, 2)
    assert source.window("day").values == (1, 1, 2)
    assert source.window("day", "2024-01-01").values == (1, 1, 2)
    assert source.current().value == 2
    assert source.check_health()


def test_text_file_floats(tmp_path: Path) -> None:
    path = _write(tmp_path / "reserves.txt", "0.5 0.99\nbad 0.1\n")
    source = TextFileSensor(Quantity.RESERVES, path)
    assert source.window("all").values == (0.5, 0.99, 0.1)


def test_text_file_empty_file(tmp_path: Path) -> None:
    source = TextFileSensor(Quantity.FLOW, _write(tmp_path / "flow.txt", "garbage\n"))
    assert source.window("day").values == ()
    with pytest.raises(Unavailable):
        source.current()


def test_text_file_missing_file_is_unavailable(tmp_path: Path) -> None:
    source = TextFileSensor(Quantity.FLOW, tmp_path / "missing.txt")
    assert not source.check_health()
    with pytest.raises(Unavailable) as excinfo:
        source.window("all")
    assert isinstance(excinfo.value.__cause__, OSError)


def test_text_file_directory_per_day(tmp_path: Path) -> None:
    _write(tmp_path / "2024-06-01.txt", "1 2\n")
    _write(tmp_path / "2024-06-02.txt", "3 4\n")
    _write(tmp_path / "notes.md", "99\n")
    source = TextFileSensor(Quantity.WIND_SPEED, tmp_path, kind=int)

    assert source.window("all").values == (1, 2, 3, 4)
    assert source.window("day").values == (3, 4)
    assert source.window("day", "2024-06-01").values == (1, 2)
    assert source.current().value == 4


def test_text_file_directory_missing_day_is_unavailable(tmp_path: Path) -> None:
    _write(tmp_path / "2024-06-01.txt", "1 2\n")
    source = TextFileSensor(Quantity.WIND_SPEED, tmp_path, kind=int)
    with pytest.raises(Unavailable):
        source.window("day", "2024-06-05")


def test_text_file_empty_directory(tmp_path: Path) -> None:
    source = TextFileSensor(Quantity.FLOW, tmp_path)
    assert source.window("day").values == ()
    assert source.window("all").values == ()


@pytest.mark.parametrize("day", ["../secret", "..", "2024/06/01", "..\\x"])
def test_text_file_directory_rejects_path_like_day_keys(tmp_path: Path, day: str) -> None:
    _write(tmp_path / "secret.txt", "42\n")
    (tmp_path / "days").mkdir()
    source = TextFileSensor(Quantity.FLOW, tmp_path / "days")
    with pytest.raises(ValueError, match="Invalid day key"):
        source.window("day", day)


def test_text_file_unlistable_directory_is_unavailable(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _write(tmp_path / "2024-06-01.txt", "1 2\n")
    source = TextFileSensor(Quantity.FLOW, tmp_path)

    def _iterdir(self):
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "iterdir", _iterdir)
    with pytest.raises(Unavailable, match="Cannot list"):
        source.window("all")
    with pytest.raises(Unavailable):
        source.window("day")


# ---------------------------------------------------------------------------
# MySQLSensor
# ---------------------------------------------------------------------------


class FakeCursor:
    def __init__(self, connection: "FakeConnection") -> None:
        self.connection = connection

    def __enter__(self) -> "FakeCursor":
        return self

    def __exit__(self, *exc) -> None:
        return None

    def execute(self, query, params=None) -> None:
        self.connection.executed.append((query, list(params or [])))

    def fetchall(self):
        return self.connection.rows

    def fetchone(self):
        return self.connection.rows[0] if self.connection.rows else None


class FakeConnection:
    def __init__(self, rows) -> None:
        self.rows = rows
        self.executed: list = []
        self.closed = False

    def cursor(self) -> FakeCursor:
        return FakeCursor(self)

    def close(self) -> None:
        self.closed = True


@pytest.fixture()
def db_config() -> DBConfig:
    return DBConfig(host="db", user="u", password="p", database="greenfleet")


@pytest.fixture()
def fake_db(monkeypatch: pytest.MonkeyPatch):
    connections: list[FakeConnection] = []

    def _install(rows):
        def _connect(config):
            connection = FakeConnection(rows)
            connections.append(connection)
            return connection

        monkeypatch.setattr(mysql_module, "connect", _connect)
        return connections

    return _install


def test_mysql_window_all_parses_text_values(fake_db, db_config) -> None:
    connections = fake_db([{"value": "12.5"}, {"value": "null"}, {"value": None}, {"value": "3"}])
    source = MySQLSensor(Quantity.FLOW, db_config, metric="river_flow", location="dam")

    series = source.window("all")

    assert series.values == (12.5, 3.0)
    query, params = connections[0].executed[0]
    assert "ORDER BY timestamp ASC" in query
    assert params == ["river_flow", "dam"]
    assert connections[0].closed


def test_mysql_window_day_filters_by_date(fake_db, db_config) -> None:
    connections = fake_db([{"value": "4"}])
    source = MySQLSensor(Quantity.WIND_SPEED, db_config, kind=int)

    assert source.window("day", "2024-06-01").values == (4,)
    query, params = connections[0].executed[0]
    assert "DATE(timestamp) = %s" in query
    assert params == ["wind_speed", "2024-06-01"]


def test_mysql_current_takes_newest_parsable_row(fake_db, db_config) -> None:
    connections = fake_db([{"value": "bad"}, {"value": "7"}, {"value": "6"}])
    source = MySQLSensor(Quantity.FLOW, db_config)

    assert source.current().value == 7.0
    query, params = connections[0].executed[0]
    assert "ORDER BY timestamp DESC" in query
    assert "LIMIT" in query


def test_mysql_current_uses_last_value_of_newest_row(fake_db, db_config) -> None:
    fake_db([{"value": "7 9"}, {"value": "3"}])
    source = MySQLSensor(Quantity.FLOW, db_config)

    assert source.current().value == 9.0


def test_mysql_current_without_rows_is_unavailable(fake_db, db_config) -> None:
    fake_db([])
    with pytest.raises(Unavailable):
        MySQLSensor(Quantity.FLOW, db_config).current()


def test_mysql_errors_become_unavailable(monkeypatch: pytest.MonkeyPatch, db_config) -> None:
    def _connect(config):
        raise pymysql.err.OperationalError(2003, "Can't connect")

    monkeypatch.setattr(mysql_module, "connect", _connect)
    source = MySQLSensor(Quantity.FLOW, db_config)

    with pytest.raises(Unavailable) as excinfo:
        source.window("all")
    assert isinstance(excinfo.value.__cause__, pymysql.MySQLError)
    assert not source.check_health()


def test_mysql_health_check(fake_db, db_config) -> None:
    fake_db([{"1": 1}])
    assert MySQLSensor(Quantity.FLOW, db_config).check_health()
