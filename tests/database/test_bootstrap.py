from __future__ import annotations

from datetime import time, timedelta

import pytest

from src.academy_system.academy_system.core.exceptions import DataIntegrityError
from src.academy_system.academy_system.database.bootstrap import _iter_sql_statements, _strip_create_db_and_use
from src.academy_system.academy_system.database.mysql_base import load_json_column, normalize_mysql_time
from src.academy_system.academy_system.students.model import normalize_software_list


def test_statement_splitter_ignores_semicolons_in_strings_and_comments():
    sql = """
    -- demo data; do not run in prod
    INSERT INTO batches (title) VALUES ('Photoshop; Advanced');
    INSERT INTO batches (title) VALUES ("It's fine");
    UPDATE batches SET title = 'a\\'b;c' WHERE id = 1
    """

    statements = list(_iter_sql_statements(sql))

    assert statements == [
        "INSERT INTO batches (title) VALUES ('Photoshop; Advanced')",
        'INSERT INTO batches (title) VALUES ("It\'s fine")',
        "UPDATE batches SET title = 'a\\'b;c' WHERE id = 1",
    ]


def test_create_database_and_use_lines_are_removed():
    sql = "CREATE DATABASE IF NOT EXISTS academy_db;\nUSE academy_db;\nCREATE TABLE t (id INT);\n"

    out = _strip_create_db_and_use(sql)

    assert "CREATE DATABASE" not in out
    assert "USE academy_db" not in out
    assert "CREATE TABLE t (id INT);" in out


@pytest.mark.parametrize(
    "raw, expected",
    [
        (None, None),
        (time(9, 30), time(9, 30)),
        (timedelta(hours=14, minutes=5), time(14, 5)),
        ("08:15", time(8, 15)),
        ("08:15:30", time(8, 15, 30)),
    ],
)
def test_normalize_mysql_time(raw, expected):
    assert normalize_mysql_time(raw) == expected


def test_normalize_mysql_time_rejects_garbage():
    with pytest.raises(DataIntegrityError):
        normalize_mysql_time("noon")
    with pytest.raises(DataIntegrityError):
        normalize_mysql_time(3.5)


def test_load_json_column_decodes_connector_values():
    assert load_json_column(None, "software_list") is None
    assert load_json_column('["Photoshop"]', "software_list") == ["Photoshop"]
    assert load_json_column(b'["Maya"]', "software_list") == ["Maya"]
    assert load_json_column(["Blender"], "software_list") == ["Blender"]

    with pytest.raises(DataIntegrityError, match="software_list"):
        load_json_column("[Photoshop", "software_list")
    with pytest.raises(DataIntegrityError, match="software_list"):
        load_json_column(b'["Ph\xffotoshop"]', "software_list")


def test_software_list_must_be_a_list_of_strings():
    assert normalize_software_list(None, student_id=1) == ()
    assert normalize_software_list([" Photoshop ", ""], student_id=1) == ("Photoshop",)

    with pytest.raises(DataIntegrityError):
        normalize_software_list("Photoshop", student_id=1)
    with pytest.raises(DataIntegrityError):
        normalize_software_list([1, 2], student_id=1)
