"""
Unit tests for StatementBuilder and the module-level build helpers.
"""

from collections import OrderedDict

import pytest

from sql_access.infrastructure.sql.core.literals import SqlLiteral, format_value
from sql_access.infrastructure.sql.dialects.mysql import MySQLDialect
from sql_access.infrastructure.sql.exceptions import StatementBuildError
from sql_access.infrastructure.sql.operations.statements import (
    StatementBuilder,
    build_count,
    build_delete_by_field,
    build_delete_by_id,
    build_insert,
    build_insert_many,
    build_select_by_id,
    build_update,
    normalize_fields,
)


class TestNormalizeFields:
    """Tests for field spec validation."""

    def test_mapping_order_preserved(self):
        pairs = normalize_fields({"b": 1, "a": 2})
        assert [name for name, _ in pairs] == ["b", "a"]

    def test_pairs_are_tagged(self):
        pairs = normalize_fields([("content", "x"), ("uid", 9)])
        assert pairs == [("content", SqlLiteral.string("x")), ("uid", SqlLiteral.integer(9))]

    def test_empty_fields_rejected(self):
        with pytest.raises(StatementBuildError, match="at least one field"):
            normalize_fields({})

    def test_duplicate_names_rejected(self):
        with pytest.raises(StatementBuildError, match="Duplicate"):
            normalize_fields([("uid", 1), ("uid", 2)])

    def test_blank_name_rejected(self):
        with pytest.raises(StatementBuildError):
            normalize_fields({" ": 1})


class TestBuildInsert:
    """Tests for single-row INSERT."""

    def test_insert_feedback(self):
        sql = build_insert("feedback", {"content": "ADFaadf", "uid": 9})
        assert sql == 'INSERT INTO feedback (content,uid) VALUES ("ADFaadf",9)'

    @pytest.mark.parametrize(
        "pairs",
        [
            [("n1", "v1")],
            [("n1", 1), ("n2", 2.5), ("n3", True)],
            [("a", None), ("b", 'q"uote'), ("c", "back\\slash"), ("d", -7)],
        ],
    )
    def test_insert_matches_template(self, pairs):
        """INSERT INTO t (n1,...,nk) VALUES (f(v1),...,f(vk))."""
        names = ",".join(name for name, _ in pairs)
        values = ",".join(format_value(value) for _, value in pairs)
        assert build_insert("t", OrderedDict(pairs)) == f"INSERT INTO t ({names}) VALUES ({values})"

    def test_insert_empty_fields_fails(self):
        with pytest.raises(StatementBuildError):
            build_insert("feedback", {})

    def test_insert_empty_table_fails(self):
        with pytest.raises(StatementBuildError):
            build_insert("", {"uid": 1})

    def test_insert_with_quoted_identifiers(self):
        builder = StatementBuilder(MySQLDialect(quote_identifiers=True))
        assert builder.insert("feedback", {"uid": 1}) == "INSERT INTO `feedback` (`uid`) VALUES (1)"

    def test_insert_with_schema(self):
        builder = StatementBuilder(schema="dev_db")
        assert builder.insert("feedback", {"uid": 1}) == "INSERT INTO dev_db.feedback (uid) VALUES (1)"


class TestBuildInsertMany:
    """Tests for multi-row INSERT."""

    def test_insert_many(self):
        sql = build_insert_many(
            "feedback",
            [{"content": "a", "uid": 1}, {"content": "b", "uid": 2}],
        )
        assert sql == 'INSERT INTO feedback (content,uid) VALUES ("a",1),("b",2)'

    def test_insert_many_requires_rows(self):
        with pytest.raises(StatementBuildError):
            build_insert_many("feedback", [])

    def test_insert_many_rejects_mismatched_rows(self):
        with pytest.raises(StatementBuildError, match="Row 1"):
            build_insert_many("feedback", [{"uid": 1}, {"content": "x"}])

    def test_insert_many_rejects_reordered_rows(self):
        with pytest.raises(StatementBuildError):
            build_insert_many("feedback", [{"a": 1, "b": 2}, {"b": 2, "a": 1}])


class TestBuildUpdate:
    """Tests for UPDATE by id."""

    def test_update_single_field(self):
        sql = build_update("feedback", 56, {"content": "更新后的内容"})
        assert sql == 'UPDATE feedback SET content="更新后的内容" WHERE id=56'

    def test_update_multiple_fields(self):
        sql = build_update("feedback", 56, {"content": "x", "uid": 3})
        assert sql == 'UPDATE feedback SET content="x",uid=3 WHERE id=56'

    def test_update_string_id_is_quoted(self):
        sql = build_update("feedback", "abc", {"uid": 3})
        assert sql == 'UPDATE feedback SET uid=3 WHERE id="abc"'

    def test_update_null_value(self):
        assert build_update("feedback", 1, {"score": None}) == "UPDATE feedback SET score=NULL WHERE id=1"

    def test_update_empty_fields_fails(self):
        with pytest.raises(StatementBuildError):
            build_update("feedback", 1, {})


class TestBuildDelete:
    """Tests for DELETE statements."""

    def test_delete_by_id(self):
        assert build_delete_by_id("feedback", 2) == "DELETE FROM feedback WHERE id=2"

    def test_delete_by_string_id(self):
        assert build_delete_by_id("feedback", "a1") == 'DELETE FROM feedback WHERE id="a1"'

    def test_delete_by_field(self):
        assert build_delete_by_field("feedback", "uid", 12) == "DELETE FROM feedback WHERE uid=12"

    def test_delete_by_string_field(self):
        sql = build_delete_by_field("feedback", "content", 'a"b')
        assert sql == 'DELETE FROM feedback WHERE content="a\\"b"'

    def test_delete_by_blank_field_fails(self):
        with pytest.raises(StatementBuildError):
            build_delete_by_field("feedback", "", 1)


class TestBuildSelect:
    """Tests for SELECT helpers."""

    def test_select_by_id_default_columns(self):
        assert build_select_by_id("feedback", 33) == "SELECT * FROM feedback WHERE id=33"

    def test_select_by_id_with_aliases(self):
        sql = build_select_by_id("feedback", 33, "id as id, feedback.content as cc")
        assert sql == "SELECT id as id, feedback.content as cc FROM feedback WHERE id=33"

    def test_select_by_id_blank_columns_fails(self):
        with pytest.raises(StatementBuildError):
            build_select_by_id("feedback", 33, "  ")

    def test_count_all(self):
        assert build_count("feedback") == "SELECT count(*) AS total FROM feedback"

    def test_count_with_conditions(self):
        sql = build_count("feedback", {"uid": 9, "content": "x"})
        assert sql == 'SELECT count(*) AS total FROM feedback WHERE uid=9 AND content="x"'


class TestBuilderFromSettings:
    """Tests for StatementBuilder.from_settings."""

    def test_plain_identifiers_by_default(self):
        builder = StatementBuilder.from_settings()
        assert builder.delete_by_id("feedback", 2) == "DELETE FROM feedback WHERE id=2"

    def test_quote_identifiers_setting(self, monkeypatch):
        monkeypatch.setenv("SQLA_QUOTE_IDENTIFIERS", "true")

        builder = StatementBuilder.from_settings()

        assert builder.delete_by_field("feedback", "uid", 9) == "DELETE FROM `feedback` WHERE `uid`=9"
