"""
SELECT column alias extraction.

Derives the output field name of every column in a ``SELECT ... FROM``
clause so positional result rows can be keyed by name:

- ``d AS e`` / ``d as e`` -> ``e``
- ``b.c`` -> ``c``
- ``a`` -> ``a``

The column list is split on every comma. Commas inside function calls or
subqueries split incorrectly, and ``SELECT *`` yields ``*``; statements like
these must be run with an explicit field list (see ``parse_field_list``).
"""

import re
from typing import List, Optional, Sequence, Union

from ..exceptions import AliasParseError

_LOWER_AS = re.compile(r"\sas\s")
_UPPER_AS = re.compile(r"\sAS\s")
_ANY_AS = re.compile(r"\sas\s", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")

_SELECT_KEYWORD = re.compile(r"\bSELECT\b")
_FROM_KEYWORD = re.compile(r"\bFROM\b")


def _strip_whitespace(text: str) -> str:
    return _WHITESPACE.sub("", text)


def find_duplicate(names: Sequence[str]) -> Optional[str]:
    """Return the first name that appears more than once, if any."""
    seen = set()
    for name in names:
        if name in seen:
            return name
        seen.add(name)
    return None


def select_clause(sql: str) -> str:
    """
    Return the text between the leftmost SELECT and the first FROM after it.

    Keywords are matched case-sensitively and as whole words, so names such
    as ``FROM_UNIXTIME`` or ``IS_FROM`` do not end the clause.

    Raises:
        AliasParseError: If either keyword is missing
    """
    select_match = _SELECT_KEYWORD.search(sql)
    if select_match is None:
        raise AliasParseError(sql, "No SELECT keyword found")

    from_match = _FROM_KEYWORD.search(sql, select_match.end())
    if from_match is None:
        raise AliasParseError(sql, "No FROM keyword found after SELECT")
    return sql[select_match.end():from_match.start()]


def resolve_alias(expression: str, case_sensitive: bool = True) -> str:
    """
    Resolve the output name of one column expression.

    With ``case_sensitive=True`` a lowercase ``as`` is looked for before an
    uppercase ``AS``; mixed-case spellings are not treated as aliases.

    Examples:
        >>> resolve_alias(" feedback.content as cc ")
        'cc'
        >>> resolve_alias(" t.uid")
        'uid'
        >>> resolve_alias(" id ")
        'id'
    """
    if case_sensitive:
        patterns = (_LOWER_AS, _UPPER_AS)
    else:
        patterns = (_ANY_AS,)

    for pattern in patterns:
        parts = pattern.split(expression)
        if len(parts) > 1:
            return _strip_whitespace(parts[-1])

    if "." in expression:
        return _strip_whitespace(expression.rsplit(".", 1)[-1])
    return _strip_whitespace(expression)


def extract_aliases(sql: str, case_sensitive: bool = True) -> List[str]:
    """
    Extract the ordered output field names of a SELECT statement.

    Args:
        sql: SQL text containing a ``SELECT ... FROM`` clause
        case_sensitive: Only recognise ``as``/``AS`` spelled in one case

    Returns:
        One alias per column, in clause order

    Raises:
        AliasParseError: If there is no SELECT ... FROM clause, a column
            resolves to an empty name, or two columns resolve to the same name

    Examples:
        >>> extract_aliases("SELECT a, b.c, d AS e FROM t")
        ['a', 'c', 'e']
    """
    aliases = [
        resolve_alias(expression, case_sensitive)
        for expression in select_clause(sql).split(",")
    ]
    for position, alias in enumerate(aliases):
        if not alias:
            raise AliasParseError(sql, f"Column {position} has no resolvable name")
    duplicate = find_duplicate(aliases)
    if duplicate is not None:
        raise AliasParseError(
            sql, f"Field name {duplicate!r} appears more than once; alias the columns apart"
        )
    return aliases


def parse_field_list(fields: Union[str, Sequence[str]]) -> List[str]:
    """
    Normalize an explicit field list.

    Accepts ``"id, cc"`` or ``["id", "cc"]``. Whitespace is removed from
    every name.

    Raises:
        AliasParseError: If the list is empty or contains an empty name or
            a repeated name
    """
    if isinstance(fields, str):
        raw = fields
        names = _strip_whitespace(fields).split(",")
    else:
        raw = ",".join(fields)
        names = [_strip_whitespace(name) for name in fields]

    if not names or any(not name for name in names):
        raise AliasParseError(raw, "Field list contains an empty name")
    duplicate = find_duplicate(names)
    if duplicate is not None:
        raise AliasParseError(raw, f"Field name {duplicate!r} appears more than once")
    return names
