"""
SQL fragment builders shared by the repositories.

Both builders are pure: they return a clause written with positional
placeholders ($1, $2, ...) together with the values to bind, where
placeholder $i always refers to values[i - 1].

    build_set_clause    -> the SET part of a partial UPDATE
    build_filter_clause -> the WHERE part of a filtered SELECT

Column names and predicate templates are trusted identifiers; they must come
from the code-defined maps in the repositories, never from request input.
"""
from dataclasses import dataclass, field
from typing import Any, Callable, Collection, List, Mapping, Optional

from jobly.core.exceptions import BadRequestError


@dataclass(frozen=True)
class SqlFragment:
    clause: str
    values: List[Any] = field(default_factory=list)

    @property
    def next_index(self) -> int:
        """Placeholder index the caller should use for its next parameter."""
        return len(self.values) + 1


@dataclass(frozen=True)
class PredicateRule:
    """
    SQL condition for one filter key.

    `template` holds `{}` where the placeholder goes, or no `{}` at all for a
    condition that binds nothing (e.g. "equity > 0"). `transform` adapts the
    raw filter value before binding.
    """
    template: str
    transform: Optional[Callable[[Any], Any]] = None

    @property
    def binds_value(self) -> bool:
        return "{}" in self.template

    def render(self, index: int) -> str:
        return self.template.format(f"${index}")


def contains(value: Any) -> str:
    """Case-insensitive substring pattern for use with LOWER(col) LIKE."""
    return f"%{str(value).lower()}%"


def build_set_clause(data: Mapping[str, Any], column_map: Mapping[str, str]) -> SqlFragment:
    """
    Build the SET clause of a partial update.

    `column_map` translates field names into column names; fields it does
    not mention are used verbatim.

        >>> build_set_clause({"firstName": "Aliya", "age": 32}, {"firstName": "first_name"})
        SqlFragment(clause='"first_name"=$1, "age"=$2', values=['Aliya', 32])
    """
    if not data:
        raise BadRequestError("No data")

    assignments = [
        f'"{column_map.get(key, key)}"=${index}'
        for index, key in enumerate(data, start=1)
    ]
    return SqlFragment(", ".join(assignments), list(data.values()))


def check_filter_keys(filters: Mapping[str, Any], allowed_keys: Collection[str]) -> None:
    """Reject the whole filter if any of its keys is not allowed."""
    invalid = [key for key in filters if key not in allowed_keys]
    if invalid:
        raise BadRequestError(f"Invalid query variable: {', '.join(invalid)}")


def build_filter_clause(
    filters: Mapping[str, Any],
    allowed_keys: Collection[str],
    rules: Mapping[str, PredicateRule],
) -> SqlFragment:
    """
    Build the WHERE clause of a filtered list query.

    Every key is checked before anything is built. Keys with a falsy value
    (None, 0, False, "") are treated as not requested, so a filter such as
    minEmployees=0 cannot be expressed. Predicates are ANDed in the order of
    `filters`; an empty result yields an empty clause.
    """
    check_filter_keys(filters, allowed_keys)

    predicates: List[str] = []
    values: List[Any] = []
    for key, value in filters.items():
        if not value:
            continue
        rule = rules[key]
        if rule.binds_value:
            values.append(rule.transform(value) if rule.transform else value)
            predicates.append(rule.render(len(values)))
        else:
            predicates.append(rule.template)

    if not predicates:
        return SqlFragment("", [])
    return SqlFragment("WHERE " + " AND ".join(predicates), values)
