"""Conditions comparing the answer of a query against an expectation."""

from __future__ import annotations

from enum import Enum
from typing import Any, Mapping

from .queries import DialogueQuery, DialogueQueryBool, DialogueQueryFloat, DialogueQueryInt
from .types import DialogueError

_ABSTRACT = "Should not use abstract condition directly"


class FloatComparison(Enum):
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"


class IntComparison(Enum):
    GREATER_THAN = "greater_than"
    LESS_THAN = "less_than"
    EQUAL_TO = "equal_to"


def _as_number(value: float) -> str:
    """Format a number with digit grouping and at most three decimals."""
    if isinstance(value, int):
        return f"{value:,}"
    text = f"{value:,.3f}".rstrip("0").rstrip(".")
    return text if text not in ("-0", "") else "0"


class DialogueCondition:
    """A condition a branch can test; concrete kinds override every method."""

    def set_query(self, query: DialogueQuery) -> None:
        raise DialogueError(_ABSTRACT)

    def set_dialogue(self, dialogue: Any) -> None:
        raise DialogueError(_ABSTRACT)

    def is_met(self) -> bool:
        raise DialogueError(_ABSTRACT)

    def display_text(self, arg_texts: Mapping[str, str], query_text: str) -> str:
        raise DialogueError(_ABSTRACT)

    def graph_description(self, query_text: str) -> str:
        return ""

    def is_valid(self) -> bool:
        return False


class _QueryCondition(DialogueCondition):
    """A condition backed by a query of one particular kind."""

    query_type: type[DialogueQuery] = DialogueQuery

    def __init__(self, query: DialogueQuery | None = None) -> None:
        self.query: Any = None
        if query is not None:
            self.set_query(query)

    def set_query(self, query: DialogueQuery) -> None:
        if query is None:
            raise ValueError("condition query must not be None")
        if not isinstance(query, self.query_type):
            raise TypeError(
                f"{type(self).__name__} needs a {self.query_type.__name__}, "
                f"got {type(query).__name__}"
            )
        self.query = query

    def set_dialogue(self, dialogue: Any) -> None:
        if dialogue is None:
            raise ValueError("condition dialogue must not be None")
        self._require_query().dialogue = dialogue

    def is_valid(self) -> bool:
        return self.query is not None and self.query.is_valid()

    def _require_query(self) -> Any:
        if self.query is None:
            raise DialogueError(f"{type(self).__name__} has no query")
        return self.query


class ConditionBool(_QueryCondition):
    """Met when a true/false query gives the expected answer."""

    query_type = DialogueQueryBool

    def __init__(self, query: DialogueQueryBool | None = None, query_true: bool = True) -> None:
        super().__init__(query)
        self.query_true = query_true

    def is_met(self) -> bool:
        value = bool(self._require_query().execute())
        return value if self.query_true else not value

    def display_text(self, arg_texts: Mapping[str, str], query_text: str) -> str:
        return f"{query_text} is {arg_texts['QueryTrue']}"

    def graph_description(self, query_text: str) -> str:
        negate = "" if self.query_true else "NOT "
        return f"{negate}{query_text}"


class ConditionFloat(_QueryCondition):
    """Met when a numeric query is above or below a value."""

    query_type = DialogueQueryFloat

    def __init__(
        self,
        query: DialogueQueryFloat | None = None,
        comparison: FloatComparison = FloatComparison.GREATER_THAN,
        compare_value: float = 0.0,
    ) -> None:
        super().__init__(query)
        self.comparison = comparison
        self.compare_value = compare_value

    def is_met(self) -> bool:
        value = self._require_query().execute()
        if self.comparison is FloatComparison.GREATER_THAN:
            return value > self.compare_value
        return value < self.compare_value

    def display_text(self, arg_texts: Mapping[str, str], query_text: str) -> str:
        return f"{query_text} {arg_texts['Comparison']} {arg_texts['CompareValue']}"

    def graph_description(self, query_text: str) -> str:
        symbol = ">" if self.comparison is FloatComparison.GREATER_THAN else "<"
        return f"{query_text} {symbol} {_as_number(self.compare_value)}"


class ConditionInt(_QueryCondition):
    """Met when a whole-number query is above, below or equal to a value."""

    query_type = DialogueQueryInt

    def __init__(
        self,
        query: DialogueQueryInt | None = None,
        comparison: IntComparison = IntComparison.GREATER_THAN,
        compare_value: int = 0,
    ) -> None:
        super().__init__(query)
        self.comparison = comparison
        self.compare_value = compare_value

    def is_met(self) -> bool:
        value = self._require_query().execute()
        if self.comparison is IntComparison.GREATER_THAN:
            return value > self.compare_value
        if self.comparison is IntComparison.LESS_THAN:
            return value < self.compare_value
        return value == self.compare_value

    def display_text(self, arg_texts: Mapping[str, str], query_text: str) -> str:
        return f"{query_text} {arg_texts['Comparison']} {arg_texts['CompareValue']}"

    def graph_description(self, query_text: str) -> str:
        symbol = {
            IntComparison.GREATER_THAN: ">",
            IntComparison.LESS_THAN: "<",
        }.get(self.comparison, "=")
        return f"{query_text} {symbol} {_as_number(self.compare_value)}"