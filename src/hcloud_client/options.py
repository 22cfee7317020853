"""Declarative validation for optional query parameters."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from .exceptions import ValidationError

Predicate = Callable[[Any], bool]


@dataclass(frozen=True, slots=True)
class OptionRule:
    """Allowed types and an optional value constraint for one option."""

    name: str
    types: tuple[type, ...]
    predicate: Predicate | None = None
    description: str = ""

    def check(self, value: Any) -> None:
        if not self._type_matches(value):
            expected = " or ".join(t.__name__ for t in self.types)
            raise ValidationError(
                f"Option '{self.name}' must be of type {expected}, got {type(value).__name__}",
                option=self.name,
            )
        if self.predicate is not None and not self.predicate(value):
            raise ValidationError(
                f"Option '{self.name}' must satisfy {self.description or 'its constraint'}, "
                f"got {value!r}",
                option=self.name,
            )

    def _type_matches(self, value: Any) -> bool:
        # bool is an int subclass but never a valid page number
        if isinstance(value, bool) and bool not in self.types:
            return False
        return isinstance(value, self.types)


class OptionsSchema:
    """Ordered allow-list of option rules.

    Unknown keys are rejected and the first violated rule aborts validation.
    """

    def __init__(self, rules: tuple[OptionRule, ...] | list[OptionRule] = ()) -> None:
        self._rules: dict[str, OptionRule] = {rule.name: rule for rule in rules}

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(self._rules)

    def define(
        self,
        name: str,
        types: type | tuple[type, ...],
        predicate: Predicate | None = None,
        description: str = "",
    ) -> OptionsSchema:
        if not isinstance(types, tuple):
            types = (types,)
        self._rules[name] = OptionRule(name, types, predicate, description)
        return self

    def validate(self, options: Mapping[str, Any] | None) -> dict[str, Any]:
        if not options:
            return {}
        for key in options:
            if key not in self._rules:
                allowed = ", ".join(self._rules) or "none"
                raise ValidationError(
                    f"Unknown option '{key}'; allowed options: {allowed}",
                    option=str(key),
                )
        validated: dict[str, Any] = {}
        for name, value in options.items():
            self._rules[name].check(value)
            validated[name] = value
        return validated


def pagination_schema() -> OptionsSchema:
    """Return a new schema accepting ``page`` and ``per_page``."""

    return (
        OptionsSchema()
        .define("page", int, lambda value: value > 0, "page > 0")
        .define("per_page", int, lambda value: 0 < value <= 100, "1 <= per_page <= 100")
    )


__all__ = ["OptionRule", "OptionsSchema", "pagination_schema"]
