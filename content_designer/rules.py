"""
Ordered rule evaluation shared by the heuristic classifiers.

A rule pairs a predicate with an outcome. Rules are evaluated in order and the
first rule whose predicate holds decides the result.
"""
from dataclasses import dataclass
from typing import Any, Callable, Generic, Iterable, Optional, TypeVar, Union

T = TypeVar('T')


@dataclass(frozen=True)
class Rule(Generic[T]):
    """A named predicate with the outcome it yields when matched"""
    name: str
    predicate: Callable[..., bool]
    outcome: Union[T, Callable[..., T]]

    def matches(self, *args: Any) -> bool:
        """Whether this rule applies to the subject"""
        return bool(self.predicate(*args))

    def resolve(self, *args: Any) -> T:
        """Outcome of this rule for the subject"""
        if callable(self.outcome):
            return self.outcome(*args)
        return self.outcome


def first_match(rules: Iterable[Rule[T]], *args: Any) -> Optional[T]:
    """Outcome of the first matching rule, or None when no rule matches"""
    rule = first_matching_rule(rules, *args)
    if rule is None:
        return None
    return rule.resolve(*args)


def first_matching_rule(rules: Iterable[Rule[T]], *args: Any) -> Optional[Rule[T]]:
    """The first rule that matches, or None"""
    for rule in rules:
        if rule.matches(*args):
            return rule
    return None


def any_pattern(patterns) -> Callable[[str], bool]:
    """Predicate that holds when any compiled pattern searches the text"""
    def predicate(text: str, *_: Any) -> bool:
        return any(pattern.search(text) for pattern in patterns)
    return predicate
