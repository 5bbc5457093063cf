# ExactCAS - Rewrite Patterns
# Copyright (c) 2024 ExactCAS Contributors. All rights reserved.

"""
Structural patterns and ordered rewrite rules.

A pattern describes the shape of a node. Matching a pattern against a node
yields `Bindings` (truthy, dict-like) or `NoMatch` (falsy):

    >>> rule_pattern = Node(Add, Bind('a'), Literal(Integer.zero()))
    >>> if bindings := rule_pattern.match(x + 0):
    ...     print(bindings['a'])
    x

A name bound twice must be bound to structurally equal sub-trees, so
`Node(Sub, Bind('a'), Bind('a'))` matches `x - x` but not `x - y`.

A `Rule` pairs a pattern with a replacement builder and an optional guard.
A `RuleSet` tries its rules in order (highest priority first, then
declaration order) and applies the first rule that matches.
"""

from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import (
    Any, Callable, Dict, Iterable, Iterator, List, Optional, Tuple, Type, Union,
)

from .entity import Entity


logger = logging.getLogger(__name__)


class Bindings:
    """
    Dict-like result of a successful match.

    Bindings objects are truthy even when empty. Use NoMatch (which is falsy)
    to represent failed matches.
    """

    __slots__ = ('_dict',)

    def __init__(self, values: Dict[str, Entity]):
        self._dict = dict(values)

    def __bool__(self) -> bool:
        return True

    def __getitem__(self, key: str) -> Entity:
        return self._dict[key]

    def get(self, key: str, default=None):
        return self._dict.get(key, default)

    def __contains__(self, key: str) -> bool:
        return key in self._dict

    def keys(self):
        return self._dict.keys()

    def items(self):
        return self._dict.items()

    def __iter__(self):
        return iter(self._dict)

    def __len__(self) -> int:
        return len(self._dict)

    def __repr__(self) -> str:
        return f"Bindings({self._dict})"

    def __eq__(self, other):
        if isinstance(other, Bindings):
            return self._dict == other._dict
        return False

    def to_dict(self) -> Dict[str, Entity]:
        return self._dict.copy()


class _NoMatch:
    """Singleton representing a failed pattern match. NoMatch is falsy."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NoMatch"

    def __getitem__(self, key: str):
        raise KeyError(f"NoMatch has no binding for '{key}'")

    def get(self, key: str, default=None):
        return default

    def __contains__(self, key: str) -> bool:
        return False

    def __len__(self) -> int:
        return 0

    def __iter__(self):
        return iter([])


NoMatch = _NoMatch()

MatchResult = Union[Bindings, _NoMatch]


class Pattern(ABC):
    """Base class of patterns."""

    @abstractmethod
    def _match(self, entity: Entity, bindings: Dict[str, Entity]) -> bool:
        """Match `entity`, recording bound names into `bindings`."""
        ...

    def match(self, entity: Entity) -> MatchResult:
        bindings: Dict[str, Entity] = {}
        if self._match(entity, bindings):
            return Bindings(bindings)
        return NoMatch


@dataclass(frozen=True)
class Bind(Pattern):
    """Matches anything and binds it to `name`."""
    name: str

    def _match(self, entity: Entity, bindings: Dict[str, Entity]) -> bool:
        if self.name in bindings:
            return bindings[self.name] == entity
        bindings[self.name] = entity
        return True


@dataclass(frozen=True)
class Wildcard(Pattern):
    """Matches anything without binding it."""

    def _match(self, entity: Entity, bindings: Dict[str, Entity]) -> bool:
        return True


ANY = Wildcard()


@dataclass(frozen=True)
class Literal(Pattern):
    """Matches nodes structurally equal to `value`."""
    value: Entity

    def _match(self, entity: Entity, bindings: Dict[str, Entity]) -> bool:
        return entity == self.value


class Node(Pattern):
    """
    Matches a node of the given kind whose children match `children`.

    Args:
        kind: Node class, or a tuple of classes.
        *children: One pattern per direct child.
    """

    def __init__(self, kind: Union[Type[Entity], Tuple[Type[Entity], ...]], *children: Pattern):
        self.kind = kind
        self.children = children

    def _match(self, entity: Entity, bindings: Dict[str, Entity]) -> bool:
        if not isinstance(entity, self.kind):
            return False
        operands = entity.direct_children
        if len(operands) != len(self.children):
            return False
        return all(p._match(c, bindings) for p, c in zip(self.children, operands))

    def __repr__(self) -> str:
        name = getattr(self.kind, '__name__', repr(self.kind))
        return f"Node({name}, {', '.join(map(repr, self.children))})"


class Kind(Pattern):
    """Matches any node of the given kind, with any children, binding it to `name`."""

    def __init__(self, kind: Union[Type[Entity], Tuple[Type[Entity], ...]], name: str = 'node'):
        self.kind = kind
        self.name = name

    def _match(self, entity: Entity, bindings: Dict[str, Entity]) -> bool:
        if not isinstance(entity, self.kind):
            return False
        bindings[self.name] = entity
        return True


# Rules

Builder = Callable[[Bindings], Entity]
Guard = Callable[[Bindings], bool]


@dataclass(frozen=True)
class Rule:
    """
    A rewrite rule: when `pattern` matches and `guard` accepts the bindings,
    the node is replaced by `build(bindings)`.

    Attributes:
        name: Identifier used in logs and lookups.
        pattern: Shape of the nodes this rule rewrites.
        build: Constructs the replacement from the bindings.
        guard: Extra condition on the bindings.
        priority: Rules with higher priority are tried first.
        description: Human-readable summary.
    """
    name: str
    pattern: Pattern
    build: Builder
    guard: Optional[Guard] = None
    priority: int = 0
    description: str = ''

    def match(self, entity: Entity) -> MatchResult:
        """Bindings if the pattern matches and the guard accepts, else NoMatch."""
        bindings = self.pattern.match(entity)
        if not bindings:
            return NoMatch
        if self.guard is not None and not self.guard(bindings):
            return NoMatch
        return bindings

    def apply(self, entity: Entity) -> Optional[Entity]:
        """The rewritten node, or None if the rule does not apply."""
        bindings = self.match(entity)
        if not bindings:
            return None
        return self.build(bindings)


class RuleSet:
    """
    An ordered collection of rules.

    Rules are sorted by descending priority; rules of equal priority keep
    their declaration order.
    """

    def __init__(self, rules: Iterable[Rule] = (), name: str = ''):
        self.name = name
        self._rules: List[Rule] = sorted(rules, key=lambda r: -r.priority)

    def apply(self, entity: Entity) -> Entity:
        """
        Rewrite `entity` with the first applicable rule.

        Returns:
            The replacement, or `entity` itself if no rule applies.
        """
        for rule in self._rules:
            result = rule.apply(entity)
            if result is not None:
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug("Rule %s: %s -> %s", rule.name, entity, result)
                return result
        return entity

    def rules_matching(self, entity: Entity) -> List[Tuple[Rule, Bindings]]:
        """All rules applicable to `entity`, in the order they would be tried."""
        matches = []
        for rule in self._rules:
            bindings = rule.match(entity)
            if bindings:
                matches.append((rule, bindings))
        return matches

    @property
    def names(self) -> List[str]:
        return [r.name for r in self._rules]

    def __getitem__(self, name: str) -> Rule:
        for rule in self._rules:
            if rule.name == name:
                return rule
        raise KeyError(f"No rule named {name!r}")

    def __contains__(self, name: Any) -> bool:
        return any(r.name == name for r in self._rules)

    def __add__(self, other: RuleSet) -> RuleSet:
        if not isinstance(other, RuleSet):
            return NotImplemented
        return RuleSet(list(self._rules) + list(other._rules), name=self.name or other.name)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleSet({self.name!r}, {len(self._rules)} rules)"
