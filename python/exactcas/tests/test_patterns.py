# ExactCAS - Rewrite Pattern Tests
# Copyright (c) 2024 ExactCAS Contributors. All rights reserved.

"""
Tests for structural patterns, rules and rule sets.
"""

import logging

import pytest

from exactcas import Add, Integer, Mul, Sub, var
from exactcas.patterns import (
    ANY, Bind, Bindings, Kind, Literal, Node, NoMatch, Rule, RuleSet,
)
from exactcas.rules import ARITHMETIC_RULES, BOOLEAN_RULES, DEFAULT_RULES


ZERO = Integer.zero()
TWO = Integer.create(2)


@pytest.fixture
def x():
    return var('x')


@pytest.fixture
def y():
    return var('y')


class TestMatchResults:
    """Test Bindings and NoMatch."""

    def test_no_match_is_falsy(self):
        assert not NoMatch
        assert len(NoMatch) == 0
        assert NoMatch.get('a', 'default') == 'default'
        with pytest.raises(KeyError):
            NoMatch['a']

    def test_empty_bindings_are_truthy(self):
        """Test a successful match without names is still truthy."""
        assert Bindings({})

    def test_bindings_behave_like_dict(self, x):
        bindings = Bindings({'a': x})
        assert bindings['a'] == x
        assert 'a' in bindings
        assert list(bindings) == ['a']
        assert bindings.to_dict() == {'a': x}
        assert bindings == Bindings({'a': x})


class TestPatterns:
    """Test matching of each pattern kind."""

    def test_bind_and_literal(self, x):
        """Test binding a child next to a literal."""
        pattern = Node(Add, Bind('a'), Literal(ZERO))
        bindings = pattern.match(x + 0)
        assert bindings
        assert bindings['a'] == x
        assert not pattern.match(x + 1)

    def test_repeated_name_requires_equal_subtrees(self, x, y):
        """Test a - a matches x - x but not x - y."""
        pattern = Node(Sub, Bind('a'), Bind('a'))
        assert pattern.match(x - x)
        assert pattern.match((x + 1) - (x + 1))
        assert not pattern.match(x - y)

    def test_wildcard(self, x, y):
        """Test ANY matches without binding."""
        bindings = Node(Mul, ANY, ANY).match(x * y)
        assert bindings
        assert len(bindings) == 0

    def test_kind_mismatch(self, x, y):
        assert Node(Add, ANY, ANY).match(x * y) is NoMatch

    def test_kind_tuple(self, x, y):
        """Test a tuple of kinds matches any of them."""
        pattern = Node((Add, Sub), Bind('a'), Bind('b'))
        assert pattern.match(x - y)['b'] == y
        assert pattern.match(x + y)['a'] == x

    def test_arity_mismatch(self, x, y):
        """Test a pattern with the wrong number of children fails."""
        assert not Node(Add, Bind('a')).match(x + y)

    def test_nested(self, x):
        """Test patterns nest."""
        pattern = Node(Add, Node(Mul, Literal(TWO), Bind('a')), Bind('a'))
        assert pattern.match(2 * x + x)['a'] == x
        assert not pattern.match(3 * x + x)

    def test_kind_pattern(self, x, y):
        """Test Kind binds the whole node."""
        expr = x + y
        assert Kind(Add).match(expr)['node'] is expr
        assert Kind(Add, name='sum').match(expr)['sum'] is expr
        assert not Kind(Add).match(x)


class TestRules:
    """Test Rule and RuleSet."""

    def test_rule_apply(self, x):
        rule = Rule('double', Node(Add, Bind('a'), Bind('a')), lambda bs: Mul(TWO, bs['a']))
        assert rule.apply(x + x) == Mul(TWO, x)
        assert rule.apply(x + 1) is None

    def test_guard_rejects(self, x):
        """Test a failing guard makes the rule inapplicable."""
        rule = Rule(
            'drop-zero', Node(Add, Bind('a'), Bind('b')), lambda bs: bs['a'],
            guard=lambda bs: bs['b'] == ZERO,
        )
        assert rule.apply(x + 0) == x
        assert rule.apply(x + 1) is None
        assert not rule.match(x + 1)

    def test_priority_order(self, x):
        """Test higher priority rules are tried first."""
        low = Rule('low', Node(Add, ANY, ANY), lambda bs: Integer.create(1))
        high = Rule('high', Node(Add, ANY, ANY), lambda bs: Integer.create(2), priority=5)
        rules = RuleSet([low, high])
        assert rules.names == ['high', 'low']
        assert rules.apply(x + x) == Integer.create(2)

    def test_declaration_order_breaks_ties(self, x):
        first = Rule('first', Node(Add, ANY, ANY), lambda bs: Integer.create(1))
        second = Rule('second', Node(Add, ANY, ANY), lambda bs: Integer.create(2))
        assert RuleSet([first, second]).apply(x + x) == Integer.create(1)

    def test_no_rule_applies(self, x):
        """Test the node itself comes back unchanged."""
        expr = x * 3
        assert ARITHMETIC_RULES.apply(expr) is expr

    def test_rules_matching(self, x):
        """Test every applicable rule is listed."""
        matches = ARITHMETIC_RULES.rules_matching((x - x) * 1)
        assert [rule.name for rule, _ in matches] == ['mul-one-right']

    def test_lookup(self):
        assert ARITHMETIC_RULES['sub-self'].name == 'sub-self'
        assert 'de-morgan-and' in BOOLEAN_RULES
        with pytest.raises(KeyError):
            BOOLEAN_RULES['missing']

    def test_combination(self):
        """Test adding rule sets keeps every rule, re-sorted by priority."""
        combined = BOOLEAN_RULES + ARITHMETIC_RULES
        assert len(combined) == len(BOOLEAN_RULES) + len(ARITHMETIC_RULES)
        assert combined.names[0] == 'nan-propagation'
        assert DEFAULT_RULES.names[0] == 'nan-propagation'

    def test_logs_applied_rule(self, x, caplog):
        """Test the applied rule is logged at debug level."""
        caplog.set_level(logging.DEBUG, logger='exactcas.patterns')
        ARITHMETIC_RULES.apply(x + 0)
        assert 'add-zero-right' in caplog.text
