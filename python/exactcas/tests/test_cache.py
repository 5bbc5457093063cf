# ExactCAS - Derived Property Cache Tests
# Copyright (c) 2024 ExactCAS Contributors. All rights reserved.

import gc

import pytest

from exactcas import var
from exactcas.cache import NodeCache
from exactcas.exceptions import InvariantError


class _Node:
    pass


class TestNodeCache:
    """Tests for the identity-keyed property table."""

    def test_computes_once(self):
        """Test the compute function runs on first access only."""
        cache = NodeCache()
        node = _Node()
        calls = []

        def compute():
            calls.append(1)
            return 42

        assert cache.get_value(node, 'complexity', compute) == 42
        assert cache.get_value(node, 'complexity', compute) == 42
        assert len(calls) == 1

    def test_fields_are_independent(self):
        """Test each field is stored separately."""
        cache = NodeCache()
        node = _Node()
        cache.get_value(node, 'complexity', lambda: 3)
        assert cache.peek(node, 'is_finite') is None
        assert cache.get_value(node, 'is_finite', lambda: False) is False

    def test_keyed_by_identity(self):
        """Test equal but distinct objects get separate entries."""
        cache = NodeCache()
        a, b = var('x'), var('x')
        assert a == b
        cache.get_value(a, 'complexity', lambda: 1)
        assert cache.peek(b, 'complexity', 'missing') == 'missing'

    def test_none_is_an_invariant_violation(self):
        """Test a compute function returning None raises."""
        cache = NodeCache()
        with pytest.raises(InvariantError):
            cache.get_value(_Node(), 'evaled', lambda: None)

    def test_peek_does_not_compute(self):
        """Test peek returns the default for missing values."""
        cache = NodeCache()
        node = _Node()
        assert cache.peek(node, 'evaled') is None
        assert node not in cache

    def test_evict(self):
        """Test evict forgets a node."""
        cache = NodeCache()
        node = _Node()
        cache.get_value(node, 'complexity', lambda: 1)
        assert node in cache
        cache.evict(node)
        assert node not in cache
        assert cache.get_value(node, 'complexity', lambda: 2) == 2

    def test_entries_dropped_with_node(self):
        """Test entries disappear when their node is collected."""
        cache = NodeCache()
        node = _Node()
        cache.get_value(node, 'complexity', lambda: 1)
        assert len(cache) == 1
        del node
        gc.collect()
        assert len(cache) == 0

    def test_clear(self):
        cache = NodeCache()
        keep = [_Node() for _ in range(3)]
        for node in keep:
            cache.get_value(node, 'complexity', lambda: 1)
        cache.clear()
        assert len(cache) == 0
