"""
Unit tests for ResultSet and its boolean algebra
Run with: pytest tests/test_result_set.py -v
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from wikisearch.results import ResultSet, RankedEntry
from wikisearch.stores import InMemoryPostingStore


class TestConstruction:
    """Test building result sets."""

    def test_from_none_is_empty(self):
        """A missing mapping degrades to no results."""
        rs = ResultSet.from_mapping(None)
        assert len(rs) == 0
        assert rs.sort() == []

    def test_none_score_is_zero(self):
        rs = ResultSet({"Page1": None})
        assert "Page1" in rs
        assert rs.relevance("Page1") == 0

    def test_negative_score_clamped(self):
        rs = ResultSet({"Page1": -4, "Page2": 2})
        assert rs.relevance("Page1") == 0
        assert rs.relevance("Page2") == 2

    def test_byte_and_string_scores_coerced(self):
        """Raw store values such as b'3' become ints."""
        rs = ResultSet({"Page1": b"3", "Page2": "5"})
        assert rs.relevance("Page1") == 3
        assert rs.relevance("Page2") == 5

    def test_integral_float_accepted(self):
        assert ResultSet({"Page1": 3.0}).relevance("Page1") == 3

    def test_fractional_score_rejected(self):
        with pytest.raises(ValueError):
            ResultSet({"Page1": 2.7})

    def test_boolean_score_rejected(self):
        with pytest.raises(TypeError):
            ResultSet({"Page1": True})

    def test_input_mapping_is_copied(self):
        """Mutating the source mapping does not leak into the result set."""
        source = {"Page1": 1}
        rs = ResultSet(source)
        source["Page2"] = 2
        assert "Page2" not in rs

    def test_search_uses_store(self):
        store = InMemoryPostingStore({"java": {"Page1": 3}})
        rs = ResultSet.search("java", store)
        assert rs.to_dict() == {"Page1": 3}

    def test_search_unknown_term(self):
        store = InMemoryPostingStore()
        assert len(ResultSet.search("nothing", store)) == 0


class TestScenario:
    """The two-term scenario: TEST1 and TEST2."""

    def setup_method(self):
        self.search1 = ResultSet({"Page1": 1, "Page2": 2, "Page3": 3})
        self.search2 = ResultSet({"Page2": 4, "Page3": 5, "Page4": 7})

    def test_and(self):
        result = self.search1.and_(self.search2)
        assert result.to_dict() == {"Page2": 6, "Page3": 8}
        assert result.sort() == [("Page2", 6), ("Page3", 8)]

    def test_or(self):
        result = self.search1.or_(self.search2)
        assert result.to_dict() == {"Page1": 1, "Page2": 6, "Page3": 8, "Page4": 7}
        assert result.sort() == [("Page1", 1), ("Page2", 6), ("Page4", 7), ("Page3", 8)]

    def test_minus(self):
        result = self.search1.minus(self.search2)
        assert result.to_dict() == {"Page1": 1}
        assert result.sort() == [("Page1", 1)]

    def test_absent_relevance_is_zero(self):
        for rs in (self.search1.and_(self.search2),
                   self.search1.or_(self.search2),
                   self.search1.minus(self.search2)):
            assert rs.relevance("PageX") == 0

    def test_operator_aliases(self):
        assert (self.search1 & self.search2) == self.search1.and_(self.search2)
        assert (self.search1 | self.search2) == self.search1.or_(self.search2)
        assert (self.search1 - self.search2) == self.search1.minus(self.search2)

    def test_operands_unchanged(self):
        """Combinators never mutate their operands."""
        before1 = self.search1.to_dict()
        before2 = self.search2.to_dict()

        self.search1.or_(self.search2)
        self.search1.and_(self.search2)
        self.search1.minus(self.search2)

        assert self.search1.to_dict() == before1
        assert self.search2.to_dict() == before2

    def test_results_do_not_alias_operands(self):
        union = self.search1.or_(ResultSet())
        assert union == self.search1
        assert union is not self.search1
        assert union._scores is not self.search1._scores


class TestAlgebraProperties:
    """Properties that hold for any pair of result sets."""

    def setup_method(self):
        self.a = ResultSet({"u1": 2, "u2": 5, "u3": 1, "u5": 9})
        self.b = ResultSet({"u2": 3, "u4": 4, "u5": 1})

    def test_or_is_union(self):
        result = self.a.or_(self.b)
        assert result.doc_ids() == self.a.doc_ids() | self.b.doc_ids()
        assert len(result) == len(self.a.doc_ids() | self.b.doc_ids())

    def test_and_sums_shared_scores(self):
        result = self.a.and_(self.b)
        for doc_id in self.a.doc_ids() & self.b.doc_ids():
            assert result.relevance(doc_id) == self.a.relevance(doc_id) + self.b.relevance(doc_id)

    def test_or_keeps_single_side_scores(self):
        result = self.a.or_(self.b)
        assert result.relevance("u1") == 2
        assert result.relevance("u4") == 4

    def test_minus_membership(self):
        result = self.a.minus(self.b)
        assert result.doc_ids() == {"u1", "u3"}
        assert result.relevance("u1") == 2
        assert result.relevance("u3") == 1

    def test_minus_then_and_is_empty(self):
        assert len(self.a.minus(self.b).and_(self.b)) == 0

    def test_and_commutative_membership(self):
        assert self.a.and_(self.b) == self.b.and_(self.a)

    def test_and_with_larger_left_operand(self):
        """Intersection walks the smaller side but keeps left-first scoring."""
        seen = []

        def record(left, right):
            seen.append((left, right))
            return left + right

        big = ResultSet({"x": 1, "y": 2, "z": 3}, combine=record)
        small = ResultSet({"y": 10})
        big.and_(small)
        assert seen == [(2, 10)]

    def test_empty_operands(self):
        empty = ResultSet()
        assert self.a.or_(empty) == self.a
        assert len(self.a.and_(empty)) == 0
        assert self.a.minus(empty) == self.a
        assert len(empty.minus(self.a)) == 0


class TestCombinePolicy:
    """Test replacing the relevance merge policy."""

    def test_custom_combine(self):
        a = ResultSet({"p": 2, "q": 3}, combine=max)
        b = ResultSet({"p": 7})
        assert a.and_(b).relevance("p") == 7
        # Single-side documents are never combined with an implicit zero
        assert a.or_(b).relevance("q") == 3

    def test_combine_inherited_by_results(self):
        a = ResultSet({"p": 2}, combine=lambda x, y: x * y)
        b = ResultSet({"p": 5})
        c = ResultSet({"p": 3})
        assert a.and_(b).and_(c).relevance("p") == 30

    def test_subclass_override(self):
        class MaxResultSet(ResultSet):
            def total_relevance(self, rel1, rel2):
                return max(rel1, rel2)

        a = MaxResultSet({"p": 4})
        result = a.or_(ResultSet({"p": 9}))
        assert isinstance(result, MaxResultSet)
        assert result.relevance("p") == 9


class TestNaryOperations:
    """Test folding over many result sets."""

    def test_union_all(self):
        sets = [ResultSet({"a": 1}), ResultSet({"a": 2, "b": 1}), ResultSet({"c": 5})]
        assert ResultSet.union_all(sets).to_dict() == {"a": 3, "b": 1, "c": 5}

    def test_intersect_all(self):
        sets = [ResultSet({"a": 1, "b": 1}), ResultSet({"a": 2, "b": 2, "c": 2}), ResultSet({"a": 4})]
        assert ResultSet.intersect_all(sets).to_dict() == {"a": 7}

    def test_intersect_all_early_exit(self):
        sets = [ResultSet({"a": 1}), ResultSet({"b": 1}), ResultSet({"a": 1, "b": 1})]
        assert len(ResultSet.intersect_all(sets)) == 0

    def test_empty_input(self):
        assert len(ResultSet.union_all([])) == 0
        assert len(ResultSet.intersect_all([])) == 0

    def test_intersect_all_keeps_first_policy(self):
        """The first set's combine sees its own score first, whatever the sizes."""
        seen = []

        def keep_left(left, right):
            seen.append((left, right))
            return left

        first = ResultSet({"a": 1, "b": 1}, combine=keep_left)
        second = ResultSet({"a": 5})

        result = ResultSet.intersect_all([first, second])

        assert result.to_dict() == {"a": 1}
        assert seen == [(1, 5)]
        assert ResultSet.intersect_all([ResultSet({"a": 1, "b": 1}, combine=max), second]).relevance("a") == 5

    def test_intersect_all_empty_member_keeps_class(self):
        class MaxResultSet(ResultSet):
            pass

        result = ResultSet.intersect_all([MaxResultSet({"a": 1}), ResultSet()])
        assert isinstance(result, MaxResultSet)
        assert len(result) == 0


class TestSorting:
    """Test ranking."""

    def test_empty_sort(self):
        assert ResultSet().sort() == []

    def test_ascending_order(self):
        rs = ResultSet({"a": 5, "b": 1, "c": 3})
        scores = [entry.score for entry in rs.sort()]
        assert scores == sorted(scores)

    def test_ties_broken_by_doc_id(self):
        rs = ResultSet({"zeta": 2, "alpha": 2, "mid": 2, "low": 1})
        assert [e.doc_id for e in rs.sort()] == ["low", "alpha", "mid", "zeta"]

    def test_entries_are_named(self):
        entry = ResultSet({"Page1": 4}).sort()[0]
        assert isinstance(entry, RankedEntry)
        assert entry.doc_id == "Page1"
        assert entry.score == 4

    def test_top(self):
        rs = ResultSet({"a": 5, "b": 1, "c": 3})
        assert rs.top(2) == [("a", 5), ("c", 3)]
        assert rs.top(0) == []
        assert len(rs.top(10)) == 3

    def test_top_ties_by_doc_id(self):
        rs = ResultSet({"c": 2, "a": 2, "b": 2, "d": 9})
        assert [e.doc_id for e in rs.top(4)] == ["d", "a", "b", "c"]
