"""
Scored result sets and the boolean algebra (AND, OR, MINUS) over them.
"""

from typing import Callable, Dict, FrozenSet, Iterable, Iterator, List, Mapping, NamedTuple, Optional
import logging

logger = logging.getLogger(__name__)


class RankedEntry(NamedTuple):
    """A (document id, score) pair produced by ResultSet.sort()."""
    doc_id: str
    score: int


def sum_relevance(rel1: int, rel2: int) -> int:
    """Default relevance merge: a document matched by several terms scores the sum."""
    return rel1 + rel2


def _coerce_score(doc_id: str, score) -> int:
    """Normalize a raw store value to a non-negative int."""
    if score is None:
        return 0
    if isinstance(score, bool):
        raise TypeError(f"Score for '{doc_id}' must be an integer, got {score!r}")
    if isinstance(score, bytes):
        score = score.decode()
    if isinstance(score, float):
        if not score.is_integer():
            raise ValueError(f"Score for '{doc_id}' is not integral: {score!r}")
    score = int(score)
    if score < 0:
        logger.warning(f"Negative score {score} for '{doc_id}' clamped to 0")
        return 0
    return score


class ResultSet:
    """
    Represents the results of a search query.

    Holds a mapping from document id (a URL) to relevance score. Instances are
    immutable: every combinator builds and returns a new ResultSet.
    """

    def __init__(self, scores: Optional[Mapping[str, int]] = None,
                 combine: Optional[Callable[[int, int], int]] = None):
        """
        Initialize a result set.

        Args:
            scores: Mapping of document id to score. None is treated as empty.
            combine: Optional relevance merge policy, defaults to addition
        """
        if scores is None:
            self._scores: Dict[str, int] = {}
        else:
            self._scores = {
                doc_id: _coerce_score(doc_id, score)
                for doc_id, score in scores.items()
            }
        self._combine = combine

    @classmethod
    def from_mapping(cls, scores: Optional[Mapping[str, int]],
                     combine: Optional[Callable[[int, int], int]] = None) -> 'ResultSet':
        """Wrap a mapping. A missing mapping becomes an empty result set."""
        return cls(scores, combine=combine)

    @classmethod
    def empty(cls) -> 'ResultSet':
        return cls()

    @classmethod
    def search(cls, term: str, store) -> 'ResultSet':
        """
        Performs a lookup against a posting store and wraps the postings.

        Args:
            term: Query term
            store: Any object exposing lookup(term) -> Dict[str, int]

        Returns:
            ResultSet for the term
        """
        counts = store.lookup(term)
        logger.debug(f"Term '{term}' matched {len(counts) if counts else 0} documents")
        return cls.from_mapping(counts)

    def _new(self, scores: Dict[str, int]) -> 'ResultSet':
        # Results inherit this operand's class and merge policy
        result = type(self).__new__(type(self))
        result._scores = scores
        result._combine = self._combine
        return result

    def relevance(self, doc_id: str) -> int:
        """
        Looks up the relevance of a given document.

        Returns:
            Stored score, or 0 if the document is not in the set
        """
        return self._scores.get(doc_id, 0)

    def total_relevance(self, rel1: int, rel2: int) -> int:
        """
        Computes the relevance of a document matched by two searches.

        Subclasses may override this to change the merge policy.

        Args:
            rel1: Relevance score from the left operand
            rel2: Relevance score from the right operand
        """
        if self._combine is not None:
            return self._combine(rel1, rel2)
        return sum_relevance(rel1, rel2)

    def or_(self, other: 'ResultSet') -> 'ResultSet':
        """
        Computes the union of two search results (OR operation).

        Documents found in only one operand keep their score unchanged.
        """
        result = dict(self._scores)

        for doc_id, other_rel in other._scores.items():
            if doc_id in result:
                result[doc_id] = self.total_relevance(result[doc_id], other_rel)
            else:
                result[doc_id] = other_rel

        return self._new(result)

    def and_(self, other: 'ResultSet') -> 'ResultSet':
        """
        Computes the intersection of two search results (AND operation).

        Iterates over the smaller operand and probes the larger one.
        """
        result = {}

        if len(self._scores) <= len(other._scores):
            for doc_id, this_rel in self._scores.items():
                if doc_id in other._scores:
                    result[doc_id] = self.total_relevance(this_rel, other._scores[doc_id])
        else:
            for doc_id, other_rel in other._scores.items():
                if doc_id in self._scores:
                    result[doc_id] = self.total_relevance(self._scores[doc_id], other_rel)

        return self._new(result)

    def minus(self, other: 'ResultSet') -> 'ResultSet':
        """
        Computes the difference of two search results (MINUS operation).

        Keeps documents of this set that do not appear in other, with their
        original scores.
        """
        result = dict(self._scores)

        for doc_id in other._scores:
            result.pop(doc_id, None)

        return self._new(result)

    __or__ = or_
    __and__ = and_
    __sub__ = minus

    @staticmethod
    def union_all(result_sets: Iterable['ResultSet']) -> 'ResultSet':
        """
        Union multiple result sets, folding left to right.

        Returns:
            ResultSet with documents in any input
        """
        result_sets = list(result_sets)
        if not result_sets:
            return ResultSet()

        result = result_sets[0]
        for rs in result_sets[1:]:
            result = result.or_(rs)

        return result

    @staticmethod
    def intersect_all(result_sets: Iterable['ResultSet']) -> 'ResultSet':
        """
        Intersect multiple result sets, folding left to right.
        The result keeps the first set's merge policy and class.

        Returns:
            ResultSet with documents in every input
        """
        result_sets = list(result_sets)
        if not result_sets:
            return ResultSet()

        # Any empty input empties the intersection
        if min(len(rs) for rs in result_sets) == 0:
            return result_sets[0]._new({})

        result = result_sets[0]
        for rs in result_sets[1:]:
            result = result.and_(rs)

            # Early termination if result becomes empty
            if not result:
                break

        return result

    def sort(self) -> List[RankedEntry]:
        """
        Sort the results by relevance in increasing order (lowest score first).

        Documents with equal scores are ordered by document id.

        Returns:
            List of RankedEntry tuples
        """
        if not self._scores:
            return []

        entries = sorted(self._scores.items(), key=lambda item: (item[1], item[0]))
        return [RankedEntry(doc_id, score) for doc_id, score in entries]

    def top(self, k: int) -> List[RankedEntry]:
        """
        Return the k most relevant entries, highest score first.

        Documents with equal scores are ordered by document id.
        """
        if k <= 0:
            return []
        entries = sorted(self._scores.items(), key=lambda item: (-item[1], item[0]))
        return [RankedEntry(doc_id, score) for doc_id, score in entries[:k]]

    def doc_ids(self) -> FrozenSet[str]:
        return frozenset(self._scores)

    def to_dict(self) -> Dict[str, int]:
        """Return a copy of the underlying scores."""
        return dict(self._scores)

    def __len__(self) -> int:
        return len(self._scores)

    def __contains__(self, doc_id) -> bool:
        return doc_id in self._scores

    def __iter__(self) -> Iterator[str]:
        return iter(self._scores)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ResultSet):
            return NotImplemented
        return self._scores == other._scores

    __hash__ = None

    def __repr__(self):
        return f"ResultSet({self._scores!r})"
