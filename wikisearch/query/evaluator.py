"""
Evaluates boolean queries against a posting store.
"""

from typing import Dict, List
import logging

from wikisearch.results.result_set import ResultSet
from wikisearch.store_base import PostingStore
from .parser import BooleanQueryParser

logger = logging.getLogger(__name__)


class QueryEvaluator:
    """Resolves query terms through a posting store and combines the result sets."""

    def __init__(self, store: PostingStore, lowercase: bool = True):
        """
        Initialize evaluator.

        Args:
            store: Posting store to resolve terms against
            lowercase: Lowercase terms before lookup
        """
        self.store = store
        self.lowercase = lowercase
        self.parser = BooleanQueryParser()

    def _normalize(self, term: str) -> str:
        return term.lower() if self.lowercase else term

    def evaluate(self, query: str) -> ResultSet:
        """
        Parse and evaluate a query string.

        Args:
            query: Query such as "java AND (programming OR language) MINUS coffee"

        Returns:
            ResultSet of matching documents
        """
        tree = self.parser.parse(query)
        return self.evaluate_tree(tree)

    def evaluate_tree(self, tree: Dict) -> ResultSet:
        """Evaluate a parsed expression tree. Each term is looked up once."""
        cache: Dict[str, ResultSet] = {}
        return self._evaluate(tree, cache)

    def _evaluate(self, expr: Dict, cache: Dict[str, ResultSet]) -> ResultSet:
        expr_type = expr['type']

        if expr_type == 'TERM':
            term = self._normalize(expr['value'])
            if term not in cache:
                cache[term] = ResultSet.search(term, self.store)
            return cache[term]

        left = self._evaluate(expr['children'][0], cache)
        right = self._evaluate(expr['children'][1], cache)

        if expr_type == 'AND':
            return left.and_(right)
        elif expr_type == 'OR':
            return left.or_(right)
        elif expr_type == 'MINUS':
            return left.minus(right)
        else:
            raise ValueError(f"Unknown expression type: {expr_type}")

    def evaluate_terms(self, terms: List[str], operator: str = 'AND') -> ResultSet:
        """
        Combine terms left to right with a single operator.

        Args:
            terms: Query terms
            operator: 'AND', 'OR' or 'MINUS'
        """
        operator = operator.upper()
        if operator not in ('AND', 'OR', 'MINUS'):
            raise ValueError(f"Unknown operator: {operator}")
        if not terms:
            return ResultSet()

        result = ResultSet.search(self._normalize(terms[0]), self.store)
        for term in terms[1:]:
            other = ResultSet.search(self._normalize(term), self.store)
            if operator == 'AND':
                result = result.and_(other)
            elif operator == 'OR':
                result = result.or_(other)
            else:
                result = result.minus(other)

        logger.debug(f"{operator} over {len(terms)} terms matched {len(result)} documents")
        return result
