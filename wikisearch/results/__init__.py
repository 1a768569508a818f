"""Result sets and their boolean algebra."""

from .result_set import ResultSet, RankedEntry, sum_relevance

__all__ = ['ResultSet', 'RankedEntry', 'sum_relevance']
