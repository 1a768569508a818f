"""Boolean query parsing and evaluation."""

from .parser import BooleanQueryParser
from .evaluator import QueryEvaluator

__all__ = ['BooleanQueryParser', 'QueryEvaluator']
