import logging
from typing import Dict, List, Tuple

from wikisearch.errors import QueryParseError

logger = logging.getLogger(__name__)


class BooleanQueryParser:
    """
    Parse boolean queries into an expression tree.
    Supports: AND, OR, MINUS, AND NOT, and parentheses.
    Terms separated only by whitespace are joined with OR.
    """

    def __init__(self):
        self.operators = {'AND', 'OR', 'MINUS', 'NOT'}

    def parse(self, query: str) -> Dict:
        """
        Parse a boolean expression into a tree structure.

        Returns a dict representing the query tree:
        {
            'type': 'AND' | 'OR' | 'MINUS' | 'TERM',
            'value': str (for TERM),
            'children': List[Dict] (for AND/OR/MINUS)
        }

        Raises:
            QueryParseError: if the query is empty or malformed
        """
        tokens = self.tokenize(query)
        if not tokens:
            raise QueryParseError("Empty query")

        expr, pos = self._parse_or_expression(tokens, 0)
        if pos < len(tokens):
            raise QueryParseError(f"Unexpected token: {tokens[pos]}")
        return expr

    def tokenize(self, query: str) -> List[str]:
        """Tokenize query string preserving operators and parentheses."""
        tokens = []
        current_token = []

        for char in query:
            if char in '()':
                if current_token:
                    tokens.append(''.join(current_token))
                    current_token = []
                tokens.append(char)
            elif char.isspace():
                if current_token:
                    tokens.append(''.join(current_token))
                    current_token = []
            else:
                current_token.append(char)

        if current_token:
            tokens.append(''.join(current_token))

        return tokens

    def _starts_operand(self, token: str) -> bool:
        return token == '(' or (token not in self.operators and token != ')')

    def _parse_or_expression(self, tokens: List[str], pos: int) -> Tuple[Dict, int]:
        """Parse OR expression (lowest precedence)."""
        left, pos = self._parse_and_expression(tokens, pos)

        while pos < len(tokens):
            if tokens[pos] == 'OR':
                pos += 1  # Skip OR
            elif not self._starts_operand(tokens[pos]):
                break
            right, pos = self._parse_and_expression(tokens, pos)
            left = {
                'type': 'OR',
                'children': [left, right]
            }

        return left, pos

    def _parse_and_expression(self, tokens: List[str], pos: int) -> Tuple[Dict, int]:
        """Parse AND / MINUS expression (higher precedence, left-associative)."""
        left, pos = self._parse_primary(tokens, pos)

        while pos < len(tokens) and tokens[pos] in ('AND', 'MINUS'):
            op = tokens[pos]
            pos += 1
            if op == 'AND' and pos < len(tokens) and tokens[pos] == 'NOT':
                op = 'MINUS'
                pos += 1
            right, pos = self._parse_primary(tokens, pos)
            left = {
                'type': op,
                'children': [left, right]
            }

        return left, pos

    def _parse_primary(self, tokens: List[str], pos: int) -> Tuple[Dict, int]:
        """Parse primary expression (parentheses or term)."""
        if pos >= len(tokens):
            raise QueryParseError("Unexpected end of query")

        token = tokens[pos]

        # Handle parentheses
        if token == '(':
            pos += 1  # Skip (
            expr, pos = self._parse_or_expression(tokens, pos)
            if pos >= len(tokens) or tokens[pos] != ')':
                raise QueryParseError("Missing closing parenthesis")
            pos += 1  # Skip )
            return expr, pos

        if token == 'NOT':
            raise QueryParseError("NOT must follow AND (use 'a AND NOT b')")

        # Handle term
        if token not in self.operators and token != ')':
            return {
                'type': 'TERM',
                'value': token
            }, pos + 1

        raise QueryParseError(f"Unexpected token: {token}")

    def terms(self, expr: Dict) -> List[str]:
        """Collect the terms of an expression tree, left to right."""
        if expr['type'] == 'TERM':
            return [expr['value']]
        found = []
        for child in expr['children']:
            found.extend(self.terms(child))
        return found

    def explain_query(self, query: str) -> str:
        """
        Explain how a query will be parsed.
        Useful for debugging.
        """
        try:
            tokens = self.tokenize(query)
            parsed = self.parse(query)

            explanation = f"Query: {query}\n"
            explanation += f"Tokens: {tokens}\n"
            explanation += f"Parsed tree:\n{self._format_tree(parsed)}"

            return explanation
        except QueryParseError as e:
            return f"Failed to parse query: {e}"

    def _format_tree(self, expr: Dict, indent: int = 0) -> str:
        """Format expression tree for display."""
        spaces = "  " * indent

        if expr['type'] == 'TERM':
            return f"{spaces}TERM: {expr['value']}\n"
        else:
            result = f"{spaces}{expr['type']}:\n"
            for child in expr['children']:
                result += self._format_tree(child, indent + 1)
            return result
