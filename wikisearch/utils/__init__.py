"""Utility functions."""

from .render import render, print_results, NO_RESULTS

__all__ = ['render', 'print_results', 'NO_RESULTS']
