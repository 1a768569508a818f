from typing import Iterable, List, Optional, Tuple

NO_RESULTS = "(No results found.)"


def render(entries: Iterable[Tuple[str, int]]) -> List[str]:
    """
    Format ranked entries for display, one "<doc_id> (<score>)" line each.
    
    Returns:
        Lines to print, or a single NO_RESULTS line for an empty sequence
    """
    lines = [f"{doc_id} ({score})" for doc_id, score in entries]
    return lines or [NO_RESULTS]


def print_results(entries: Iterable[Tuple[str, int]], title: Optional[str] = None) -> None:
    """Print ranked entries, preceded by an optional title."""
    if title:
        print(f"\n{title}")
    for line in render(entries):
        print(line)
