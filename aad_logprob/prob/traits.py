# prob/traits.py
"""
Term selection for proportional ("propto") evaluation.

Each distribution describes its log density as a table
    {term name: names of the arguments the term depends on}
and keeps a term when the full density is requested or when at least one
argument it depends on is being differentiated. With propto=True, a term
depending on no argument (a pure normalising constant) is always dropped.
"""

from __future__ import annotations
from typing import Dict, Mapping, Tuple

TermTable = Mapping[str, Tuple[str, ...]]


def include_summand(propto: bool, *differentiated: bool) -> bool:
    return not propto or any(differentiated)


def included_terms(propto: bool, table: TermTable,
                   differentiated: Mapping[str, bool]) -> Dict[str, bool]:
    """Evaluate `include_summand` for every term of `table`."""
    return {
        term: include_summand(propto, *(differentiated[a] for a in deps))
        for term, deps in table.items()
    }
