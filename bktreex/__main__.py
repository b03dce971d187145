#!/usr/bin/env python
"""Quick-start guide for bktreex.

Run with: python -m bktreex

This module avoids importing bktreex internals so that printing the guide
stays fast.
"""

from __future__ import annotations

QUICKSTART = """\
================================================================================
                                  BKTREEX
        Burkhard-Keller trees: range queries over any integer metric
================================================================================

BASIC USAGE (edit distance)
---------------------------
    from bktreex import BKTree

    tree = BKTree("levenshtein", ["book", "books", "cake", "boo", "cape"])

    tree.size()                          # 5
    tree.count("book")                   # 1 (membership)
    tree.get_within_distance("bool", 1)  # 2

    matches = []
    tree.get_within_distance("bool", 1, matches)   # fills matches, any order
    tree.find_within("bool", 1)          # [(1, 'book'), (1, 'boo')]
    tree.nearest("bok", n=2)             # two closest (distance, item) pairs

CUSTOM METRICS
--------------
    # Any callable (a, b) -> int that is a metric:
    #   non-negative, symmetric, zero only for equal elements,
    #   and satisfying the triangle inequality.
    tree = BKTree(lambda a, b: bin(a ^ b).count("1"), hashes)

    # Violating the axioms is NOT detected: queries silently miss matches.

BATCHED QUERIES AND RUNTIME
---------------------------
    from bktreex import MetricIndex, Runtime

    runtime = Runtime(metric="levenshtein", traversal="dfs", diagnostics=False)
    tree = MetricIndex(runtime).fit(words)
    hits = MetricIndex(runtime, tree).within(["speling", "mispell"], k=2)

ENVIRONMENT
-----------
    BKTREEX_METRIC              default metric name     (levenshtein)
    BKTREEX_TRAVERSAL           bfs | dfs               (bfs)
    BKTREEX_ENABLE_DIAGNOSTICS  CPU/RSS in op logs      (1)
    BKTREEX_LOG_LEVEL           logging level           (INFO)

================================================================================
"""


def main() -> None:
    """Print quick-start guide."""
    print(QUICKSTART)


if __name__ == "__main__":
    main()
