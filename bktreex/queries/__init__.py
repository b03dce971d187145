from .range import brute_force_within, range_query

__all__ = ["brute_force_within", "range_query"]
