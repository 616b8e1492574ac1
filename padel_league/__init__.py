"""
Padel league ranking system.

Tracks players, doubles matches and tournaments and computes rankings either
with a margin-scaled team Elo rating or with cumulative tournament points.
"""

__version__ = "1.0.0"
