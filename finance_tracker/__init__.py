"""
Finance Tracker - Source Package

A small personal finance tracker: a balance, a savings reserve and a
list of dated expenses, from which we derive what is left to spend,
how fast it is being spent, and how many days it will last.

DESIGN PRINCIPLES:
1. State in, figures out - the metrics and views are pure projections
2. Validate every raw input, even if the UI already did
3. A failed mutation leaves the state untouched
4. Storage is a swappable key-value blob store
"""

__version__ = "1.0.0"
__author__ = "Finance Tracker Team"
