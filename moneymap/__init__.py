"""
MoneyMap - Source Package

A personal expense tracker: log expenses, watch the monthly limit,
compare spending against income, and export everything as JSON.

DESIGN PRINCIPLES:
1. The expense list is the single source of truth
2. Every aggregate is recomputed from scratch on each render
3. Persistence failures never take the app down
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "MoneyMap Team"
