"""
Expense Tracker - Source Package

A personal expense tracker: record expenses, view them by day, month or
year, and compare each period with the one before it.

DESIGN PRINCIPLES:
1. The store is the single owner of the expense collection
2. Invalid input is rejected loudly, never silently corrected
3. Window and aggregation logic is pure and storage-agnostic
4. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Expense Tracker Team"
