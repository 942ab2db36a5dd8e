"""
Finance Tracker - Source Package

A small single-user ledger for household deposits and payments,
persisted as a pipe-delimited text file.

DESIGN PRINCIPLES:
1. The file is append-only; nothing is ever rewritten
2. Fail early, fail visibly
3. No silent corrections
4. Every mutation and failure is auditable
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Finance Tracker Team"
