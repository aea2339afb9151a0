"""
Item Tracker: loanables, loanees and the loans between them, persisted in a
single SQLite file.
"""

__version__ = "0.1.0"
