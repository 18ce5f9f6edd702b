"""
Name-based query facades: Database (pooled, per-call connection) and
Transaction (one connection, explicit commit/rollback).
"""

from .database import Database, open, open_from_settings
from .querier import NamedQuerier, Querier
from .scan import ExecResult
from .transaction import Transaction

__all__ = [
    "Database",
    "ExecResult",
    "NamedQuerier",
    "Querier",
    "Transaction",
    "open",
    "open_from_settings",
]
