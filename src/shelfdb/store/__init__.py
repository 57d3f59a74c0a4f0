"""
Storage module for shelfdb.

This module provides the table store and its persistence and threading
collaborators.

Components:
    - ShelfDB: named tables of encoded rows with insert/read/update/delete
    - ByteMedium: whole-blob read/write (FileMedium, MemoryMedium)
    - ShelfWorker: runs store calls one at a time on a worker thread
"""

from shelfdb.store.db import ShelfDB
from shelfdb.store.medium import ByteMedium, FileMedium, MemoryMedium
from shelfdb.store.worker import ShelfWorker

__all__ = [
    "ByteMedium",
    "FileMedium",
    "MemoryMedium",
    "ShelfDB",
    "ShelfWorker",
]
