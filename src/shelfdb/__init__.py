"""
shelfdb - Embedded record store for homogeneous tables of structured values.

Tables are addressed by name (by default the row type's name) and hold any
type pydantic can serialize. The whole store saves to and loads from a
single blob.

Example usage:
    db = ShelfDB(path="store.json")
    db.insert(Person(id=1, name="Ricardo", age=35))
    db.read(Person)  # [Person(id=1, name="Ricardo", age=35)]
    db.save()

    $ shelfdb tables store.json
"""

__version__ = "0.1.0"
__author__ = "shelfdb Contributors"

from shelfdb.box import ValueBox
from shelfdb.codec import Codec, JsonCodec
from shelfdb.schema import StoreConfig, TableInfo, load_config
from shelfdb.store import ByteMedium, FileMedium, MemoryMedium, ShelfDB, ShelfWorker

__all__ = [
    "__version__",
    "__author__",
    "ByteMedium",
    "Codec",
    "FileMedium",
    "JsonCodec",
    "MemoryMedium",
    "ShelfDB",
    "ShelfWorker",
    "StoreConfig",
    "TableInfo",
    "ValueBox",
    "load_config",
]
