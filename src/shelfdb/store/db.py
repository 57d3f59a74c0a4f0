"""
In-process table store for shelfdb.

ShelfDB keeps every table as one ValueBox in a dict keyed by table name.
Each box holds the encoded list of a table's rows; rows are decoded on demand
with the row type the caller names, changed in Python, and encoded back.

Design Principles:
    - Failures are results: write operations return bool, reads return []
    - No partial writes: a table's bytes change only on a successful encode
    - Tables are created lazily on first insert and never removed by emptying
    - Row identity is a comparator, == by default, overridable per call
    - Whole-store save/load; load replaces state only if the blob decodes

Threading:
    ShelfDB is not thread-safe. Run it behind a ShelfWorker, or hold one lock
    for the duration of each call.
"""

from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from shelfdb.box import ValueBox
from shelfdb.codec import DEFAULT_CODEC, Codec, JsonCodec
from shelfdb.errors import CodecError, StorageError, StorageLocationError
from shelfdb.logging_config import get_logger
from shelfdb.schema import StoreConfig, TableInfo
from shelfdb.store.medium import ByteMedium, FileMedium

logger = get_logger(__name__)

Match = Callable[[Any, Any], bool]
Where = Callable[[Any], bool]

TABLE_MAP_TYPE = dict[str, ValueBox]


def _equals(stored: Any, given: Any) -> bool:
    return stored == given


def _always(_row: Any) -> bool:
    return True


class ShelfDB:
    """
    Embedded store of named, homogeneous tables.

    Usage:
        db = ShelfDB(path="people.json")
        db.insert(Person(id=1, name="Ricardo", age=35))
        people = db.read(Person, where=lambda p: p.age > 30)
        db.update(Person(id=1, name="Ricardo", age=36), match=lambda a, b: a.id == b.id)
        db.save()

    Table names default to the row type's name ("Person"). Pass name= to
    keep several tables of one type apart.

    Attributes:
        codec: Codec used for row payloads and for the whole-store blob
        medium: Byte medium used by save() and load()
        path: Default location for save() and load()
        tables: Table name to ValueBox map
    """

    def __init__(
        self,
        codec: Codec | None = None,
        data: bytes | None = None,
        path: str | Path | None = None,
        medium: ByteMedium | None = None,
    ) -> None:
        """
        Initialize the store.

        Args:
            codec: Codec for payloads; defaults to a strict JsonCodec
            data: Optional blob from `data` to start from
            path: Optional default location; loaded immediately if given
            medium: Byte medium for save/load; defaults to FileMedium
        """
        self.codec = codec or DEFAULT_CODEC
        self.medium = medium or FileMedium()
        self.path = path
        self.tables: dict[str, ValueBox] = {}
        if data is not None:
            self.set_data(data)
        if path is not None:
            self.load(path)

    @classmethod
    def from_config(cls, config: StoreConfig, medium: ByteMedium | None = None) -> "ShelfDB":
        """Build a store from a StoreConfig."""
        return cls(codec=JsonCodec(strict=config.strict), path=config.path, medium=medium)

    def __repr__(self) -> str:
        return f"ShelfDB(path={self.path!r}, tables={sorted(self.tables)!r})"

    # =========================================================================
    # Data
    # =========================================================================

    @property
    def data(self) -> bytes | None:
        """The whole store encoded as one blob, or None if encoding fails."""
        try:
            return self.codec.encode(self.tables, TABLE_MAP_TYPE)
        except CodecError as e:
            logger.warning("store_encode_failed", **e.to_dict())
            return None

    def set_data(self, data: bytes) -> bool:
        """
        Replace every table with the contents of a blob.

        The current tables are kept if the blob does not decode.

        Returns:
            True if the blob decoded and was applied
        """
        try:
            tables = self.codec.decode(data, TABLE_MAP_TYPE)
        except CodecError as e:
            logger.warning("store_decode_failed", **e.to_dict())
            return False
        self.tables = tables
        logger.debug("store_replaced", tables=len(tables))
        return True

    def clear(self) -> None:
        """Drop every table."""
        self.tables = {}

    # =========================================================================
    # Files
    # =========================================================================

    def _location(self, path: str | Path | None, operation: str) -> str | Path:
        location = path if path is not None else self.path
        if location is None:
            raise StorageLocationError(operation=operation)
        return location

    def save(self, path: str | Path | None = None) -> bool:
        """
        Write the store blob to path, or to the store's default path.

        Returns:
            True if the blob was encoded and written
        """
        try:
            location = self._location(path, "save")
        except StorageLocationError as e:
            logger.warning("save_failed", **e.to_dict())
            return False

        data = self.data
        if data is None:
            return False

        try:
            self.medium.write(location, data)
        except StorageError as e:
            logger.warning("save_failed", **e.to_dict())
            return False
        logger.debug("saved", location=str(location), size=len(data))
        return True

    def load(self, path: str | Path | None = None) -> bool:
        """
        Replace the store with the blob at path, or at the default path.

        The in-memory tables are untouched unless the whole blob is read and
        decoded.

        Returns:
            True if the blob was read, decoded and applied
        """
        try:
            location = self._location(path, "load")
            data = self.medium.read(location)
        except StorageError as e:
            logger.info("load_failed", **e.to_dict())
            return False
        return self.set_data(data)

    # =========================================================================
    # Tables
    # =========================================================================

    def table_name(self, item_type: Any, name: str | None = None) -> str:
        """Return name if given, else the canonical name of item_type."""
        return name if name is not None else self.codec.type_name(item_type)

    def has_table(self, name: str) -> bool:
        return name in self.tables

    def create_table(self, name: str) -> None:
        """Add an empty table under name unless one exists."""
        if name not in self.tables:
            self.tables[name] = ValueBox()

    def set_table(self, name: str, rows: list[Any], item_type: Any) -> bool:
        """
        Encode rows as list[item_type] into an existing table.

        Returns:
            False if the table doesn't exist or the rows don't encode
        """
        box = self.tables.get(name)
        if box is None:
            return False
        if not box.set(rows, list[item_type], self.codec):
            logger.warning(
                "table_encode_failed",
                table=name,
                item_type=self.codec.type_name(item_type),
                rows=len(rows),
            )
            return False
        return True

    def get_table(self, name: str, item_type: Any) -> list[Any] | None:
        """
        Decode a table's rows as list[item_type].

        Returns:
            The rows, or None if the table is absent, empty, or stored as a
            different type
        """
        box = self.tables.get(name)
        if box is None:
            return None
        rows = box.get(list[item_type], self.codec)
        if rows is None and not box.is_empty:
            logger.debug(
                "table_type_mismatch",
                table=name,
                stored=box.type_tag,
                requested=self.codec.type_name(list[item_type]),
            )
        return rows

    def table_info(self) -> list[TableInfo]:
        """Summarize every table, sorted by name."""
        infos = []
        for name in sorted(self.tables):
            box = self.tables[name]
            rows = box.get(list[Any], self.codec)
            infos.append(
                TableInfo(
                    name=name,
                    type_tag=box.type_tag,
                    size_bytes=box.size,
                    row_count=len(rows) if rows is not None else None,
                )
            )
        return infos

    # =========================================================================
    # Insert
    # =========================================================================

    def _append(self, name: str | None, new_rows: list[Any], item_type: Any) -> bool:
        name = self.table_name(item_type, name)
        self.create_table(name)
        rows = self.get_table(name, item_type) or []
        rows.extend(new_rows)
        return self.set_table(name, rows, item_type)

    def insert(self, item: Any, name: str | None = None) -> bool:
        """
        Append one row.

        The table is created if needed, even when encoding then fails. A
        table whose payload doesn't decode as type(item) is treated as empty
        and overwritten.

        Returns:
            False only if the rows could not be encoded
        """
        return self._append(name, [item], type(item))

    def insert_many(
        self,
        items: Iterable[Any],
        name: str | None = None,
        item_type: Any = None,
    ) -> bool:
        """
        Append several rows in order.

        Args:
            items: Rows to append
            name: Table name; defaults to the item type's name
            item_type: Row type; defaults to the type of the first item

        Raises:
            ValueError: If items is empty and item_type is not given
        """
        items = list(items)
        if item_type is None:
            if not items:
                msg = "item_type is required to insert an empty list"
                raise ValueError(msg)
            item_type = type(items[0])
        return self._append(name, items, item_type)

    # =========================================================================
    # Read
    # =========================================================================

    def read(
        self,
        item_type: Any,
        name: str | None = None,
        where: Where | None = None,
    ) -> list[Any]:
        """
        Return the rows of a table that satisfy where, in stored order.

        An absent or undecodable table reads as [].
        """
        rows = self.get_table(self.table_name(item_type, name), item_type) or []
        if where is None:
            return rows
        return [row for row in rows if where(row)]

    # =========================================================================
    # Update
    # =========================================================================

    def update(self, item: Any, name: str | None = None, match: Match | None = None) -> bool:
        """
        Replace every row that matches item with item.

        Args:
            item: The new row
            name: Table name; defaults to type(item)'s name
            match: match(stored, item) -> bool; defaults to ==

        Returns:
            False if no row matched or the rows could not be encoded
        """
        match = match or _equals
        item_type = type(item)
        name = self.table_name(item_type, name)
        rows = self.get_table(name, item_type) or []
        indexes = [i for i, row in enumerate(rows) if match(row, item)]
        if not indexes:
            return False
        for index in indexes:
            rows[index] = item
        return self.set_table(name, rows, item_type)

    def update_many(
        self,
        items: Iterable[Any],
        name: str | None = None,
        match: Match | None = None,
    ) -> bool:
        """
        Update items one at a time, stopping at the first that fails.

        Not atomic: rows updated before the failing item stay updated.
        """
        for item in items:
            if not self.update(item, name=name, match=match):
                return False
        return True

    def update_all(
        self,
        item_type: Any,
        changes: Callable[[Any], Any],
        name: str | None = None,
        where: Where | None = None,
    ) -> bool:
        """
        Replace each row satisfying where with changes(row).

        Returns:
            False if no row satisfied where or the rows could not be encoded
        """
        where = where or _always
        name = self.table_name(item_type, name)
        rows = self.get_table(name, item_type) or []
        indexes = [i for i, row in enumerate(rows) if where(row)]
        if not indexes:
            return False
        for index in indexes:
            rows[index] = changes(rows[index])
        return self.set_table(name, rows, item_type)

    # =========================================================================
    # Delete
    # =========================================================================

    def delete(self, item: Any, name: str | None = None, match: Match | None = None) -> bool:
        """
        Remove every row that matches item.

        Returns:
            False if no row matched or the rows could not be encoded
        """
        match = match or _equals
        item_type = type(item)
        name = self.table_name(item_type, name)
        rows = self.get_table(name, item_type) or []
        indexes = [i for i, row in enumerate(rows) if match(row, item)]
        if not indexes:
            return False
        for index in reversed(indexes):
            del rows[index]
        return self.set_table(name, rows, item_type)

    def delete_many(
        self,
        items: Iterable[Any],
        name: str | None = None,
        match: Match | None = None,
    ) -> bool:
        """
        Delete items one at a time, stopping at the first that fails.

        Not atomic: rows deleted before the failing item stay deleted.
        """
        for item in items:
            if not self.delete(item, name=name, match=match):
                return False
        return True

    def delete_all(
        self,
        item_type: Any,
        name: str | None = None,
        where: Where | None = None,
    ) -> bool:
        """
        Remove every row satisfying where (all rows by default).

        The table itself stays, possibly empty.

        Returns:
            False if the table is absent, nothing matched, or encoding failed
        """
        where = where or _always
        name = self.table_name(item_type, name)
        rows = self.get_table(name, item_type)
        if rows is None:
            return False
        indexes = [i for i, row in enumerate(rows) if where(row)]
        if not indexes:
            return False
        for index in reversed(indexes):
            del rows[index]
        return self.set_table(name, rows, item_type)
