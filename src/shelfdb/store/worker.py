"""
Single-writer asynchronous wrapper around ShelfDB.

ShelfWorker owns one store and one worker thread. Every *_async call is
queued on that thread and runs to completion before the next one starts, so
calls made through the worker never interleave and never tear a table.

Each call returns a concurrent.futures.Future. An optional completion
callback receives the operation's result once it finishes:

    with ShelfWorker(ShelfDB()) as worker:
        worker.insert_async(person, completion=lambda ok: print("saved", ok))
        people = worker.read_async(Person).result()
"""

from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from pathlib import Path
from typing import Any

from shelfdb.logging_config import get_logger
from shelfdb.store.db import Match, ShelfDB, Where

logger = get_logger(__name__)

Completion = Callable[[Any], None]


class ShelfWorker:
    """
    Runs store operations one at a time on a dedicated thread.

    Attributes:
        db: The wrapped store. Calling it directly from other threads while
            the worker is running is not safe.
    """

    def __init__(self, db: ShelfDB, thread_name_prefix: str = "shelfdb") -> None:
        self.db = db
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix=thread_name_prefix)

    def __enter__(self) -> "ShelfWorker":
        return self

    def __exit__(self, *args: Any) -> None:
        self.shutdown(wait=True)

    def shutdown(self, wait: bool = True) -> None:
        """Stop accepting jobs; with wait=True, finish the queued ones first."""
        self._executor.shutdown(wait=wait)

    def submit(
        self,
        fn: Callable[..., Any],
        *args: Any,
        completion: Completion | None = None,
        **kwargs: Any,
    ) -> Future:
        """
        Queue fn(*args, **kwargs) on the worker thread.

        completion, if given, is called with fn's result on the worker thread
        before the future resolves. It is skipped if fn raises, and an
        exception raised by completion itself is set on the future.

        Returns:
            Future holding fn's result
        """
        name = getattr(fn, "__name__", repr(fn))

        def _job() -> Any:
            result = fn(*args, **kwargs)
            if completion is not None:
                completion(result)
            return result

        def _log_failure(f: Future) -> None:
            if f.cancelled():
                return
            error = f.exception()
            if error is not None:
                logger.error("job_failed", job=name, error=repr(error))

        future = self._executor.submit(_job)
        future.add_done_callback(_log_failure)
        return future

    # =========================================================================
    # Store Operations
    # =========================================================================

    def insert_async(
        self, item: Any, name: str | None = None, completion: Completion | None = None
    ) -> Future:
        return self.submit(self.db.insert, item, name=name, completion=completion)

    def insert_many_async(
        self,
        items: Iterable[Any],
        name: str | None = None,
        item_type: Any = None,
        completion: Completion | None = None,
    ) -> Future:
        # Copied at submission time
        return self.submit(
            self.db.insert_many, list(items), name=name, item_type=item_type, completion=completion
        )

    def read_async(
        self,
        item_type: Any,
        name: str | None = None,
        where: Where | None = None,
        completion: Completion | None = None,
    ) -> Future:
        return self.submit(self.db.read, item_type, name=name, where=where, completion=completion)

    def update_async(
        self,
        item: Any,
        name: str | None = None,
        match: Match | None = None,
        completion: Completion | None = None,
    ) -> Future:
        return self.submit(self.db.update, item, name=name, match=match, completion=completion)

    def update_many_async(
        self,
        items: Iterable[Any],
        name: str | None = None,
        match: Match | None = None,
        completion: Completion | None = None,
    ) -> Future:
        return self.submit(
            self.db.update_many, list(items), name=name, match=match, completion=completion
        )

    def update_all_async(
        self,
        item_type: Any,
        changes: Callable[[Any], Any],
        name: str | None = None,
        where: Where | None = None,
        completion: Completion | None = None,
    ) -> Future:
        return self.submit(
            self.db.update_all, item_type, changes, name=name, where=where, completion=completion
        )

    def delete_async(
        self,
        item: Any,
        name: str | None = None,
        match: Match | None = None,
        completion: Completion | None = None,
    ) -> Future:
        return self.submit(self.db.delete, item, name=name, match=match, completion=completion)

    def delete_many_async(
        self,
        items: Iterable[Any],
        name: str | None = None,
        match: Match | None = None,
        completion: Completion | None = None,
    ) -> Future:
        return self.submit(
            self.db.delete_many, list(items), name=name, match=match, completion=completion
        )

    def delete_all_async(
        self,
        item_type: Any,
        name: str | None = None,
        where: Where | None = None,
        completion: Completion | None = None,
    ) -> Future:
        return self.submit(
            self.db.delete_all, item_type, name=name, where=where, completion=completion
        )

    def save_async(
        self, path: str | Path | None = None, completion: Completion | None = None
    ) -> Future:
        return self.submit(self.db.save, path, completion=completion)

    def load_async(
        self, path: str | Path | None = None, completion: Completion | None = None
    ) -> Future:
        return self.submit(self.db.load, path, completion=completion)
