import threading
from contextlib import contextmanager, nullcontext
from typing import Dict

from flask import current_app


class TableLocks:
    """In-process mutex registry keyed by table number."""

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: Dict[int, threading.Lock] = {}

    def lock_for(self, table_num: int) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(table_num)
            if lock is None:
                lock = self._locks[table_num] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, table_num: int):
        with self.lock_for(table_num):
            yield


def table_guard(table_num: int):
    """Serialize a read-modify-write on one table when TABLE_LOCKING is 'mutex'."""
    mode = current_app.config.get('TABLE_LOCKING', 'mutex')
    if mode == 'none':
        return nullcontext()
    if mode != 'mutex':
        raise ValueError(f"unknown TABLE_LOCKING mode {mode!r}")
    locks = current_app.extensions.setdefault('table_locks', TableLocks())
    return locks.hold(table_num)
