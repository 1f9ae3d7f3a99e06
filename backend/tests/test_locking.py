import threading

import pytest

from poolhall.services.tables.locking import TableLocks, table_guard


def test_same_table_shares_one_lock():
    locks = TableLocks()
    assert locks.lock_for(3) is locks.lock_for(3)
    assert locks.lock_for(3) is not locks.lock_for(4)


def test_hold_serializes_one_table():
    locks = TableLocks()
    entered = threading.Event()
    release = threading.Event()
    order = []

    def first():
        with locks.hold(1):
            entered.set()
            release.wait(2)
            order.append('first')

    def second():
        entered.wait(2)
        with locks.hold(1):
            order.append('second')

    t1 = threading.Thread(target=first)
    t2 = threading.Thread(target=second)
    t1.start()
    t2.start()
    entered.wait(2)
    # second is blocked on the table lock until first releases
    assert order == []
    release.set()
    t1.join(2)
    t2.join(2)
    assert order == ['first', 'second']


def test_other_tables_are_not_blocked():
    locks = TableLocks()
    with locks.hold(1):
        assert locks.lock_for(2).acquire(blocking=False)
        locks.lock_for(2).release()


def test_guard_holds_app_lock(flask_app):
    lock = flask_app.extensions['table_locks'].lock_for(2)
    with table_guard(2):
        assert lock.locked()
    assert not lock.locked()


def test_guard_disabled(flask_app):
    flask_app.config['TABLE_LOCKING'] = 'none'
    lock = flask_app.extensions['table_locks'].lock_for(2)
    with table_guard(2):
        assert not lock.locked()


def test_guard_rejects_unknown_mode(flask_app):
    flask_app.config['TABLE_LOCKING'] = 'bogus'
    with pytest.raises(ValueError):
        table_guard(2)
