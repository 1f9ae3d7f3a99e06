"""Table lifecycle: available -> waiting -> occupied -> available.

Each public function is one request-sized transition against the table
store. Failures raise the kinds from ``poolhall.errors``; nothing is retried.
"""
from typing import List, NamedTuple, Optional

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from poolhall import db
from poolhall.errors import InvalidInput, InvalidState, NotFound, StoreFailure
from poolhall.models import GameRecord, PoolTable, TableStatus, Turn, utcnow
from .locking import table_guard
from .rules import advance_turn, determine_winner, legacy_end_winner, starting_turn


class TurnOutcome(NamedTuple):
    game_over: bool
    winner: Optional[Turn]
    winner_nickname: Optional[str]
    current_turn: Optional[Turn]
    inning: int


def _strict() -> bool:
    return bool(current_app.config.get('STRICT_TRANSITIONS'))


def _load(table_num: int) -> PoolTable:
    try:
        table = db.session.get(PoolTable, table_num, populate_existing=True)
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error(f"[store] table={table_num} read failed: {exc}")
        raise StoreFailure(f"Could not read table {table_num}") from exc
    if table is None:
        raise NotFound(f"Table {table_num} does not exist")
    return table


def _commit(tag: str, table_num: int) -> None:
    try:
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error(f"[{tag}] table={table_num} commit failed: {exc}")
        raise StoreFailure(f"Could not save table {table_num}") from exc


def _require(table: PoolTable, tag: str, status: TableStatus, message: str) -> None:
    if table.status != status.value:
        current_app.logger.warning(f"[{tag}] table={table.table_num} rejected: status={table.status}")
        raise InvalidState(message)


def list_tables() -> List[PoolTable]:
    try:
        return PoolTable.query.order_by(PoolTable.table_num).all()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error(f"[list_tables] read failed: {exc}")
        raise StoreFailure('Could not read tables') from exc


def get_game_state(table_num: int) -> PoolTable:
    return _load(table_num)


def create_room(table_num: int, nickname: str, target: int) -> PoolTable:
    with table_guard(table_num):
        table = _load(table_num)
        _require(table, 'create_room', TableStatus.AVAILABLE, f"Table {table_num} is already in use")
        table.status = TableStatus.WAITING.value
        table.player1 = nickname
        table.target1 = target
        _commit('create_room', table_num)
    current_app.logger.info(f"[create_room] table={table_num} player1={nickname} target={target}")
    return table


def join_room(table_num: int, nickname: str) -> PoolTable:
    """Record a join request. The table stays waiting until colors are set."""
    with table_guard(table_num):
        table = _load(table_num)
        _require(table, 'join_room', TableStatus.WAITING, f"Table {table_num} cannot be joined")
        if _strict() and nickname == table.player1:
            raise InvalidInput('You cannot join your own room')
        if table.player2 and table.player2 != nickname:
            current_app.logger.info(f"[join_room] table={table_num} replacing pending player2={table.player2}")
        table.player2 = nickname
        _commit('join_room', table_num)
    current_app.logger.info(f"[join_room] table={table_num} player2={nickname}")
    return table


def approve_join(table_num: int, target: int) -> PoolTable:
    with table_guard(table_num):
        table = _load(table_num)
        if _strict():
            _require(table, 'approve_join', TableStatus.WAITING, f"Table {table_num} has no pending join")
            if not table.player2:
                raise InvalidState(f"Table {table_num} has no pending join")
        table.target2 = target
        _commit('approve_join', table_num)
    current_app.logger.info(f"[approve_join] table={table_num} player2={table.player2} target={target}")
    return table


def set_colors(table_num: int, color1: str, color2: str) -> Turn:
    """Assign ball colors and start play. The white ball breaks."""
    with table_guard(table_num):
        table = _load(table_num)
        if _strict():
            _require(table, 'set_colors', TableStatus.WAITING, f"Table {table_num} is not waiting for a game")
            if not (table.player1 and table.player2 and table.target1 and table.target2):
                raise InvalidState(f"Table {table_num} needs two approved players")
        starter = starting_turn(color2)
        table.status = TableStatus.OCCUPIED.value
        table.color1 = color1
        table.color2 = color2
        table.current_turn = starter.value
        table.inning = 1
        table.start_time = utcnow()
        _commit('set_colors', table_num)
    current_app.logger.info(
        f"[set_colors] table={table_num} color1={color1} color2={color2} starter={starter.value}"
    )
    return starter


def update_score(table_num: int, score: int) -> PoolTable:
    """Replace the running total of whoever is at the table."""
    with table_guard(table_num):
        table = _load(table_num)
        if _strict():
            _require(table, 'update_score', TableStatus.OCCUPIED, f"Table {table_num} has no game in progress")
        if table.turn is Turn.PLAYER1:
            table.score1 = score
        else:
            table.score2 = score
        _commit('update_score', table_num)
    current_app.logger.info(f"[update_score] table={table_num} turn={table.current_turn} score={score}")
    return table


def next_turn(table_num: int) -> TurnOutcome:
    """Check for a winner, otherwise pass the turn.

    A finished game is only reported here; the table is left untouched
    until end_game records it.
    """
    with table_guard(table_num):
        table = _load(table_num)
        if _strict():
            _require(table, 'next_turn', TableStatus.OCCUPIED, f"Table {table_num} has no game in progress")
        winner = determine_winner(table.score1, table.target1, table.score2, table.target2)
        if winner is not None:
            current_app.logger.info(f"[next_turn] table={table_num} game over winner={winner.value}")
            return TurnOutcome(True, winner, table.player_for(winner), table.turn, table.inning)
        following, inning = advance_turn(table.turn, table.inning)
        table.current_turn = following.value
        table.inning = inning
        _commit('next_turn', table_num)
    current_app.logger.info(f"[next_turn] table={table_num} turn={following.value} inning={inning}")
    return TurnOutcome(False, None, None, following, inning)


def end_game(table_num: int) -> GameRecord:
    """Write the game to the ledger and free the table in one transaction."""
    with table_guard(table_num):
        table = _load(table_num)
        if _strict():
            _require(table, 'end_game', TableStatus.OCCUPIED, f"Table {table_num} has no game in progress")
        if current_app.config.get('ENDGAME_WINNER_POLICY', 'legacy') == 'strict':
            winner = determine_winner(table.score1, table.target1, table.score2, table.target2)
        else:
            winner = legacy_end_winner(table.score1, table.target1)
        record = GameRecord(
            table_num=table.table_num,
            player1=table.player1,
            player2=table.player2,
            score1=table.score1,
            score2=table.score2,
            winner=table.player_for(winner),
            start_time=table.start_time,
        )
        db.session.add(record)
        table.reset()
        _commit('end_game', table_num)
    current_app.logger.info(
        f"[end_game] table={table_num} record={record.id} winner={record.winner} "
        f"score={record.score1}:{record.score2}"
    )
    return record


def cancel_room(table_num: int) -> PoolTable:
    with table_guard(table_num):
        table = _load(table_num)
        previous = table.status
        table.reset()
        _commit('cancel_room', table_num)
    current_app.logger.info(f"[cancel_room] table={table_num} was={previous}")
    return table


def game_history(table_num: Optional[int] = None, limit: int = 50) -> List[GameRecord]:
    query = GameRecord.query
    if table_num is not None:
        query = query.filter_by(table_num=table_num)
    try:
        return query.order_by(GameRecord.id.desc()).limit(limit).all()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error(f"[game_history] read failed: {exc}")
        raise StoreFailure('Could not read game history') from exc


def provision_tables(count: int) -> int:
    """Create any missing tables numbered 1..count. Returns how many were added."""
    existing = {num for (num,) in db.session.query(PoolTable.table_num).all()}
    added = 0
    for num in range(1, count + 1):
        if num not in existing:
            table = PoolTable(table_num=num)
            table.reset()
            db.session.add(table)
            added += 1
    _commit('provision_tables', count)
    if added:
        current_app.logger.info(f"[provision_tables] added={added} total={count}")
    return added
