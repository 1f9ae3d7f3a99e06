from poolhall import db
from flask_login import UserMixin
from datetime import datetime, timezone
import enum
from sqlalchemy import event
from sqlalchemy.exc import SQLAlchemyError


def utcnow():
    return datetime.now(timezone.utc)


def _iso(value):
    return value.isoformat() if value else None


class ImmutableRecordError(SQLAlchemyError):
    """Raised when a flush would change or delete a game record."""


class TableStatus(str, enum.Enum):
    AVAILABLE = 'available'
    WAITING = 'waiting'
    OCCUPIED = 'occupied'


class Turn(str, enum.Enum):
    """Whose turn it is, as a seat role rather than a nickname."""
    PLAYER1 = 'player1'
    PLAYER2 = 'player2'

    @property
    def other(self):
        return Turn.PLAYER2 if self is Turn.PLAYER1 else Turn.PLAYER1


class User(UserMixin, db.Model):
    __tablename__ = 'users'
    id = db.Column(db.Integer, primary_key=True)
    nickname = db.Column(db.String(10), unique=True, nullable=False, index=True)
    target = db.Column(db.Integer, nullable=False, default=25)
    wins = db.Column(db.Integer, nullable=False, default=0)
    losses = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime(timezone=True), default=utcnow)

    def to_dict(self):
        return {
            'nickname': self.nickname,
            'target': self.target,
            'wins': self.wins or 0,
            'losses': self.losses or 0,
        }


class PoolTable(db.Model):
    __tablename__ = 'tables'
    table_num = db.Column(db.Integer, primary_key=True, autoincrement=False)
    status = db.Column(db.String(16), nullable=False, default=TableStatus.AVAILABLE.value)  # available, waiting, occupied
    player1 = db.Column(db.String(10), nullable=True)
    player2 = db.Column(db.String(10), nullable=True)
    score1 = db.Column(db.Integer, nullable=False, default=0)
    score2 = db.Column(db.Integer, nullable=False, default=0)
    target1 = db.Column(db.Integer, nullable=False, default=0)
    target2 = db.Column(db.Integer, nullable=False, default=0)
    color1 = db.Column(db.String(16), nullable=True)
    color2 = db.Column(db.String(16), nullable=True)
    current_turn = db.Column(db.String(8), nullable=True)  # player1, player2
    inning = db.Column(db.Integer, nullable=False, default=0)
    start_time = db.Column(db.DateTime(timezone=True), nullable=True)

    @property
    def turn(self):
        return Turn(self.current_turn) if self.current_turn else None

    def player_for(self, turn):
        if turn is None:
            return None
        return self.player1 if turn is Turn.PLAYER1 else self.player2

    def reset(self):
        """Return the table to the available zero state."""
        self.status = TableStatus.AVAILABLE.value
        self.player1 = None
        self.player2 = None
        self.score1 = 0
        self.score2 = 0
        self.target1 = 0
        self.target2 = 0
        self.color1 = None
        self.color2 = None
        self.current_turn = None
        self.inning = 0
        self.start_time = None

    def to_dict(self):
        return {
            'tableNum': self.table_num,
            'status': self.status,
            'player1': self.player1,
            'player2': self.player2,
            'score1': self.score1,
            'score2': self.score2,
            'target1': self.target1,
            'target2': self.target2,
            'color1': self.color1,
            'color2': self.color2,
            'currentTurn': self.current_turn,
            'inning': self.inning,
            'startTime': _iso(self.start_time),
        }


class GameRecord(db.Model):
    """Append-only ledger row written when a game ends."""
    __tablename__ = 'games'
    id = db.Column(db.Integer, primary_key=True)
    table_num = db.Column(db.Integer, nullable=False, index=True)
    player1 = db.Column(db.String(10), nullable=True)
    player2 = db.Column(db.String(10), nullable=True)
    score1 = db.Column(db.Integer, nullable=False, default=0)
    score2 = db.Column(db.Integer, nullable=False, default=0)
    winner = db.Column(db.String(10), nullable=True)
    start_time = db.Column(db.DateTime(timezone=True), nullable=True)
    ended_at = db.Column(db.DateTime(timezone=True), nullable=False, default=utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'tableNum': self.table_num,
            'player1': self.player1,
            'player2': self.player2,
            'score1': self.score1,
            'score2': self.score2,
            'winner': self.winner,
            'startTime': _iso(self.start_time),
            'endedAt': _iso(self.ended_at),
        }


@event.listens_for(GameRecord, 'before_update')
@event.listens_for(GameRecord, 'before_delete')
def _reject_record_changes(mapper, connection, target):
    raise ImmutableRecordError(f"game record {target.id} is immutable")
