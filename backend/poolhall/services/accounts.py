from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from poolhall import db
from poolhall.errors import DuplicateNickname, InvalidInput, NotFound, StoreFailure
from poolhall.models import User

NICKNAME_MIN = 2
NICKNAME_MAX = 10


def register(nickname, target) -> User:
    if not nickname or not (NICKNAME_MIN <= len(nickname) <= NICKNAME_MAX):
        raise InvalidInput(f"Nickname must be {NICKNAME_MIN}-{NICKNAME_MAX} characters")
    if User.query.filter_by(nickname=nickname).first():
        raise DuplicateNickname(f"Nickname {nickname} is already taken")

    user = User(nickname=nickname, target=target, wins=0, losses=0)
    db.session.add(user)
    try:
        db.session.commit()
    except IntegrityError as exc:
        # lost a race with a concurrent registration
        db.session.rollback()
        raise DuplicateNickname(f"Nickname {nickname} is already taken") from exc
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error(f"[register] nickname={nickname} commit failed: {exc}")
        raise StoreFailure('Could not save user') from exc
    current_app.logger.info(f"[register] nickname={nickname} target={target}")
    return user


def login(nickname) -> User:
    if not nickname:
        raise InvalidInput('Nickname is required')
    user = User.query.filter_by(nickname=nickname).first()
    if user is None:
        raise NotFound(f"Nickname {nickname} does not exist")
    return user
