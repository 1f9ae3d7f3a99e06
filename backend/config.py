import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name, default='0'):
    return os.environ.get(name, default).lower() in ('1', 'true', 'yes')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///poolhall.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Physical table inventory, provisioned by the CLI
    TABLE_COUNT = int(os.environ.get('TABLE_COUNT', '8'))
    # Targets used when a request omits one
    DEFAULT_CREATOR_TARGET = int(os.environ.get('DEFAULT_CREATOR_TARGET', '25'))
    DEFAULT_JOINER_TARGET = int(os.environ.get('DEFAULT_JOINER_TARGET', '20'))
    # Per-table serialization: 'mutex' or 'none'
    TABLE_LOCKING = os.environ.get('TABLE_LOCKING', 'mutex')
    # Enforce lifecycle preconditions the legacy clients never relied on
    STRICT_TRANSITIONS = _flag('STRICT_TRANSITIONS')
    # 'legacy': score1 >= target1 ? player1 : player2. 'strict': full check, may be null
    ENDGAME_WINNER_POLICY = os.environ.get('ENDGAME_WINNER_POLICY', 'legacy')
    CHECK_DB_ON_STARTUP = _flag('CHECK_DB_ON_STARTUP', '1')
    CORS_ORIGINS = os.environ.get('CORS_ORIGINS', '*').split(',')
