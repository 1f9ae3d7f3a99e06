"""Failure kinds reported by the scoreboard services.

Every failure carries a machine-checkable ``kind``, a human-readable
message and the HTTP status the transport layer should answer with.
"""


class ScoreboardError(Exception):
    kind = 'error'
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {'success': False, 'error': self.kind, 'message': self.message}


class InvalidInput(ScoreboardError):
    kind = 'invalid_input'
    status_code = 400


class DuplicateNickname(ScoreboardError):
    kind = 'duplicate_nickname'
    status_code = 409


class NotFound(ScoreboardError):
    kind = 'not_found'
    status_code = 404


class InvalidState(ScoreboardError):
    kind = 'invalid_state'
    status_code = 409


class StoreFailure(ScoreboardError):
    kind = 'store_failure'
    status_code = 500
