"""Table services: the lifecycle state machine and its rules.

Imported by the HTTP blueprints; transport concerns stay out of here.
"""
from .state_machine import (
    TurnOutcome,
    approve_join,
    cancel_room,
    create_room,
    end_game,
    game_history,
    get_game_state,
    join_room,
    list_tables,
    next_turn,
    provision_tables,
    set_colors,
    update_score,
)

__all__ = [
    "TurnOutcome",
    "approve_join", "cancel_room", "create_room", "end_game",
    "game_history", "get_game_state", "join_room", "list_tables",
    "next_turn", "provision_tables", "set_colors", "update_score",
]
