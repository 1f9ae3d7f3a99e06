from typing import Optional, Tuple

from poolhall.models import Turn


def starting_turn(color2: Optional[str]) -> Turn:
    """Whoever breaks with the white ball goes first."""
    return Turn.PLAYER2 if color2 == 'white' else Turn.PLAYER1


def determine_winner(score1: int, target1: int, score2: int, target2: int) -> Optional[Turn]:
    """Return the seat that reached its target, or None while play continues.

    Player 1 is checked first, so when both thresholds are met player 1 wins.
    """
    if score1 >= target1:
        return Turn.PLAYER1
    if score2 >= target2:
        return Turn.PLAYER2
    return None


def legacy_end_winner(score1: int, target1: int) -> Turn:
    # Falls through to player 2 without checking player 2's threshold
    return Turn.PLAYER1 if score1 >= target1 else Turn.PLAYER2


def advance_turn(current: Optional[Turn], inning: int) -> Tuple[Turn, int]:
    """Hand the table to the other seat.

    The inning counts completed rounds, so it only moves when play returns
    to player 1. An unset turn is treated like player 2.
    """
    following = current.other if current is not None else Turn.PLAYER1
    if following is Turn.PLAYER1:
        inning += 1
    return following, inning
