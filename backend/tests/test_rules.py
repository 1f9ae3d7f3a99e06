from poolhall.models import Turn
from poolhall.services.tables.rules import (
    advance_turn,
    determine_winner,
    legacy_end_winner,
    starting_turn,
)


def test_white_ball_breaks():
    assert starting_turn('white') is Turn.PLAYER2
    assert starting_turn('red') is Turn.PLAYER1
    assert starting_turn('yellow') is Turn.PLAYER1
    assert starting_turn(None) is Turn.PLAYER1


def test_winner_requires_target():
    assert determine_winner(10, 25, 5, 20) is None
    assert determine_winner(25, 25, 5, 20) is Turn.PLAYER1
    assert determine_winner(30, 25, 5, 20) is Turn.PLAYER1
    assert determine_winner(10, 25, 20, 20) is Turn.PLAYER2


def test_player1_wins_when_both_reach_target():
    assert determine_winner(25, 25, 20, 20) is Turn.PLAYER1


def test_legacy_end_winner_falls_through_to_player2():
    assert legacy_end_winner(25, 25) is Turn.PLAYER1
    assert legacy_end_winner(3, 25) is Turn.PLAYER2


def test_inning_moves_only_when_player1_is_back():
    turn, inning = advance_turn(Turn.PLAYER1, 1)
    assert (turn, inning) == (Turn.PLAYER2, 1)
    turn, inning = advance_turn(turn, inning)
    assert (turn, inning) == (Turn.PLAYER1, 2)


def test_turn_other():
    assert Turn.PLAYER1.other is Turn.PLAYER2
    assert Turn.PLAYER2.other is Turn.PLAYER1


def test_unset_turn_hands_play_to_player1():
    assert advance_turn(None, 0) == (Turn.PLAYER1, 1)
