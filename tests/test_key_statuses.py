from anniverswordlary.models.game import TileStatus

from conftest import play, type_word


def test_no_statuses_before_first_guess(game):
    type_word(game, "GOS")
    assert game.key_statuses() == {}


def test_statuses_from_finalized_rows(game):
    play(game, "PLAYER")
    play(game, "BRIDGE")

    statuses = game.key_statuses()

    assert statuses["P"] is TileStatus.PRESENT
    assert statuses["I"] is TileStatus.PRESENT
    assert statuses["G"] is TileStatus.PRESENT
    for letter in "LAYERBD":
        assert statuses[letter] is TileStatus.ABSENT
    assert "S" not in statuses


def test_pending_input_is_not_counted(game):
    play(game, "PLAYER")
    type_word(game, "GOSS")

    assert "O" not in game.key_statuses()


def test_present_is_not_downgraded_by_absent_in_same_row(game):
    # First P is present, second P finds nothing left and is absent
    play(game, "PPQQQQ")
    assert game.key_statuses()["P"] is TileStatus.PRESENT


def test_correct_beats_earlier_absent_and_later_present(game):
    # P at index 4 is absent because the exact P at index 5 consumed it
    play(game, "ABCDPP")
    assert game.key_statuses()["P"] is TileStatus.CORRECT

    play(game, "PLAYER")
    assert game.key_statuses()["P"] is TileStatus.CORRECT


def test_all_rows_counted_once_game_is_over(game):
    play(game, "PLAYER")
    play(game, "GOSSIP")

    statuses = game.key_statuses()

    assert statuses["P"] is TileStatus.CORRECT
    assert statuses["G"] is TileStatus.CORRECT
    assert statuses["L"] is TileStatus.ABSENT


def test_statuses_reset_with_new_game(game):
    play(game, "PLAYER")
    game.new_game()
    assert game.key_statuses() == {}
