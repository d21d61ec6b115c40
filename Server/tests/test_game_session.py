"""Rule-level tests for the game session state machine."""

from __future__ import annotations

import pytest

from wordle_maker.errors import InvalidDefinition, SessionNotActive, WrongLength
from wordle_maker.models.game import LetterStatus, PuzzleDefinition, SessionStatus
from wordle_maker.services.game_service import GameSession

C, P, A = LetterStatus.CORRECT, LetterStatus.PRESENT, LetterStatus.ABSENT


def _guess(session: GameSession, word: str):
    for letter in word:
        session.append_letter(letter)
    return session.submit_guess()


def test_new_session_is_idle_and_ignores_input() -> None:
    session = GameSession()

    assert session.status is SessionStatus.IDLE
    assert session.append_letter("A") is False
    assert session.delete_letter() is False
    with pytest.raises(SessionNotActive):
        session.submit_guess()


def test_crane_scenario_wins_on_second_guess(crane_session) -> None:
    first = _guess(crane_session, "SNAKE")

    assert first == (A, P, C, A, C)
    assert crane_session.status is SessionStatus.PLAYING

    second = _guess(crane_session, "CRANE")

    assert second == (C, C, C, C, C)
    assert crane_session.status is SessionStatus.WON
    assert len(crane_session.guesses) == 2
    assert crane_session.status_message == "You solved it in 2 guesses!"


def test_exact_solution_wins_with_budget_left(crane_session) -> None:
    _guess(crane_session, "CRANE")

    assert crane_session.status is SessionStatus.WON
    assert crane_session.status_message == "You solved it in 1 guess!"


def test_running_out_of_guesses_loses() -> None:
    session = GameSession()
    session.start(PuzzleDefinition(solution="CAT", max_guesses=2))

    _guess(session, "DOG")
    assert session.status is SessionStatus.PLAYING
    _guess(session, "COT")

    assert session.status is SessionStatus.LOST
    assert session.status_message == "Game over. The word was CAT."


def test_winning_on_the_last_guess_is_a_win() -> None:
    session = GameSession()
    session.start(PuzzleDefinition(solution="CAT", max_guesses=1))

    _guess(session, "CAT")

    assert session.status is SessionStatus.WON


def test_wrong_length_leaves_state_unchanged(crane_session) -> None:
    for letter in "CRA":
        crane_session.append_letter(letter)

    with pytest.raises(WrongLength) as excinfo:
        crane_session.submit_guess()

    assert str(excinfo.value) == "Guesses must be 5 letters."
    assert excinfo.value.expected == 5
    assert crane_session.current_input == "CRA"
    assert crane_session.guesses == ()
    assert crane_session.status is SessionStatus.PLAYING


def test_input_is_capped_at_word_length(crane_session) -> None:
    for letter in "CRANES":
        crane_session.append_letter(letter)

    assert crane_session.current_input == "CRANE"


def test_non_letters_are_ignored(crane_session) -> None:
    assert crane_session.append_letter("1") is False
    assert crane_session.append_letter("AB") is False
    assert crane_session.append_letter("é") is False
    assert crane_session.append_letter("c") is True

    assert crane_session.current_input == "C"


def test_delete_letter(crane_session) -> None:
    crane_session.append_letter("C")
    crane_session.append_letter("R")

    assert crane_session.delete_letter() is True
    assert crane_session.current_input == "C"
    crane_session.delete_letter()
    assert crane_session.delete_letter() is False


def test_set_input_sanitizes_and_truncates(crane_session) -> None:
    crane_session.set_input("sn-ake!s")

    assert crane_session.current_input == "SNAKE"


def test_press_key_maps_enter_backspace_and_letters(crane_session) -> None:
    for key in ["c", "r", "x", "Backspace", "a", "n", "e"]:
        assert crane_session.press_key(key) is None

    evaluation = crane_session.press_key("Enter")

    assert evaluation == (C, C, C, C, C)
    assert crane_session.status is SessionStatus.WON


def test_press_key_ignores_unknown_keys(crane_session) -> None:
    crane_session.press_key("Shift")
    crane_session.press_key("F5")

    assert crane_session.current_input == ""


def test_press_enter_too_early_reports_wrong_length(crane_session) -> None:
    crane_session.press_key("C")

    with pytest.raises(WrongLength):
        crane_session.press_key("ENTER")


def test_finished_session_accepts_nothing(crane_session) -> None:
    _guess(crane_session, "CRANE")

    assert crane_session.append_letter("A") is False
    assert crane_session.delete_letter() is False
    assert crane_session.set_input("CRANE") is False
    assert crane_session.press_key("ENTER") is None
    with pytest.raises(SessionNotActive):
        crane_session.submit_guess()
    assert len(crane_session.guesses) == 1


def test_knowledge_tracks_best_status(crane_session) -> None:
    _guess(crane_session, "SNAKE")
    _guess(crane_session, "NACRE")

    knowledge = crane_session.knowledge
    assert knowledge["A"] is C
    assert knowledge["N"] is P
    assert knowledge["S"] is A


def test_history_is_index_aligned(crane_session) -> None:
    _guess(crane_session, "SNAKE")
    _guess(crane_session, "TRAIN")

    assert crane_session.guesses == ("SNAKE", "TRAIN")
    assert len(crane_session.evaluations) == 2
    assert crane_session.evaluations[1] == (A, C, C, A, P)


def test_start_resets_a_finished_session(crane_session) -> None:
    _guess(crane_session, "CRANE")

    crane_session.start(PuzzleDefinition(solution="LLAMA", max_guesses=3))

    assert crane_session.status is SessionStatus.PLAYING
    assert crane_session.guesses == ()
    assert crane_session.knowledge == {}
    assert crane_session.current_input == ""


def test_snapshot_hides_answer_until_game_over(crane_session) -> None:
    _guess(crane_session, "SNAKE")
    state = crane_session.snapshot()

    assert state.answer is None
    assert state.game_over is False
    assert state.evaluations == [["absent", "present", "correct", "absent", "correct"]]
    assert state.letter_status["A"] == "correct"

    _guess(crane_session, "CRANE")
    state = crane_session.snapshot()

    assert state.answer == "CRANE"
    assert state.game_over is True
    assert state.status == "won"


def test_win_summary_renders_share_grid(crane_session) -> None:
    assert crane_session.win_summary() is None

    _guess(crane_session, "SNAKE")
    _guess(crane_session, "CRANE")
    summary = crane_session.win_summary()

    assert summary.guess_count == 2
    assert summary.max_guesses == 6
    assert summary.to_share_text() == "Secret Wordle 2/6\n⬛🟨🟩⬛🟩\n🟩🟩🟩🟩🟩"


def test_lost_session_has_no_win_summary() -> None:
    session = GameSession()
    session.start(PuzzleDefinition(solution="CAT", max_guesses=1))
    _guess(session, "DOG")

    assert session.win_summary() is None


@pytest.mark.parametrize(
    ("kwargs", "message"),
    [
        ({"solution": ""}, "Secret word must contain letters."),
        ({"solution": "AB"}, "Word length must be between 3 and 25 letters."),
        ({"solution": "crane"}, "Secret word must contain only letters A-Z."),
        ({"solution": "CRANE", "max_guesses": 13}, "Max guesses must be between 1 and 12."),
        ({"solution": "CRANE", "max_guesses": 0}, "Max guesses must be between 1 and 12."),
    ],
)
def test_invalid_definitions_cannot_be_built(kwargs, message) -> None:
    with pytest.raises(InvalidDefinition) as excinfo:
        PuzzleDefinition(**kwargs)

    assert str(excinfo.value) == message


def test_creator_input_is_normalized() -> None:
    definition = PuzzleDefinition.from_creator_input(" bri-ght ", "20", "  Party  ", "")

    assert definition.solution == "BRIGHT"
    assert definition.max_guesses == 12
    assert definition.title == "Party"
    assert definition.hint == ""
    assert definition.language == "en"


def test_creator_input_defaults_blank_guess_budget() -> None:
    assert PuzzleDefinition.from_creator_input("crane", "").max_guesses == 6


def test_creator_input_rejects_word_without_letters() -> None:
    with pytest.raises(InvalidDefinition, match="must contain letters"):
        PuzzleDefinition.from_creator_input("1234")


def test_submit_word_rejects_longer_word_without_scoring(crane_session) -> None:
    crane_session.append_letter("S")

    with pytest.raises(WrongLength) as excinfo:
        crane_session.submit_word("CRANES")

    assert excinfo.value.actual == 6
    assert crane_session.guesses == ()
    assert crane_session.current_input == "S"
    assert crane_session.status is SessionStatus.PLAYING


def test_submit_word_sanitizes_then_scores(crane_session) -> None:
    evaluation = crane_session.submit_word("s-n-a-k-e")

    assert evaluation == (A, P, C, A, C)
    assert crane_session.guesses == ("SNAKE",)
    assert crane_session.current_input == ""


def test_submit_word_on_finished_session_is_rejected(crane_session) -> None:
    crane_session.submit_word("CRANE")

    with pytest.raises(SessionNotActive):
        crane_session.submit_word("CRANE")


def test_service_guess_longer_than_word_is_wrong_length(game_service) -> None:
    _, token = game_service.create_puzzle("crane", 6)
    game_id = game_service.load_puzzle(token)

    state, error = game_service.make_guess(game_id, "CRANES")

    assert error == "Guesses must be 5 letters."
    assert state.status == "playing"
    assert state.guesses == []
