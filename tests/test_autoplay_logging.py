import logging

from blockfall.engine import GameOverEvent
from examples.autoplay import log_summary, play_game


def test_log_summary_limits_rows_and_output(caplog):
    results = [
        GameOverEvent(final_score=50, final_lines=1),
        GameOverEvent(final_score=400, final_lines=5),
    ]
    with caplog.at_level(logging.INFO, logger="examples.autoplay"):
        best = log_summary(results, limit=1)

    assert best == [results[1]]
    message = "".join(caplog.messages)
    assert "score=400" in message
    assert "score=50," not in message


def test_play_game_reaches_game_over():
    result = play_game(seed=0)
    assert isinstance(result, GameOverEvent)
    assert result.final_score >= 0
