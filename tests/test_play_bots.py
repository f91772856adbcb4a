"""Smoke tests for the bot-vs-bot CLI."""
import pytest

from blot.play_bots import main


def test_cli_plays_a_short_match(capsys):
    main(["--target", "51", "--seed", "3"])
    out = capsys.readouterr().out
    assert "[round 1]" in out
    assert "target=51" in out
    assert "winner=" in out
    assert "winner=none" not in out


def test_cli_accepts_difficulties(capsys):
    main(["--target", "51", "--seed", "9", "--difficulty", "beginner", "expert"])
    assert "winner=" in capsys.readouterr().out


def test_cli_rejects_unknown_target():
    with pytest.raises(SystemExit):
        main(["--target", "100"])
