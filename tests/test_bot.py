"""Tests for bot startup configuration."""
import pytest

import bot
from bot import FormRunnerBot, token_is_set


@pytest.mark.parametrize("token, expected", [
    ("123456:ABC-DEF", True),
    ("your_admin_bot_token_here", False),
    ("your_user_bot_token_here", False),
    ("", False),
    (None, False),
])
def test_token_is_set(token, expected):
    assert token_is_set(token) is expected


def test_placeholder_tokens_are_refused(monkeypatch, tmp_path):
    monkeypatch.setattr(bot, "ADMIN_BOT_TOKEN", "your_admin_bot_token_here")
    monkeypatch.setattr(bot, "USER_BOT_TOKEN", "123456:ABC-DEF")
    runner = FormRunnerBot(db_path=str(tmp_path / "forms.db"))

    with pytest.raises(ValueError):
        runner.create_applications()

    assert runner.admin_application is None


def test_form_link_uses_configured_username(monkeypatch, tmp_path):
    monkeypatch.setattr(bot, "USER_BOT_USERNAME", "@form_filler_bot")
    runner = FormRunnerBot(db_path=str(tmp_path / "forms.db"))

    assert runner.build_form_link("3") == "https://t.me/form_filler_bot?start=START_3"
