"""Tests for the multi-prefix command parser."""
import pytest

from command_parser import (
    ADMIN_ALIASES, USER_ALIASES, AdminAction, PrefixStyle, UserAction,
    create_admin_parser, create_user_parser, example_prefix, get_pattern_help
)

PREFIXES = ["/", ".", "#", "!", ">", ":", "-", "--"]


@pytest.mark.parametrize("prefix", PREFIXES)
@pytest.mark.parametrize("alias", sorted(ADMIN_ALIASES))
def test_every_admin_alias_under_every_prefix(prefix, alias):
    parsed = create_admin_parser().parse(f"{prefix}{alias} 42")

    assert parsed.is_command
    assert parsed.command == ADMIN_ALIASES[alias]
    assert parsed.args == "42"
    assert parsed.pattern == PrefixStyle(prefix)


@pytest.mark.parametrize("prefix", PREFIXES)
@pytest.mark.parametrize("alias", sorted(USER_ALIASES))
def test_every_user_alias_under_every_prefix(prefix, alias):
    parsed = create_user_parser().parse(f"{prefix}{alias} some argument")

    assert parsed.is_command
    assert parsed.command == USER_ALIASES[alias]
    assert parsed.args == "some argument"


def test_word_is_case_insensitive_and_args_trimmed():
    parsed = create_admin_parser().parse("  /EXPORT    17   ")

    assert parsed.command == AdminAction.EXPORT_DATA
    assert parsed.raw_command == "export"
    assert parsed.args == "17"


def test_missing_argument_is_empty_string():
    parsed = create_user_parser().parse(".skip")

    assert parsed.command == UserAction.SKIP_QUESTION
    assert parsed.args == ""


def test_double_dash_is_not_mistaken_for_dash():
    parsed = create_user_parser().parse("--back")

    assert parsed.pattern == PrefixStyle.DOUBLE_DASH
    assert parsed.command == UserAction.PREVIOUS_QUESTION


@pytest.mark.parametrize("text", [
    "hello world",
    "new",
    "/unknownword",
    "#hashtag",
    "- bullet point",
    "/",
    "",
    "a/new",
])
def test_non_commands(text):
    assert create_admin_parser().parse(text).is_command is False
    assert create_user_parser().parse(text).is_command is False


def test_alias_tables_are_independent():
    admin = create_admin_parser().parse("/start")
    user = create_user_parser().parse("/start")

    assert admin.command == AdminAction.CREATE_FORM
    assert user.command == UserAction.START_FORM
    assert create_user_parser().parse("/export 1").is_command is False
    assert create_admin_parser().parse("/skip").is_command is False


def test_question_mark_is_help():
    assert create_admin_parser().parse("/?").command == AdminAction.HELP
    assert create_user_parser().parse("!?").command == UserAction.HELP


def test_example_prefix_is_html_safe():
    assert example_prefix(None) == "/"
    assert example_prefix(PrefixStyle.ARROW) == "&gt;"
    assert ">new" not in get_pattern_help()
