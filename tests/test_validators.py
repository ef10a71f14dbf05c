"""Tests for answer validation rules."""
import pytest

from form_storage import QuestionSpec, ValidationType
from validators import default_error_message, validate


def question(validation_type, error_message=""):
    return QuestionSpec("Q", validation_type, error_message)


@pytest.mark.parametrize("validation_type, value", [
    (ValidationType.NUMBER, "123"),
    (ValidationType.NUMBER, " 007 "),
    (ValidationType.EMAIL, "a@b.c"),
    (ValidationType.EMAIL, "my mail is user@example.com"),
    (ValidationType.RATING, "1"),
    (ValidationType.RATING, "5"),
    (ValidationType.PHONE, "+1234567890"),
    (ValidationType.PHONE, "123-456-7890"),
    (ValidationType.PHONE, "+7 912 345 67 89"),
    (ValidationType.YESNO, "yes"),
    (ValidationType.YESNO, "YES"),
    (ValidationType.YESNO, "No"),
    (ValidationType.TEXT, "anything at all"),
])
def test_accepted_answers(validation_type, value):
    assert validate(value, question(validation_type)) is None


@pytest.mark.parametrize("validation_type, value", [
    (ValidationType.NUMBER, "abc"),
    (ValidationType.NUMBER, "12.5"),
    (ValidationType.NUMBER, "-3"),
    (ValidationType.EMAIL, "user@example"),
    (ValidationType.EMAIL, "@example.com"),
    (ValidationType.EMAIL, "plain"),
    (ValidationType.RATING, "0"),
    (ValidationType.RATING, "6"),
    (ValidationType.RATING, "12"),
    (ValidationType.PHONE, "12345"),
    (ValidationType.PHONE, "+1 23-45"),
    (ValidationType.PHONE, "phone 1234567890"),
    (ValidationType.YESNO, "maybe"),
    (ValidationType.YESNO, "yes please"),
])
def test_rejected_answers(validation_type, value):
    assert validate(value, question(validation_type)) is not None


def test_custom_error_message_wins():
    assert validate("abc", question(ValidationType.NUMBER, "Digits!")) == "Digits!"


def test_default_error_message_when_no_custom():
    assert validate("abc", question(ValidationType.NUMBER)) == default_error_message(ValidationType.NUMBER)


def test_unknown_type_is_text():
    spec = QuestionSpec("Q", "colour")

    assert spec.validation_type == ValidationType.TEXT
    assert validate("blue", spec) is None
