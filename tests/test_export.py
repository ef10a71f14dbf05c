"""Tests for CSV export and deep links."""
import csv
import io
from datetime import datetime

from deep_links import build_deep_link, parse_start_token
from export import generate_csv
from form_storage import FormDefinition, QuestionSpec, ResponseRecord


FORM = FormDefinition(
    owner_chat_id="100",
    title="Survey",
    questions=[QuestionSpec("Name"), QuestionSpec("City, country"), QuestionSpec("Notes")],
    id="7",
)


def response(number, answers):
    return ResponseRecord(
        form_id="7",
        respondent_chat_id=number,
        respondent_number=number,
        answers=answers,
        submitted_at=datetime(2024, 5, 1, 12, 30, 0),
    )


def test_header_and_rows():
    text = generate_csv(FORM, [
        response("200", {"Notes": "n", "Name": "Alice", "City, country": "Paris"}),
        response("300", {"Name": "Bob"}),
    ])

    rows = list(csv.reader(io.StringIO(text)))

    assert rows[0] == ["User", "Timestamp", "Name", "City; country", "Notes"]
    assert rows[1] == ["200", "2024-05-01T12:30:00", "Alice", "Paris", "n"]
    assert rows[2] == ["300", "2024-05-01T12:30:00", "Bob", "", ""]
    assert len(rows) == 3


def test_commas_replaced_with_semicolons():
    text = generate_csv(FORM, [response("200", {"Name": "Smith, John"})])

    assert "Smith; John" in text
    assert '"' not in text


def test_no_responses_is_header_only():
    assert generate_csv(FORM, []) == "User,Timestamp,Name,City; country,Notes\n"


def test_build_deep_link():
    assert build_deep_link("@form_bot", "7") == "https://t.me/form_bot?start=START_7"


def test_parse_start_token():
    assert parse_start_token("START_7") == "7"
    assert parse_start_token(" FILL_12 ") == "12"
    assert parse_start_token("START_") is None
    assert parse_start_token("start 7") is None
