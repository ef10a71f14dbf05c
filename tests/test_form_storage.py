"""Tests for the SQLite form storage."""
import asyncio
from datetime import datetime

import pytest

from form_storage import (
    FormDefinition, QuestionSpec, ResponseRecord, SQLiteFormStorage, ValidationType
)


def make_form(owner="100", title="Survey", created_at=None):
    definition = FormDefinition(
        owner_chat_id=owner,
        title=title,
        questions=[
            QuestionSpec("Email", ValidationType.EMAIL, "Bad email"),
            QuestionSpec("Comment"),
        ],
    )
    if created_at is not None:
        definition.created_at = created_at
    return definition


def test_create_and_get_form(storage):
    definition = make_form()
    form_id = asyncio.run(storage.create_form(definition))

    assert form_id == "1"
    assert definition.id == "1"

    loaded = asyncio.run(storage.get_form(form_id))
    assert loaded.title == "Survey"
    assert loaded.owner_chat_id == "100"
    assert [q.prompt for q in loaded.questions] == ["Email", "Comment"]
    assert loaded.questions[0].validation_type == ValidationType.EMAIL
    assert loaded.questions[0].validation_error_message == "Bad email"
    assert loaded.questions[1].validation_type == ValidationType.TEXT


def test_form_ids_are_unique(storage):
    first = asyncio.run(storage.create_form(make_form()))
    second = asyncio.run(storage.create_form(make_form()))

    assert first != second


@pytest.mark.parametrize("form_id", ["999", "abc", "", "1; DROP TABLE forms"])
def test_get_missing_form(storage, form_id):
    asyncio.run(storage.create_form(make_form()))

    assert asyncio.run(storage.get_form(form_id)) is None


def test_list_forms_newest_first(storage):
    asyncio.run(storage.create_form(make_form(title="Old", created_at=1000.0)))
    asyncio.run(storage.create_form(make_form(title="New", created_at=2000.0)))
    asyncio.run(storage.create_form(make_form(owner="200", title="Other")))

    forms = asyncio.run(storage.list_forms("100"))

    assert [f.title for f in forms] == ["New", "Old"]
    assert forms[0].question_count == 2


def test_responses_in_submission_order(storage):
    form_id = asyncio.run(storage.create_form(make_form()))
    for number in ("200", "300"):
        asyncio.run(storage.create_response(ResponseRecord(
            form_id=form_id,
            respondent_chat_id=number,
            respondent_number=number,
            answers={"Email": f"{number}@mail.ru", "Comment": "Привет"},
            submitted_at=datetime(2024, 5, 1, 12, 0, 0),
            completion_duration=12.5,
        )))

    responses = asyncio.run(storage.list_responses(form_id))

    assert [r.respondent_number for r in responses] == ["200", "300"]
    assert responses[0].answers["Comment"] == "Привет"
    assert responses[0].submitted_at == datetime(2024, 5, 1, 12, 0, 0)
    assert responses[0].completion_duration == 12.5
    assert asyncio.run(storage.list_responses("abc")) == []


def test_statistics_and_clear(storage):
    form_id = asyncio.run(storage.create_form(make_form()))
    asyncio.run(storage.create_response(ResponseRecord(
        form_id=form_id, respondent_chat_id="200", respondent_number="200", answers={}
    )))

    stats = asyncio.run(storage.get_statistics())
    assert stats == {"total_forms": 1, "total_responses": 1, "total_owners": 1}

    asyncio.run(storage.clear())
    assert asyncio.run(storage.get_form(form_id)) is None


def test_data_survives_reopen(tmp_path):
    path = str(tmp_path / "forms.db")
    form_id = asyncio.run(SQLiteFormStorage(path).create_form(make_form()))

    assert asyncio.run(SQLiteFormStorage(path).get_form(form_id)).title == "Survey"
