"""Общие фикстуры тестов."""
import asyncio

import pytest

from admin_dialog import AdminDialog
from form_storage import FormDefinition, QuestionSpec, SQLiteFormStorage, ValidationType
from user_dialog import UserDialog


@pytest.fixture
def send():
    """Отправить сообщение в диалог и вернуть ответ."""
    def _send(dialog, chat_id, text):
        return asyncio.run(dialog.handle_message(chat_id, text))
    return _send


@pytest.fixture
def storage(tmp_path):
    return SQLiteFormStorage(str(tmp_path / "forms.db"))


@pytest.fixture
def admin_dialog(storage):
    return AdminDialog(storage, link_builder=lambda form_id: f"https://t.me/test_form_bot?start=START_{form_id}")


@pytest.fixture
def user_dialog(storage):
    return UserDialog(storage)


@pytest.fixture
def survey_form(storage):
    """Сохраненная форма из трех вопросов."""
    definition = FormDefinition(
        owner_chat_id="100",
        title="Опрос",
        questions=[
            QuestionSpec("Name", ValidationType.TEXT),
            QuestionSpec("Age", ValidationType.NUMBER, "Numbers only"),
            QuestionSpec("Rate us", ValidationType.RATING),
        ],
    )
    asyncio.run(storage.create_form(definition))
    return definition
