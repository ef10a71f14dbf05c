"""Tests for the form filling dialog."""
import asyncio

from dialog_config import USER_TEXTS
from form_storage import FormStorageError, SQLiteFormStorage
from user_dialog import SKIPPED_ANSWER, UserDialog, format_elapsed, generate_progress_bar


class BrokenStorage(SQLiteFormStorage):
    """Хранилище, которое не может сохранить ответы."""

    async def create_response(self, record):
        raise FormStorageError("disk full")


class LockedStorage(SQLiteFormStorage):
    """Хранилище, которое перестает отдавать формы по флагу."""

    locked = False

    async def get_form(self, form_id):
        if self.locked:
            raise FormStorageError("db locked")
        return await super().get_form(form_id)


def test_start_with_argument(send, user_dialog, survey_form):
    reply = send(user_dialog, "200", "/start 1")

    session = user_dialog.sessions.get("200")
    assert session.form_id == "1"
    assert session.current_question_index == 0
    assert "Name" in reply.text


def test_start_with_deep_link_payload(send, user_dialog, survey_form):
    send(user_dialog, "200", "/start START_1")

    assert user_dialog.sessions.get("200").form_id == "1"


def test_legacy_tokens(send, user_dialog, survey_form):
    send(user_dialog, "200", "START_1")
    send(user_dialog, "300", "FILL_1")

    assert user_dialog.sessions.get("200").form_id == "1"
    assert user_dialog.sessions.get("300").form_id == "1"


def test_start_without_argument(send, user_dialog):
    reply = send(user_dialog, "200", ">start")

    assert reply.text == USER_TEXTS['start']['usage'].format(prefix="&gt;")
    assert "200" not in user_dialog.sessions


def test_start_unknown_form(send, user_dialog):
    reply = send(user_dialog, "200", "/start 404")

    assert reply.text == USER_TEXTS['start']['not_found'].format(form_id="404")
    assert "200" not in user_dialog.sessions


def test_back_at_first_question_is_noop(send, user_dialog, survey_form):
    send(user_dialog, "200", "/start 1")
    reply = send(user_dialog, "200", "/back")

    assert reply.text == USER_TEXTS['navigation']['at_first']
    assert user_dialog.sessions.get("200").current_question_index == 0


def test_skip_records_sentinel(send, user_dialog, survey_form):
    send(user_dialog, "200", "/start 1")
    send(user_dialog, "200", "/skip")

    session = user_dialog.sessions.get("200")
    assert session.current_question_index == 1
    assert session.answers["Name"] == SKIPPED_ANSWER


def test_skip_keeps_existing_answer(send, user_dialog, survey_form):
    send(user_dialog, "200", "/start 1")
    send(user_dialog, "200", "Alice")
    send(user_dialog, "200", "/back")
    send(user_dialog, "200", "/next")

    session = user_dialog.sessions.get("200")
    assert session.current_question_index == 1
    assert session.answers["Name"] == "Alice"


def test_skip_on_last_question_refused(send, user_dialog, survey_form):
    send(user_dialog, "200", "/start 1")
    send(user_dialog, "200", "Alice")
    send(user_dialog, "200", "30")
    reply = send(user_dialog, "200", "/skip")

    assert reply.text == USER_TEXTS['navigation']['at_last'].format(prefix="/")
    assert user_dialog.sessions.get("200").current_question_index == 2


def test_invalid_answer_uses_custom_message(send, user_dialog, survey_form):
    send(user_dialog, "200", "/start 1")
    send(user_dialog, "200", "Alice")
    reply = send(user_dialog, "200", "thirty")

    assert "Numbers only" in reply.text
    session = user_dialog.sessions.get("200")
    assert session.current_question_index == 1
    assert "Age" not in session.answers


def test_answering_all_questions(send, user_dialog, survey_form):
    send(user_dialog, "200", "/start 1")
    send(user_dialog, "200", "Alice")
    send(user_dialog, "200", "30")
    send(user_dialog, "200", "5")

    session = user_dialog.sessions.get("200")
    assert session.is_complete
    assert session.current_question_index == 3
    assert session.answers == {"Name": "Alice", "Age": "30", "Rate us": "5"}


def test_text_after_completion_rejected(send, user_dialog, survey_form):
    send(user_dialog, "200", "/start 1")
    for answer in ("Alice", "30", "5"):
        send(user_dialog, "200", answer)

    reply = send(user_dialog, "200", "one more")

    assert reply.text == USER_TEXTS['already_complete'].format(prefix="/")
    assert user_dialog.sessions.get("200").answers["Name"] == "Alice"


def test_back_after_completion_reopens_last_question(send, user_dialog, survey_form):
    send(user_dialog, "200", "/start 1")
    for answer in ("Alice", "30", "5"):
        send(user_dialog, "200", answer)

    send(user_dialog, "200", "/back")
    send(user_dialog, "200", "3")

    session = user_dialog.sessions.get("200")
    assert session.is_complete
    assert session.answers["Rate us"] == "3"


def test_submit_without_answers_refused(send, user_dialog, survey_form, storage):
    send(user_dialog, "200", "/start 1")
    send(user_dialog, "200", "/skip")
    reply = send(user_dialog, "200", "/submit")

    assert reply.text == USER_TEXTS['submit']['nothing']
    assert "200" in user_dialog.sessions
    assert asyncio.run(storage.list_responses("1")) == []


def test_submit_persists_one_response(send, user_dialog, survey_form, storage):
    send(user_dialog, "200", "/start 1")
    send(user_dialog, "200", "/skip")
    send(user_dialog, "200", "30")
    send(user_dialog, "200", "--send")

    assert "200" not in user_dialog.sessions

    responses = asyncio.run(storage.list_responses("1"))
    assert len(responses) == 1
    assert responses[0].respondent_number == "200"
    assert responses[0].answers == {"Name": SKIPPED_ANSWER, "Age": "30"}


def test_submit_failure_keeps_session(send, tmp_path, survey_form):
    broken = BrokenStorage(str(tmp_path / "forms.db"))
    dialog = UserDialog(broken)
    send(dialog, "200", "/start 1")
    send(dialog, "200", "Alice")
    reply = send(dialog, "200", "/submit")

    assert "disk full" in reply.text
    assert dialog.sessions.get("200").answers == {"Name": "Alice"}


def test_session_commands_need_session(send, user_dialog):
    reply = send(user_dialog, "200", "/review")

    assert reply.text == USER_TEXTS['not_in_form'].format(prefix="/")


def test_plain_text_without_session_is_ignored(send, user_dialog):
    assert send(user_dialog, "200", "hello") is None


def test_cancel(send, user_dialog, survey_form):
    send(user_dialog, "200", "/start 1")

    assert send(user_dialog, "200", "/cancel").text == USER_TEXTS['cancel']['done']
    assert "200" not in user_dialog.sessions
    assert send(user_dialog, "200", "/cancel").text == USER_TEXTS['cancel']['nothing']


def test_restart_clears_answers(send, user_dialog, survey_form):
    send(user_dialog, "200", "/start 1")
    send(user_dialog, "200", "Alice")
    reply = send(user_dialog, "200", "/restart")

    session = user_dialog.sessions.get("200")
    assert reply.text.startswith(USER_TEXTS['restart']['prefix'])
    assert session.current_question_index == 0
    assert session.answers == {}


def test_review_and_progress_do_not_mutate(send, user_dialog, survey_form):
    send(user_dialog, "200", "/start 1")
    send(user_dialog, "200", "Alice")

    review = send(user_dialog, "200", "/review")
    progress = send(user_dialog, "200", "/progress")

    session = user_dialog.sessions.get("200")
    assert session.current_question_index == 1
    assert session.answers == {"Name": "Alice"}
    assert "Alice" in review.text
    assert "33%" in progress.text


def test_answers_are_html_escaped_in_review(send, user_dialog, survey_form):
    send(user_dialog, "200", "/start 1")
    send(user_dialog, "200", "<b>Bob</b>")
    reply = send(user_dialog, "200", "/review")

    assert "&lt;b&gt;Bob&lt;/b&gt;" in reply.text


def test_progress_bar():
    assert generate_progress_bar(0, 4) == "░" * 10
    assert generate_progress_bar(4, 4) == "█" * 10
    assert generate_progress_bar(1, 2) == "█" * 5 + "░" * 5


def test_format_elapsed():
    assert format_elapsed(42) == USER_TEXTS['time']['seconds'].format(seconds=42)
    assert format_elapsed(125) == USER_TEXTS['time']['minutes'].format(minutes=2, seconds=5)


def test_restart_failure_keeps_session(send, tmp_path, survey_form):
    locked = LockedStorage(str(tmp_path / "forms.db"))
    dialog = UserDialog(locked)
    send(dialog, "200", "/start 1")
    send(dialog, "200", "Alice")

    locked.locked = True
    reply = send(dialog, "200", "/restart")

    assert "db locked" in reply.text
    assert not reply.text.startswith(USER_TEXTS['restart']['prefix'])
    session = dialog.sessions.get("200")
    assert session is not None
    assert session.current_question_index == 1
    assert session.answers == {"Name": "Alice"}


def test_respondent_number_is_chat_id(send, user_dialog, survey_form, storage):
    send(user_dialog, "123456789", "/start 1")
    send(user_dialog, "123456789", "Alice")
    send(user_dialog, "123456789", "/submit")

    responses = asyncio.run(storage.list_responses("1"))
    assert responses[0].respondent_chat_id == "123456789"
    assert responses[0].respondent_number == "123456789"


def test_hints_follow_command_prefix(send, user_dialog, survey_form):
    send(user_dialog, "200", "!start 1")
    reply = send(user_dialog, "200", "!skip")

    assert "<code>!back</code>" in reply.text
    assert "<code>/back</code>" not in reply.text


def test_hints_after_plain_answer_use_slash(send, user_dialog, survey_form):
    send(user_dialog, "200", ".start 1")
    send(user_dialog, "200", "Alice")
    reply = send(user_dialog, "200", "thirty")

    assert "<code>/back</code>" in reply.text
    assert "<code>/skip</code>" in reply.text
