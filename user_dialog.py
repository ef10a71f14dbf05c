#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Диалог заполнения формы: вопросы по порядку, навигация назад/вперед,
просмотр ответов, прогресс и отправка
"""

import html
import logging
import math
import time
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from command_parser import (
    CommandParser, ParsedCommand, UserAction, create_user_parser, example_prefix
)
from deep_links import parse_start_token
from dialog_config import SETTINGS, USER_TEXTS
from form_storage import FormStorage, FormStorageError, QuestionSpec, ResponseRecord
from replies import Reply
from session_store import SessionStore
from validators import validate


logger = logging.getLogger(__name__)

SKIPPED_ANSWER = SETTINGS['skipped_answer']

# Команды, которым нужна активная сессия
SESSION_ACTIONS = {
    UserAction.PREVIOUS_QUESTION,
    UserAction.NEXT_QUESTION,
    UserAction.SKIP_QUESTION,
    UserAction.REVIEW_ANSWERS,
    UserAction.SUBMIT_FORM,
    UserAction.SHOW_PROGRESS,
}


@dataclass
class UserSession:
    """Сессия заполнения формы"""
    chat_id: str
    form_id: str
    form_title: str
    questions: List[QuestionSpec]
    current_question_index: int = 0
    answers: Dict[str, str] = field(default_factory=dict)
    started_at: float = field(default_factory=time.time)

    @property
    def question_count(self) -> int:
        return len(self.questions)

    @property
    def is_complete(self) -> bool:
        return self.current_question_index >= self.question_count

    @property
    def current_question(self) -> Optional[QuestionSpec]:
        if self.is_complete:
            return None
        return self.questions[self.current_question_index]

    def answered_count(self) -> int:
        """Количество настоящих (не пропущенных) ответов"""
        return sum(1 for answer in self.answers.values() if answer and answer != SKIPPED_ANSWER)


def generate_progress_bar(current: int, total: int) -> str:
    """Полоса прогресса из заполненных и пустых клеток"""
    length = SETTINGS['progress_bar']['length']
    filled = round(current / total * length) if total else 0
    return SETTINGS['progress_bar']['filled'] * filled + SETTINGS['progress_bar']['empty'] * (length - filled)


def format_elapsed(seconds: float) -> str:
    """Длительность в виде 2м 5с или 42с"""
    total = int(seconds)
    minutes, secs = divmod(total, 60)
    if minutes > 0:
        return USER_TEXTS['time']['minutes'].format(minutes=minutes, seconds=secs)
    return USER_TEXTS['time']['seconds'].format(seconds=secs)


class UserDialog:
    """Конечный автомат заполнения формы"""

    def __init__(self, storage: FormStorage, sessions: SessionStore = None,
                 parser: CommandParser = None):
        self.storage = storage
        self.sessions: SessionStore[UserSession] = sessions if sessions is not None else SessionStore()
        self.parser = parser or create_user_parser()

    async def handle_message(self, chat_id: str, text: str) -> Optional[Reply]:
        """Обработать входящее сообщение, None если сообщение не для бота"""
        text = (text or "").strip()
        if not text:
            return None

        # Старый формат ссылок: START_<id> / FILL_<id>
        legacy_form_id = parse_start_token(text)
        if legacy_form_id:
            return await self.start_form(chat_id, legacy_form_id)

        parsed = self.parser.parse(text)
        session = self.sessions.get(chat_id)

        if parsed.is_command:
            return await self._handle_command(chat_id, parsed, session)

        if session:
            return self._handle_answer(session, parsed.original)

        return None

    async def _handle_command(self, chat_id: str, parsed: ParsedCommand,
                              session: Optional[UserSession]) -> Reply:
        prefix = example_prefix(parsed.pattern)
        command = parsed.command

        if command == UserAction.START_FORM:
            if not parsed.args:
                return Reply(USER_TEXTS['start']['usage'].format(prefix=prefix))
            return await self.start_form(chat_id, parse_start_token(parsed.args) or parsed.args, prefix)

        if command == UserAction.CANCEL_FORM:
            if self.sessions.delete(chat_id):
                logger.info(f"Чат {chat_id} отменил заполнение формы")
                return Reply(USER_TEXTS['cancel']['done'])
            return Reply(USER_TEXTS['cancel']['nothing'])

        if command == UserAction.RESTART_FORM:
            if not session:
                return Reply(USER_TEXTS['restart']['nothing'].format(prefix=prefix))
            reply = await self.start_form(chat_id, session.form_id, prefix)
            if self.sessions.get(chat_id) is not session:
                reply.text = USER_TEXTS['restart']['prefix'] + reply.text
            return reply

        if command == UserAction.HELP:
            return self._help(session, prefix)

        if command in SESSION_ACTIONS and not session:
            return Reply(USER_TEXTS['not_in_form'].format(prefix=prefix))

        if command == UserAction.PREVIOUS_QUESTION:
            return self._go_to_previous_question(session, prefix)

        if command in (UserAction.NEXT_QUESTION, UserAction.SKIP_QUESTION):
            return self._skip_question(session, prefix)

        if command == UserAction.REVIEW_ANSWERS:
            return self._review_answers(session, prefix)

        if command == UserAction.SHOW_PROGRESS:
            return self._show_progress(session)

        return await self._submit_form(chat_id, session, prefix)

    # === ЗАПУСК ===

    async def start_form(self, chat_id: str, form_id: str, prefix: str = "/") -> Reply:
        """Начать форму с первого вопроса, старая сессия чата заменяется"""
        try:
            form = await self.storage.get_form(form_id)
        except FormStorageError as e:
            logger.error(f"Ошибка загрузки формы {form_id}: {e}")
            return Reply(USER_TEXTS['start']['error'].format(error=html.escape(str(e))))

        if not form:
            return Reply(USER_TEXTS['start']['not_found'].format(form_id=html.escape(form_id)))

        if not form.questions:
            return Reply(USER_TEXTS['start']['empty'].format(title=html.escape(form.title)))

        session = UserSession(
            chat_id=chat_id,
            form_id=form.id,
            form_title=form.title,
            questions=list(form.questions)
        )
        self.sessions.put(chat_id, session)
        logger.info(f"Чат {chat_id} начал форму {form.id}")

        intro = USER_TEXTS['start']['intro'].format(
            title=html.escape(form.title),
            count=session.question_count,
            minutes=math.ceil(session.question_count * SETTINGS['minutes_per_question']),
            prefix=prefix
        )
        return Reply(intro + self._render_question(session, prefix))

    # === ОТВЕТЫ ===

    def _handle_answer(self, session: UserSession, text: str) -> Reply:
        """Проверить и записать ответ на текущий вопрос"""
        # В обычном ответе префикса нет, подсказки показываем со /
        prefix = example_prefix(None)

        if session.is_complete:
            return Reply(USER_TEXTS['already_complete'].format(prefix=prefix))

        question = session.current_question
        error = validate(text, question)
        if error:
            return Reply(USER_TEXTS['invalid'].format(
                error=html.escape(error),
                example=USER_TEXTS['examples'].get(question.validation_type.value, ''),
                prefix=prefix
            ))

        session.answers[question.prompt] = text
        session.current_question_index += 1

        if session.is_complete:
            logger.info(f"Чат {session.chat_id} прошел все вопросы формы {session.form_id}")
            return self._completion_summary(session, prefix)

        return Reply(self._render_question(session, prefix))

    def _render_question(self, session: UserSession, prefix: str) -> str:
        """Текст текущего вопроса с подсказками"""
        question = session.current_question
        index = session.current_question_index

        prompt = USER_TEXTS['question']['header'].format(
            title=html.escape(session.form_title),
            bar=generate_progress_bar(index, session.question_count),
            position=index + 1,
            total=session.question_count,
            question=html.escape(question.prompt)
        )
        prompt += USER_TEXTS['hints'].get(question.validation_type.value, '')

        if index > 0:
            prompt += USER_TEXTS['question']['back_hint'].format(prefix=prefix)

        return prompt

    def _completion_summary(self, session: UserSession, prefix: str) -> Reply:
        return Reply(USER_TEXTS['complete'].format(
            title=html.escape(session.form_title),
            answered=session.answered_count(),
            total=session.question_count,
            elapsed=format_elapsed(time.time() - session.started_at),
            prefix=prefix
        ))

    # === НАВИГАЦИЯ ===

    def _go_to_previous_question(self, session: UserSession, prefix: str) -> Reply:
        if session.current_question_index == 0:
            return Reply(USER_TEXTS['navigation']['at_first'])

        session.current_question_index -= 1
        return Reply(USER_TEXTS['navigation']['going_back'] + self._render_question(session, prefix))

    def _skip_question(self, session: UserSession, prefix: str) -> Reply:
        if session.current_question_index >= session.question_count - 1:
            return Reply(USER_TEXTS['navigation']['at_last'].format(prefix=prefix))

        question = session.current_question
        if not session.answers.get(question.prompt):
            session.answers[question.prompt] = SKIPPED_ANSWER

        session.current_question_index += 1
        return Reply(USER_TEXTS['navigation']['skipped'] + self._render_question(session, prefix))

    # === ПРОСМОТР ===

    def _review_answers(self, session: UserSession, prefix: str) -> Reply:
        texts = USER_TEXTS['review']
        review = texts['header'].format(title=html.escape(session.form_title))

        for number, question in enumerate(session.questions, 1):
            answer = session.answers.get(question.prompt)
            if not answer:
                status, shown = '⭕', texts['not_answered']
            elif answer == SKIPPED_ANSWER:
                status, shown = '⭕', texts['skipped']
            else:
                status, shown = '✅', html.escape(answer)

            review += texts['item'].format(
                status=status,
                number=number,
                question=html.escape(question.prompt),
                answer=shown
            )

        review += texts['footer'].format(answered=session.answered_count(), total=session.question_count)

        if session.is_complete:
            review += texts['complete'].format(prefix=prefix)

        return Reply(review)

    def _show_progress(self, session: UserSession) -> Reply:
        total = session.question_count
        return Reply(USER_TEXTS['progress'].format(
            bar=generate_progress_bar(session.current_question_index, total),
            current=min(session.current_question_index + 1, total),
            total=total,
            percentage=round(session.current_question_index / total * 100),
            answered=session.answered_count(),
            title=html.escape(session.form_title)
        ))

    def _help(self, session: Optional[UserSession], prefix: str) -> Reply:
        texts = USER_TEXTS['help']
        if not session:
            context = texts['no_form'].format(prefix=prefix)
        elif session.is_complete:
            context = texts['complete'].format(title=html.escape(session.form_title))
        else:
            context = texts['answering'].format(
                current=session.current_question_index + 1,
                total=session.question_count,
                title=html.escape(session.form_title)
            )
        return Reply(context + texts['commands'])

    # === ОТПРАВКА ===

    async def _submit_form(self, chat_id: str, session: UserSession, prefix: str) -> Reply:
        answered = session.answered_count()
        if answered == 0:
            return Reply(USER_TEXTS['submit']['nothing'])

        elapsed = time.time() - session.started_at
        record = ResponseRecord(
            form_id=session.form_id,
            respondent_chat_id=chat_id,
            respondent_number=chat_id,
            answers=dict(session.answers),
            submitted_at=datetime.now(),
            completion_duration=elapsed
        )

        try:
            await self.storage.create_response(record)
        except FormStorageError as e:
            logger.error(f"Не удалось сохранить ответы чата {chat_id} на форму {session.form_id}: {e}")
            return Reply(USER_TEXTS['submit']['error'].format(error=html.escape(str(e)), prefix=prefix))

        self.sessions.delete(chat_id)
        logger.info(f"Чат {chat_id} отправил форму {session.form_id}: {answered}/{session.question_count}")

        return Reply(USER_TEXTS['submit']['success'].format(
            title=html.escape(session.form_title),
            answered=answered,
            total=session.question_count,
            elapsed=format_elapsed(elapsed)
        ))
