#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Диалог конструктора форм: название -> вопросы с типом проверки -> публикация
Плюс команды вне сессии: список форм, просмотр, выгрузка ответов
"""

import html
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, List, Optional

from command_parser import (
    AdminAction, CommandParser, ParsedCommand, create_admin_parser,
    example_prefix, get_pattern_help
)
from dialog_config import ADMIN_TEXTS, SETTINGS, VALIDATION_TEXTS
from export import generate_csv
from form_storage import FormDefinition, FormStorage, FormStorageError, QuestionSpec, ValidationType
from replies import Attachment, Reply
from session_store import SessionStore
from validators import default_error_message


logger = logging.getLogger(__name__)


class AdminPhase(Enum):
    """Этапы создания формы"""
    AWAITING_TITLE = "awaiting_title"
    COLLECTING_QUESTIONS = "collecting_questions"
    AWAITING_VALIDATION_CHOICE = "awaiting_validation_choice"


@dataclass
class AdminSession:
    """Сессия создания формы"""
    chat_id: str
    phase: AdminPhase = AdminPhase.AWAITING_TITLE
    title: Optional[str] = None
    pending_question_prompt: Optional[str] = None
    questions: List[QuestionSpec] = field(default_factory=list)


def get_validation_choice(choice: str) -> ValidationType:
    """Тип проверки по цифре 1-5, все остальное считается текстом"""
    return ValidationType.coerce(SETTINGS['validation_choices'].get(choice.strip(), 'text'))


class AdminDialog:
    """Конечный автомат конструктора форм"""

    def __init__(self, storage: FormStorage, link_builder: Callable[[str], str],
                 sessions: SessionStore = None, parser: CommandParser = None):
        self.storage = storage
        self.link_builder = link_builder
        self.sessions: SessionStore[AdminSession] = sessions if sessions is not None else SessionStore()
        self.parser = parser or create_admin_parser()

    async def handle_message(self, chat_id: str, text: str) -> Optional[Reply]:
        """Обработать входящее сообщение, None если сообщение не для бота"""
        text = (text or "").strip()
        if not text:
            return None

        parsed = self.parser.parse(text)
        session = self.sessions.get(chat_id)

        if session:
            return await self._handle_session(chat_id, session, parsed)

        if parsed.is_command:
            return await self._handle_command(chat_id, parsed)

        return None

    # === КОМАНДЫ ВНЕ СЕССИИ ===

    async def _handle_command(self, chat_id: str, parsed: ParsedCommand) -> Reply:
        prefix = example_prefix(parsed.pattern)
        command = parsed.command

        if command == AdminAction.CREATE_FORM:
            self.sessions.put(chat_id, AdminSession(chat_id=chat_id))
            logger.info(f"Чат {chat_id} начал создание формы")
            return Reply(ADMIN_TEXTS['create']['started'])

        if command == AdminAction.EXPORT_DATA:
            if not parsed.args:
                return Reply(ADMIN_TEXTS['export']['usage'].format(prefix=prefix))
            return await self._export_form(parsed.args)

        if command == AdminAction.VIEW_FORM:
            if not parsed.args:
                return Reply(ADMIN_TEXTS['view']['usage'].format(prefix=prefix))
            return await self._show_form_details(parsed.args)

        if command == AdminAction.LIST_FORMS:
            return await self._list_forms(chat_id, prefix)

        if command == AdminAction.CANCEL:
            return Reply(ADMIN_TEXTS['cancel']['nothing'])

        if command == AdminAction.QUESTION_OPTIONS:
            return Reply(ADMIN_TEXTS['options'])

        if command == AdminAction.DONE:
            return Reply(ADMIN_TEXTS['done_without_session'].format(prefix=prefix))

        return Reply(f"{ADMIN_TEXTS['help']['commands']}\n\n{get_pattern_help()}")

    async def _export_form(self, form_id: str) -> Reply:
        """Выгрузить ответы на форму в CSV-документ"""
        safe_id = html.escape(form_id)

        try:
            form = await self.storage.get_form(form_id)
            if not form:
                return Reply(ADMIN_TEXTS['export']['not_found'].format(form_id=safe_id))

            responses = await self.storage.list_responses(form.id)
        except FormStorageError as e:
            logger.error(f"Ошибка выгрузки формы {form_id}: {e}")
            return Reply(ADMIN_TEXTS['export']['error'].format(form_id=safe_id, error=html.escape(str(e))))

        if not responses:
            return Reply(ADMIN_TEXTS['export']['no_responses'].format(form_id=safe_id))

        csv_text = generate_csv(form, responses)
        filename = SETTINGS['export_filename'].format(
            form_id=form.id,
            timestamp=datetime.now().strftime('%Y%m%d_%H%M%S')
        )
        logger.info(f"Выгружено {len(responses)} ответов на форму {form.id}")

        return Reply(
            ADMIN_TEXTS['export']['success'].format(title=html.escape(form.title), count=len(responses)),
            attachment=Attachment(filename=filename, content=csv_text.encode('utf-8'))
        )

    async def _show_form_details(self, form_id: str) -> Reply:
        """Показать вопросы формы"""
        try:
            form = await self.storage.get_form(form_id)
        except FormStorageError as e:
            logger.error(f"Ошибка загрузки формы {form_id}: {e}")
            return Reply(ADMIN_TEXTS['view']['error'].format(error=html.escape(str(e))))

        if not form:
            return Reply(ADMIN_TEXTS['view']['not_found'].format(form_id=html.escape(form_id)))

        details = ADMIN_TEXTS['view']['header'].format(
            title=html.escape(form.title),
            form_id=form.id,
            count=len(form.questions)
        )
        for number, question in enumerate(form.questions, 1):
            details += ADMIN_TEXTS['view']['item'].format(
                number=number,
                question=html.escape(question.prompt),
                label=VALIDATION_TEXTS['labels'][question.validation_type.value]
            )

        return Reply(details)

    async def _list_forms(self, chat_id: str, prefix: str) -> Reply:
        """Список форм чата, новые первыми"""
        try:
            forms = await self.storage.list_forms(chat_id)
        except FormStorageError as e:
            logger.error(f"Ошибка получения списка форм для {chat_id}: {e}")
            return Reply(ADMIN_TEXTS['list']['error'].format(error=html.escape(str(e))))

        if not forms:
            return Reply(ADMIN_TEXTS['list']['empty'].format(prefix=prefix))

        text = ADMIN_TEXTS['list']['header'].format(count=len(forms))
        for number, summary in enumerate(forms, 1):
            text += ADMIN_TEXTS['list']['item'].format(
                number=number,
                title=html.escape(summary.title),
                form_id=summary.id,
                questions=summary.question_count,
                date=datetime.fromtimestamp(summary.created_at).strftime('%d.%m.%Y')
            )
        text += ADMIN_TEXTS['list']['footer'].format(prefix=prefix)

        return Reply(text)

    # === СЕССИЯ СОЗДАНИЯ ФОРМЫ ===

    async def _handle_session(self, chat_id: str, session: AdminSession,
                              parsed: ParsedCommand) -> Reply:
        prefix = example_prefix(parsed.pattern)

        if parsed.is_command:
            if parsed.command == AdminAction.CANCEL:
                self.sessions.delete(chat_id)
                logger.info(f"Чат {chat_id} отменил создание формы")
                return Reply(ADMIN_TEXTS['cancel']['done'])

            if parsed.command == AdminAction.HELP:
                return self._session_help(session, prefix)

            if session.phase == AdminPhase.COLLECTING_QUESTIONS:
                if parsed.command == AdminAction.DONE:
                    return await self._finish_form(chat_id, session, prefix)
                if parsed.command == AdminAction.QUESTION_OPTIONS:
                    return Reply(ADMIN_TEXTS['options'])

        if session.phase == AdminPhase.AWAITING_TITLE:
            if parsed.is_command:
                return Reply(ADMIN_TEXTS['title']['not_command'])
            session.title = parsed.original
            session.phase = AdminPhase.COLLECTING_QUESTIONS
            return Reply(ADMIN_TEXTS['title']['set'].format(
                title=html.escape(session.title), prefix=prefix
            ))

        if session.phase == AdminPhase.COLLECTING_QUESTIONS:
            if parsed.is_command:
                return Reply(ADMIN_TEXTS['question']['not_command'].format(prefix=prefix))
            session.pending_question_prompt = parsed.original
            session.phase = AdminPhase.AWAITING_VALIDATION_CHOICE
            return Reply(ADMIN_TEXTS['question']['received'].format(
                question=html.escape(session.pending_question_prompt)
            ))

        # AWAITING_VALIDATION_CHOICE
        if parsed.is_command:
            return Reply(ADMIN_TEXTS['validation']['not_command'])

        validation_type = get_validation_choice(parsed.original)
        session.questions.append(QuestionSpec(
            prompt=session.pending_question_prompt,
            validation_type=validation_type,
            validation_error_message=default_error_message(validation_type)
        ))
        session.pending_question_prompt = None
        session.phase = AdminPhase.COLLECTING_QUESTIONS

        return Reply(ADMIN_TEXTS['validation']['set'].format(
            label=VALIDATION_TEXTS['labels'][validation_type.value], prefix=prefix
        ))

    def _session_help(self, session: AdminSession, prefix: str) -> Reply:
        """Подсказка для текущего этапа"""
        return Reply(ADMIN_TEXTS['help'][session.phase.value].format(
            prefix=prefix, count=len(session.questions)
        ))

    async def _finish_form(self, chat_id: str, session: AdminSession, prefix: str) -> Reply:
        """Опубликовать форму"""
        if not session.questions:
            return Reply(ADMIN_TEXTS['finish']['no_questions'])

        definition = FormDefinition(
            owner_chat_id=chat_id,
            title=session.title,
            questions=list(session.questions)
        )

        try:
            form_id = await self.storage.create_form(definition)
        except FormStorageError as e:
            logger.error(f"Не удалось сохранить форму чата {chat_id}: {e}")
            return Reply(ADMIN_TEXTS['finish']['error'].format(error=html.escape(str(e)), prefix=prefix))

        self.sessions.delete(chat_id)
        logger.info(f"Создана форма {form_id} ({len(definition.questions)} вопросов) чатом {chat_id}")

        return Reply(ADMIN_TEXTS['finish']['success'].format(
            title=html.escape(definition.title),
            form_id=form_id,
            count=len(definition.questions),
            link=html.escape(self.link_builder(form_id)),
            prefix=prefix
        ))
