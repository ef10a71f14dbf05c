#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Парсер команд для обоих ботов
Понимает одну и ту же команду в разных стилях: /new, .new, #new, !new, >new, :new, -new, --new
"""

import html
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple


class PrefixStyle(Enum):
    """Стили префиксов команд"""
    SLASH = "/"
    DOT = "."
    HASH = "#"
    EXCLAMATION = "!"
    ARROW = ">"
    COLON = ":"
    DASH = "-"
    DOUBLE_DASH = "--"


class AdminAction(Enum):
    """Действия бота-конструктора"""
    CREATE_FORM = "createForm"
    EXPORT_DATA = "exportData"
    VIEW_FORM = "viewForm"
    LIST_FORMS = "listForms"
    CANCEL = "cancel"
    HELP = "help"
    DONE = "done"
    QUESTION_OPTIONS = "questionOptions"


class UserAction(Enum):
    """Действия бота для заполнения форм"""
    START_FORM = "startForm"
    PREVIOUS_QUESTION = "previousQuestion"
    NEXT_QUESTION = "nextQuestion"
    SKIP_QUESTION = "skipQuestion"
    REVIEW_ANSWERS = "reviewAnswers"
    SUBMIT_FORM = "submitForm"
    SHOW_PROGRESS = "showProgress"
    CANCEL_FORM = "cancelForm"
    RESTART_FORM = "restartForm"
    HELP = "help"


# Порядок важен: первый подошедший шаблон определяет стиль
COMMAND_PATTERNS: List[Tuple[PrefixStyle, re.Pattern]] = [
    (style, re.compile(r'^' + re.escape(style.value) + r'(\w+|\?)(?:\s+(.*))?$', re.DOTALL))
    for style in PrefixStyle
]


ADMIN_ALIASES: Dict[str, AdminAction] = {
    # Создание формы
    'new': AdminAction.CREATE_FORM,
    'create': AdminAction.CREATE_FORM,
    'form': AdminAction.CREATE_FORM,
    'start': AdminAction.CREATE_FORM,
    'begin': AdminAction.CREATE_FORM,

    # Экспорт
    'export': AdminAction.EXPORT_DATA,
    'download': AdminAction.EXPORT_DATA,
    'csv': AdminAction.EXPORT_DATA,
    'data': AdminAction.EXPORT_DATA,
    'get': AdminAction.EXPORT_DATA,

    # Просмотр
    'view': AdminAction.VIEW_FORM,
    'show': AdminAction.VIEW_FORM,
    'see': AdminAction.VIEW_FORM,
    'display': AdminAction.VIEW_FORM,
    'info': AdminAction.VIEW_FORM,

    # Список
    'list': AdminAction.LIST_FORMS,
    'forms': AdminAction.LIST_FORMS,
    'all': AdminAction.LIST_FORMS,

    # Отмена
    'cancel': AdminAction.CANCEL,
    'stop': AdminAction.CANCEL,
    'quit': AdminAction.CANCEL,
    'exit': AdminAction.CANCEL,
    'abort': AdminAction.CANCEL,

    # Справка
    'help': AdminAction.HELP,
    'menu': AdminAction.HELP,
    'commands': AdminAction.HELP,
    '?': AdminAction.HELP,

    # Завершение
    'done': AdminAction.DONE,
    'finish': AdminAction.DONE,
    'complete': AdminAction.DONE,
    'end': AdminAction.DONE,

    # Типы вопросов
    'options': AdminAction.QUESTION_OPTIONS,
    'types': AdminAction.QUESTION_OPTIONS,
    'fields': AdminAction.QUESTION_OPTIONS,
}


USER_ALIASES: Dict[str, UserAction] = {
    # Запуск формы
    'start': UserAction.START_FORM,
    'begin': UserAction.START_FORM,
    'form': UserAction.START_FORM,
    'fill': UserAction.START_FORM,
    'open': UserAction.START_FORM,

    # Навигация
    'back': UserAction.PREVIOUS_QUESTION,
    'prev': UserAction.PREVIOUS_QUESTION,
    'previous': UserAction.PREVIOUS_QUESTION,
    'undo': UserAction.PREVIOUS_QUESTION,
    'next': UserAction.NEXT_QUESTION,
    'skip': UserAction.SKIP_QUESTION,

    # Просмотр ответов
    'review': UserAction.REVIEW_ANSWERS,
    'check': UserAction.REVIEW_ANSWERS,
    'summary': UserAction.REVIEW_ANSWERS,
    'answers': UserAction.REVIEW_ANSWERS,

    # Отправка
    'submit': UserAction.SUBMIT_FORM,
    'finish': UserAction.SUBMIT_FORM,
    'done': UserAction.SUBMIT_FORM,
    'send': UserAction.SUBMIT_FORM,
    'complete': UserAction.SUBMIT_FORM,

    # Прогресс
    'progress': UserAction.SHOW_PROGRESS,
    'status': UserAction.SHOW_PROGRESS,
    'where': UserAction.SHOW_PROGRESS,

    # Отмена и перезапуск
    'cancel': UserAction.CANCEL_FORM,
    'quit': UserAction.CANCEL_FORM,
    'exit': UserAction.CANCEL_FORM,
    'stop': UserAction.CANCEL_FORM,
    'restart': UserAction.RESTART_FORM,
    'reset': UserAction.RESTART_FORM,

    # Справка
    'help': UserAction.HELP,
    '?': UserAction.HELP,
    'commands': UserAction.HELP,
    'info': UserAction.HELP,
}


@dataclass
class ParsedCommand:
    """Результат разбора входящего сообщения"""
    is_command: bool
    original: str
    command: Optional[Enum] = None
    raw_command: str = ""
    args: str = ""
    pattern: Optional[PrefixStyle] = None


class CommandParser:
    """Разбор команд по таблице синонимов"""

    def __init__(self, aliases: Dict[str, Enum]):
        self.aliases = aliases

    def parse(self, text: str) -> ParsedCommand:
        """Определить, является ли текст командой"""
        trimmed = text.strip()

        for style, pattern in COMMAND_PATTERNS:
            match = pattern.match(trimmed)
            if not match:
                continue

            word, args = match.groups()
            action = self.aliases.get(word.lower())
            if action:
                return ParsedCommand(
                    is_command=True,
                    original=trimmed,
                    command=action,
                    raw_command=word.lower(),
                    args=args.strip() if args else "",
                    pattern=style
                )

        return ParsedCommand(is_command=False, original=trimmed)


def example_prefix(pattern: Optional[PrefixStyle]) -> str:
    """Префикс для примеров в HTML-ответах (по умолчанию /)"""
    return html.escape(pattern.value if pattern else PrefixStyle.SLASH.value)


def get_pattern_help() -> str:
    """Справка по стилям префиксов"""
    examples = "\n".join(
        f"<code>{prefix}new</code> <code>{prefix}export 123</code> <code>{prefix}help</code>"
        for prefix in (html.escape(style.value) for style in PrefixStyle)
    )
    return (
        "🎯 <b>Стили команд</b> (выбирайте любой):\n\n"
        f"{examples}\n\n"
        "Все стили работают одинаково!"
    )


def create_admin_parser() -> CommandParser:
    return CommandParser(ADMIN_ALIASES)


def create_user_parser() -> CommandParser:
    return CommandParser(USER_ALIASES)
