#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Правила проверки ответов на вопросы формы
"""

import re
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from dialog_config import VALIDATION_TEXTS
from form_storage import QuestionSpec, ValidationType


@dataclass
class ValidationRule:
    """Правило валидации"""
    name: str
    validator: Callable[[str], bool]
    error_message: str


NUMBER_PATTERN = re.compile(r'^[0-9]+$')
EMAIL_PATTERN = re.compile(r'[^@\s]+@[^@\s]+\.[^@\s]+')
RATING_PATTERN = re.compile(r'^[1-5]$')
PHONE_PATTERN = re.compile(r'^\+?[0-9\s-]+$')
YESNO_PATTERN = re.compile(r'^(yes|no)$', re.IGNORECASE)

MIN_PHONE_DIGITS = 10


def _is_phone(value: str) -> bool:
    if not PHONE_PATTERN.match(value):
        return False
    return sum(ch.isdigit() for ch in value) >= MIN_PHONE_DIGITS


class AnswerValidators:
    """Готовые правила для каждого типа вопроса"""

    @staticmethod
    def number() -> ValidationRule:
        return ValidationRule(
            name="number",
            validator=lambda x: bool(NUMBER_PATTERN.match(x)),
            error_message=VALIDATION_TEXTS['errors']['number']
        )

    @staticmethod
    def email() -> ValidationRule:
        return ValidationRule(
            name="email",
            validator=lambda x: bool(EMAIL_PATTERN.search(x)),
            error_message=VALIDATION_TEXTS['errors']['email']
        )

    @staticmethod
    def rating() -> ValidationRule:
        return ValidationRule(
            name="rating",
            validator=lambda x: bool(RATING_PATTERN.match(x)),
            error_message=VALIDATION_TEXTS['errors']['rating']
        )

    @staticmethod
    def phone() -> ValidationRule:
        return ValidationRule(
            name="phone",
            validator=_is_phone,
            error_message=VALIDATION_TEXTS['errors']['phone']
        )

    @staticmethod
    def yes_no() -> ValidationRule:
        return ValidationRule(
            name="yesno",
            validator=lambda x: bool(YESNO_PATTERN.match(x)),
            error_message=VALIDATION_TEXTS['errors']['yesno']
        )


# Для текста правила нет: подходит любой ответ
RULES: Dict[ValidationType, ValidationRule] = {
    ValidationType.NUMBER: AnswerValidators.number(),
    ValidationType.EMAIL: AnswerValidators.email(),
    ValidationType.RATING: AnswerValidators.rating(),
    ValidationType.PHONE: AnswerValidators.phone(),
    ValidationType.YESNO: AnswerValidators.yes_no(),
}


def default_error_message(validation_type: ValidationType) -> str:
    """Стандартное сообщение об ошибке для типа"""
    return VALIDATION_TEXTS['errors'][ValidationType.coerce(validation_type).value]


def validate(raw_text: str, question: QuestionSpec) -> Optional[str]:
    """
    Проверить ответ на вопрос.
    Возвращает текст ошибки или None, если ответ подходит.
    """
    rule = RULES.get(question.validation_type)
    if rule is None:
        return None

    if rule.validator(raw_text.strip()):
        return None

    return question.validation_error_message or rule.error_message
