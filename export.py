#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Экспорт ответов на форму в CSV
"""

import csv
import io
from typing import List

from form_storage import FormDefinition, ResponseRecord


def _sanitize(value) -> str:
    """Запятые в значениях заменяются точкой с запятой"""
    return str(value if value is not None else '').replace(',', ';')


def generate_csv(form: FormDefinition, responses: List[ResponseRecord]) -> str:
    """
    Сформировать CSV: строка заголовков User,Timestamp,<вопросы...>
    и по одной строке на каждый ответ, ответы в порядке вопросов
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator='\n')

    writer.writerow(['User', 'Timestamp'] + [_sanitize(q.prompt) for q in form.questions])

    for response in responses:
        writer.writerow(
            [_sanitize(response.respondent_number), _sanitize(response.submitted_at.isoformat())]
            + [_sanitize(response.answers.get(q.prompt, '')) for q in form.questions]
        )

    return buffer.getvalue()
