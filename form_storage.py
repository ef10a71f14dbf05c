#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Модель данных форм и хранилище форм и ответов
"""

import json
import logging
import sqlite3
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional


logger = logging.getLogger(__name__)


class ValidationType(Enum):
    """Типы проверки ответа"""
    TEXT = "text"
    NUMBER = "number"
    EMAIL = "email"
    RATING = "rating"
    PHONE = "phone"
    YESNO = "yesno"

    @classmethod
    def coerce(cls, value: Any) -> 'ValidationType':
        """Неизвестный тип считается текстом"""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.TEXT


@dataclass
class QuestionSpec:
    """Вопрос формы"""
    prompt: str
    validation_type: ValidationType = ValidationType.TEXT
    validation_error_message: str = ""

    def __post_init__(self):
        self.validation_type = ValidationType.coerce(self.validation_type)

    def to_dict(self) -> Dict[str, str]:
        return {
            "question": self.prompt,
            "type": self.validation_type.value,
            "errorMsg": self.validation_error_message,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'QuestionSpec':
        return cls(
            prompt=data.get("question", ""),
            validation_type=ValidationType.coerce(data.get("type")),
            validation_error_message=data.get("errorMsg") or "",
        )


@dataclass
class FormDefinition:
    """Опубликованная форма"""
    owner_chat_id: str
    title: str
    questions: List[QuestionSpec]
    id: Optional[str] = None
    created_at: float = field(default_factory=time.time)


@dataclass
class FormSummary:
    """Краткая информация о форме для списков"""
    id: str
    title: str
    question_count: int
    created_at: float


@dataclass
class ResponseRecord:
    """Отправленные ответы на форму"""
    form_id: str
    respondent_chat_id: str
    respondent_number: str
    answers: Dict[str, str]
    submitted_at: datetime = field(default_factory=datetime.now)
    completion_duration: float = 0.0


class FormStorageError(Exception):
    """Ошибка хранилища форм"""


class FormStorage(ABC):
    """Абстрактное хранилище форм и ответов"""

    @abstractmethod
    async def create_form(self, definition: FormDefinition) -> str:
        """Сохранить форму и вернуть ее ID"""
        pass

    @abstractmethod
    async def get_form(self, form_id: str) -> Optional[FormDefinition]:
        """Загрузить форму по ID"""
        pass

    @abstractmethod
    async def list_forms(self, owner_chat_id: str) -> List[FormSummary]:
        """Формы владельца, новые первыми"""
        pass

    @abstractmethod
    async def create_response(self, record: ResponseRecord) -> None:
        """Сохранить ответы"""
        pass

    @abstractmethod
    async def list_responses(self, form_id: str) -> List[ResponseRecord]:
        """Ответы на форму в порядке отправки"""
        pass

    @abstractmethod
    async def get_statistics(self) -> Dict[str, int]:
        """Количество форм и ответов"""
        pass

    @abstractmethod
    async def clear(self) -> None:
        """Удалить все формы и ответы"""
        pass


class SQLiteFormStorage(FormStorage):
    """Хранилище форм в SQLite"""

    def __init__(self, db_path: str):
        self.db_path = db_path
        self._init_database()

    def _connect(self) -> sqlite3.Connection:
        try:
            return sqlite3.connect(self.db_path)
        except sqlite3.Error as e:
            raise FormStorageError(f"Не удалось открыть базу данных: {e}") from e

    def _init_database(self):
        """Инициализация таблиц форм и ответов"""
        conn = self._connect()
        cursor = conn.cursor()

        try:
            cursor.execute('''
                CREATE TABLE IF NOT EXISTS forms (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    owner_chat_id TEXT NOT NULL,
                    title TEXT NOT NULL,
                    fields TEXT NOT NULL,
                    created_at REAL
                )
            ''')

            cursor.execute('''
                CREATE TABLE IF NOT EXISTS responses (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    form_id INTEGER NOT NULL,
                    respondent_chat_id TEXT,
                    respondent_number TEXT,
                    answers TEXT,
                    submitted_at TEXT,
                    completion_duration REAL
                )
            ''')

            conn.commit()
        except sqlite3.Error as e:
            raise FormStorageError(f"Ошибка инициализации базы данных: {e}") from e
        finally:
            conn.close()

        logger.info(f"Хранилище форм инициализировано: {self.db_path}")

    @staticmethod
    def _normalize_id(form_id: Any) -> Optional[int]:
        text = str(form_id).strip()
        if not text.isdigit():
            return None
        return int(text)

    async def create_form(self, definition: FormDefinition) -> str:
        """Сохранить форму и вернуть ее ID"""
        conn = self._connect()
        cursor = conn.cursor()

        try:
            cursor.execute('''
                INSERT INTO forms (owner_chat_id, title, fields, created_at)
                VALUES (?, ?, ?, ?)
            ''', (
                definition.owner_chat_id,
                definition.title,
                json.dumps([q.to_dict() for q in definition.questions], ensure_ascii=False),
                definition.created_at
            ))
            conn.commit()
            form_id = str(cursor.lastrowid)
        except sqlite3.Error as e:
            raise FormStorageError(f"Не удалось сохранить форму: {e}") from e
        finally:
            conn.close()

        definition.id = form_id
        return form_id

    async def get_form(self, form_id: str) -> Optional[FormDefinition]:
        """Загрузить форму по ID"""
        numeric_id = self._normalize_id(form_id)
        if numeric_id is None:
            return None

        conn = self._connect()
        cursor = conn.cursor()

        try:
            cursor.execute('''
                SELECT id, owner_chat_id, title, fields, created_at
                FROM forms WHERE id = ?
            ''', (numeric_id,))
            result = cursor.fetchone()
        except sqlite3.Error as e:
            raise FormStorageError(f"Не удалось загрузить форму: {e}") from e
        finally:
            conn.close()

        if result:
            return FormDefinition(
                id=str(result[0]),
                owner_chat_id=result[1],
                title=result[2],
                questions=[QuestionSpec.from_dict(item) for item in json.loads(result[3] or "[]")],
                created_at=result[4]
            )
        return None

    async def list_forms(self, owner_chat_id: str) -> List[FormSummary]:
        """Формы владельца, новые первыми"""
        conn = self._connect()
        cursor = conn.cursor()

        try:
            cursor.execute('''
                SELECT id, title, fields, created_at
                FROM forms WHERE owner_chat_id = ?
                ORDER BY created_at DESC, id DESC
            ''', (owner_chat_id,))
            rows = cursor.fetchall()
        except sqlite3.Error as e:
            raise FormStorageError(f"Не удалось получить список форм: {e}") from e
        finally:
            conn.close()

        return [
            FormSummary(
                id=str(row[0]),
                title=row[1],
                question_count=len(json.loads(row[2] or "[]")),
                created_at=row[3]
            ) for row in rows
        ]

    async def create_response(self, record: ResponseRecord) -> None:
        """Сохранить ответы"""
        conn = self._connect()
        cursor = conn.cursor()

        try:
            cursor.execute('''
                INSERT INTO responses
                (form_id, respondent_chat_id, respondent_number, answers, submitted_at, completion_duration)
                VALUES (?, ?, ?, ?, ?, ?)
            ''', (
                self._normalize_id(record.form_id),
                record.respondent_chat_id,
                record.respondent_number,
                json.dumps(record.answers, ensure_ascii=False),
                record.submitted_at.isoformat(),
                record.completion_duration
            ))
            conn.commit()
        except sqlite3.Error as e:
            raise FormStorageError(f"Не удалось сохранить ответы: {e}") from e
        finally:
            conn.close()

    async def list_responses(self, form_id: str) -> List[ResponseRecord]:
        """Ответы на форму в порядке отправки"""
        numeric_id = self._normalize_id(form_id)
        if numeric_id is None:
            return []

        conn = self._connect()
        cursor = conn.cursor()

        try:
            cursor.execute('''
                SELECT form_id, respondent_chat_id, respondent_number, answers, submitted_at, completion_duration
                FROM responses WHERE form_id = ?
                ORDER BY id ASC
            ''', (numeric_id,))
            rows = cursor.fetchall()
        except sqlite3.Error as e:
            raise FormStorageError(f"Не удалось загрузить ответы: {e}") from e
        finally:
            conn.close()

        return [
            ResponseRecord(
                form_id=str(row[0]),
                respondent_chat_id=row[1],
                respondent_number=row[2],
                answers=json.loads(row[3]) if row[3] else {},
                submitted_at=datetime.fromisoformat(row[4]),
                completion_duration=row[5] or 0.0
            ) for row in rows
        ]

    async def get_statistics(self) -> Dict[str, int]:
        """Количество форм и ответов"""
        conn = self._connect()
        cursor = conn.cursor()

        try:
            cursor.execute("SELECT COUNT(*) FROM forms")
            total_forms = cursor.fetchone()[0]

            cursor.execute("SELECT COUNT(*) FROM responses")
            total_responses = cursor.fetchone()[0]

            cursor.execute("SELECT COUNT(DISTINCT owner_chat_id) FROM forms")
            total_owners = cursor.fetchone()[0]
        except sqlite3.Error as e:
            raise FormStorageError(f"Не удалось получить статистику: {e}") from e
        finally:
            conn.close()

        return {
            "total_forms": total_forms,
            "total_responses": total_responses,
            "total_owners": total_owners,
        }

    async def clear(self) -> None:
        """Удалить все формы и ответы"""
        conn = self._connect()
        cursor = conn.cursor()

        try:
            cursor.execute("DELETE FROM responses")
            cursor.execute("DELETE FROM forms")
            conn.commit()
        except sqlite3.Error as e:
            raise FormStorageError(f"Не удалось очистить базу данных: {e}") from e
        finally:
            conn.close()

        logger.info("Хранилище форм очищено")
