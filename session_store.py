#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Хранилище активных сессий в памяти процесса
Одна сессия на чат, сообщения одного чата обрабатываются последовательно
"""

from typing import Dict, Generic, Optional, TypeVar


S = TypeVar('S')


class SessionStore(Generic[S]):
    """Таблица сессий по идентификатору чата"""

    def __init__(self):
        self.active_sessions: Dict[str, S] = {}

    def get(self, chat_id: str) -> Optional[S]:
        """Получить сессию чата"""
        return self.active_sessions.get(chat_id)

    def put(self, chat_id: str, session: S) -> None:
        """Создать или заменить сессию чата"""
        self.active_sessions[chat_id] = session

    def delete(self, chat_id: str) -> bool:
        """Удалить сессию, True если она была"""
        return self.active_sessions.pop(chat_id, None) is not None

    def __contains__(self, chat_id: str) -> bool:
        return chat_id in self.active_sessions
