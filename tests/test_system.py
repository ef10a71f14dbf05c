#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Проверка структуры проекта FormRunner
"""

from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parent.parent

REQUIRED_FILES = {
    # Основные файлы
    'bot.py': 'Два Telegram-бота',
    'run.py': 'Скрипт запуска с параметрами',
    'start.py': 'Быстрый запуск',
    'manage.py': 'Утилиты управления БД',

    # Диалоги и разбор команд
    'admin_dialog.py': 'Конструктор форм',
    'user_dialog.py': 'Заполнение форм',
    'command_parser.py': 'Разбор команд',
    'validators.py': 'Проверка ответов',
    'dialog_config.py': 'Тексты и настройки',

    # Данные
    'form_storage.py': 'Хранилище форм',
    'export.py': 'Экспорт в CSV',
    'deep_links.py': 'Ссылки на формы',

    # Конфигурация
    '.env.example': 'Пример конфигурации',
    'pyproject.toml': 'Описание пакета',
}


@pytest.mark.parametrize("file_path", sorted(REQUIRED_FILES))
def test_file_structure(file_path):
    assert (ROOT / file_path).exists(), f"{file_path} ({REQUIRED_FILES[file_path]})"


def test_python_syntax():
    errors = []
    for file_path in ROOT.rglob('*.py'):
        if '__pycache__' in str(file_path):
            continue
        try:
            compile(file_path.read_text(encoding='utf-8'), str(file_path), 'exec')
        except SyntaxError as e:
            errors.append(f"{file_path}: {e}")

    assert not errors


def test_env_example():
    content = (ROOT / '.env.example').read_text(encoding='utf-8')

    for var in ('ADMIN_BOT_TOKEN', 'USER_BOT_TOKEN', 'USER_BOT_USERNAME', 'DATABASE_PATH', 'LOG_LEVEL'):
        assert var in content, f"В .env.example нет {var}"
