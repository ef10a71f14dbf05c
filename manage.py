#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Утилита управления базой форм и ответов
"""

import asyncio
import os
import sys
from datetime import datetime

from dotenv import load_dotenv

from dialog_config import SETTINGS
from export import generate_csv
from form_storage import FormStorageError, SQLiteFormStorage

load_dotenv()

DATABASE_PATH = os.getenv('DATABASE_PATH', 'forms.db')


def _require_database() -> bool:
    if not os.path.exists(DATABASE_PATH):
        print("❌ База данных не найдена. Запустите сначала ботов.")
        return False
    return True


def init_db():
    """Инициализация базы данных"""
    SQLiteFormStorage(DATABASE_PATH)
    print("✅ База данных инициализирована")


def show_stats():
    """Показать статистику"""
    if not _require_database():
        return

    stats = asyncio.run(SQLiteFormStorage(DATABASE_PATH).get_statistics())

    print(f"\n📊 Статистика FormRunner:")
    print(f"📋 Всего форм: {stats['total_forms']}")
    print(f"👥 Авторов форм: {stats['total_owners']}")
    print(f"📨 Всего ответов: {stats['total_responses']}")
    if stats['total_forms']:
        print(f"📈 Ответов на форму: {stats['total_responses'] / stats['total_forms']:.1f}")


def show_forms(owner_chat_id: str = None):
    """Показать формы автора"""
    if not _require_database():
        return

    if not owner_chat_id:
        print("❌ Укажите ID чата автора: python manage.py forms <chat_id>")
        return

    forms = asyncio.run(SQLiteFormStorage(DATABASE_PATH).list_forms(owner_chat_id))

    if not forms:
        print("📭 Формы не найдены")
        return

    print(f"\n📋 Формы чата {owner_chat_id} ({len(forms)}):")
    print("-" * 60)

    for summary in forms:
        created = datetime.fromtimestamp(summary.created_at).strftime('%d.%m.%Y %H:%M')
        print(f"🆔 {summary.id}  {summary.title}")
        print(f"   ❓ Вопросов: {summary.question_count}  📅 {created}")
        print("-" * 40)


def export_form(form_id: str = None):
    """Экспорт ответов на форму в CSV"""
    if not _require_database():
        return

    if not form_id:
        print("❌ Укажите ID формы: python manage.py export <form_id>")
        return

    storage = SQLiteFormStorage(DATABASE_PATH)
    form = asyncio.run(storage.get_form(form_id))
    if not form:
        print(f"❌ Форма {form_id} не найдена")
        return

    responses = asyncio.run(storage.list_responses(form.id))
    if not responses:
        print("📭 Нет ответов для экспорта")
        return

    filename = SETTINGS['export_filename'].format(
        form_id=form.id,
        timestamp=datetime.now().strftime('%Y%m%d_%H%M%S')
    )

    with open(filename, 'w', newline='', encoding='utf-8') as csvfile:
        csvfile.write(generate_csv(form, responses))

    print(f"✅ Ответы экспортированы в файл: {filename}")
    print(f"📊 Экспортировано ответов: {len(responses)}")


def clear_db():
    """Очистка базы данных"""
    if not _require_database():
        return

    confirm = input("⚠️ Вы уверены, что хотите удалить ВСЕ формы и ответы? (да/нет): ")
    if confirm.lower() != 'да':
        print("❌ Операция отменена")
        return

    asyncio.run(SQLiteFormStorage(DATABASE_PATH).clear())
    print("✅ База данных очищена")


def main():
    """Главное меню управления"""
    if len(sys.argv) < 2:
        print("🔧 Утилита управления FormRunner")
        print("\nДоступные команды:")
        print("  init               - Инициализировать базу данных")
        print("  stats              - Показать статистику")
        print("  forms <chat_id>    - Показать формы автора")
        print("  export <form_id>   - Экспортировать ответы в CSV")
        print("  clear              - Очистить базу данных")
        print("\nПример: python manage.py stats")
        return

    command = sys.argv[1].lower()
    argument = sys.argv[2] if len(sys.argv) > 2 else None

    commands = {
        'init': init_db,
        'stats': show_stats,
        'forms': lambda: show_forms(argument),
        'export': lambda: export_form(argument),
        'clear': clear_db
    }

    if command not in commands:
        print(f"❌ Неизвестная команда: {command}")
        print("Используйте: python manage.py для списка команд")
        return

    try:
        commands[command]()
    except FormStorageError as e:
        print(f"❌ Ошибка базы данных: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
