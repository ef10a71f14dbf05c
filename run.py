#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Главный скрипт запуска ботов FormRunner
Поддерживает параметры командной строки и настройку через .env
"""

import os
import sys
import argparse
import logging
import sqlite3
from dotenv import load_dotenv


def parse_arguments(argv=None):
    """Парсинг аргументов командной строки"""
    parser = argparse.ArgumentParser(
        description='FormRunner: конструктор и заполнение форм в Telegram',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры использования:
  python run.py                          # Обычный запуск
  python run.py --check                  # Только проверка конфигурации
  python run.py --env custom.env         # Использовать другой .env файл
  python run.py --debug                  # Запуск в режиме отладки
  python run.py --admin-token T1 --user-token T2
        """
    )

    parser.add_argument('--check', action='store_true',
                       help='Только проверить конфигурацию без запуска')
    parser.add_argument('--env', type=str, default='.env',
                       help='Путь к файлу с переменными окружения')
    parser.add_argument('--debug', action='store_true',
                       help='Запустить в режиме отладки')
    parser.add_argument('--admin-token', type=str,
                       help='Токен бота-конструктора (переопределяет .env)')
    parser.add_argument('--user-token', type=str,
                       help='Токен бота заполнения форм (переопределяет .env)')
    parser.add_argument('--db', type=str,
                       help='Путь к базе данных (переопределяет .env)')

    return parser.parse_args(argv)


def load_environment(env_file: str, args):
    """Загрузка переменных окружения с поддержкой параметров"""
    if os.path.exists(env_file):
        load_dotenv(env_file)
        print(f"✅ Загружены переменные из {env_file}")
    else:
        print(f"⚠️ Файл {env_file} не найден, используются переменные по умолчанию")

    # Переопределяем из аргументов командной строки
    if args.admin_token:
        os.environ['ADMIN_BOT_TOKEN'] = args.admin_token
        print("✅ Токен бота-конструктора установлен из аргументов")

    if args.user_token:
        os.environ['USER_BOT_TOKEN'] = args.user_token
        print("✅ Токен бота заполнения установлен из аргументов")

    if args.db:
        os.environ['DATABASE_PATH'] = args.db
        print(f"✅ Путь к БД установлен: {args.db}")

    if args.debug:
        os.environ['LOG_LEVEL'] = 'DEBUG'
        print("✅ Включен режим отладки")


def setup_logging():
    """Настройка системы логирования"""
    log_level = os.getenv('LOG_LEVEL', 'INFO')
    log_file = os.getenv('LOG_FILE')
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

    handlers = []

    # Консольный обработчик
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(log_format))
    handlers.append(console_handler)

    # Файловый обработчик
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(logging.Formatter(log_format))
        handlers.append(file_handler)

    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format=log_format,
        handlers=handlers,
        force=True
    )

    # Настраиваем уровни для внешних библиотек
    logging.getLogger('httpx').setLevel(logging.WARNING)
    logging.getLogger('telegram').setLevel(logging.INFO)


def check_requirements():
    """Проверка установленных зависимостей"""
    try:
        import telegram
        import dotenv
        print("✅ Зависимости установлены")
        return True
    except ImportError as e:
        print(f"❌ Не установлены зависимости: {e}")
        print("Выполните: pip install -e .")
        return False


def _check_token(variable: str, description: str) -> bool:
    token = os.getenv(variable)
    if not token or token.startswith('your_'):
        print(f"❌ {variable} не установлен!")
        print(f"\nДля настройки токена ({description}):")
        print("1. Получите токен у @BotFather в Telegram")
        print(f"2. Установите в .env файле: {variable}=ваш_токен")
        return False

    print(f"✅ {variable} установлен: {token[:10]}...")
    return True


def check_tokens():
    """Проверка наличия токенов обоих ботов"""
    admin_ok = _check_token('ADMIN_BOT_TOKEN', 'бот-конструктор')
    user_ok = _check_token('USER_BOT_TOKEN', 'бот заполнения форм')
    return admin_ok and user_ok


def check_user_bot_username():
    """Проверка имени бота заполнения для ссылок"""
    if not os.getenv('USER_BOT_USERNAME'):
        print("⚠️ USER_BOT_USERNAME не установлен, имя будет получено у Telegram при запуске")
    else:
        print(f"✅ Ссылки на формы ведут на @{os.getenv('USER_BOT_USERNAME').lstrip('@')}")
    return True


def check_database():
    """Проверка доступности базы данных"""
    db_path = os.getenv('DATABASE_PATH', 'forms.db')

    try:
        conn = sqlite3.connect(db_path)
        conn.close()
        print(f"✅ База данных доступна: {db_path}")
        return True
    except sqlite3.Error as e:
        print(f"⚠️ Проблема с базой данных: {e}")
        print("База будет создана автоматически при первом запуске")
        return True  # Не критично


def check_dialogs():
    """Проверка разбора команд и правил проверки"""
    try:
        from command_parser import AdminAction, UserAction, create_admin_parser, create_user_parser
        from form_storage import QuestionSpec, ValidationType
        from validators import validate

        if create_admin_parser().parse('/new').command != AdminAction.CREATE_FORM:
            print("❌ Парсер команд конструктора работает некорректно")
            return False
        if create_user_parser().parse('--skip').command != UserAction.SKIP_QUESTION:
            print("❌ Парсер команд заполнения работает некорректно")
            return False
        if validate('abc', QuestionSpec('Возраст', ValidationType.NUMBER)) is None:
            print("❌ Правила проверки ответов работают некорректно")
            return False

        print("✅ Диалоги готовы к работе")
        return True

    except Exception as e:
        print(f"❌ Ошибка диалогов: {e}")
        return False


def run_system_checks():
    """Запустить все проверки системы"""
    print("🔍 Проверка системы...\n")

    checks = [
        ("Зависимости Python", check_requirements),
        ("Токены ботов", check_tokens),
        ("Имя бота заполнения", check_user_bot_username),
        ("База данных", check_database),
        ("Диалоги", check_dialogs)
    ]

    all_passed = True
    critical_failed = False

    for check_name, check_func in checks:
        print(f"🔍 Проверка: {check_name}")
        result = check_func()
        if not result:
            all_passed = False
            # Критичные проверки
            if check_name in ["Зависимости Python", "Токены ботов", "Диалоги"]:
                critical_failed = True
        print()

    return all_passed, critical_failed


def main():
    """Главная функция"""
    args = parse_arguments()

    print("🤖 FormRunner: конструктор и заполнение форм")
    print("=" * 50)

    load_environment(args.env, args)

    setup_logging()
    logger = logging.getLogger(__name__)

    all_passed, critical_failed = run_system_checks()

    if critical_failed:
        print("❌ Обнаружены критичные проблемы. Исправьте их и запустите снова.")
        sys.exit(1)

    if not all_passed:
        print("⚠️ Обнаружены некритичные проблемы, но боты могут работать.")
    else:
        print("✅ Все проверки пройдены!")

    if args.check:
        print("\n🎉 Конфигурация корректна! Для запуска используйте: python run.py")
        return

    print("\n🚀 Запускаем ботов...")

    try:
        # Импорт после загрузки окружения: bot читает конфигурацию при импорте
        from bot import FormRunnerBot

        bot = FormRunnerBot()
        bot.run()

    except KeyboardInterrupt:
        print("\n👋 Боты остановлены пользователем")
        logger.info("Боты остановлены пользователем")

    except Exception as e:
        print(f"\n❌ Критическая ошибка: {e}")
        logger.error(f"Критическая ошибка: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()
