#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Простой скрипт быстрого запуска ботов
Для случаев, когда нужен минимальный запуск без проверок
"""

import os
from dotenv import load_dotenv


def quick_start():
    """Быстрый запуск без проверок"""
    if os.path.exists('.env'):
        load_dotenv('.env')
    # Поддержка альтернативного имени файла
    if os.path.exists('config.env'):
        load_dotenv('config.env')

    for variable in ('ADMIN_BOT_TOKEN', 'USER_BOT_TOKEN'):
        token = os.getenv(variable)
        if not token or token.startswith('your_'):
            print(f"❌ Установите {variable} в .env файле")
            return

    print("🚀 Быстрый запуск ботов FormRunner...")

    try:
        from bot import FormRunnerBot
        bot = FormRunnerBot()
        # run() синхронный и сам запускает polling
        bot.run()
    except Exception as e:
        print(f"❌ Ошибка: {e}")


if __name__ == '__main__':
    quick_start()
