#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Два Telegram-бота FormRunner в одном процессе:
бот-конструктор для администраторов и бот заполнения форм для участников
"""

import asyncio
import logging
import os
from typing import Optional

from dotenv import load_dotenv
from telegram import Update
from telegram.error import TelegramError
from telegram.ext import Application, ContextTypes, MessageHandler, filters

from admin_dialog import AdminDialog
from deep_links import build_deep_link
from form_storage import SQLiteFormStorage
from replies import Reply
from user_dialog import UserDialog


# Загрузка переменных окружения
load_dotenv()

# Настройка логирования
log_level = os.getenv('LOG_LEVEL', 'INFO')
log_file = os.getenv('LOG_FILE')

logging_config = {
    'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    'level': getattr(logging, log_level.upper())
}

if log_file:
    logging_config['filename'] = log_file

logging.basicConfig(**logging_config)
logger = logging.getLogger(__name__)

# Конфигурация
ADMIN_BOT_TOKEN = os.getenv('ADMIN_BOT_TOKEN', '')
USER_BOT_TOKEN = os.getenv('USER_BOT_TOKEN', '')
USER_BOT_USERNAME = os.getenv('USER_BOT_USERNAME', '')
DATABASE_PATH = os.getenv('DATABASE_PATH', 'forms.db')


def token_is_set(token: str) -> bool:
    """Токен задан и не является заглушкой из .env.example"""
    return bool(token) and not token.startswith('your_')


class FormRunnerBot:
    """Бот-конструктор и бот заполнения форм с общим хранилищем"""

    def __init__(self, db_path: str = None):
        self.db_path = db_path or DATABASE_PATH
        self.storage = SQLiteFormStorage(self.db_path)
        self.admin_dialog = AdminDialog(self.storage, link_builder=self.build_form_link)
        self.user_dialog = UserDialog(self.storage)
        self.admin_application: Optional[Application] = None
        self.user_application: Optional[Application] = None

    def build_form_link(self, form_id: str) -> str:
        """Ссылка на форму в боте заполнения"""
        username = USER_BOT_USERNAME
        if not username and self.user_application is not None:
            username = self.user_application.bot.username
        return build_deep_link(username, form_id)

    def create_applications(self) -> None:
        """Создать Telegram Application для обоих ботов"""
        if not token_is_set(ADMIN_BOT_TOKEN) or not token_is_set(USER_BOT_TOKEN):
            raise ValueError("Необходимо установить ADMIN_BOT_TOKEN и USER_BOT_TOKEN!")

        self.admin_application = Application.builder().token(ADMIN_BOT_TOKEN).build()
        self.user_application = Application.builder().token(USER_BOT_TOKEN).build()

        # Команды разбираются самими диалогами, поэтому ловим весь текст из личных чатов
        private_text = filters.TEXT & filters.ChatType.PRIVATE
        self.admin_application.add_handler(MessageHandler(private_text, self._handle_admin_message))
        self.user_application.add_handler(MessageHandler(private_text, self._handle_user_message))

        self.admin_application.add_error_handler(self._error_handler)
        self.user_application.add_error_handler(self._error_handler)

        logger.info("Обработчики ботов зарегистрированы")

    async def _handle_admin_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Сообщение боту-конструктору"""
        if not update.message or not update.message.text:
            return
        reply = await self.admin_dialog.handle_message(str(update.effective_chat.id), update.message.text)
        await self._send_reply(update, reply)

    async def _handle_user_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Сообщение боту заполнения форм"""
        if not update.message or not update.message.text:
            return
        reply = await self.user_dialog.handle_message(str(update.effective_chat.id), update.message.text)
        await self._send_reply(update, reply)

    async def _send_reply(self, update: Update, reply: Optional[Reply]) -> None:
        """Отправить ответ одним сообщением"""
        if reply is None:
            return

        try:
            if reply.attachment:
                await update.message.reply_document(
                    document=reply.attachment.content,
                    filename=reply.attachment.filename,
                    caption=reply.text,
                    parse_mode='HTML'
                )
            else:
                await update.message.reply_text(reply.text, parse_mode='HTML')
        except TelegramError as e:
            logger.error(f"Не удалось отправить ответ в чат {update.effective_chat.id}: {e}")

    async def _error_handler(self, update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
        """Логирование необработанных ошибок"""
        logger.error(f"Ошибка при обработке обновления: {context.error}", exc_info=context.error)

    async def run_async(self) -> None:
        """Запустить polling обоих ботов до остановки"""
        self.create_applications()

        async with self.admin_application, self.user_application:
            await self.admin_application.start()
            await self.user_application.start()
            await self.admin_application.updater.start_polling()
            await self.user_application.updater.start_polling()

            logger.info(
                f"🤖 Боты запущены: @{self.admin_application.bot.username} (конструктор), "
                f"@{self.user_application.bot.username} (заполнение)"
            )
            print("🤖 Боты запущены! Нажмите Ctrl+C для остановки.")

            try:
                await asyncio.Event().wait()
            finally:
                await self.admin_application.updater.stop()
                await self.user_application.updater.stop()
                await self.admin_application.stop()
                await self.user_application.stop()
                logger.info("Боты остановлены")

    def run(self) -> None:
        """Синхронный запуск"""
        try:
            asyncio.run(self.run_async())
        except KeyboardInterrupt:
            logger.info("Получен сигнал остановки")


def main():
    """Главная функция"""
    try:
        bot = FormRunnerBot()
        bot.run()
    except Exception as e:
        logger.error(f"Критическая ошибка: {e}")
        print(f"❌ Критическая ошибка: {e}")


if __name__ == '__main__':
    main()
