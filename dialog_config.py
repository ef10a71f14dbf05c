#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Тексты диалогов и настройки ботов
Все сообщения в HTML-разметке Telegram, пользовательские данные подставляются экранированными
"""

SETTINGS = {
    'progress_bar': {
        'length': 10,
        'filled': '█',
        'empty': '░'
    },
    'minutes_per_question': 0.5,
    'skipped_answer': '[SKIPPED]',
    'legacy_start_tokens': ['START', 'FILL'],
    'deep_link_base': 'https://t.me/{username}?start={payload}',
    'export_filename': 'form_{form_id}_export_{timestamp}.csv',
    # Выбор типа проверки в конструкторе: цифра -> тип
    'validation_choices': {
        '1': 'text',
        '2': 'number',
        '3': 'email',
        '4': 'rating',
        '5': 'phone'
    }
}


VALIDATION_TEXTS = {
    'labels': {
        'text': 'Текст',
        'number': 'Число',
        'email': 'Email',
        'rating': 'Оценка',
        'phone': 'Телефон',
        'yesno': 'Да/Нет'
    },
    'errors': {
        'text': 'Введите текст',
        'number': 'Только цифры, пожалуйста',
        'email': 'Введите корректный email',
        'rating': 'Поставьте оценку от 1 до 5',
        'phone': 'Введите корректный номер телефона',
        'yesno': 'Ответьте Yes или No'
    }
}


ADMIN_TEXTS = {
    'create': {
        'started': "📋 <b>Создание новой формы</b>\n\nОтправьте название формы:"
    },
    'title': {
        'set': (
            "✅ <b>Название:</b> «{title}»\n\n"
            "Теперь отправьте первый вопрос или <code>{prefix}options</code>, "
            "чтобы посмотреть типы вопросов."
        ),
        'not_command': "⚠️ Введите название формы (а не команду)."
    },
    'question': {
        'received': (
            "📝 <b>Вопрос:</b> «{question}»\n\n"
            "Тип проверки:\n"
            "1️⃣ Текст\n"
            "2️⃣ Число\n"
            "3️⃣ Email\n"
            "4️⃣ Оценка (1-5)\n"
            "5️⃣ Телефон\n\n"
            "Ответьте цифрой:"
        ),
        'not_command': (
            "⚠️ Введите вопрос (а не команду) или <code>{prefix}done</code>, "
            "чтобы завершить."
        )
    },
    'validation': {
        'set': (
            "✅ <b>Проверка «{label}» установлена</b>\n\n"
            "Отправьте следующий вопрос или <code>{prefix}done</code>, чтобы завершить:"
        ),
        'not_command': "⚠️ Выберите тип проверки (1-5)."
    },
    'finish': {
        'no_questions': (
            "⚠️ <b>Нет ни одного вопроса</b>\n\n"
            "Добавьте хотя бы один вопрос перед завершением."
        ),
        'success': (
            "🎉 <b>Форма создана!</b>\n\n"
            "<b>Название:</b> {title}\n"
            "<b>ID:</b> {form_id}\n"
            "<b>Вопросов:</b> {count}\n\n"
            "🔗 <b>Ссылка для участников:</b>\n{link}\n\n"
            "📊 <b>Выгрузить ответы:</b>\n<code>{prefix}export {form_id}</code>"
        ),
        'error': (
            "❌ <b>Не удалось сохранить форму</b>\n\n"
            "Ошибка: {error}\n\n"
            "Попробуйте еще раз: <code>{prefix}done</code>"
        )
    },
    'cancel': {
        'done': "❌ <b>Создание формы отменено</b>",
        'nothing': "ℹ️ Сейчас нечего отменять."
    },
    'done_without_session': (
        "ℹ️ Сейчас вы не создаете форму.\n\n"
        "Начните с <code>{prefix}new</code>"
    ),
    'export': {
        'usage': "📊 <b>Выгрузка ответов</b>\n\nУкажите ID формы:\n<code>{prefix}export 123</code>",
        'not_found': "❌ <b>Форма {form_id} не найдена</b>",
        'no_responses': "📭 <b>Ответов пока нет</b>\n\nНа форму {form_id} еще никто не ответил.",
        'success': "📊 <b>Ответы на форму «{title}»</b>\n\nЗаписей: {count}",
        'error': "❌ Ошибка выгрузки формы {form_id}: {error}"
    },
    'view': {
        'usage': "👀 <b>Просмотр формы</b>\n\nУкажите ID формы:\n<code>{prefix}view 123</code>",
        'not_found': "❌ <b>Форма {form_id} не найдена</b>",
        'header': (
            "📋 <b>Форма</b>\n\n"
            "<b>Название:</b> {title}\n"
            "<b>ID:</b> {form_id}\n"
            "<b>Вопросов:</b> {count}\n\n"
        ),
        'item': "{number}. {question} <i>({label})</i>\n",
        'error': "❌ <b>Ошибка:</b> {error}"
    },
    'list': {
        'empty': "📝 <b>Форм пока нет</b>\n\nСоздайте первую командой <code>{prefix}new</code>",
        'header': "📋 <b>Ваши формы</b> ({count})\n\n",
        'item': "{number}. <b>{title}</b>\n   ID: {form_id} | вопросов: {questions} | {date}\n\n",
        'footer': (
            "💡 <code>{prefix}view [ID]</code> - подробности, "
            "<code>{prefix}export [ID]</code> - ответы"
        ),
        'error': "❌ <b>Ошибка:</b> {error}"
    },
    'options': (
        "📌 <b>Типы вопросов</b>\n\n"
        "1️⃣ <b>Текст</b> - любой ответ\n"
        "2️⃣ <b>Число</b> - только цифры\n"
        "3️⃣ <b>Email</b> - адрес электронной почты\n"
        "4️⃣ <b>Оценка</b> - от 1 до 5\n"
        "5️⃣ <b>Телефон</b> - номер телефона\n\n"
        "Отправьте вопрос, затем выберите тип проверки!"
    ),
    'help': {
        'commands': (
            "📋 <b>Доступные команды</b>\n\n"
            "🆕 <b>Создать форму:</b>\n"
            "<code>new</code> <code>create</code> <code>form</code> <code>start</code> <code>begin</code>\n\n"
            "📊 <b>Выгрузить ответы:</b>\n"
            "<code>export [ID]</code> <code>download [ID]</code> <code>csv [ID]</code> <code>data [ID]</code>\n\n"
            "👀 <b>Посмотреть форму:</b>\n"
            "<code>view [ID]</code> <code>show [ID]</code> <code>info [ID]</code>\n\n"
            "📝 <b>Все мои формы:</b>\n"
            "<code>list</code> <code>forms</code> <code>all</code>\n\n"
            "❌ <b>Отмена:</b>\n"
            "<code>cancel</code> <code>stop</code> <code>quit</code> <code>exit</code>\n\n"
            "❓ <b>Справка:</b>\n"
            "<code>help</code> <code>menu</code> <code>?</code>\n\n"
            "✅ <b>Во время создания формы:</b>\n"
            "<code>done</code> <code>finish</code> <code>complete</code>\n"
            "<code>options</code> <code>types</code> (типы вопросов)"
        ),
        'awaiting_title': (
            "📋 <b>Создание формы - шаг 1</b>\n\n"
            "Отправьте название формы.\n\n"
            "<b>Команды:</b>\n"
            "<code>{prefix}cancel</code> - отменить создание"
        ),
        'collecting_questions': (
            "📝 <b>Создание формы - вопросы</b>\n\n"
            "Отправляйте вопросы обычными сообщениями. Уже добавлено: {count}.\n\n"
            "<b>Команды:</b>\n"
            "<code>{prefix}done</code> - завершить форму\n"
            "<code>{prefix}options</code> - типы вопросов\n"
            "<code>{prefix}cancel</code> - отменить создание"
        ),
        'awaiting_validation_choice': (
            "⚙️ <b>Создание формы - тип проверки</b>\n\n"
            "Выберите тип проверки (1-5).\n\n"
            "<b>Команды:</b>\n"
            "<code>{prefix}cancel</code> - отменить создание"
        )
    }
}


USER_TEXTS = {
    'start': {
        'usage': (
            "📋 <b>Запуск формы</b>\n\n"
            "Укажите ID формы:\n<code>{prefix}start 123</code>\n\n"
            "Или откройте ссылку на форму."
        ),
        'not_found': (
            "❌ <b>Форма не найдена</b>\n\n"
            "Формы с ID «{form_id}» не существует или она удалена."
        ),
        'empty': "⚠️ <b>В форме «{title}» нет вопросов</b>",
        'intro': (
            "📋 <b>Начинаем форму:</b> {title}\n\n"
            "<b>Вопросов:</b> {count}\n"
            "<b>Примерное время:</b> {minutes} мин\n\n"
            "💡 <b>Совет:</b> <code>{prefix}help</code> - список команд\n\n"
        ),
        'error': "❌ <b>Ошибка:</b> {error}"
    },
    'question': {
        'header': "📋 <b>{title}</b>\n\n{bar} ({position}/{total})\n\n<b>{question}</b>",
        'back_hint': "\n\n💡 <i><code>{prefix}back</code> - вернуться к предыдущему вопросу</i>"
    },
    'hints': {
        'rating': "\n\n📊 <i>Ответьте числом от 1 до 5</i>",
        'email': "\n\n✉️ <i>Введите корректный email</i>",
        'phone': "\n\n📞 <i>Введите номер телефона</i>",
        'number': "\n\n🔢 <i>Только цифры</i>",
        'yesno': "\n\n✅ <i>Ответьте Yes или No</i>"
    },
    'examples': {
        'email': "\n\n<b>Пример:</b> user@example.com",
        'phone': "\n\n<b>Пример:</b> +1234567890 или 1234567890",
        'rating': "\n\n<b>Допустимо:</b> 1, 2, 3, 4 или 5",
        'number': "\n\n<b>Пример:</b> 25, 100, 1500"
    },
    'invalid': (
        "❌ <b>Некорректный ответ</b>\n\n"
        "{error}{example}\n\n"
        "💡 <i><code>{prefix}back</code> - предыдущий вопрос, <code>{prefix}skip</code> - пропустить этот</i>"
    ),
    'already_complete': (
        "ℹ️ Вы уже прошли все вопросы. "
        "<code>{prefix}review</code> - посмотреть ответы, <code>{prefix}submit</code> - отправить."
    ),
    'navigation': {
        'at_first': "⚠️ <b>Это первый вопрос</b>\n\nВы в самом начале формы.",
        'going_back': "⬅️ <b>Возвращаемся</b>\n\n",
        'at_last': "⚠️ <b>Это последний вопрос</b>\n\n<code>{prefix}submit</code> - отправить форму.",
        'skipped': "⏭️ <b>Пропущено</b>\n\n"
    },
    'review': {
        'header': "📝 <b>Ваши ответы</b>\n\n<b>Форма:</b> {title}\n\n",
        'item': "{status} <b>В{number}:</b> {question}\n   <b>О:</b> {answer}\n\n",
        'not_answered': "[Нет ответа]",
        'skipped': "[Пропущено]",
        'footer': "<b>Прогресс:</b> {answered}/{total} отвечено",
        'complete': "\n\n✅ <b>Все вопросы пройдены!</b> Можно отправлять: <code>{prefix}submit</code>"
    },
    'progress': (
        "📊 <b>Прогресс</b>\n\n"
        "{bar}\n\n"
        "<b>Текущий:</b> вопрос {current} из {total}\n"
        "<b>Пройдено:</b> {percentage}%\n"
        "<b>Отвечено:</b> {answered}/{total}\n"
        "<b>Форма:</b> {title}"
    ),
    'complete': (
        "🎉 <b>Форма заполнена!</b>\n\n"
        "<b>{title}</b>\n\n"
        "✅ <b>Отвечено:</b> {answered}/{total}\n"
        "⏱️ <b>Затрачено времени:</b> {elapsed}\n\n"
        "<b>Что дальше?</b>\n"
        "• <code>{prefix}review</code> - проверить ответы\n"
        "• <code>{prefix}submit</code> - отправить форму\n"
        "• <code>{prefix}restart</code> - начать заново"
    ),
    'submit': {
        'nothing': "⚠️ <b>Нельзя отправить</b>\n\nВы еще не ответили ни на один вопрос.",
        'success': (
            "✅ <b>Форма отправлена!</b>\n\n"
            "<b>Форма:</b> {title}\n"
            "<b>Отвечено:</b> {answered}/{total}\n"
            "<b>Время:</b> {elapsed}\n\n"
            "Спасибо за ответы! 🙏"
        ),
        'error': (
            "❌ <b>Не удалось отправить</b>\n\n"
            "Ошибка: {error}\n\n"
            "Попробуйте еще раз: <code>{prefix}submit</code>"
        )
    },
    'cancel': {
        'done': "❌ <b>Форма отменена</b>\n\nВаши ответы удалены.",
        'nothing': "ℹ️ <b>Нечего отменять</b>\n\nВы сейчас не заполняете форму."
    },
    'restart': {
        'nothing': "⚠️ <b>Нечего начинать заново</b>\n\nНачните форму: <code>{prefix}start [ID]</code>",
        'prefix': "🔄 <b>Начинаем заново</b>\n\n"
    },
    'not_in_form': "⚠️ <b>Вы не заполняете форму</b>\n\nНачните с <code>{prefix}start [ID]</code>",
    'help': {
        'commands': (
            "🤖 <b>Команды заполнения формы</b>\n\n"
            "<b>Начать:</b>\n"
            "<code>start [ID]</code> <code>form [ID]</code> <code>fill [ID]</code>\n\n"
            "<b>Навигация:</b>\n"
            "<code>back</code> <code>prev</code> - предыдущий вопрос\n"
            "<code>next</code> <code>skip</code> - пропустить вопрос\n\n"
            "<b>Просмотр:</b>\n"
            "<code>review</code> <code>answers</code> - ваши ответы\n"
            "<code>progress</code> <code>status</code> - прогресс\n\n"
            "<b>Завершение:</b>\n"
            "<code>submit</code> <code>done</code> <code>finish</code> - отправить форму\n\n"
            "<b>Управление:</b>\n"
            "<code>cancel</code> <code>quit</code> - отменить форму\n"
            "<code>restart</code> <code>reset</code> - начать заново\n"
            "<code>help</code> <code>?</code> - эта справка\n\n"
            "<b>Префиксы:</b> любые из <code>/</code> <code>.</code> <code>#</code> <code>!</code> "
            "<code>&gt;</code> <code>:</code> <code>-</code> <code>--</code>"
        ),
        'answering': "📍 Сейчас: вопрос {current} из {total} формы «{title}». Просто отправьте ответ.\n\n",
        'complete': "📍 Все вопросы формы «{title}» пройдены. Проверьте ответы и отправьте форму.\n\n",
        'no_form': "📍 Вы не заполняете форму. Откройте ссылку на форму или отправьте <code>{prefix}start [ID]</code>.\n\n"
    },
    'time': {
        'minutes': "{minutes}м {seconds}с",
        'seconds': "{seconds}с"
    }
}
