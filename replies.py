#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Ответ бота на одно входящее сообщение
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Attachment:
    """Файл, отправляемый документом"""
    filename: str
    content: bytes


@dataclass
class Reply:
    """Одно исходящее сообщение в HTML-разметке"""
    text: str
    attachment: Optional[Attachment] = None
