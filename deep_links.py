#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Ссылки для запуска формы в боте заполнения
"""

import re
from typing import Optional

from dialog_config import SETTINGS


LEGACY_TOKEN_PATTERN = re.compile(
    r'^(?:' + '|'.join(SETTINGS['legacy_start_tokens']) + r')_(\S+)$'
)


def build_deep_link(bot_username: str, form_id: str) -> str:
    """Ссылка, которая отправит боту /start START_<id>"""
    return SETTINGS['deep_link_base'].format(
        username=bot_username.lstrip('@'),
        payload=f"{SETTINGS['legacy_start_tokens'][0]}_{form_id}"
    )


def parse_start_token(text: str) -> Optional[str]:
    """ID формы из START_<id> или FILL_<id>, иначе None"""
    match = LEGACY_TOKEN_PATTERN.match(text.strip())
    if match:
        return match.group(1)
    return None
