"""Вспомогательные утилиты пакета.

Модули:
    logger
        Семантическое логирование с контекстом и маскированием секретов.
"""
