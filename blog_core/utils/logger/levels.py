"""Уровень TRACE (5) для командных строк и сырых метаданных статей.

BlogLogger пишет на этом уровне через logger.log(TRACE, ...), поэтому
достаточно зарегистрировать имя уровня.
"""

import logging

TRACE: int = 5


def install_trace_level() -> None:
    """Регистрирует имя TRACE, чтобы levelname и getLevelName("TRACE") работали."""
    if logging.getLevelName(TRACE) != "TRACE":
        logging.addLevelName(TRACE, "TRACE")
