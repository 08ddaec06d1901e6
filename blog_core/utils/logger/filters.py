"""Маскирование секретов в логах деплоя.

В команды rsync/ssh попадает только путь к ключу, но содержимое ключа
или токен могут оказаться в сообщении об ошибке или в .env, выведенном
в debug. Такие фрагменты заменяются на REDACTED.
"""

import logging
import re
from typing import Iterable, Pattern

REDACTED: str = "***REDACTED***"

SENSITIVE_PATTERNS: tuple[Pattern[str], ...] = (
    # PEM: RSA, EC, OPENSSH, ENCRYPTED ...
    re.compile(
        r"-----BEGIN [A-Z ]*PRIVATE KEY-----.*?-----END [A-Z ]*PRIVATE KEY-----",
        re.DOTALL,
    ),
    re.compile(r"AKIA[0-9A-Z]{16}"),
    re.compile(r"gh[pousr]_[0-9A-Za-z]{36,}"),
    re.compile(r"(?i)bearer\s+[a-zA-Z0-9_.-]{20,}"),
    re.compile(r"(?i)(password|passwd)=\S+"),
)


def redact(text: str, patterns: Iterable[Pattern[str]] = SENSITIVE_PATTERNS) -> str:
    """Заменяет все совпадения паттернов на REDACTED."""
    for pattern in patterns:
        text = pattern.sub(REDACTED, text)
    return text


class SensitiveDataFilter(logging.Filter):
    """Фильтр хендлера: чистит record.msg и строковые record.args.

    Записи не отбрасываются. Путь к ключу (`-i ~/.ssh/id_ed25519`)
    секретом не считается и остаётся в логе.
    """

    def __init__(self, patterns: Iterable[Pattern[str]] = SENSITIVE_PATTERNS):
        super().__init__()
        self.patterns = tuple(patterns)

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = redact(record.msg, self.patterns)

        if isinstance(record.args, tuple):
            record.args = tuple(
                redact(arg, self.patterns) if isinstance(arg, str) else arg
                for arg in record.args
            )
        elif isinstance(record.args, dict):
            record.args = {
                key: redact(value, self.patterns) if isinstance(value, str) else value
                for key, value in record.args.items()
            }

        return True
