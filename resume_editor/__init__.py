"""
Пакет Resume Editor
===================

Ядро данных для редактора резюме: модель стилизованных фрагментов текста,
структура резюме, импорт старых записей, локальное хранение.

Этот пакет предоставляет:
    - Модель текста из упорядоченных фрагментов (runs) с независимыми стилями
    - Применение стиля к произвольному диапазону символов (split/merge)
    - Поля с выравниванием и типом блока (текст, маркированный/нумерованный список)
    - Миграцию старых plain-text модулей в структурированный формат
    - JSON-хранилище резюме с квотой и атомарной записью
    - Проверку пароля сайта и cookie авторизации (Argon2)

Пример базового использования:
    >>> from resume_editor import ContentElement, StyleFacet, get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> element = ContentElement.from_text("Hello World")
    >>> element.apply_style((2, 5), StyleFacet.BOLD, True)
    >>> [run.text for run in element.segments]
    ['He', 'llo', ' World']
    >>> logger.info("Runs: %d", len(element.segments))

Управление конфигурацией:
    >>> import os
    >>> os.environ['RESUME_EDITOR_LOG_LEVEL'] = 'DEBUG'
    >>>
    >>> from resume_editor import load_config
    >>>
    >>> config = load_config()
    >>> print(config['storage_quota_bytes'])
    5242880

Лицензия: MIT
Python: 3.11+
"""

import json
import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

# =============================================================================
# МЕТАДАННЫЕ ВЕРСИИ
# =============================================================================

__version__ = "0.1.0"
__author__ = "Resume Editor Development Team"
__description__ = "Styled-text segment engine and data core for a resume editor"
__license__ = "MIT"
__python_requires__ = ">=3.11"

# Компоненты семантической версии
VERSION_MAJOR = 0
VERSION_MINOR = 1
VERSION_PATCH = 0

# =============================================================================
# ПРОВЕРКА ВЕРСИИ PYTHON
# =============================================================================

if sys.version_info < (3, 11):
    raise RuntimeError(
        f"Resume Editor требует Python 3.11 или выше. "
        f"Текущая версия: {sys.version_info.major}."
        f"{sys.version_info.minor}.{sys.version_info.micro}"
    )

# =============================================================================
# КОНФИГУРАЦИЯ ЛОГИРОВАНИЯ
# =============================================================================

LOG_LEVEL_ENV = "RESUME_EDITOR_LOG_LEVEL"
LOG_FILE_ENV = "RESUME_EDITOR_LOG_FILE"


def _setup_logging() -> None:
    """
    Инициализировать общепакетную конфигурацию логирования.

    Настраивает логгер пакета ``resume_editor`` с:
    - Консольным обработчиком (stderr) для WARNING и выше
    - Ротирующим файловым обработчиком для всех уровней, если задана
      переменная окружения RESUME_EDITOR_LOG_FILE

    Уровень логирования задаётся переменной окружения
    RESUME_EDITOR_LOG_LEVEL (DEBUG, INFO, WARNING, ERROR, CRITICAL).

    Функция идемпотентна - повторные вызовы не имеют дополнительного эффекта.
    """
    log_level_str = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()

    log_level_map = {
        "DEBUG": logging.DEBUG,
        "INFO": logging.INFO,
        "WARNING": logging.WARNING,
        "ERROR": logging.ERROR,
        "CRITICAL": logging.CRITICAL,
    }
    log_level = log_level_map.get(log_level_str, logging.INFO)

    package_logger = logging.getLogger("resume_editor")
    if package_logger.handlers:
        return

    package_logger.setLevel(log_level)

    formatter = logging.Formatter(
        fmt=("[%(asctime)s] %(levelname)-8s " "[%(name)s.%(funcName)s:%(lineno)d] %(message)s"),
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Консольный обработчик (stderr) - WARNING и выше
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.WARNING)
    console_handler.setFormatter(formatter)
    package_logger.addHandler(console_handler)

    log_file = os.environ.get(LOG_FILE_ENV)
    if log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_path,
                maxBytes=10 * 1024 * 1024,  # 10 МБ
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(log_level)
            file_handler.setFormatter(formatter)
            package_logger.addHandler(file_handler)
        except OSError as e:
            package_logger.warning(
                "Не удалось инициализировать файловое логирование: %s. "
                "Используется только консоль.",
                e,
            )


def get_logger(module_name: str) -> logging.Logger:
    """
    Получить логгер в пространстве имён ``resume_editor``.

    Аргументы:
        module_name: Имя модуля, обычно ``__name__``.

    Возвращает:
        Экземпляр logging.Logger с именем ``resume_editor.<module_name>``
        (имена внутри пакета не меняются).

    Пример:
        >>> get_logger("plugins.export").name
        'resume_editor.plugins.export'
        >>> get_logger("resume_editor.model.run").name
        'resume_editor.model.run'
    """
    if not module_name.startswith("resume_editor"):
        if module_name == "__main__":
            full_name = "resume_editor.main"
        else:
            clean_name = module_name.lstrip(".")
            full_name = f"resume_editor.{clean_name}"
    else:
        full_name = module_name

    return logging.getLogger(full_name)


# =============================================================================
# УПРАВЛЕНИЕ КОНФИГУРАЦИЕЙ
# =============================================================================

_DEFAULT_CONFIG: Dict[str, Any] = {
    "storage_path": "resumes.json",
    "storage_quota_bytes": 5 * 1024 * 1024,
    "site_password_env": "SITE_PASSWORD",
}


def load_config(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Загрузить конфигурацию из config.json или вернуть настройки по умолчанию.

    Ключи конфигурации:
        - storage_path: str - Путь к JSON-файлу хранилища резюме
        - storage_quota_bytes: int - Максимальный размер файла хранилища
        - site_password_env: str - Имя переменной окружения с паролем сайта

    Аргументы:
        config_path: Путь к файлу. Если None, ищет 'config.json' в текущем каталоге.

    Возвращает:
        Словарь со всеми ключами по умолчанию; пользовательские значения
        переопределяют значения по умолчанию. Ошибки чтения и разбора
        не пробрасываются: пишется предупреждение и используются умолчания.
    """
    logger = get_logger(__name__)

    if config_path is None:
        config_path = Path("config.json")

    config = _DEFAULT_CONFIG.copy()

    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                user_config = json.load(f)

            if not isinstance(user_config, dict):
                raise ValueError(
                    f"Файл конфигурации должен содержать JSON-объект, "
                    f"получен {type(user_config).__name__}"
                )

            config.update(user_config)

            logger.info("Конфигурация загружена из %s", config_path)
            logger.debug("Конфигурация: %s", config)

        except json.JSONDecodeError as e:
            logger.warning(
                "Не удалось разобрать %s: недопустимый JSON в строке %d, столбце %d. "
                "Используется конфигурация по умолчанию.",
                config_path,
                e.lineno,
                e.colno,
            )
        except OSError as e:
            logger.warning(
                "Не удалось прочитать %s: %s. Используется конфигурация по умолчанию.",
                config_path,
                e,
            )
        except ValueError as e:
            logger.warning(
                "Недопустимый формат конфигурации: %s. Используется конфигурация по умолчанию.",
                e,
            )
    else:
        logger.info(
            "Файл конфигурации %s не найден. Используется конфигурация по умолчанию.",
            config_path,
        )

    return config


def check_dependencies() -> Dict[str, bool]:
    """
    Проверить доступность сторонних зависимостей.

    Возвращает:
        Словарь: имя пакета -> доступен ли он. Исключения не выбрасываются.
    """
    dependencies: Dict[str, bool] = {}

    try:
        import argon2  # noqa: F401

        dependencies["argon2-cffi"] = True
    except ImportError:
        dependencies["argon2-cffi"] = False

    return dependencies


# =============================================================================
# ИМПОРТЫ СЛОЯ МОДЕЛИ
# =============================================================================

# Импорты размещены после утилит, чтобы логирование было настроено первым.

from .model.enums import Alignment, BlockType, StyleFacet  # noqa: E402
from .model.exceptions import (  # noqa: E402
    InvalidFacetError,
    InvalidRangeError,
    InvalidSequenceError,
    SegmentError,
)
from .model.style import UNSET, TextStyle  # noqa: E402
from .model.run import Run  # noqa: E402
from .model.segments import (  # noqa: E402
    SelectionRange,
    apply_style,
    merge_adjacent,
    query_style_at,
    query_style_in,
    replace_all,
    text_length,
    text_of,
    validate_sequence,
)
from .model.element import ContentElement  # noqa: E402
from .model.resume import ContentRow, ResumeData, ResumeModule  # noqa: E402

# =============================================================================
# ОПРЕДЕЛЕНИЕ ПУБЛИЧНОГО API
# =============================================================================

__all__ = [
    # Метаданные версии
    "__version__",
    "__author__",
    "__description__",
    "__license__",
    "__python_requires__",
    "VERSION_MAJOR",
    "VERSION_MINOR",
    "VERSION_PATCH",
    # Утилиты
    "get_logger",
    "load_config",
    "check_dependencies",
    # Модель
    "Alignment",
    "BlockType",
    "StyleFacet",
    "TextStyle",
    "UNSET",
    "Run",
    "SelectionRange",
    "ContentElement",
    "ContentRow",
    "ResumeModule",
    "ResumeData",
    # Движок фрагментов
    "apply_style",
    "query_style_at",
    "query_style_in",
    "replace_all",
    "merge_adjacent",
    "text_of",
    "text_length",
    "validate_sequence",
    # Исключения
    "SegmentError",
    "InvalidRangeError",
    "InvalidFacetError",
    "InvalidSequenceError",
]

# =============================================================================
# ИНИЦИАЛИЗАЦИЯ ПАКЕТА
# =============================================================================

_setup_logging()

_logger = get_logger(__name__)
_logger.debug("Resume Editor v%s инициализирован (Python %s)", __version__, sys.version)
