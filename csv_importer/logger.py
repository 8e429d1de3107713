"""
Модуль для настройки и управления логированием приложения.

Обеспечивает централизованную настройку логирования с ротацией файлов,
цветным выводом в консоль и различными уровнями детализации.
"""

import copy
import logging
import logging.handlers
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

try:
    from .config_loader import LoggingConfig
except ImportError:
    from config_loader import LoggingConfig


LOGGER_NAME = 'csv_importer'
LOG_FORMAT = '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class ColoredFormatter(logging.Formatter):
    """Форматтер с цветным выводом для консоли."""

    # Цветовые коды ANSI
    COLORS = {
        'DEBUG': '\033[36m',      # Cyan
        'INFO': '\033[32m',       # Green
        'WARNING': '\033[33m',    # Yellow
        'ERROR': '\033[31m',      # Red
        'CRITICAL': '\033[35m',   # Magenta
        'RESET': '\033[0m'        # Reset
    }

    def format(self, record):
        """Форматирует запись лога с цветом."""
        # Копия, чтобы цвет не попал в файловый обработчик
        record = copy.copy(record)
        if record.levelname in self.COLORS:
            record.levelname = f"{self.COLORS[record.levelname]}{record.levelname}{self.COLORS['RESET']}"

        return super().format(record)


class PostImporterLogger:
    """Класс для управления логированием импорта постов."""

    def __init__(self, config: LoggingConfig):
        """
        Инициализация логгера.

        Args:
            config: Конфигурация логирования
        """
        self.config = config
        self.logger: Optional[logging.Logger] = None
        self._setup_logger()

    def _setup_logger(self) -> None:
        """Настраивает логгер с консольным и (опционально) файловым выводом."""
        level = getattr(logging, self.config.level.upper())

        self.logger = logging.getLogger(LOGGER_NAME)
        self.logger.setLevel(level)

        for handler in self.logger.handlers[:]:
            handler.close()
            self.logger.removeHandler(handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(ColoredFormatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        console_handler.setLevel(level)
        self.logger.addHandler(console_handler)

        if self.config.log_file:
            log_file_path = Path(self.config.log_file)
            log_file_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_file_path,
                maxBytes=self.config.max_log_size * 1024 * 1024,  # MB -> байты
                backupCount=self.config.backup_count,
                encoding='utf-8'
            )
            file_handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
            file_handler.setLevel(level)
            self.logger.addHandler(file_handler)

        # Предотвращаем дублирование сообщений
        self.logger.propagate = False

    def get_logger(self) -> logging.Logger:
        """
        Возвращает настроенный логгер.

        Returns:
            logging.Logger: Настроенный логгер
        """
        if self.logger is None:
            raise RuntimeError("Логгер не инициализирован")
        return self.logger

    def log_import_start(self, source: Path, output_dir: Path) -> None:
        """
        Логирует начало импорта.

        Args:
            source: CSV-файл с постами
            output_dir: Каталог для файлов постов
        """
        self.logger.info(f"🚀 Начало импорта постов из {source}")
        self.logger.info(f"📁 Каталог постов: {output_dir}")
        self.logger.info(f"⏰ Время начала: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}")

    def log_import_end(self, written_posts: int, skipped_rows: int = 0, failed_rows: int = 0) -> None:
        """
        Логирует завершение импорта.

        Args:
            written_posts: Записано постов
            skipped_rows: Пропущено строк заголовка
            failed_rows: Строк с ошибками
        """
        self.logger.info(f"✅ Создано {written_posts} постов!")
        if skipped_rows:
            self.logger.info(f"   • Пропущено строк заголовка: {skipped_rows}")
        if failed_rows:
            self.logger.warning(f"   • Строк с ошибками: {failed_rows}")

    def log_post_written(self, row_number: int, target_path: Path) -> None:
        self.logger.info(f"📝 Строка {row_number}: пост записан в {target_path}")

    def log_row_skipped(self, row_number: int, reason: str) -> None:
        self.logger.debug(f"⏭️ Строка {row_number} пропущена: {reason}")

    def log_row_error(self, row_number: int, error: Exception) -> None:
        """
        Логирует ошибку при обработке строки CSV.

        Args:
            row_number: Номер строки (с единицы)
            error: Исключение
        """
        self.logger.error(f"❌ Ошибка в строке {row_number}: {error}")

    def log_file_operation(self, operation: str, file_path: Path, success: bool = True) -> None:
        """
        Логирует операцию с файлом.

        Args:
            operation: Тип операции (mkdir, write)
            file_path: Путь к файлу
            success: Успешность операции
        """
        status = "✅" if success else "❌"
        self.logger.debug(f"{status} {operation.upper()}: {file_path}")

    def log_config_loaded(self, config_path: Optional[str]) -> None:
        source = config_path or "значения по умолчанию"
        self.logger.info(f"⚙️ Конфигурация загружена: {source}")

    def log_system_info(self, info: str) -> None:
        self.logger.info(f"ℹ️ {info}")

    def log_warning(self, message: str) -> None:
        self.logger.warning(f"⚠️ {message}")

    def log_critical_error(self, message: str, error: Exception = None) -> None:
        """
        Логирует критическую ошибку.

        Args:
            message: Сообщение об ошибке
            error: Исключение (опционально)
        """
        if error:
            self.logger.critical(f"💥 {message}: {error}")
        else:
            self.logger.critical(f"💥 {message}")


def setup_logger(config: LoggingConfig) -> logging.Logger:
    """
    Удобная функция для быстрой настройки логгера.

    Args:
        config: Конфигурация логирования

    Returns:
        logging.Logger: Настроенный логгер
    """
    importer_logger = PostImporterLogger(config)
    return importer_logger.get_logger()


def get_logger(name: str = LOGGER_NAME) -> logging.Logger:
    """Получает логгер по имени."""
    return logging.getLogger(name)
