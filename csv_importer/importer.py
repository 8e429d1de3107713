"""
Модуль бизнес-логики импорта постов.

Читает CSV-файл построчно, строит посты и записывает их в каталог
постов, подсчитывая результат.
"""

import csv
from datetime import datetime
from typing import Dict, List, Optional

try:
    from .config_loader import Config
    from .logger import PostImporterLogger
    from .post import CSVPost, PostDataError
    from .post_writer import PostWriter, PostWriteError
except ImportError:
    from config_loader import Config
    from logger import PostImporterLogger
    from post import CSVPost, PostDataError
    from post_writer import PostWriter, PostWriteError


HEADER_SENTINEL = "title"


class ImporterError(Exception):
    """Базовое исключение для ошибок импорта."""
    pass


class SourceNotFoundError(ImporterError):
    """Исключение для отсутствующего CSV-файла."""

    def __init__(self, path):
        super().__init__(f"Не удалось найти файл '{path}'. Импорт прерван.")
        self.path = path


class ImportStats:
    """Класс для хранения статистики импорта."""

    def __init__(self):
        self.total_rows = 0
        self.written_posts = 0
        self.skipped_rows = 0
        self.failed_rows = 0
        self.start_time: Optional[datetime] = None
        self.end_time: Optional[datetime] = None
        self.errors: List[Dict] = []

    def add_error(self, row_number: int, error: Exception):
        """Добавляет ошибку в список."""
        self.errors.append({
            'row': row_number,
            'error': str(error),
            'timestamp': datetime.now()
        })

    def get_duration(self) -> Optional[float]:
        """Возвращает продолжительность импорта в секундах."""
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None

    def to_dict(self) -> Dict:
        return {
            'total_rows': self.total_rows,
            'written_posts': self.written_posts,
            'skipped_rows': self.skipped_rows,
            'failed_rows': self.failed_rows,
            'start_time': self.start_time.isoformat() if self.start_time else None,
            'end_time': self.end_time.isoformat() if self.end_time else None,
            'duration_seconds': self.get_duration(),
            'error_count': len(self.errors)
        }


class CSVImporter:
    """Основной класс для импорта постов из CSV."""

    def __init__(self, config: Config, logger: PostImporterLogger):
        """
        Инициализация импорта.

        Args:
            config: Конфигурация приложения
            logger: Логгер для записи операций
        """
        self.config = config
        self.logger = logger
        self.writer = PostWriter(
            config.importer.output_dir,
            logger,
            no_front_matter=config.importer.no_front_matter,
            encoding=config.importer.encoding
        )
        self.stats = ImportStats()

    @staticmethod
    def is_header(row: List[str]) -> bool:
        return bool(row) and row[0] == HEADER_SENTINEL

    def check_source(self) -> None:
        """
        Проверяет наличие CSV-файла.

        Raises:
            SourceNotFoundError: Если файл не найден
        """
        source = self.config.importer.file
        if not source.is_file():
            raise SourceNotFoundError(source)

    def _warn_shared_columns(self) -> None:
        for index, names in self.config.columns.shared_columns().items():
            self.logger.log_warning(
                f"Поля {', '.join(names)} читаются из одной колонки {index}"
            )

    def import_row(self, row: List[str], row_number: int) -> bool:
        """
        Импортирует одну строку CSV.

        Args:
            row: Значения колонок
            row_number: Номер строки (с единицы)

        Returns:
            bool: True если пост записан, False если строка пропущена

        Raises:
            PostDataError: Если данные строки некорректны
            PostWriteError: Если файл поста не удалось записать
        """
        if self.is_header(row):
            self.stats.skipped_rows += 1
            self.logger.log_row_skipped(row_number, "строка заголовка")
            return False

        post = CSVPost(row, self.config.columns)
        target_path = self.writer.write_post(post)
        self.stats.written_posts += 1
        self.logger.log_post_written(row_number, target_path)
        return True

    def process(self) -> ImportStats:
        """
        Импортирует все строки CSV-файла.

        Returns:
            ImportStats: Статистика импорта

        Raises:
            SourceNotFoundError: Если CSV-файл не найден
            PostDataError: Если строка некорректна (режим без сбора ошибок)
            PostWriteError: Если пост не удалось записать (режим без сбора ошибок)
        """
        self.stats.start_time = datetime.now()
        self.check_source()

        source = self.config.importer.file
        self.logger.log_import_start(source, self.writer.output_dir)
        self._warn_shared_columns()
        self.writer.ensure_output_dir()

        with open(source, 'r', encoding=self.config.importer.encoding, newline='') as f:
            for row_number, row in enumerate(csv.reader(f), start=1):
                self.stats.total_rows += 1
                try:
                    self.import_row(row, row_number)
                except (PostDataError, PostWriteError) as e:
                    self.logger.log_row_error(row_number, e)
                    if not self.config.importer.collect_errors:
                        self.stats.end_time = datetime.now()
                        self.logger.log_critical_error("Импорт прерван", e)
                        raise
                    self.stats.failed_rows += 1
                    self.stats.add_error(row_number, e)

        self.stats.end_time = datetime.now()
        self.logger.log_import_end(
            written_posts=self.stats.written_posts,
            skipped_rows=self.stats.skipped_rows,
            failed_rows=self.stats.failed_rows
        )
        return self.stats


def create_importer(config: Config, logger: PostImporterLogger) -> CSVImporter:
    """Удобная функция для создания объекта импорта."""
    return CSVImporter(config, logger)
