"""
Модуль для загрузки и валидации конфигурации приложения.

Обеспечивает загрузку параметров импорта из config/settings.ini
с валидацией и возможностью переопределения из командной строки.
"""

import codecs
import configparser
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Dict, Optional


@dataclass
class ImportConfig:
    """Конфигурация параметров импорта."""
    file: Path = Path("posts.csv")
    output_dir: Path = Path("_posts")
    no_front_matter: bool = False
    collect_errors: bool = False
    encoding: str = "utf-8"


@dataclass
class ColumnsConfig:
    """Номера колонок CSV для каждого поля поста (с нуля)."""
    id: int = 0
    title: int = 1
    image: int = 2
    permalink: int = 3
    published: int = 4
    user_id: int = 5
    created_at: int = 6
    published_at: int = 6
    updated_at: int = 7

    def as_dict(self) -> Dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def shared_columns(self) -> Dict[int, list]:
        """Возвращает колонки, из которых читается больше одного поля."""
        by_index: Dict[int, list] = {}
        for name, index in self.as_dict().items():
            by_index.setdefault(index, []).append(name)
        return {index: names for index, names in by_index.items() if len(names) > 1}


@dataclass
class LoggingConfig:
    """Конфигурация логирования."""
    level: str = "INFO"
    log_file: Optional[Path] = None
    max_log_size: int = 10
    backup_count: int = 5


@dataclass
class Config:
    """Основная конфигурация приложения."""
    importer: ImportConfig = field(default_factory=ImportConfig)
    columns: ColumnsConfig = field(default_factory=ColumnsConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigLoader:
    """Класс для загрузки и валидации конфигурации."""

    def __init__(self, config_path: Optional[str] = None):
        """
        Инициализация загрузчика конфигурации.

        Args:
            config_path: Путь к файлу конфигурации (None - значения по умолчанию)
        """
        self.config_path = Path(config_path) if config_path else None
        self._config: Optional[Config] = None

    def load_config(self) -> Config:
        """
        Загружает конфигурацию из файла.

        Returns:
            Config: Объект конфигурации

        Raises:
            FileNotFoundError: Если файл конфигурации не найден
            ValueError: Если конфигурация некорректна
        """
        if self.config_path is None:
            self._config = Config()
            self._validate_config()
            return self._config

        if not self.config_path.exists():
            raise FileNotFoundError(f"Файл конфигурации не найден: {self.config_path}")

        config_parser = configparser.ConfigParser()

        try:
            config_parser.read(self.config_path, encoding='utf-8')

            self._config = Config(
                importer=self._load_import_config(config_parser),
                columns=self._load_columns_config(config_parser),
                logging=self._load_logging_config(config_parser)
            )

            self._validate_config()

            return self._config

        except (configparser.Error, ValueError) as e:
            raise ValueError(f"Ошибка загрузки конфигурации: {e}")

    def _load_import_config(self, parser: configparser.ConfigParser) -> ImportConfig:
        """Загружает параметры импорта."""
        section = 'import'
        defaults = ImportConfig()

        if not parser.has_section(section):
            return defaults

        return ImportConfig(
            file=Path(parser.get(section, 'file', fallback=str(defaults.file))),
            output_dir=Path(parser.get(section, 'output_dir', fallback=str(defaults.output_dir))),
            no_front_matter=parser.getboolean(section, 'no_front_matter', fallback=defaults.no_front_matter),
            collect_errors=parser.getboolean(section, 'collect_errors', fallback=defaults.collect_errors),
            encoding=parser.get(section, 'encoding', fallback=defaults.encoding)
        )

    def _load_columns_config(self, parser: configparser.ConfigParser) -> ColumnsConfig:
        """Загружает раскладку колонок CSV."""
        section = 'columns'
        defaults = ColumnsConfig()

        if not parser.has_section(section):
            return defaults

        unknown = set(parser.options(section)) - set(defaults.as_dict())
        if unknown:
            raise ValueError(f"Неизвестные поля в секции '{section}': {', '.join(sorted(unknown))}")

        values = {
            name: parser.getint(section, name, fallback=default)
            for name, default in defaults.as_dict().items()
        }
        return ColumnsConfig(**values)

    def _load_logging_config(self, parser: configparser.ConfigParser) -> LoggingConfig:
        """Загружает конфигурацию логирования."""
        section = 'logging'

        if not parser.has_section(section):
            return LoggingConfig()

        log_file = parser.get(section, 'log_file', fallback='').strip()

        return LoggingConfig(
            level=parser.get(section, 'level', fallback='INFO'),
            log_file=Path(log_file) if log_file else None,
            max_log_size=parser.getint(section, 'max_log_size', fallback=10),
            backup_count=parser.getint(section, 'backup_count', fallback=5)
        )

    def _validate_config(self) -> None:
        """Валидирует загруженную конфигурацию."""
        if not self._config:
            raise ValueError("Конфигурация не загружена")

        try:
            codecs.lookup(self._config.importer.encoding)
        except LookupError:
            raise ValueError(f"Неизвестная кодировка: {self._config.importer.encoding}")

        for name, index in self._config.columns.as_dict().items():
            if index < 0:
                raise ValueError(f"Номер колонки для '{name}' не может быть отрицательным: {index}")

        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if self._config.logging.level.upper() not in valid_levels:
            raise ValueError(f"Некорректный уровень логирования: {self._config.logging.level}")

        if self._config.logging.max_log_size <= 0:
            raise ValueError("Размер файла лога должен быть больше 0")

        if self._config.logging.backup_count < 0:
            raise ValueError("Количество архивных логов не может быть отрицательным")

    def get_config(self) -> Config:
        """
        Возвращает загруженную конфигурацию.

        Raises:
            ValueError: Если конфигурация не загружена
        """
        if self._config is None:
            raise ValueError("Конфигурация не загружена. Вызовите load_config() сначала.")
        return self._config


def load_config(config_path: Optional[str] = None) -> Config:
    """
    Удобная функция для быстрой загрузки конфигурации.

    Args:
        config_path: Путь к файлу конфигурации

    Returns:
        Config: Объект конфигурации
    """
    loader = ConfigLoader(config_path)
    return loader.load_config()


def apply_overrides(config: Config, file: Optional[str] = None, output_dir: Optional[str] = None,
                    no_front_matter: Optional[bool] = None,
                    collect_errors: Optional[bool] = None) -> Config:
    """
    Применяет параметры командной строки поверх конфигурации.

    Значения None не меняют соответствующую настройку.

    Returns:
        Config: Новый объект конфигурации
    """
    changes = {}
    if file is not None:
        changes['file'] = Path(file)
    if output_dir is not None:
        changes['output_dir'] = Path(output_dir)
    if no_front_matter is not None:
        changes['no_front_matter'] = no_front_matter
    if collect_errors is not None:
        changes['collect_errors'] = collect_errors

    if not changes:
        return config
    return replace(config, importer=replace(config.importer, **changes))
