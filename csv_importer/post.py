"""
Модуль построения записи поста из строки CSV.

Содержит класс CSVPost, проверку обязательных полей, разбор даты
публикации и вычисление имени файла поста.
"""

from datetime import datetime
from pathlib import PurePosixPath
from typing import Optional, Sequence

from dateutil import parser as date_parser
from dateutil import tz

try:
    from .config_loader import ColumnsConfig
except ImportError:
    from config_loader import ColumnsConfig


MARKUP = "markdown"

DEFAULT_COLUMNS = ColumnsConfig()

# Поле -> текст ошибки при его отсутствии
REQUIRED_FIELDS = (
    ('title', "Заголовок поста (title) отсутствует в колонке {column}."),
    ('permalink', "Постоянная ссылка поста (permalink) отсутствует в колонке {column}."),
    ('published', "Признак публикации поста (published) отсутствует в колонке {column}."),
    ('published_at', "Дата публикации поста (published_at) отсутствует в колонке {column}."),
)


class PostDataError(Exception):
    """Базовое исключение для ошибок данных строки CSV."""
    pass


class MissingDataError(PostDataError):
    """Исключение для отсутствующего обязательного поля."""

    def __init__(self, message: str, field_name: str):
        super().__init__(message)
        self.field_name = field_name


class PublishDateError(PostDataError):
    """Исключение для нераспознанной даты публикации."""

    def __init__(self, raw_value: str, error: Exception):
        super().__init__(f"Не удалось разобрать дату публикации '{raw_value}': {error}")
        self.raw_value = raw_value


def parse_publish_date(raw_value: str) -> datetime:
    """
    Разбирает дату публикации из текста.

    Дата без часового пояса считается датой в UTC.

    Args:
        raw_value: Текстовое представление даты

    Returns:
        datetime: Дата и время публикации

    Raises:
        PublishDateError: Если текст не удалось разобрать
    """
    try:
        parsed = date_parser.parse(raw_value)
    except (ValueError, OverflowError) as e:
        raise PublishDateError(raw_value, e)

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz.UTC)
    return parsed


def permalink_stem(permalink: str) -> str:
    """Возвращает имя из постоянной ссылки без пути и последнего расширения."""
    return PurePosixPath(permalink).stem


def derive_filename(published_at: datetime, permalink: str, markup: str = MARKUP) -> str:
    """
    Вычисляет имя файла поста в формате YYYY-MM-DD-<stem>.<markup>.

    Args:
        published_at: Дата публикации
        permalink: Постоянная ссылка поста
        markup: Формат разметки (расширение файла)

    Returns:
        str: Имя файла поста
    """
    return f"{published_at.strftime('%Y-%m-%d')}-{permalink_stem(permalink)}.{markup}"


def _cell(row: Sequence[str], index: int) -> Optional[str]:
    """Значение ячейки или None, если ячейки нет или она пустая."""
    if index >= len(row):
        return None
    value = row[index]
    if value is None or value == '':
        return None
    return value


class CSVPost:
    """Пост, построенный из одной строки CSV."""

    def __init__(self, row: Sequence[str], columns: ColumnsConfig = DEFAULT_COLUMNS):
        """
        Создает пост из строки CSV.

        Args:
            row: Значения колонок строки
            columns: Номера колонок для полей поста

        Raises:
            MissingDataError: Если отсутствует обязательное поле
            PublishDateError: Если дата публикации не разбирается
        """
        positions = columns.as_dict()

        for field_name, message in REQUIRED_FIELDS:
            column = positions[field_name]
            if _cell(row, column) is None:
                raise MissingDataError(message.format(column=column), field_name)

        self.id = _cell(row, columns.id)
        self.title = _cell(row, columns.title)
        self.image = _cell(row, columns.image)
        self.body = ""
        self.permalink = _cell(row, columns.permalink)
        self.published = _cell(row, columns.published)
        self.user_id = _cell(row, columns.user_id)
        self.created_at = _cell(row, columns.created_at)
        self.published_at_raw = _cell(row, columns.published_at)
        self.updated_at = _cell(row, columns.updated_at)
        self.markup = MARKUP

        self.published_at = parse_publish_date(self.published_at_raw)

    @property
    def filename(self) -> str:
        return derive_filename(self.published_at, self.permalink, self.markup)

    def __repr__(self) -> str:
        return f"CSVPost(title={self.title!r}, permalink={self.permalink!r})"
