"""
Модуль записи файлов постов.

Формирует YAML front matter и тело поста и записывает результат
в каталог постов (_posts).
"""

from pathlib import Path
from typing import Dict, Union

import yaml

try:
    from .logger import PostImporterLogger
    from .post import CSVPost
except ImportError:
    from logger import PostImporterLogger
    from post import CSVPost


LAYOUT = "post"
FRONT_MATTER_SEPARATOR = "---"


class PostWriteError(Exception):
    """Исключение для ошибок записи файла поста."""

    def __init__(self, message: str, path: Path = None):
        super().__init__(message)
        self.path = path


class PostWriter:
    """Класс для записи постов в файлы."""

    def __init__(self, output_dir: Union[str, Path], logger: PostImporterLogger,
                 no_front_matter: bool = False, encoding: str = 'utf-8'):
        """
        Инициализация записи постов.

        Args:
            output_dir: Каталог для файлов постов
            logger: Логгер для записи операций
            no_front_matter: Не добавлять front matter в файл поста
            encoding: Кодировка файлов постов
        """
        self.output_dir = Path(output_dir)
        self.logger = logger
        self.no_front_matter = no_front_matter
        self.encoding = encoding

    def ensure_output_dir(self) -> Path:
        """
        Создает каталог постов если он не существует.

        Raises:
            PostWriteError: Если каталог не удалось создать
        """
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            self.logger.log_file_operation("mkdir", self.output_dir, True)
            return self.output_dir
        except OSError as e:
            self.logger.log_file_operation("mkdir", self.output_dir, False)
            raise PostWriteError(f"Ошибка создания каталога постов {self.output_dir}: {e}", self.output_dir)

    def build_front_matter(self, post: CSVPost) -> Dict:
        """
        Формирует поля front matter в фиксированном порядке.

        Args:
            post: Пост

        Returns:
            Dict: Поля front matter
        """
        return {
            'layout': LAYOUT,
            'title': post.title,
            'date': post.published_at.isoformat(),
            'permalink': post.permalink,
            'image': post.image,
            'published': post.published,
            'id': post.id,
            'user_id': post.user_id,
            'created_at': post.created_at,
            'published_at': post.published_at,
            'updated_at': post.updated_at,
        }

    def render(self, post: CSVPost) -> str:
        """
        Формирует содержимое файла поста.

        Args:
            post: Пост

        Returns:
            str: Front matter (если включен), разделитель и тело поста
        """
        parts = []
        if not self.no_front_matter:
            parts.append(yaml.dump(
                self.build_front_matter(post),
                explicit_start=True,
                sort_keys=False,
                allow_unicode=True,
                default_flow_style=False
            ))
            parts.append(FRONT_MATTER_SEPARATOR + "\n")
        parts.append(post.body + "\n")
        return "".join(parts)

    def get_post_path(self, post: CSVPost) -> Path:
        return self.output_dir / post.filename

    def write_post(self, post: CSVPost) -> Path:
        """
        Записывает пост в файл, существующий файл перезаписывается.

        Args:
            post: Пост

        Returns:
            Path: Путь к записанному файлу

        Raises:
            PostWriteError: Если произошла ошибка при записи
        """
        target_path = self.get_post_path(post)
        content = self.render(post)

        try:
            with open(target_path, 'w', encoding=self.encoding) as f:
                f.write(content)
        except OSError as e:
            self.logger.log_file_operation("write", target_path, False)
            raise PostWriteError(f"Ошибка записи поста {target_path}: {e}", target_path)

        self.logger.log_file_operation("write", target_path, True)
        return target_path


def create_post_writer(output_dir: Union[str, Path], logger: PostImporterLogger,
                       no_front_matter: bool = False, encoding: str = 'utf-8') -> PostWriter:
    """Удобная функция для создания объекта записи постов."""
    return PostWriter(output_dir, logger, no_front_matter, encoding)
