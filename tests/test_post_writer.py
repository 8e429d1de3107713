"""
Тесты для модуля post_writer.py
"""

import pytest
import tempfile
import shutil
from pathlib import Path
from unittest.mock import Mock, patch

import yaml

from csv_importer.post import CSVPost
from csv_importer.post_writer import PostWriter, PostWriteError, create_post_writer
from csv_importer.logger import PostImporterLogger


ROW = ['1', 'Hello World', '', 'hello-world.html', 'true', '5', '2020-01-02 10:30:00', '2020-01-03']


def split_front_matter(content):
    """Разделяет содержимое файла на front matter и остаток."""
    _, front_matter, rest = content.split("---\n", 2)
    return yaml.safe_load(front_matter), front_matter, rest


class TestPostWriter:
    """Тесты для класса PostWriter."""

    @pytest.fixture
    def temp_dir(self):
        """Создает временную директорию для тестов."""
        temp_path = tempfile.mkdtemp()
        yield Path(temp_path)
        shutil.rmtree(temp_path, ignore_errors=True)

    @pytest.fixture
    def mock_logger(self):
        """Создает мок логгера."""
        return Mock(spec=PostImporterLogger)

    @pytest.fixture
    def writer(self, temp_dir, mock_logger):
        writer = PostWriter(temp_dir / "_posts", mock_logger)
        writer.ensure_output_dir()
        return writer

    @pytest.fixture
    def post(self):
        return CSVPost(ROW)

    def test_ensure_output_dir(self, temp_dir, mock_logger):
        """Тест создания каталога постов."""
        writer = PostWriter(temp_dir / "site" / "_posts", mock_logger)

        result = writer.ensure_output_dir()

        assert result.is_dir()
        assert result == temp_dir / "site" / "_posts"
        mock_logger.log_file_operation.assert_called_once_with("mkdir", result, True)

    def test_ensure_output_dir_error(self, temp_dir, mock_logger):
        """Тест ошибки создания каталога поверх файла."""
        blocker = temp_dir / "_posts"
        blocker.write_text("not a directory")
        writer = PostWriter(blocker, mock_logger)

        with pytest.raises(PostWriteError):
            writer.ensure_output_dir()

    def test_build_front_matter_order(self, writer, post):
        """Тест порядка полей front matter."""
        front_matter = writer.build_front_matter(post)

        assert list(front_matter) == [
            'layout', 'title', 'date', 'permalink', 'image', 'published',
            'id', 'user_id', 'created_at', 'published_at', 'updated_at'
        ]
        assert front_matter['layout'] == 'post'
        assert front_matter['date'] == '2020-01-02T10:30:00+00:00'
        assert front_matter['published_at'] is post.published_at

    def test_render_with_front_matter(self, writer, post):
        """Тест содержимого с front matter."""
        content = writer.render(post)

        assert content.startswith("---\nlayout: post\n")
        data, raw_front_matter, rest = split_front_matter(content)

        assert rest == "\n"
        assert data['layout'] == 'post'
        assert data['title'] == 'Hello World'
        assert data['date'] == '2020-01-02T10:30:00+00:00'
        assert data['permalink'] == 'hello-world.html'
        assert data['image'] is None
        assert data['published'] == 'true'
        assert data['id'] == '1'
        assert data['user_id'] == '5'
        assert data['created_at'] == '2020-01-02 10:30:00'
        assert data['updated_at'] == '2020-01-03'
        assert raw_front_matter.index('layout') < raw_front_matter.index('title')

    def test_render_separator_precedes_body(self, writer, post):
        """Тест: разделитель стоит непосредственно перед телом."""
        post.body = "Body text"

        content = writer.render(post)

        assert content.endswith("\n---\nBody text\n")

    def test_render_without_front_matter(self, temp_dir, mock_logger, post):
        """Тест содержимого без front matter."""
        writer = PostWriter(temp_dir, mock_logger, no_front_matter=True)

        assert writer.render(post) == "\n"

        post.body = "Only body"
        assert writer.render(post) == "Only body\n"

    def test_render_unicode_title(self, writer):
        row = list(ROW)
        row[1] = 'Привет, мир'
        post = CSVPost(row)

        content = writer.render(post)
        data, _, _ = split_front_matter(content)

        assert 'Привет' in content
        assert data['title'] == 'Привет, мир'

    def test_write_post(self, writer, post, mock_logger):
        """Тест записи поста в файл."""
        result_path = writer.write_post(post)

        assert result_path == writer.output_dir / "2020-01-02-hello-world.markdown"
        assert result_path.read_text(encoding='utf-8') == writer.render(post)
        mock_logger.log_file_operation.assert_called_with("write", result_path, True)

    def test_write_post_overwrites_existing(self, writer, post):
        """Тест: существующий файл с тем же именем перезаписывается."""
        existing = writer.output_dir / post.filename
        existing.write_text("old content", encoding='utf-8')

        result_path = writer.write_post(post)

        assert result_path == existing
        assert "old content" not in existing.read_text(encoding='utf-8')
        assert len(list(writer.output_dir.iterdir())) == 1

    def test_write_post_error(self, writer, post, mock_logger):
        """Тест ошибки записи файла."""
        with patch('builtins.open', side_effect=PermissionError("denied")):
            with pytest.raises(PostWriteError, match="denied") as exc_info:
                writer.write_post(post)

        assert exc_info.value.path == writer.output_dir / post.filename
        mock_logger.log_file_operation.assert_called_with("write", exc_info.value.path, False)

    def test_create_post_writer(self, temp_dir, mock_logger):
        writer = create_post_writer(temp_dir, mock_logger, no_front_matter=True)

        assert isinstance(writer, PostWriter)
        assert writer.no_front_matter is True
        assert writer.output_dir == temp_dir


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
