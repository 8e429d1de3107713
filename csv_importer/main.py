"""
Главный модуль CLI интерфейса для утилиты импорта постов.

Предоставляет командный интерфейс для конвертации строк CSV-файла
в посты Jekyll.
"""

import argparse
import sys
import traceback
from typing import Optional

try:
    from .config_loader import apply_overrides, load_config
    from .logger import PostImporterLogger
    from .importer import create_importer, SourceNotFoundError
    from .post import PostDataError
    from .post_writer import PostWriteError
except ImportError:
    from config_loader import apply_overrides, load_config
    from logger import PostImporterLogger
    from importer import create_importer, SourceNotFoundError
    from post import PostDataError
    from post_writer import PostWriteError


MAX_REPORTED_ERRORS = 10


class PostImporterCLI:
    """Класс для обработки команд CLI."""

    def __init__(self):
        self.config = None
        self.logger = None
        self.importer = None

    def setup(self, args: argparse.Namespace) -> bool:
        """
        Инициализирует CLI с конфигурацией.

        Args:
            args: Аргументы командной строки

        Returns:
            bool: True если инициализация успешна
        """
        try:
            config = load_config(args.config)
            config = apply_overrides(
                config,
                file=args.file,
                output_dir=args.output_dir,
                no_front_matter=True if args.no_front_matter else None,
                collect_errors=True if args.collect_errors else None
            )
            if args.verbose:
                config.logging.level = 'DEBUG'
            self.config = config

            self.logger = PostImporterLogger(self.config.logging)
            self.importer = create_importer(self.config, self.logger)

            self.logger.log_config_loaded(args.config)
            return True

        except (FileNotFoundError, ValueError) as e:
            print(f"❌ Ошибка инициализации: {e}")
            return False

    def cmd_import(self, args: argparse.Namespace) -> int:
        """
        Команда импорта постов.

        Args:
            args: Аргументы командной строки

        Returns:
            int: Код возврата (0 - успех, 1 - ошибка)
        """
        try:
            stats = self.importer.process()
        except SourceNotFoundError as e:
            print(f"❌ {e}")
            return 1
        except (PostDataError, PostWriteError) as e:
            print(f"❌ Ошибка импорта: {e}")
            return 1

        print(f"✅ Создано {stats.written_posts} постов!")

        if stats.failed_rows > 0:
            print(f"\n⚠️ Обнаружено {stats.failed_rows} ошибок:")
            for error in stats.errors[:MAX_REPORTED_ERRORS]:
                print(f"   • Строка {error['row']}: {error['error']}")
            if len(stats.errors) > MAX_REPORTED_ERRORS:
                print(f"   ... и еще {len(stats.errors) - MAX_REPORTED_ERRORS} ошибок")
            return 1

        return 0


def create_parser() -> argparse.ArgumentParser:
    """
    Создает парсер аргументов командной строки.

    Returns:
        argparse.ArgumentParser: Настроенный парсер
    """
    parser = argparse.ArgumentParser(
        description="Импорт постов из CSV-файла в каталог _posts",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Примеры использования:

  # Импорт из posts.csv в _posts
  csv-importer

  # Импорт из другого файла без front matter
  csv-importer --file export.csv --no-front-matter

  # Продолжать импорт при ошибках в строках
  csv-importer --collect-errors

  # Настройки из файла конфигурации
  csv-importer --config config/settings.ini
        """
    )

    parser.add_argument(
        '--config',
        default=None,
        help='Путь к файлу конфигурации (по умолчанию: встроенные настройки)'
    )
    parser.add_argument(
        '--file',
        help='CSV-файл для импорта (по умолчанию: posts.csv)'
    )
    parser.add_argument(
        '--output-dir',
        help='Каталог для файлов постов (по умолчанию: _posts)'
    )
    parser.add_argument(
        '--no-front-matter',
        action='store_true',
        help='Не добавлять front matter в файлы постов'
    )
    parser.add_argument(
        '--collect-errors',
        action='store_true',
        help='Не прерывать импорт при ошибке в строке, вывести список ошибок в конце'
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Подробный вывод'
    )

    return parser


def main(argv: Optional[list] = None) -> int:
    """Главная функция CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    cli = PostImporterCLI()

    if not cli.setup(args):
        return 1

    try:
        return cli.cmd_import(args)

    except KeyboardInterrupt:
        print("\n⚠️ Операция прервана пользователем")
        return 1
    except Exception as e:
        print(f"❌ Неожиданная ошибка: {e}")
        if args.verbose:
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
