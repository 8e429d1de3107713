"""
CSV Post Importer

Утилита для импорта постов из CSV-файла в структуру Jekyll (_posts).
"""

__version__ = "1.0.0"
__author__ = "CSV Post Importer Team"
__description__ = "Utility for converting CSV rows into Jekyll posts with YAML front matter"
