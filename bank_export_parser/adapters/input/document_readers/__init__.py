"""Lectores de archivos de exportación (texto y hojas de cálculo)."""

from bank_export_parser.adapters.input.document_readers.spreadsheet_file_reader import SpreadsheetFileReader
from bank_export_parser.adapters.input.document_readers.text_file_reader import TextFileReader


def default_readers() -> list:
    """Lectores en el orden en que el CLI los prueba."""
    return [SpreadsheetFileReader(), TextFileReader()]


__all__ = ["SpreadsheetFileReader", "TextFileReader", "default_readers"]
