"""
Adaptador de entrada: Lector de exportaciones de texto.

Cubre todos los formatos de texto (CSV, pipes, tabs, ancho fijo). El
archivo se lee como bytes y se decodifica aquí, no en el tokenizer:

1. UTF-8 (con o sin BOM): las exportaciones recientes.
2. Latin-1: las exportaciones viejas de Banregio y Afirme.

El mojibake ("DÃ­a") NO se corrige aquí; lo resuelven las tablas de
etiquetas de cada tokenizer.
"""

from pathlib import Path

from bank_export_parser.domain.exceptions import ExtractionError
from bank_export_parser.domain.ports.document_reader import DocumentReader
from bank_export_parser.domain.shared.text_cleaner import decode_document


class TextFileReader(DocumentReader):
    """Lee .csv, .txt y .tsv como texto decodificado."""

    EXTENSIONES: tuple[str, ...] = (".csv", ".txt", ".tsv", ".dat")

    @property
    def name(self) -> str:
        return "texto"

    def can_handle(self, file_path: Path) -> bool:
        return file_path.suffix.lower() in self.EXTENSIONES

    def read(self, file_path: Path) -> str:
        if not file_path.exists():
            raise ExtractionError(str(file_path), "El archivo no existe")

        try:
            contenido = file_path.read_bytes()
        except OSError as e:
            raise ExtractionError(str(file_path), str(e))

        return decode_document(contenido)
