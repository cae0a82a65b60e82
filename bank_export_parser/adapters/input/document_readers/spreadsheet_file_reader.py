"""
Adaptador de entrada: Lector de hojas de cálculo.

No interpreta el libro: entrega los bytes tal cual y el tokenizer de HSBC
los abre con pandas. Así el tokenizer también se puede probar con un
libro armado en memoria.
"""

from pathlib import Path

from bank_export_parser.domain.exceptions import ExtractionError
from bank_export_parser.domain.ports.document_reader import DocumentReader


class SpreadsheetFileReader(DocumentReader):
    """Lee .xlsx como bytes crudos. El .xls binario no se soporta (openpyxl solo abre OOXML)."""

    EXTENSIONES: tuple[str, ...] = (".xlsx",)

    @property
    def name(self) -> str:
        return "hoja-de-calculo"

    def can_handle(self, file_path: Path) -> bool:
        return file_path.suffix.lower() in self.EXTENSIONES

    def read(self, file_path: Path) -> bytes:
        if not file_path.exists():
            raise ExtractionError(str(file_path), "El archivo no existe")

        try:
            contenido = file_path.read_bytes()
        except OSError as e:
            raise ExtractionError(str(file_path), str(e))

        if not contenido:
            raise ExtractionError(str(file_path), "El archivo está vacío")
        return contenido
