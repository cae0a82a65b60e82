"""
Adaptador de salida: Logger en memoria.

Acumula cada evento como un dict en `eventos`, sin imprimir nada.
Es el logger por defecto de select_parser(): una biblioteca no debe
escribir en la consola de quien la usa. En tests permite hacer asserts
sobre los diagnósticos.

Ejemplo:
    >>> logger = MemoryLogger()
    >>> parser = select_parser("banregio", logger=logger)
    >>> parser.parse("sin tabla")
    []
    >>> logger.eventos_de("data_block_not_found")[0]["bank"]
    'banregio'
"""

from dataclasses import asdict

from bank_export_parser.domain.models.encabezado import MetadatosEncabezado
from bank_export_parser.domain.ports.process_logger import ProcessLogger


class MemoryLogger(ProcessLogger):
    """Logger que guarda los eventos en una lista."""

    def __init__(self) -> None:
        self.eventos: list[dict] = []

    def _registrar(self, evento: str, **datos) -> None:
        self.eventos.append({"evento": evento, **datos})

    def eventos_de(self, evento: str) -> list[dict]:
        """Eventos de un tipo, en orden de llegada."""
        return [e for e in self.eventos if e["evento"] == evento]

    def log_document_received(self, bank: str, revision: str, source: str) -> None:
        self._registrar("document_received", bank=bank, revision=revision, source=source)

    def log_data_block_not_found(self, bank: str, error: Exception) -> None:
        self._registrar("data_block_not_found", bank=bank, error=str(error))

    def log_header_found(self, bank: str, encabezado: MetadatosEncabezado) -> None:
        self._registrar("header_found", bank=bank, **asdict(encabezado))

    def log_document_parsed(self, bank: str, num_movimientos: int, num_descartes: int) -> None:
        self._registrar(
            "document_parsed",
            bank=bank,
            num_movimientos=num_movimientos,
            num_descartes=num_descartes,
        )

    def log_row_discarded(self, bank: str, line_number: int, reason: str) -> None:
        self._registrar("row_discarded", bank=bank, line_number=line_number, reason=reason)

    def log_mining_failed(self, bank: str, description: str, error: str) -> None:
        self._registrar("mining_failed", bank=bank, description=description, error=error)

    def log_error(self, source: str, error: Exception) -> None:
        self._registrar("error", source=source, error=str(error))

    def get_summary(self) -> dict:
        parsed = self.eventos_de("document_parsed")
        return {
            "documentos_recibidos": len(self.eventos_de("document_received")),
            "documentos_procesados": len(parsed),
            "documentos_sin_datos": len(self.eventos_de("data_block_not_found")),
            "filas_descartadas": len(self.eventos_de("row_discarded")),
            "fallos_minado": len(self.eventos_de("mining_failed")),
            "total_movimientos": sum(e["num_movimientos"] for e in parsed),
            "errores": [
                {"origen": e["source"], "error": e["error"]} for e in self.eventos_de("error")
            ],
        }
