"""
Puerto de salida: Bitácora de procesamiento (Process Logger).

Define el contrato para registrar eventos durante el parseo de una
exportación. Ningún tokenizer ni miner imprime a consola: los problemas
se reportan aquí y el llamador decide qué hacer con ellos.

¿Por qué no usar simplemente el módulo `logging` de Python?
Porque `logging` es una herramienta de infraestructura (HOW), mientras que
este puerto define los EVENTOS de negocio (WHAT):
- "No se encontró la tabla de movimientos" (no "ERROR: header missing")
- "Se descartó la línea 14" (no "WARNING: bad row")

Esto permite:
- En la terminal: imprimir con ConsoleLogger.
- En tests: acumular en memoria con MemoryLogger y hacer asserts.
"""

from abc import ABC, abstractmethod

from bank_export_parser.domain.models.encabezado import MetadatosEncabezado


class ProcessLogger(ABC):
    """Interfaz para la bitácora de procesamiento."""

    # --- Documento ---

    @abstractmethod
    def log_document_received(self, bank: str, revision: str, source: str) -> None:
        """Registra que se recibió un documento para parsear.

        Args:
            bank: Clave del banco ('banorte', 'hsbc', ...).
            revision: Revisión de formato seleccionada.
            source: Origen legible: nombre de archivo o '<memoria>'.
        """
        ...

    @abstractmethod
    def log_data_block_not_found(self, bank: str, error: Exception) -> None:
        """Registra que el tokenizer no pudo localizar la tabla.

        El documento produce cero movimientos; no se lanza excepción.
        """
        ...

    @abstractmethod
    def log_header_found(self, bank: str, encabezado: MetadatosEncabezado) -> None:
        """Registra los datos de cuenta hallados fuera de la tabla.

        Solo se llama si el encabezado trae al menos un dato (cuenta,
        CLABE, RFC, periodo...).
        """
        ...

    @abstractmethod
    def log_document_parsed(self, bank: str, num_movimientos: int, num_descartes: int) -> None:
        """Registra el fin del parseo de un documento."""
        ...

    # --- Filas ---

    @abstractmethod
    def log_row_discarded(self, bank: str, line_number: int, reason: str) -> None:
        """Registra una línea o fila que no produjo movimiento.

        Args:
            bank: Clave del banco.
            line_number: Línea (o fila de hoja) 1-indexed.
            reason: Ej: "Número de columnas inesperado: 8".
        """
        ...

    @abstractmethod
    def log_mining_failed(self, bank: str, description: str, error: str) -> None:
        """Registra un fallo interno del miner. El movimiento sobrevive sin enriquecer."""
        ...

    # --- Errores generales ---

    @abstractmethod
    def log_error(self, source: str, error: Exception) -> None:
        """Registra un error que impidió procesar un documento (lectura, salida)."""
        ...

    # --- Resumen ---

    @abstractmethod
    def get_summary(self) -> dict:
        """Devuelve un resumen de todo el procesamiento.

        Returns:
            Diccionario con métricas:
            {
                'documentos_recibidos': int,
                'documentos_procesados': int,
                'documentos_sin_datos': int,
                'filas_descartadas': int,
                'fallos_minado': int,
                'total_movimientos': int,
                'errores': List[dict],  # [{origen, error}]
            }
        """
        ...
