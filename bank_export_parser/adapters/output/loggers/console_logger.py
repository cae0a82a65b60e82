"""
Adaptador de salida: Logger a consola.

Implementación simple de ProcessLogger que imprime eventos a stdout con
un formato consistente y un resumen final.

Útil para:
- Ejecución manual desde terminal (CLI).
- Revisar qué líneas de una exportación se descartaron y por qué.

Los descartes por fila pueden ser cientos en un archivo con pies de
página repetidos; con verbose=False solo se cuentan.
"""

from bank_export_parser.domain.models.encabezado import MetadatosEncabezado
from bank_export_parser.domain.ports.process_logger import ProcessLogger


class ConsoleLogger(ProcessLogger):
    """Logger que imprime eventos de procesamiento a consola."""

    def __init__(self, verbose: bool = False) -> None:
        self._verbose = verbose
        self._documentos_recibidos: int = 0
        self._documentos_procesados: int = 0
        self._documentos_sin_datos: int = 0
        self._filas_descartadas: int = 0
        self._fallos_minado: int = 0
        self._total_movimientos: int = 0
        self._errores: list[dict] = []

    # --- Documento ---

    def log_document_received(self, bank: str, revision: str, source: str) -> None:
        self._documentos_recibidos += 1
        print(f"  📄 Recibido: {source} ({bank}/{revision})")

    def log_data_block_not_found(self, bank: str, error: Exception) -> None:
        self._documentos_sin_datos += 1
        print(f"  ❌ Sin movimientos ({bank}): {error}")

    def log_header_found(self, bank: str, encabezado: MetadatosEncabezado) -> None:
        datos = [
            f"{etiqueta}: {valor}"
            for etiqueta, valor in (
                ("Cuenta", encabezado.cuenta),
                ("Titular", encabezado.nombre_cuenta),
                ("CLABE", encabezado.clabe),
                ("RFC", encabezado.rfc),
                ("Periodo", encabezado.periodo),
                ("Usuario", encabezado.usuario),
            )
            if valor
        ]
        if datos:
            print(f"  🏦 Encabezado ({bank}): {', '.join(datos)}")

    def log_document_parsed(self, bank: str, num_movimientos: int, num_descartes: int) -> None:
        self._documentos_procesados += 1
        self._total_movimientos += num_movimientos
        print(
            f"  ✅ Completado ({bank}): "
            f"{num_movimientos} movimientos, {num_descartes} líneas descartadas"
        )

    # --- Filas ---

    def log_row_discarded(self, bank: str, line_number: int, reason: str) -> None:
        self._filas_descartadas += 1
        if self._verbose:
            print(f"  ⏭️  Descartada línea {line_number} ({bank}): {reason}")

    def log_mining_failed(self, bank: str, description: str, error: str) -> None:
        self._fallos_minado += 1
        print(f"  ⚠️  Minado fallido ({bank}): '{description[:60]}' — {error}")

    # --- Errores generales ---

    def log_error(self, source: str, error: Exception) -> None:
        self._errores.append({"origen": source, "error": str(error)})
        print(f"  ❌ Error: {source} — {error}")

    # --- Resumen ---

    def get_summary(self) -> dict:
        return {
            "documentos_recibidos": self._documentos_recibidos,
            "documentos_procesados": self._documentos_procesados,
            "documentos_sin_datos": self._documentos_sin_datos,
            "filas_descartadas": self._filas_descartadas,
            "fallos_minado": self._fallos_minado,
            "total_movimientos": self._total_movimientos,
            "errores": self._errores,
        }

    def print_summary(self) -> None:
        """Imprime el resumen final del procesamiento."""
        print("\n" + "=" * 60)
        print("RESUMEN DE PROCESAMIENTO")
        print("=" * 60)
        print(f"  Documentos recibidos:  {self._documentos_recibidos}")
        print(f"  Documentos procesados: {self._documentos_procesados}")
        print(f"  Documentos sin datos:  {self._documentos_sin_datos}")
        print(f"  Líneas descartadas:    {self._filas_descartadas}")
        print(f"  Fallos de minado:      {self._fallos_minado}")
        print(f"  Total movimientos:     {self._total_movimientos}")

        if self._errores:
            print("\n  ERRORES:")
            for err in self._errores:
                print(f"    - {err['origen']}: {err['error']}")

        print("=" * 60)
