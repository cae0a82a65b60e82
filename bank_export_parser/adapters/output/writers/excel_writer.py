"""
Adaptador de salida: Escritor de Excel.

Genera archivos Excel con el layout estándar de 2 hojas:
- Hoja 1 (Resumen): Totales de abonos y cargos por banco y cuenta.
- Hoja 2 (Movimientos): Detalle de cada movimiento.

Los montos se escriben sin signo en columnas separadas (Cargos / Abonos)
porque así los concilian en contabilidad; el signo vive en 'Tipo'.
"""

from decimal import Decimal
from pathlib import Path

import pandas as pd

from bank_export_parser.domain.exceptions import OutputError
from bank_export_parser.domain.models.movimiento import Movimiento
from bank_export_parser.domain.models.resumen import Resumen
from bank_export_parser.domain.ports.output_writer import OutputWriter


class ExcelWriter(OutputWriter):
    """Genera archivos Excel con formato estandarizado."""

    def write(self, movimientos: list[Movimiento], output_path: Path) -> Path:
        """Escribe los movimientos de una exportación a Excel.

        Args:
            movimientos: Movimientos parseados.
            output_path: Ruta donde crear el archivo. Si no termina en .xlsx,
                        se le agrega la extensión.

        Returns:
            Ruta del archivo creado.
        """
        if not movimientos:
            raise OutputError(str(output_path), "No hay movimientos que escribir")

        # Asegurar extensión .xlsx
        if output_path.suffix.lower() != ".xlsx":
            output_path = output_path.with_suffix(".xlsx")

        # Crear directorio si no existe
        output_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            self._escribir_excel(movimientos, output_path)
        except Exception as e:
            raise OutputError(str(output_path), str(e))

        return output_path

    # =================================================================
    # MÉTODO PRIVADO: Generación del Excel
    # =================================================================

    def _escribir_excel(self, movimientos: list[Movimiento], output_path: Path) -> None:
        # --- Construir datos de Movimientos ---
        filas_movimientos = [
            {
                "Banco": mov.banco.nombre,
                "Cuenta": mov.cuenta or "",
                "Fecha": mov.fecha,
                "Hora": mov.hora or "",
                "Tipo": mov.tipo,
                "Descripción": mov.descripcion,
                "Referencia": mov.referencia,
                "Cargos": float(mov.importe) if not mov.es_abono else 0,
                "Abonos": float(mov.importe) if mov.es_abono else 0,
                "Saldo": float(mov.saldo),
                "Beneficiario": mov.beneficiario or "",
                "Clave de rastreo": mov.clave_rastreo or "",
                "RFC": mov.rfc or "",
            }
            for mov in movimientos
        ]
        df_movimientos = pd.DataFrame(filas_movimientos)

        # --- Construir datos de Resumen (uno por banco + cuenta) ---
        grupos: dict[tuple[str, str], list[Movimiento]] = {}
        for mov in movimientos:
            grupos.setdefault((mov.banco.nombre, mov.cuenta or ""), []).append(mov)

        filas_resumen = []
        for (banco, cuenta), grupo in grupos.items():
            resumen = Resumen.desde_movimientos(grupo)
            filas_resumen.append(
                {
                    "Banco": banco,
                    "Cuenta": cuenta,
                    "Total Abonos": float(resumen.total_abonos),
                    "Num Abonos": resumen.num_abonos,
                    "Total Cargos": float(resumen.total_cargos),
                    "Num Cargos": resumen.num_cargos,
                    "Neto": float(resumen.balance_movimientos),
                    "Saldo Final": float(resumen.saldo_final or Decimal("0")),
                }
            )
        df_resumen = pd.DataFrame(filas_resumen)

        # --- Escribir Excel con xlsxwriter ---
        with pd.ExcelWriter(output_path, engine="xlsxwriter") as writer:
            df_resumen.to_excel(writer, index=False, sheet_name="Resumen")
            df_movimientos.to_excel(writer, index=False, sheet_name="Movimientos")

            # --- Aplicar formato ---
            workbook = writer.book
            ws_resumen = writer.sheets["Resumen"]
            ws_movimientos = writer.sheets["Movimientos"]

            # Formato para texto (mantener ceros iniciales en cuenta)
            text_format = workbook.add_format({"num_format": "@"})

            # Formato para montos (2 decimales con separador de miles)
            money_format = workbook.add_format({"num_format": "#,##0.00"})

            # --- Formato Hoja Resumen ---
            ws_resumen.set_column("A:A", 14)  # Banco
            ws_resumen.set_column("B:B", 20, text_format)  # Cuenta
            ws_resumen.set_column("C:C", 18, money_format)  # Total Abonos
            ws_resumen.set_column("D:D", 12)  # Num Abonos
            ws_resumen.set_column("E:E", 18, money_format)  # Total Cargos
            ws_resumen.set_column("F:F", 12)  # Num Cargos
            ws_resumen.set_column("G:H", 18, money_format)  # Neto / Saldo Final

            # --- Formato Hoja Movimientos ---
            ws_movimientos.set_column("A:A", 14)  # Banco
            ws_movimientos.set_column("B:B", 20, text_format)  # Cuenta
            ws_movimientos.set_column("C:E", 11)  # Fecha / Hora / Tipo
            ws_movimientos.set_column("F:F", 50)  # Descripción
            ws_movimientos.set_column("G:G", 20, text_format)  # Referencia
            ws_movimientos.set_column("H:J", 15, money_format)  # Cargos / Abonos / Saldo
            ws_movimientos.set_column("K:K", 35)  # Beneficiario
            ws_movimientos.set_column("L:M", 22, text_format)  # Rastreo / RFC
