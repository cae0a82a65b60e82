"""
Adaptador de entrada: Exportaciones de texto de BBVA MÉXICO.

REVISIONES DE FORMATO:
- 'tabulado' (por defecto): texto separado por tabs con encabezado.
  El archivo se genera en UTF-8 pero suele llegar leído como Latin-1,
  así que "Día" aparece como "DÃ­a":

      DÃ­a	Concepto / Referencia	cargo	Abono	Saldo
      02-12-2024	SPEI RECIBIDO BANORTE/0123456789	 	1,500.00	10,500.00

- 'texto': sin encabezado; cada movimiento es una línea que empieza con
  fecha y termina con el saldo:

      02-12-2024 PAGO TARJETA 500.00 9,000.00

  En esta revisión un monto único antes del saldo se toma como cargo
  (el archivo no distingue la columna).

GRAMÁTICA DE LA DESCRIPCIÓN:
El concepto trae la referencia después de una diagonal: "/0123456789".
"""

import re

from bank_export_parser.domain.models.banco import IdentidadBanco
from bank_export_parser.domain.models.campos_minados import CamposMinados, VarianteDescripcion
from bank_export_parser.domain.models.documento_tokenizado import (
    DocumentoTokenizado,
    FilaCruda,
    FilaDescartada,
)
from bank_export_parser.domain.ports.bank_parser import DescriptionMiner, Tokenizer
from bank_export_parser.domain.shared.date_parser import FormatoFecha
from bank_export_parser.domain.shared.delimited import build_row, map_header_labels, split_columns, split_lines
from bank_export_parser.domain.shared.mining import RFC_PATTERN, ReglaMinado, buscar, buscar_rfc, minar_con_reglas

IDENTIDAD_BBVA = IdentidadBanco(id="012", codigo="40012", nombre="BBVA MEXICO")


class BBVATabTokenizer(Tokenizer):
    """Revisión 'tabulado': encabezado en la primera línea, tabs."""

    ETIQUETAS: dict[str, str] = {
        "Día": "date",
        "DÃ­a": "date",
        "Dia": "date",
        "Concepto / Referencia": "description",
        "Concepto": "description",
        "cargo": "debit",
        "Cargo": "debit",
        "Abono": "credit",
        "abono": "credit",
        "Saldo": "balance",
    }

    @property
    def formato_fecha(self) -> FormatoFecha:
        return FormatoFecha.DD_MM_YYYY_GUION

    def tokenize(self, document: str | bytes) -> DocumentoTokenizado:
        lineas = [(n, line) for n, line in enumerate(split_lines(document), start=1) if line.strip()]
        if not lineas:
            return DocumentoTokenizado(filas=[])

        columnas = map_header_labels(split_columns(lineas[0][1], "\t", '"'), self.ETIQUETAS)
        filas = [build_row(columnas, split_columns(line, "\t", '"')) for _, line in lineas[1:]]
        return DocumentoTokenizado(filas=filas)


class BBVATextTokenizer(Tokenizer):
    """Revisión 'texto': un regex por línea."""

    _LINEA = re.compile(
        r"^(\d{2}-\d{2}-\d{4})\s+(.+?)\s+([\d,]+\.\d{2})?\s*([\d,]+\.\d{2})?\s+([\d,]+\.\d{2})$"
    )
    _INICIA_CON_FECHA = re.compile(r"^\d{2}-\d{2}-\d{4}")

    @property
    def formato_fecha(self) -> FormatoFecha:
        return FormatoFecha.DD_MM_YYYY_GUION

    def tokenize(self, document: str | bytes) -> DocumentoTokenizado:
        filas: list[FilaCruda] = []
        descartes: list[FilaDescartada] = []

        for numero, line in enumerate(split_lines(document), start=1):
            line = line.strip()
            if not self._INICIA_CON_FECHA.match(line):
                continue
            match = self._LINEA.match(line)
            if not match:
                descartes.append(FilaDescartada(numero, "Línea con fecha pero sin montos", line))
                continue

            fecha, descripcion, cargo, abono, saldo = match.groups()
            filas.append(
                {
                    "date": fecha,
                    "description": descripcion.strip(),
                    "debit": cargo or "",
                    "credit": abono or "",
                    "balance": saldo,
                }
            )

        return DocumentoTokenizado(filas=filas, descartes=descartes)


class BBVAMiner(DescriptionMiner):
    """Referencia "/dígitos" y RFC dentro del concepto."""

    _REFERENCIA = re.compile(r"/(\d{10,})")

    def __init__(self) -> None:
        self._reglas = [
            ReglaMinado(
                variante=VarianteDescripcion.GENERICO,
                detecta=lambda texto: bool(self._REFERENCIA.search(texto) or RFC_PATTERN.search(texto)),
                extrae=self._extraer,
            ),
        ]

    def extract(self, text: str) -> CamposMinados:
        return minar_con_reglas(text, self._reglas)

    def _extraer(self, texto: str) -> CamposMinados:
        return CamposMinados(
            referencia=buscar(self._REFERENCIA, texto),
            rfc=buscar_rfc(texto),
            descripcion_real=texto.strip(),
        )
