"""
Adaptador de entrada: Archivos de ancho fijo de SCOTIABANK.

FORMATO:
Cada movimiento es una línea de ancho fijo que empieza con el tipo de
registro 'CHQMXN' (cuenta de cheques en pesos). Los campos se leen por
posición; las líneas con otro tipo de registro (encabezados, totales) no
son movimientos.

    CHQMXN000000000012345678902024/12/021234567   00000000001500.00ABONO00000000011500.00TRANSF. INTERBANCARIA SPEI ...

REVISIONES DE FORMATO:
Se conocen dos tablas de posiciones y no se ha podido confirmar cuál
corresponde a los archivos actuales, así que ambas se mantienen como
revisiones explícitas (ver LAYOUTS):

- 'chqmxn' (por defecto): fecha YYYY/MM/DD en 26:36, descripción desde 85.
- 'extendido': fecha YYYYMMDD en 28:36, descripción en 135:165.

El tipo de operación ('ABONO' / 'CARGO') decide si el importe va a la
columna de crédito o de débito.

GRAMÁTICA DE LA DESCRIPCIÓN:
    TRANSF. INTERBANCARIA SPEI PAGO FACTURA 88 BBVA MEXICO 012345 EMPRESA EJEMPLO SA DE CV
    → "SPEI BBVA MEXICO PAGO FACTURA 88 EMPRESA EJEMPLO SA DE CV"
"""

import re
from dataclasses import dataclass

from bank_export_parser.domain.models.banco import IdentidadBanco
from bank_export_parser.domain.models.campos_minados import CamposMinados, VarianteDescripcion
from bank_export_parser.domain.models.documento_tokenizado import (
    DocumentoTokenizado,
    FilaCruda,
    FilaDescartada,
)
from bank_export_parser.domain.ports.bank_parser import DescriptionMiner, Tokenizer
from bank_export_parser.domain.shared.date_parser import FormatoFecha
from bank_export_parser.domain.shared.delimited import split_lines
from bank_export_parser.domain.shared.mining import ReglaMinado, buscar, minar_con_reglas
from bank_export_parser.domain.shared.text_cleaner import clean_whitespace

IDENTIDAD_SCOTIABANK = IdentidadBanco(id="044", codigo="40044", nombre="SCOTIABANK")


@dataclass(frozen=True)
class LayoutScotiabank:
    """Posiciones (inicio, fin) de cada campo en una línea de ancho fijo.

    fin = None significa "hasta el final de la línea".
    """

    nombre: str
    formato_fecha: FormatoFecha
    tipo_registro: tuple[int, int | None]
    cuenta: tuple[int, int | None]
    fecha: tuple[int, int | None]
    referencia: tuple[int, int | None]
    importe: tuple[int, int | None]
    tipo_operacion: tuple[int, int | None]
    saldo: tuple[int, int | None]
    descripcion: tuple[int, int | None]

    @property
    def longitud_minima(self) -> int:
        """Una línea más corta no alcanza a traer la descripción."""
        return self.descripcion[0] + 1


LAYOUT_CHQMXN = LayoutScotiabank(
    nombre="chqmxn",
    formato_fecha=FormatoFecha.YYYY_MM_DD,
    tipo_registro=(0, 6),
    cuenta=(6, 26),
    fecha=(26, 36),
    referencia=(36, 46),
    importe=(46, 63),
    tipo_operacion=(63, 68),
    saldo=(68, 85),
    descripcion=(85, None),
)

LAYOUT_EXTENDIDO = LayoutScotiabank(
    nombre="extendido",
    formato_fecha=FormatoFecha.YYYYMMDD,
    tipo_registro=(0, 6),
    cuenta=(6, 26),
    fecha=(28, 36),
    referencia=(36, 56),
    importe=(56, 73),
    tipo_operacion=(73, 78),
    saldo=(78, 95),
    descripcion=(135, 165),
)

LAYOUTS: dict[str, LayoutScotiabank] = {
    LAYOUT_CHQMXN.nombre: LAYOUT_CHQMXN,
    LAYOUT_EXTENDIDO.nombre: LAYOUT_EXTENDIDO,
}


class ScotiabankFixedWidthTokenizer(Tokenizer):
    """Corta cada línea 'CHQMXN' según la tabla de posiciones."""

    TIPO_REGISTRO: str = "CHQMXN"

    def __init__(self, layout: LayoutScotiabank = LAYOUT_CHQMXN) -> None:
        self._layout = layout

    @property
    def layout(self) -> LayoutScotiabank:
        return self._layout

    @property
    def formato_fecha(self) -> FormatoFecha:
        return self._layout.formato_fecha

    def tokenize(self, document: str | bytes) -> DocumentoTokenizado:
        filas: list[FilaCruda] = []
        descartes: list[FilaDescartada] = []

        for numero, line in enumerate(split_lines(document), start=1):
            line = line.strip()
            if not line:
                continue
            if self._campo(line, self._layout.tipo_registro) != self.TIPO_REGISTRO:
                descartes.append(FilaDescartada(numero, "Tipo de registro distinto de CHQMXN", line[:20]))
                continue
            if len(line) < self._layout.longitud_minima:
                descartes.append(
                    FilaDescartada(numero, f"Línea de {len(line)} caracteres, más corta que el layout", line[:20])
                )
                continue
            filas.append(self._cortar(line))

        return DocumentoTokenizado(filas=filas, descartes=descartes)

    def _cortar(self, line: str) -> FilaCruda:
        layout = self._layout
        importe = self._campo(line, layout.importe)
        tipo_operacion = self._campo(line, layout.tipo_operacion)
        es_abono = "abono" in tipo_operacion.lower()

        return {
            "recordType": self._campo(line, layout.tipo_registro),
            "account": self._campo(line, layout.cuenta),
            "date": self._campo(line, layout.fecha),
            "reference": self._campo(line, layout.referencia),
            "operationType": tipo_operacion,
            "credit": importe if es_abono else "",
            "debit": "" if es_abono else importe,
            "balance": self._campo(line, layout.saldo),
            "description": self._campo(line, layout.descripcion),
        }

    @staticmethod
    def _campo(line: str, posiciones: tuple[int, int | None]) -> str:
        inicio, fin = posiciones
        return line[inicio:fin].strip()


class ScotiabankMiner(DescriptionMiner):
    """Transferencias interbancarias SPEI."""

    _SPEI = re.compile(r"TRANSF\.?\s+INTERBANCARIA\s+SPEI")
    _BANCO = re.compile(r"SANTANDER|BBVA MEXICO|BANORTE|AFIRME|SCOTIABANK|KUSPIT", re.IGNORECASE)
    _NOMBRE = re.compile(r"([A-Z][A-Z\s]+/)?([A-Z][A-Z\s/]+SA DE CV|[A-Z][A-Z\s]+/[A-Z])")

    # Palabras del concepto que siguen a "SPEI"
    PALABRAS_CONCEPTO: int = 3

    def __init__(self) -> None:
        self._reglas = [
            ReglaMinado(
                variante=VarianteDescripcion.TRANSFERENCIA,
                detecta=lambda texto: self._SPEI.search(texto) is not None,
                extrae=self._extraer_spei,
            ),
        ]

    def extract(self, text: str) -> CamposMinados:
        return minar_con_reglas(text, self._reglas)

    def _extraer_spei(self, texto: str) -> CamposMinados:
        despues = texto.split("SPEI")[1]
        concepto = " ".join(despues.split()[: self.PALABRAS_CONCEPTO])
        banco = buscar(self._BANCO, texto, grupo=0) or ""

        nombre = self._NOMBRE.search(texto)
        beneficiario = nombre.group(0).replace("/", " ").strip() if nombre else ""

        return CamposMinados(
            beneficiario=clean_whitespace(beneficiario) or None,
            concepto=concepto or None,
            descripcion_real=clean_whitespace(f"SPEI {banco} {concepto} {beneficiario}"),
        )
