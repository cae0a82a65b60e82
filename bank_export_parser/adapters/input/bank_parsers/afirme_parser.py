"""
Adaptador de entrada: Exportaciones CSV de AFIRME.

REVISIONES DE FORMATO:
- 'posicional' (por defecto): 7 columnas sin encabezado, en este orden:
      Concepto, Fecha (DD/MM/AA), Referencia, Cargo, Abono, Saldo, Cuenta
  Ejemplo:
      PAGO TARJETA,01/03/24,REF123,0,500.00,1500.00,ACC001
- 'columnas': la primera línea es el encabezado en español
  ("Concepto,Fecha (DD/MM/AA),Referencia,...,No. Secuencia") y las
  columnas se ubican por nombre.

GRAMÁTICA DE LA DESCRIPCIÓN:
Los SPEI de Afirme traen los datos etiquetados dentro del concepto:

    SPEI RECIBIDO RASTREO 085901234567 REFERENCIA:1234567 HORA:10:15:30
    JUAN PEREZ LOPEZ RFC PELJ850101AB1 CONCEPTO RENTA

- RASTREO <clave>, REFERENCIA:<ref>, HORA:<hh:mm:ss>, RFC <rfc>,
  CONCEPTO <palabra>.
- El beneficiario es el texto que sigue a la hora, hasta "RFC".
- La descripción a mostrar es el beneficiario; si no hay, el texto sin
  las partes técnicas.
"""

import re

from bank_export_parser.domain.models.banco import IdentidadBanco
from bank_export_parser.domain.models.campos_minados import CamposMinados, VarianteDescripcion
from bank_export_parser.domain.models.documento_tokenizado import DocumentoTokenizado, FilaDescartada
from bank_export_parser.domain.ports.bank_parser import DescriptionMiner, Tokenizer
from bank_export_parser.domain.shared.date_parser import FormatoFecha
from bank_export_parser.domain.shared.delimited import build_row, map_header_labels, split_columns, split_lines
from bank_export_parser.domain.shared.mining import RFC_CUERPO, ReglaMinado, buscar, contiene, minar_con_reglas
from bank_export_parser.domain.shared.text_cleaner import clean_whitespace

IDENTIDAD_AFIRME = IdentidadBanco(id="062", codigo="40062", nombre="AFIRME")


class AfirmePositionalTokenizer(Tokenizer):
    """Revisión 'posicional': 7 columnas fijas, sin encabezado."""

    COLUMNAS: list[str] = ["description", "date", "reference", "debit", "credit", "balance", "account"]

    # Si el archivo sí trae la línea de encabezado, se salta
    _ETIQUETA_ENCABEZADO: str = "concepto"

    @property
    def formato_fecha(self) -> FormatoFecha:
        return FormatoFecha.DD_MM_YY

    def tokenize(self, document: str | bytes) -> DocumentoTokenizado:
        filas = []
        descartes = []

        for numero, line in enumerate(split_lines(document), start=1):
            if not line.strip():
                continue

            valores = split_columns(line, ",", '"')
            if valores[0].strip().lower() == self._ETIQUETA_ENCABEZADO:
                continue
            if len(valores) < len(self.COLUMNAS):
                descartes.append(
                    FilaDescartada(numero, f"Se esperaban 7 columnas, hay {len(valores)}", line)
                )
                continue

            filas.append(build_row(self.COLUMNAS, valores))

        return DocumentoTokenizado(filas=filas, descartes=descartes)


class AfirmeHeaderTokenizer(Tokenizer):
    """Revisión 'columnas': encabezado en la primera línea."""

    ETIQUETAS: dict[str, str] = {
        "Concepto": "description",
        "Fecha (DD/MM/AA)": "date",
        "Fecha": "date",
        "Referencia": "reference",
        "Cargo": "debit",
        "Abono": "credit",
        "Saldo": "balance",
        "Cuenta": "account",
        "Código": "code",
        "CÃ³digo": "code",
        "No. Secuencia": "sequence",
    }

    @property
    def formato_fecha(self) -> FormatoFecha:
        return FormatoFecha.DD_MM_YY

    def tokenize(self, document: str | bytes) -> DocumentoTokenizado:
        lineas = [(n, line) for n, line in enumerate(split_lines(document), start=1) if line.strip()]
        if not lineas:
            return DocumentoTokenizado(filas=[])

        columnas = map_header_labels(split_columns(lineas[0][1], ",", '"'), self.ETIQUETAS)
        filas = [build_row(columnas, split_columns(line, ",", '"')) for _, line in lineas[1:]]
        return DocumentoTokenizado(filas=filas)


class AfirmeMiner(DescriptionMiner):
    """Extrae rastreo, referencia, hora, RFC, concepto y beneficiario."""

    _RASTREO = re.compile(r"RASTREO\s+([A-Z0-9]+)")
    _REFERENCIA = re.compile(r"REFERENCIA:(\S+)")
    _HORA = re.compile(r"HORA:(\d{2}:\d{2}:\d{2})")
    _RFC = re.compile(rf"RFC\s+({RFC_CUERPO})")
    _CONCEPTO = re.compile(r"CONCEPTO\s+(\S+)")
    _BENEFICIARIO = re.compile(r"HORA:\d{2}:\d{2}:\d{2}\s+(.+?)(?:\s+RFC\s+[A-Z]|$)")

    # Partes técnicas que se quitan al limpiar la descripción
    _PARTES_TECNICAS: list[re.Pattern] = [
        re.compile(r"RASTREO\s+[A-Z0-9]+\s*"),
        re.compile(r"REFERENCIA:\S+\s*"),
        re.compile(r"HORA:\d{2}:\d{2}:\d{2}\s*"),
        re.compile(r"DE\s+LA\s+CTA\s+CLABE\s+\d+"),
        re.compile(rf"RFC\s+{RFC_CUERPO}"),
        re.compile(r"CONCEPTO\s+\S+"),
    ]

    def __init__(self) -> None:
        self._reglas = [
            ReglaMinado(
                variante=VarianteDescripcion.TRANSFERENCIA,
                detecta=contiene("RASTREO", "REFERENCIA:", "HORA:"),
                extrae=self._extraer_spei,
            ),
        ]

    def extract(self, text: str) -> CamposMinados:
        return minar_con_reglas(text, self._reglas)

    def _extraer_spei(self, texto: str) -> CamposMinados:
        beneficiario = buscar(self._BENEFICIARIO, texto)
        return CamposMinados(
            beneficiario=beneficiario,
            clave_rastreo=buscar(self._RASTREO, texto),
            referencia=buscar(self._REFERENCIA, texto),
            hora=buscar(self._HORA, texto),
            rfc=buscar(self._RFC, texto),
            concepto=buscar(self._CONCEPTO, texto),
            descripcion_real=beneficiario or self._limpiar(texto),
        )

    def _limpiar(self, texto: str) -> str:
        for patron in self._PARTES_TECNICAS:
            texto = patron.sub("", texto, count=1)
        return clean_whitespace(texto)
