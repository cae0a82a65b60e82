"""
Adaptador de entrada: Exportaciones XLSX de HSBC (HSBCnet).

FORMATO:
La primera hoja del libro es una tabla. La primera fila trae los
encabezados en español y cada fila siguiente es un movimiento que repite
los datos de la cuenta:

    Nombre de cuenta | Número de cuenta | Nombre del banco | ... |
    Referencia bancaria | Descripción | Referencia de cliente | Tipo de TRN |
    Importe de crédito | Importe del débito | Saldo | Fecha del apunte

- Los datos de la cuenta se toman de la primera fila de datos.
- Una fila con menos celdas que el encabezado (sin contar las vacías del
  final) es un renglón de totales o un separador: se salta.
- Los importes pueden venir como números o como texto "1,234.56".
- 'Fecha del apunte' viene como texto DD/MM/YYYY o como fecha de Excel.

GRAMÁTICAS DE LA DESCRIPCIÓN (en orden de prioridad):
1. SPEI:               "PAGO PROVEEDOR 1234567 FACT 88 SPEI"
   → concepto 'PAGO PROVEEDOR', clave de rastreo '1234567'
2. TRANSFERENCIA BPI:  "TRANSFERENCIA BPI CUENTA 4055123456"
   → 'Transferencia BPI', cuenta como clave de rastreo
3. Genérica:           "COMISION 20241130" → concepto 'COMISION'
   Solo aplica si después de la frase vienen dígitos.
"""

import io
import re
from datetime import date, datetime

import pandas as pd

from bank_export_parser.domain.exceptions import BloqueDatosNoEncontradoError, FormatoInvalidoError
from bank_export_parser.domain.models.banco import IdentidadBanco
from bank_export_parser.domain.models.campos_minados import CamposMinados, VarianteDescripcion
from bank_export_parser.domain.models.documento_tokenizado import (
    DocumentoTokenizado,
    FilaCruda,
    FilaDescartada,
)
from bank_export_parser.domain.models.encabezado import MetadatosEncabezado
from bank_export_parser.domain.ports.bank_parser import DescriptionMiner, Tokenizer
from bank_export_parser.domain.shared.date_parser import FormatoFecha
from bank_export_parser.domain.shared.delimited import build_row, map_header_labels
from bank_export_parser.domain.shared.mining import ReglaMinado, buscar, contiene, minar_con_reglas

IDENTIDAD_HSBC = IdentidadBanco(id="021", codigo="40021", nombre="HSBC")


class HSBCSpreadsheetTokenizer(Tokenizer):
    """Lee la primera hoja del libro con pandas (motor openpyxl)."""

    ETIQUETAS: dict[str, str] = {
        "Nombre de cuenta": "accountName",
        "Número de cuenta": "account",
        "Nombre del banco": "bankName",
        "Moneda": "currency",
        "Ubicación": "location",
        "BIC": "bic",
        "IBAN": "iban",
        "Estatus de cuenta": "accountStatus",
        "Tipo de cuenta": "accountType",
        "Saldo en libros al cierre": "closingBookBalance",
        "Saldo en libros final al cierre del ejercicio anterior de": "previousClosingBookBalance",
        "Saldo disponible al cierre": "closingAvailableBalance",
        "Saldo final disponible del ejercicio anterior de": "previousClosingAvailableBalance",
        "Saldo actual en libros": "currentBookBalance",
        "Saldo actual en libros al": "currentBookBalanceDate",
        "Saldo actual disponible": "currentAvailableBalance",
        "Saldo actual disponible al": "currentAvailableBalanceDate",
        "Referencia bancaria": "bankReference",
        "Descripción": "description",
        "Referencia de cliente": "clientReference",
        "Tipo de TRN": "transactionType",
        "Importe de crédito": "credit",
        "Importe del débito": "debit",
        "Saldo": "balance",
        "Fecha del apunte": "date",
    }

    @property
    def formato_fecha(self) -> FormatoFecha:
        return FormatoFecha.DD_MM_YYYY

    def tokenize(self, document: str | bytes) -> DocumentoTokenizado:
        if not isinstance(document, (bytes, bytearray)):
            raise FormatoInvalidoError("hsbc", "XLSX (bytes)", f"se recibió {type(document).__name__}")

        try:
            hoja = pd.read_excel(
                io.BytesIO(document),
                sheet_name=0,
                header=None,
                dtype=object,
                engine="openpyxl",
            )
        except Exception as e:
            # openpyxl lanza BadZipFile, KeyError o InvalidFileException
            # según cómo esté dañado el archivo
            raise FormatoInvalidoError("hsbc", "XLSX", str(e))

        renglones = [_recortar(list(renglon)) for renglon in hoja.itertuples(index=False, name=None)]
        if len(renglones) < 2:
            raise BloqueDatosNoEncontradoError("hsbc", "encabezado + al menos un movimiento")

        columnas = map_header_labels(renglones[0], self.ETIQUETAS)

        filas: list[FilaCruda] = []
        descartes: list[FilaDescartada] = []
        for numero, renglon in enumerate(renglones[1:], start=2):
            if len(renglon) < len(columnas):
                descartes.append(
                    FilaDescartada(numero, f"Fila con {len(renglon)} de {len(columnas)} celdas")
                )
                continue
            fila = build_row(columnas, renglon)
            fila["reference"] = fila.get("clientReference") or fila.get("bankReference") or ""
            filas.append(fila)

        return DocumentoTokenizado(
            filas=filas,
            encabezado=self._leer_encabezado(columnas, renglones[1]),
            descartes=descartes,
        )

    @staticmethod
    def _leer_encabezado(columnas: list[str], primer_renglon: list[str]) -> MetadatosEncabezado:
        datos = build_row(columnas, primer_renglon)
        return MetadatosEncabezado(
            cuenta=datos.get("account", ""),
            nombre_cuenta=datos.get("accountName", ""),
            nombre_banco=datos.get("bankName", ""),
        )


def _recortar(celdas: list[object]) -> list[str]:
    """Convierte las celdas a texto y quita las vacías del final."""
    textos = [_celda_a_texto(c) for c in celdas]
    while textos and textos[-1] == "":
        textos.pop()
    return textos


def _celda_a_texto(valor: object) -> str:
    if valor is None or (isinstance(valor, float) and pd.isna(valor)):
        return ""
    if isinstance(valor, (datetime, date)):
        return valor.strftime("%d/%m/%Y")
    if isinstance(valor, float) and valor.is_integer():
        return str(int(valor))
    return str(valor).strip()


class HSBCMiner(DescriptionMiner):
    """SPEI, transferencia BPI y concepto genérico."""

    _SUFIJO_SPEI = re.compile(r"\s+SPEI$")
    _BENEFICIARIO = re.compile(r"^([A-Za-z][A-Za-z\s.\-]+?(?=\s+\d|$))")
    _CONCEPTO_SPEI = re.compile(r"^([A-Za-z][A-Za-z\s.\-0-9]+?)(?=\s+\d{6,8}\s|$)")
    _RASTREO = re.compile(r"(\d{6,8})(?:\s|$)")
    _CUENTA_BPI = re.compile(r"CUENTA\s+(\d+)")
    _CONCEPTO_GENERICO = re.compile(r"^([A-Za-z][A-Za-z\s.\-]+?)(?=\s+\d)")

    def __init__(self) -> None:
        self._reglas = [
            ReglaMinado(
                variante=VarianteDescripcion.TRANSFERENCIA,
                detecta=lambda texto: "SPEI" in texto,
                extrae=self._extraer_spei,
            ),
            ReglaMinado(
                variante=VarianteDescripcion.TRANSFERENCIA_BPI,
                detecta=contiene("TRANSFERENCIA BPI"),
                extrae=self._extraer_bpi,
            ),
            ReglaMinado(
                variante=VarianteDescripcion.GENERICO,
                detecta=lambda texto: self._CONCEPTO_GENERICO.match(texto.strip()) is not None,
                extrae=self._extraer_generico,
            ),
        ]

    def extract(self, text: str) -> CamposMinados:
        return minar_con_reglas(text, self._reglas)

    def _extraer_spei(self, texto: str) -> CamposMinados:
        limpio = self._SUFIJO_SPEI.sub("", texto.strip()).strip()
        concepto = buscar(self._CONCEPTO_SPEI, limpio)
        return CamposMinados(
            beneficiario=buscar(self._BENEFICIARIO, limpio),
            clave_rastreo=buscar(self._RASTREO, limpio),
            concepto=concepto,
            descripcion_real=concepto or texto.strip(),
        )

    def _extraer_bpi(self, texto: str) -> CamposMinados:
        return CamposMinados(
            clave_rastreo=buscar(self._CUENTA_BPI, texto),
            concepto="Transferencia BPI",
            descripcion_real="Transferencia BPI",
        )

    def _extraer_generico(self, texto: str) -> CamposMinados:
        concepto = buscar(self._CONCEPTO_GENERICO, texto.strip())
        return CamposMinados(concepto=concepto, descripcion_real=concepto)
