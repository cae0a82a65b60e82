"""
Adaptador de entrada: Exportaciones CSV de BANREGIO.

FORMATO:
    Estado de Cuenta,,,,,,
    ...
    CUENTA: 012345678,,,,,,
    CLABE: 058580000000000000,,,,,,
    RFC: EEJ850101AB1,,,,,,
    Fecha inicio: 01/11/2024,,Fecha fin: 30/11/2024,,,,
    Fecha,Descripción,Referencia,Cargo,Abonos,Saldo,Clasificación
    01/11/2024,Saldo Inicial,,,,"$10,000.00",
    04/11/2024,(BE) Transferencia a cuenta 058580123 JUAN PEREZ,123,"$1,500.00",$0.00,"$8,500.00",Pagos

- Los metadatos de la cuenta están en las primeras 15 líneas.
- La cuarta línea es el nombre del titular, salvo que esté vacía (',,,,,').
- Los montos traen "$" y comas, entrecomillados cuando tienen comas.
- Las líneas "Saldo Inicial" y "Estado de Cuenta" no son movimientos.

REVISIONES DE FORMATO:
- 'clasificacion' (por defecto): 7 columnas, la última es la
  clasificación que el usuario asignó en la banca en línea.
- 'basica': 6 columnas, sin clasificación.
"""

import re

from bank_export_parser.domain.exceptions import BloqueDatosNoEncontradoError
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
from bank_export_parser.domain.shared.delimited import build_row, find_header_line, split_columns, split_lines
from bank_export_parser.domain.shared.header_metadata import scan_labeled_values, scan_period
from bank_export_parser.domain.shared.mining import (
    ReglaMinado,
    buscar,
    buscar_hora,
    buscar_rfc,
    minar_con_reglas,
)
from bank_export_parser.domain.shared.text_cleaner import clean_whitespace

IDENTIDAD_BANREGIO = IdentidadBanco(id="058", codigo="40058", nombre="BANREGIO")


class BanregioTokenizer(Tokenizer):
    """Bloque de datos después del encabezado literal de la tabla."""

    COLUMNAS_CLASIFICACION: list[str] = [
        "date",
        "description",
        "reference",
        "debit",
        "credit",
        "balance",
        "classification",
    ]

    # Etiquetas de la tabla en el orden de COLUMNAS_CLASIFICACION
    _ETIQUETAS: list[str] = ["Fecha", "Descripción", "Referencia", "Cargo", "Abonos", "Saldo", "Clasificación"]

    LIMITE_ENCABEZADO: int = 15
    LIMITE_BUSQUEDA: int = 40

    LINEAS_NO_MOVIMIENTO: tuple[str, ...] = ("Saldo Inicial", "Estado de Cuenta")

    ETIQUETAS_CUENTA: dict[str, str] = {
        "CUENTA:": "cuenta",
        "CLABE:": "clabe",
        "RFC:": "rfc",
    }

    _PERIODO = re.compile(r"Fecha inicio:\s*(\d{2}/\d{2}/\d{4}).*Fecha fin:\s*(\d{2}/\d{2}/\d{4})")

    # Línea (0-indexed) donde Banregio pone el nombre del titular
    _LINEA_TITULAR: int = 3

    def __init__(self, con_clasificacion: bool = True) -> None:
        num_columnas = 7 if con_clasificacion else 6
        self._columnas = self.COLUMNAS_CLASIFICACION[:num_columnas]
        self._marcador = ",".join(self._ETIQUETAS[:num_columnas])
        # Mismo encabezado leído como Latin-1
        self._marcador_mojibake = self._marcador.replace("ó", "Ã³")

    @property
    def formato_fecha(self) -> FormatoFecha:
        return FormatoFecha.DD_MM_YYYY

    def tokenize(self, document: str | bytes) -> DocumentoTokenizado:
        lines = [line.strip() for line in split_lines(document)]
        indice = find_header_line(lines, (self._marcador, self._marcador_mojibake), self.LIMITE_BUSQUEDA)
        if indice is None:
            raise BloqueDatosNoEncontradoError("banregio", self._marcador)

        filas: list[FilaCruda] = []
        descartes: list[FilaDescartada] = []
        for numero, line in enumerate(lines[indice + 1 :], start=indice + 2):
            if not line:
                continue
            razon = self._razon_descarte(line)
            if razon:
                descartes.append(FilaDescartada(numero, razon, line))
                continue
            filas.append(build_row(self._columnas, split_columns(line, ",", '"')))

        return DocumentoTokenizado(
            filas=filas,
            encabezado=self._leer_encabezado(lines, indice),
            descartes=descartes,
        )

    def _razon_descarte(self, line: str) -> str | None:
        for marcador in self.LINEAS_NO_MOVIMIENTO:
            if marcador in line:
                return f"Línea de resumen: {marcador}"
        if "," not in line:
            return "Línea sin delimitador"
        return None

    def _leer_encabezado(self, lines: list[str], indice_tabla: int) -> MetadatosEncabezado:
        prefijo = lines[: min(self.LIMITE_ENCABEZADO, indice_tabla)]
        valores = scan_labeled_values(prefijo, self.ETIQUETAS_CUENTA, self.LIMITE_ENCABEZADO)

        titular = ""
        if len(prefijo) > self._LINEA_TITULAR and ",,,,," not in prefijo[self._LINEA_TITULAR]:
            titular = prefijo[self._LINEA_TITULAR].replace(",", "").strip()

        return MetadatosEncabezado(
            cuenta=valores.get("cuenta", ""),
            clabe=valores.get("clabe", ""),
            rfc=valores.get("rfc", ""),
            periodo=scan_period(prefijo, self._PERIODO, self.LIMITE_ENCABEZADO),
            nombre_cuenta=titular,
            nombre_banco="BANREGIO",
        )


class BanregioMiner(DescriptionMiner):
    """Transferencias con código (BE)/(NB) y SPEI con clave de rastreo.

    Ejemplos:
        (BE) Transferencia a cuenta 058580123 JUAN PEREZ
            → referencia '058580123', beneficiario 'JUAN PEREZ'
        (NB) Recepción SPEI Clave de rastreo: MBAN01002411040012 RFC PELJ850101AB1
            → clave_rastreo, rfc
    """

    _CODIGO_TIPO = re.compile(r"\((BE|NB)\)")
    _TRANSFERENCIA = re.compile(r"Transferencia", re.IGNORECASE)
    _CUENTA = re.compile(r"(?:a\s+la\s+|de\s+la\s+)?(?:cuenta|cta\.?)\s*:?\s*(\d{4,20})", re.IGNORECASE)
    _CONECTOR = re.compile(r"^\s*(?:a|de|para|SPEI)\b", re.IGNORECASE)
    _RASTREO = re.compile(r"Clave de rastreo:?\s*([A-Z0-9]+)", re.IGNORECASE)

    def __init__(self) -> None:
        self._reglas = [
            ReglaMinado(
                variante=VarianteDescripcion.TRANSFERENCIA,
                detecta=self._es_transferencia_con_codigo,
                extrae=self._extraer_transferencia,
            ),
            ReglaMinado(
                variante=VarianteDescripcion.GENERICO,
                detecta=lambda texto: self._RASTREO.search(texto) is not None,
                extrae=self._extraer_spei,
            ),
        ]

    def extract(self, text: str) -> CamposMinados:
        return minar_con_reglas(text, self._reglas)

    def _es_transferencia_con_codigo(self, texto: str) -> bool:
        return bool(self._CODIGO_TIPO.search(texto) and self._TRANSFERENCIA.search(texto))

    def _extraer_transferencia(self, texto: str) -> CamposMinados:
        despues = self._TRANSFERENCIA.split(texto, maxsplit=1)[1]
        cuenta = buscar(self._CUENTA, despues)

        # Lo que queda después de quitar la cuenta y el rastreo es el beneficiario
        resto = self._RASTREO.sub("", self._CUENTA.sub("", despues))
        resto = self._CONECTOR.sub("", resto)
        rfc = buscar_rfc(resto)
        if rfc:
            resto = resto.replace(rfc, "").replace("RFC", "")
        beneficiario = clean_whitespace(resto).strip(" -:,.|") or None

        return CamposMinados(
            beneficiario=beneficiario,
            referencia=cuenta,
            clave_rastreo=buscar(self._RASTREO, texto),
            rfc=rfc,
            hora=buscar_hora(texto),
            descripcion_real=clean_whitespace(texto),
        )

    def _extraer_spei(self, texto: str) -> CamposMinados:
        return CamposMinados(
            clave_rastreo=buscar(self._RASTREO, texto),
            rfc=buscar_rfc(texto),
            hora=buscar_hora(texto),
            descripcion_real=clean_whitespace(texto),
        )
