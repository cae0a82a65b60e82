"""
Adaptador de entrada: Exportaciones CSV de BANBAJÍO.

FORMATO:
    EMPRESA EJEMPLO SA DE CV,0123456789          ← nombre, cuenta
    #,Fecha Movimiento,Hora,Recibo,Descripción,Cargos,Abonos,Saldo
    1,28-Nov-2024,09:33:24,1234567,SPEI Recibido|Clave de Rastreo: ...,0.00,58928.00,60000.00

REVISIONES DE FORMATO:
- 'encabezado' (por defecto): se busca la línea "#,Fecha Movimiento,..."
  y se toman las líneas cuyo primer campo es un número de secuencia.
- 'posicional': se saltan las dos primeras líneas (metadatos y
  encabezado) sin buscar el marcador. El banco lista los movimientos del
  más reciente al más antiguo, así que la salida se INVIERTE para
  devolverlos en orden cronológico.

LA DESCRIPCIÓN PUEDE TRAER COMAS sin comillas. Los primeros 4 campos y
los últimos 3 son fijos, así que todo lo que queda en medio es la
descripción.
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
from bank_export_parser.domain.shared.mining import ReglaMinado, buscar, buscar_rfc, contiene, minar_con_reglas

IDENTIDAD_BANBAJIO = IdentidadBanco(id="030", codigo="40030", nombre="BANBAJIO")

COLUMNAS_BANBAJIO: list[str] = [
    "sequence",
    "date",
    "time",
    "receipt",
    "description",
    "debit",
    "credit",
    "balance",
]


def _dividir_fila(line: str) -> list[str]:
    """4 campos fijos + descripción (con comas) + 3 montos."""
    valores = split_columns(line, ",", '"')
    if len(valores) <= len(COLUMNAS_BANBAJIO):
        return valores
    descripcion = ",".join(valores[4:-3])
    return valores[:4] + [descripcion] + valores[-3:]


def _es_linea_de_datos(line: str) -> bool:
    primer_campo = line.split(",", 1)[0].strip()
    return "," in line and primer_campo.isdigit()


def _leer_encabezado(primera_linea: str) -> MetadatosEncabezado:
    partes = split_columns(primera_linea, ",", '"')
    if len(partes) < 2:
        return MetadatosEncabezado(nombre_banco="BANBAJIO")
    return MetadatosEncabezado(
        nombre_cuenta=partes[0],
        cuenta=partes[1],
        nombre_banco="BANBAJIO",
    )


class BanBajioHeaderTokenizer(Tokenizer):
    """Revisión 'encabezado': bloque de datos después del marcador."""

    MARCADOR: str = "#,Fecha Movimiento,Hora,Recibo,Descripción,Cargos,Abonos,Saldo"
    MARCADOR_MOJIBAKE: str = "#,Fecha Movimiento,Hora,Recibo,DescripciÃ³n,Cargos,Abonos,Saldo"

    # El marcador aparece en las primeras líneas; después solo hay datos
    LIMITE_BUSQUEDA: int = 20

    @property
    def formato_fecha(self) -> FormatoFecha:
        return FormatoFecha.DD_MMM_YYYY

    def tokenize(self, document: str | bytes) -> DocumentoTokenizado:
        lines = split_lines(document)
        indice = find_header_line(lines, (self.MARCADOR, self.MARCADOR_MOJIBAKE), self.LIMITE_BUSQUEDA)
        if indice is None:
            raise BloqueDatosNoEncontradoError("banbajio", self.MARCADOR)

        filas: list[FilaCruda] = []
        descartes: list[FilaDescartada] = []
        for numero, line in enumerate(lines[indice + 1 :], start=indice + 2):
            if not line.strip():
                continue
            if not _es_linea_de_datos(line):
                descartes.append(FilaDescartada(numero, "Sin número de secuencia", line))
                continue
            filas.append(build_row(COLUMNAS_BANBAJIO, _dividir_fila(line)))

        return DocumentoTokenizado(
            filas=filas,
            encabezado=_leer_encabezado(lines[0]) if indice > 0 else MetadatosEncabezado(),
            descartes=descartes,
        )


class BanBajioPositionalTokenizer(Tokenizer):
    """Revisión 'posicional': sin marcador, orden invertido."""

    LINEAS_ENCABEZADO: int = 2

    @property
    def formato_fecha(self) -> FormatoFecha:
        return FormatoFecha.DD_MMM_YYYY

    def tokenize(self, document: str | bytes) -> DocumentoTokenizado:
        lineas = [(n, line) for n, line in enumerate(split_lines(document), start=1) if line.strip()]
        encabezado = _leer_encabezado(lineas[0][1]) if lineas else MetadatosEncabezado()

        filas: list[FilaCruda] = []
        descartes: list[FilaDescartada] = []
        for numero, line in lineas[self.LINEAS_ENCABEZADO :]:
            valores = _dividir_fila(line)
            if not _es_linea_de_datos(line) or len(valores) < len(COLUMNAS_BANBAJIO):
                descartes.append(FilaDescartada(numero, "Línea sin las 8 columnas de movimiento", line))
                continue
            fila = build_row(COLUMNAS_BANBAJIO, valores)
            # En esta revisión el folio del recibo es la referencia
            fila["reference"] = fila["receipt"]
            filas.append(fila)

        filas.reverse()
        return DocumentoTokenizado(filas=filas, encabezado=encabezado, descartes=descartes)


class BanBajioMiner(DescriptionMiner):
    """Referencia, clave de rastreo y RFC de descripciones separadas por '|'.

    Prioridad de la referencia: "Referencia:", luego "Clave de Rastreo:",
    luego "Recibo #".
    """

    _REFERENCIA = re.compile(r"Referencia:\s*([^|]+)")
    _RASTREO = re.compile(r"Clave de Rastreo:\s*([^\s|]+)")
    _RECIBO = re.compile(r"Recibo #\s*(\d+)")

    def __init__(self) -> None:
        self._reglas = [
            ReglaMinado(
                variante=VarianteDescripcion.TRANSFERENCIA,
                detecta=contiene("Clave de Rastreo:"),
                extrae=self._extraer,
            ),
            ReglaMinado(
                variante=VarianteDescripcion.GENERICO,
                detecta=contiene("Referencia:", "Recibo #"),
                extrae=self._extraer,
            ),
        ]

    def extract(self, text: str) -> CamposMinados:
        return minar_con_reglas(text, self._reglas)

    def _extraer(self, texto: str) -> CamposMinados:
        rastreo = buscar(self._RASTREO, texto)
        referencia = buscar(self._REFERENCIA, texto) or rastreo or buscar(self._RECIBO, texto)
        return CamposMinados(
            clave_rastreo=rastreo,
            referencia=referencia,
            rfc=buscar_rfc(texto),
            descripcion_real=texto.strip(),
        )
