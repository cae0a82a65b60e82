"""
Adaptador de entrada: Exportaciones BANORTE delimitadas por pipes.

FORMATO:
    Cuenta|Fecha De Operación|Fecha|Referencia|Descripción|Cod. Transac|Sucursal|Depósitos|Retiros|Saldo|Movimiento|Descripción Detallada|Cheque
    0123456789|02/12/2024|02/12/2024|1234567|SPEI RECIBIDO|...|$13,295.61|$0.00|$50,000.00|...|SPEI RECIBIDO DEL CLIENTE ...|

- La primera línea es el encabezado; los encabezados repetidos (al
  concatenar varias exportaciones) se descartan.
- Los montos traen "$" y comas; "$0.00" significa columna vacía.
- Algunas exportaciones llegan con el encabezado mal decodificado
  ("OperaciÃ³n", "DepÃ³sitos"); la tabla de etiquetas incluye ambas formas.

REVISIONES DE FORMATO:
- 'detallado' (por defecto): 'Fecha' es la fecha del movimiento y
  'Fecha De Operación' se conserva como fecha de operación.
- 'operacion': 'Fecha De Operación' es la fecha del movimiento.

GRAMÁTICAS DE LA DESCRIPCIÓN DETALLADA (en orden de prioridad):
1. SPEI RECIBIDO:
       SPEI RECIBIDO DEL CLIENTE JUAN PEREZ, ... CVE RAST: 2024120240014,
       HR LIQ: 10:15:30, RFC PELJ850101AB1, CONCEPTO: PAGO FACTURA 123, ...
   → "SPEI Recibido: PAGO FACTURA 123 - JUAN PEREZ"
2. COMPRA ORDEN DE PAGO SPEI / BEM SPEI:
       BEM SPEI BENEF:PROVEEDOR SA (DATO NO VERIFICADO), CVE RASTREO: ABC123,
       HORA LIQ: 11:00:00, RFC: PRO850101AB1, TRANSFERENCIA, PAGO
   → "SPEI Enviado: PAGO - PROVEEDOR SA"
3. COMPENSACION DESFASE SPEI:
       COMPENSACION DESFASE SPEI RASTREO :, 2024120240014
   → "Compensación SPEI"
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
from bank_export_parser.domain.ports.bank_parser import DescriptionMiner, Tokenizer
from bank_export_parser.domain.shared.date_parser import FormatoFecha
from bank_export_parser.domain.shared.delimited import build_row, map_header_labels, split_lines
from bank_export_parser.domain.shared.mining import RFC_CUERPO, ReglaMinado, buscar, contiene, minar_con_reglas
from bank_export_parser.domain.shared.text_cleaner import repair_mojibake

IDENTIDAD_BANORTE = IdentidadBanco(id="072", codigo="40072", nombre="BANORTE")


class BanorteTokenizer(Tokenizer):
    """Tokenizer por encabezado, delimitado por '|'."""

    DELIMITADOR: str = "|"

    ETIQUETAS: dict[str, str] = {
        "Cuenta": "account",
        "Fecha De Operación": "operationDate",
        "Fecha De OperaciÃ³n": "operationDate",
        "Fecha": "date",
        "Referencia": "reference",
        "Descripción": "description",
        "DescripciÃ³n": "description",
        "Cod. Transac": "transactionCode",
        "Sucursal": "branch",
        "Depósitos": "credit",
        "DepÃ³sitos": "credit",
        "Retiros": "debit",
        "Saldo": "balance",
        "Movimiento": "movement",
        "Descripción Detallada": "detailedDescription",
        "DescripciÃ³n Detallada": "detailedDescription",
        "Cheque": "check",
    }

    # El encabezado debe estar al principio; no se busca en todo el archivo
    LIMITE_BUSQUEDA: int = 10

    def __init__(self, fecha_de_operacion: bool = False) -> None:
        """
        Args:
            fecha_de_operacion: Si True ('operacion'), la columna
                               'Fecha De Operación' es la fecha del movimiento
                               y 'Fecha' pasa a 'postingDate'.
        """
        self._etiquetas = dict(self.ETIQUETAS)
        if fecha_de_operacion:
            for etiqueta, canonico in self.ETIQUETAS.items():
                if canonico == "operationDate":
                    self._etiquetas[etiqueta] = "date"
            self._etiquetas["Fecha"] = "postingDate"

    @property
    def formato_fecha(self) -> FormatoFecha:
        return FormatoFecha.DD_MM_YYYY

    def tokenize(self, document: str | bytes) -> DocumentoTokenizado:
        lines = split_lines(document)

        indice = next(
            (i for i, line in enumerate(lines[: self.LIMITE_BUSQUEDA]) if self._es_encabezado(line)),
            None,
        )
        if indice is None:
            raise BloqueDatosNoEncontradoError("banorte", "Cuenta|Fecha...|Descripción|...")

        columnas = map_header_labels(lines[indice].split(self.DELIMITADOR), self._etiquetas)

        filas: list[FilaCruda] = []
        descartes: list[FilaDescartada] = []
        for numero, line in enumerate(lines[indice + 1 :], start=indice + 2):
            if not line.strip():
                continue
            if self._es_encabezado(line):
                descartes.append(FilaDescartada(numero, "Encabezado repetido", line))
                continue
            filas.append(build_row(columnas, line.split(self.DELIMITADOR)))

        return DocumentoTokenizado(filas=filas, descartes=descartes)

    @staticmethod
    def _es_encabezado(line: str) -> bool:
        reparada = repair_mojibake(line)
        return "Cuenta" in reparada and "Fecha" in reparada and "Descripción" in reparada


class BanorteMiner(DescriptionMiner):
    """Gramáticas SPEI recibido, SPEI enviado y compensación."""

    # --- SPEI RECIBIDO ---
    _ORDENANTE = re.compile(r"DEL CLIENTE\s+([^,]+),")
    _CVE_RAST = re.compile(r"CVE RAST:\s*([^,\s]+)")
    _HR_LIQ = re.compile(r"HR LIQ:\s*(\d{2}:\d{2}:\d{2})")
    _RFC_RECIBIDO = re.compile(rf"RFC\s+({RFC_CUERPO}),")
    _CONCEPTO_RECIBIDO = re.compile(r"CONCEPTO:\s*([^,]+),")

    # --- SPEI ENVIADO ---
    _BENEFICIARIO = re.compile(r"BENEF:([^,(]+)")
    _CVE_RASTREO = re.compile(r"CVE RASTREO:\s*([^,\s]+)")
    _HORA_LIQ = re.compile(r"HORA LIQ:\s*(\d{2}:\d{2}:\d{2})")
    _RFC_ENVIADO = re.compile(rf"RFC:\s*({RFC_CUERPO}),")
    _CONCEPTO_ENVIADO = re.compile(r"TRANSFERENCIA,?\s*([^,]+)?")

    # --- COMPENSACION ---
    _RASTREO_COMPENSACION = re.compile(r"RASTREO\s*:,\s*([^,\s]+)")

    def __init__(self) -> None:
        self._reglas = [
            ReglaMinado(
                variante=VarianteDescripcion.SPEI_RECIBIDO,
                detecta=contiene("SPEI RECIBIDO"),
                extrae=self._extraer_spei_recibido,
            ),
            ReglaMinado(
                variante=VarianteDescripcion.SPEI_ENVIADO,
                detecta=contiene("COMPRA ORDEN DE PAGO SPEI", "BEM SPEI"),
                extrae=self._extraer_spei_enviado,
            ),
            ReglaMinado(
                variante=VarianteDescripcion.COMPENSACION,
                detecta=contiene("COMPENSACION DESFASE SPEI"),
                extrae=self._extraer_compensacion,
            ),
        ]

    def extract(self, text: str) -> CamposMinados:
        return minar_con_reglas(text, self._reglas)

    def _extraer_spei_recibido(self, texto: str) -> CamposMinados:
        beneficiario = buscar(self._ORDENANTE, texto)
        concepto = buscar(self._CONCEPTO_RECIBIDO, texto)
        return CamposMinados(
            beneficiario=beneficiario,
            clave_rastreo=buscar(self._CVE_RAST, texto),
            hora=buscar(self._HR_LIQ, texto),
            rfc=buscar(self._RFC_RECIBIDO, texto),
            concepto=concepto,
            descripcion_real=_componer("SPEI Recibido", concepto, beneficiario),
        )

    def _extraer_spei_enviado(self, texto: str) -> CamposMinados:
        beneficiario = buscar(self._BENEFICIARIO, texto)
        concepto = buscar(self._CONCEPTO_ENVIADO, texto) or "Transferencia"
        return CamposMinados(
            beneficiario=beneficiario,
            clave_rastreo=buscar(self._CVE_RASTREO, texto),
            hora=buscar(self._HORA_LIQ, texto),
            rfc=buscar(self._RFC_ENVIADO, texto),
            concepto=concepto,
            descripcion_real=_componer("SPEI Enviado", concepto, beneficiario),
        )

    def _extraer_compensacion(self, texto: str) -> CamposMinados:
        return CamposMinados(
            clave_rastreo=buscar(self._RASTREO_COMPENSACION, texto),
            descripcion_real="Compensación SPEI",
        )


def _componer(titulo: str, concepto: str | None, beneficiario: str | None) -> str:
    """'SPEI Recibido: concepto - beneficiario', omitiendo las partes vacías."""
    partes = [p for p in (concepto, beneficiario) if p]
    if not partes:
        return titulo
    return f"{titulo}: {' - '.join(partes)}"
