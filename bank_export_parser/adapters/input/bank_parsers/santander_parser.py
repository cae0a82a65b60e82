"""
Adaptador de entrada: Exportaciones CSV de SANTANDER (Enlace).

FORMATO:
    Cuenta:,65501234567,,,
    Contrato: EMPRESA EJEMPLO SA DE CV
    Periodo de: 01/11/2024 al 30/11/2024
    Usuario:,JPEREZ,,,
    Fecha,Hora,Sucursal,Descripcion,Importe Cargo,Importe Abono,Saldo,Referencia,Concepto
    '01112024','09:15','0001','ABONO TRANSFERENCIA','0',"1,500.00","11,500.00",'1234567','PAGO FACTURA 88'

- Los metadatos están en las primeras 10 líneas.
- Cada token puede venir con comilla simple o doble; solo la misma
  comilla cierra el token. Las comas de los montos van entre comillas.
- Una línea de movimiento empieza con la fecha entre comillas simples
  ('DDMMYYYY',). El bloque termina en la primera línea que no cumple.
- Cada movimiento debe tener exactamente 9 columnas; si no, se descarta.

DESCRIPCIÓN:
Santander pone en 'Descripcion' el tipo de movimiento ("ABONO
TRANSFERENCIA") y en 'Concepto' lo que capturó quien paga. Se prefiere
el concepto, salvo que venga vacío o sea el relleno "REF 0000000".
La descripción original se conserva en 'originalDescription'.
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
    RFC_CUERPO,
    ReglaMinado,
    buscar,
    buscar_hora,
    buscar_rfc,
    contiene,
    minar_con_reglas,
)

IDENTIDAD_SANTANDER = IdentidadBanco(id="014", codigo="40014", nombre="SANTANDER")


class SantanderTokenizer(Tokenizer):
    """Escáner de tokens entrecomillados."""

    MARCADOR: str = "Fecha,Hora,Sucursal,Descripcion,Importe Cargo,Importe Abono,Saldo,Referencia,Concepto"

    COLUMNAS: list[str] = [
        "date",
        "time",
        "branch",
        "description",
        "debit",
        "credit",
        "balance",
        "reference",
        "concept",
    ]

    LIMITE_ENCABEZADO: int = 10
    LIMITE_BUSQUEDA: int = 30

    ETIQUETAS_CUENTA: dict[str, str] = {
        "Cuenta:": "cuenta",
        "Usuario:": "usuario",
    }

    _LINEA_DATOS = re.compile(r"^'\d{8}',")
    _PERIODO = re.compile(r"Periodo de:\s*(\d{2}/\d{2}/\d{4})\s*al\s*(\d{2}/\d{2}/\d{4})")

    # Relleno que Santander pone en 'Concepto' cuando no hay concepto
    _CONCEPTO_VACIO: str = "REF 0000000"

    @property
    def formato_fecha(self) -> FormatoFecha:
        return FormatoFecha.DDMMYYYY

    def tokenize(self, document: str | bytes) -> DocumentoTokenizado:
        lines = [line.strip() for line in split_lines(document)]
        indice = find_header_line(lines, (self.MARCADOR,), self.LIMITE_BUSQUEDA)
        if indice is None:
            raise BloqueDatosNoEncontradoError("santander", self.MARCADOR)

        filas: list[FilaCruda] = []
        descartes: list[FilaDescartada] = []
        for numero, line in enumerate(lines[indice + 1 :], start=indice + 2):
            if not line or not self._LINEA_DATOS.match(line):
                break

            valores = split_columns(line, ",", "'\"")
            if len(valores) != len(self.COLUMNAS):
                descartes.append(
                    FilaDescartada(numero, f"Número de columnas inesperado: {len(valores)}", line)
                )
                continue

            filas.append(self._preferir_concepto(build_row(self.COLUMNAS, valores)))

        return DocumentoTokenizado(
            filas=filas,
            encabezado=self._leer_encabezado(lines),
            descartes=descartes,
        )

    def _preferir_concepto(self, fila: FilaCruda) -> FilaCruda:
        fila["originalDescription"] = fila["description"]
        concepto = fila["concept"].strip()
        if concepto and self._CONCEPTO_VACIO not in concepto:
            fila["description"] = concepto
        return fila

    def _leer_encabezado(self, lines: list[str]) -> MetadatosEncabezado:
        valores = scan_labeled_values(lines, self.ETIQUETAS_CUENTA, self.LIMITE_ENCABEZADO)

        # "Cuenta:,655..." deja el valor en la siguiente columna
        for etiqueta, campo in self.ETIQUETAS_CUENTA.items():
            if campo in valores and not valores[campo]:
                valores[campo] = self._valor_siguiente(lines, etiqueta)

        # El contrato ocupa el resto de la línea (puede traer comas)
        contrato = scan_labeled_values(lines, {"Contrato:": "contrato"}, self.LIMITE_ENCABEZADO, delimiter="")

        return MetadatosEncabezado(
            cuenta=valores.get("cuenta", ""),
            usuario=valores.get("usuario", ""),
            nombre_cuenta=contrato.get("contrato", ""),
            periodo=scan_period(lines, self._PERIODO, self.LIMITE_ENCABEZADO),
            nombre_banco="SANTANDER",
        )

    def _valor_siguiente(self, lines: list[str], etiqueta: str) -> str:
        for line in lines[: self.LIMITE_ENCABEZADO]:
            if etiqueta not in line:
                continue
            resto = split_columns(line.split(etiqueta, 1)[1], ",", "'\"")
            return next((v for v in resto if v), "")
        return ""


class SantanderMiner(DescriptionMiner):
    """Clave de rastreo, RFC y hora dentro del concepto."""

    _RASTREO = re.compile(r"(?:CLAVE DE RASTREO|RASTREO)\s*:?\s*([A-Z0-9]+)")
    _RFC = re.compile(rf"RFC\s*:?\s*({RFC_CUERPO})")
    _HORA = re.compile(r"HORA\s*:?\s*(\d{2}:\d{2}(?::\d{2})?)")

    def __init__(self) -> None:
        self._reglas = [
            ReglaMinado(
                variante=VarianteDescripcion.TRANSFERENCIA,
                detecta=contiene("RASTREO", "RFC", "HORA"),
                extrae=self._extraer,
            ),
        ]

    def extract(self, text: str) -> CamposMinados:
        return minar_con_reglas(text, self._reglas)

    def _extraer(self, texto: str) -> CamposMinados:
        return CamposMinados(
            clave_rastreo=buscar(self._RASTREO, texto),
            rfc=buscar(self._RFC, texto) or buscar_rfc(texto),
            hora=buscar(self._HORA, texto) or buscar_hora(texto),
            descripcion_real=texto.strip(),
        )
