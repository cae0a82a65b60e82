"""
Tests para el parser de Banorte.

Diferencias clave que estos tests validan vs los demás bancos:
- Delimitado por pipes, con encabezado de 13 columnas.
- Dos fechas: la de aplicación y la de operación.
- El minado usa la 'Descripción Detallada', no la corta.
- Encabezados repetidos y encabezados con mojibake.
"""

from decimal import Decimal

import pytest

from bank_export_parser.adapters.input.bank_parsers.banorte_parser import BanorteMiner, BanorteTokenizer
from bank_export_parser.domain.exceptions import BloqueDatosNoEncontradoError
from bank_export_parser.domain.models.campos_minados import VarianteDescripcion
from bank_export_parser.infrastructure.registry import select_parser

ENCABEZADO = (
    "Cuenta|Fecha De Operación|Fecha|Referencia|Descripción|Cod. Transac|Sucursal|"
    "Depósitos|Retiros|Saldo|Movimiento|Descripción Detallada|Cheque"
)

DETALLE_SPEI = (
    "SPEI RECIBIDO DEL CLIENTE JUAN PEREZ, DE LA CLABE 012345678901234567, "
    "CVE RAST: 2024120240014, HR LIQ: 10:15:30, RFC PELJ850101AB1, "
    "CONCEPTO: PAGO FACTURA 123, REF 1234567"
)

FILA_SPEI = (
    "0123456789|01/12/2024|02/12/2024|1234567|SPEI RECIBIDO|C07|0001|"
    f"$13,295.61|$0.00|$50,000.00|1|{DETALLE_SPEI}|"
)

FILA_COMISION = "0123456789|03/12/2024|03/12/2024||COMISION|C99|0001|$0.00|$116.00|$49,884.00|2||"


def _documento(*filas: str, encabezado: str = ENCABEZADO) -> str:
    return "\n".join([encabezado, *filas]) + "\n"


class TestBanorteTokenizer:
    @pytest.fixture
    def tokenizer(self):
        return BanorteTokenizer()

    def test_columnas_canonicas(self, tokenizer):
        fila = tokenizer.tokenize(_documento(FILA_SPEI)).filas[0]

        assert fila["account"] == "0123456789"
        assert fila["operationDate"] == "01/12/2024"
        assert fila["date"] == "02/12/2024"
        assert fila["credit"] == "$13,295.61"
        assert fila["debit"] == "$0.00"
        assert fila["detailedDescription"] == DETALLE_SPEI

    def test_revision_operacion(self):
        fila = BanorteTokenizer(fecha_de_operacion=True).tokenize(_documento(FILA_SPEI)).filas[0]

        assert fila["date"] == "01/12/2024"
        assert fila["postingDate"] == "02/12/2024"
        assert "operationDate" not in fila

    def test_encabezado_repetido_se_descarta(self, tokenizer):
        doc = tokenizer.tokenize(_documento(FILA_SPEI, ENCABEZADO, FILA_COMISION))

        assert len(doc.filas) == 2
        assert doc.descartes[0].razon == "Encabezado repetido"
        assert doc.descartes[0].numero_linea == 3

    def test_encabezado_con_mojibake(self, tokenizer):
        encabezado = ENCABEZADO.encode("utf-8").decode("latin-1")
        fila = tokenizer.tokenize(_documento(FILA_SPEI, encabezado=encabezado)).filas[0]

        assert fila["credit"] == "$13,295.61"
        assert fila["detailedDescription"] == DETALLE_SPEI

    def test_sin_encabezado(self, tokenizer):
        with pytest.raises(BloqueDatosNoEncontradoError):
            tokenizer.tokenize(FILA_SPEI)


class TestBanorteMiner:
    @pytest.fixture
    def miner(self):
        return BanorteMiner()

    def test_spei_recibido(self, miner):
        campos = miner.extract(DETALLE_SPEI)

        assert campos.variante == VarianteDescripcion.SPEI_RECIBIDO
        assert campos.beneficiario == "JUAN PEREZ"
        assert campos.clave_rastreo == "2024120240014"
        assert campos.hora == "10:15:30"
        assert campos.rfc == "PELJ850101AB1"
        assert campos.concepto == "PAGO FACTURA 123"
        assert campos.descripcion_real == "SPEI Recibido: PAGO FACTURA 123 - JUAN PEREZ"

    def test_spei_enviado(self, miner):
        campos = miner.extract(
            "BEM SPEI BENEF:PROVEEDOR SA (DATO NO VERIFICADO), CVE RASTREO: ABC123, "
            "HORA LIQ: 11:00:00, RFC: PRO850101AB1, TRANSFERENCIA, PAGO"
        )

        assert campos.variante == VarianteDescripcion.SPEI_ENVIADO
        assert campos.beneficiario == "PROVEEDOR SA"
        assert campos.clave_rastreo == "ABC123"
        assert campos.rfc == "PRO850101AB1"
        assert campos.descripcion_real == "SPEI Enviado: PAGO - PROVEEDOR SA"

    def test_spei_enviado_sin_concepto(self, miner):
        campos = miner.extract("COMPRA ORDEN DE PAGO SPEI BENEF:PROVEEDOR SA, CVE RASTREO: X1")
        assert campos.concepto == "Transferencia"
        assert campos.descripcion_real == "SPEI Enviado: Transferencia - PROVEEDOR SA"

    def test_compensacion(self, miner):
        campos = miner.extract("COMPENSACION DESFASE SPEI RASTREO :, 2024120240014")

        assert campos.variante == VarianteDescripcion.COMPENSACION
        assert campos.clave_rastreo == "2024120240014"
        assert campos.descripcion_real == "Compensación SPEI"


class TestBanorteEndToEnd:
    def test_parse_detallado(self):
        abono, comision = select_parser("banorte").parse(_documento(FILA_SPEI, FILA_COMISION))

        assert abono.fecha == "2024-12-02"
        assert abono.fecha_operacion == "2024-12-01"
        assert abono.monto == Decimal("13295.61")
        assert abono.saldo == Decimal("50000.00")
        assert abono.descripcion == "SPEI Recibido: PAGO FACTURA 123 - JUAN PEREZ"
        assert abono.cuenta == "0123456789"

        assert comision.monto == Decimal("-116.00")
        assert comision.descripcion == "COMISION"

    def test_detallada_sin_gramatica_usa_descripcion_corta(self):
        fila = (
            "0123456789|02/12/2024|02/12/2024|77|PAGO SERVICIO|C10|0001|"
            "$0.00|$350.00|$49,650.00|3|PAGO DE SERVICIO TELMEX FOLIO 998877 SUC 01|"
        )
        mov = select_parser("banorte").parse(_documento(fila))[0]

        assert mov.descripcion == "PAGO SERVICIO"
        assert mov.monto == Decimal("-350.00")
        assert mov.beneficiario is None

    def test_parse_operacion(self):
        movimientos = select_parser("banorte", "operacion").parse(_documento(FILA_SPEI))
        assert movimientos[0].fecha == "2024-12-01"
