"""
Tests para el ensamblador de movimientos.

Convención de signo: credit ≠ 0 → abono positivo; si no, cargo negativo.
"""

import json
from decimal import Decimal

from bank_export_parser.domain.models import CamposMinados, IdentidadBanco, MetadatosEncabezado
from bank_export_parser.domain.services.transaction_assembler import ensamblar_movimiento
from bank_export_parser.domain.shared.date_parser import FormatoFecha

IDENTIDAD = IdentidadBanco(id="058", codigo="40058", nombre="BANREGIO")


def _fila(**valores) -> dict[str, str]:
    fila = {"date": "04/11/2024", "description": " PAGO NOMINA ", "credit": "", "debit": "", "balance": ""}
    fila.update(valores)
    return fila


def _ensamblar(fila, minados=None, encabezado=None):
    return ensamblar_movimiento(
        fila,
        minados or CamposMinados.sin_coincidencia(fila["description"]),
        IDENTIDAD,
        FormatoFecha.DD_MM_YYYY,
        encabezado,
    )


class TestSigno:
    def test_credito_es_abono_positivo(self):
        mov = _ensamblar(_fila(credit="100", debit="0"))
        assert mov.tipo == "credit"
        assert mov.monto == Decimal("100")

    def test_debito_es_cargo_negativo(self):
        mov = _ensamblar(_fila(credit="0", debit="50"))
        assert mov.tipo == "debit"
        assert mov.monto == Decimal("-50")

    def test_debito_con_signo_menos(self):
        """Algunos bancos escriben el cargo ya negativo."""
        assert _ensamblar(_fila(debit="-50.00")).monto == Decimal("-50.00")

    def test_montos_con_formato(self):
        mov = _ensamblar(_fila(credit="$1,500.00", balance='"$8,500.00"'))
        assert mov.monto == Decimal("1500.00")
        assert mov.saldo == Decimal("8500.00")

    def test_sin_montos_es_cargo_cero(self):
        mov = _ensamblar(_fila())
        assert mov.tipo == "debit"
        assert mov.monto == Decimal("0")


class TestPrioridades:
    def test_fecha_en_iso(self):
        assert _ensamblar(_fila()).fecha == "2024-11-04"

    def test_fecha_mal_formada_se_conserva(self):
        assert _ensamblar(_fila(date="04-11")).fecha == "04-11"

    def test_descripcion_minada_gana(self):
        mov = _ensamblar(_fila(), CamposMinados(descripcion_real="SPEI Recibido: RENTA"))
        assert mov.descripcion == "SPEI Recibido: RENTA"

    def test_descripcion_original_recortada(self):
        assert _ensamblar(_fila(), CamposMinados()).descripcion == "PAGO NOMINA"

    def test_referencia_minada_gana(self):
        mov = _ensamblar(_fila(reference="COL"), CamposMinados(referencia="MIN"))
        assert mov.referencia == "MIN"

    def test_referencia_de_columna(self):
        assert _ensamblar(_fila(reference=" 123 ")).referencia == "123"

    def test_referencia_ausente_es_vacia(self):
        assert _ensamblar(_fila()).referencia == ""

    def test_hora_minada_gana(self):
        mov = _ensamblar(_fila(time="09:00"), CamposMinados(hora="10:15:30"))
        assert mov.hora == "10:15:30"

    def test_hora_de_columna(self):
        assert _ensamblar(_fila(time="09:00")).hora == "09:00"

    def test_cuenta_de_columna_gana(self):
        mov = _ensamblar(_fila(account="ACC001"), encabezado=MetadatosEncabezado(cuenta="999"))
        assert mov.cuenta == "ACC001"

    def test_cuenta_del_encabezado(self):
        mov = _ensamblar(_fila(), encabezado=MetadatosEncabezado(cuenta="999"))
        assert mov.cuenta == "999"

    def test_sin_cuenta(self):
        assert _ensamblar(_fila()).cuenta is None

    def test_fecha_de_operacion_de_columna(self):
        assert _ensamblar(_fila(operationDate="01/11/2024")).fecha_operacion == "2024-11-01"

    def test_enriquecimientos_minados(self):
        minados = CamposMinados(beneficiario="JUAN", clave_rastreo="ABC", rfc="PELJ850101AB1", concepto="RENTA")
        mov = _ensamblar(_fila(), minados)
        assert (mov.beneficiario, mov.clave_rastreo, mov.rfc, mov.concepto) == (
            "JUAN",
            "ABC",
            "PELJ850101AB1",
            "RENTA",
        )

    def test_raw_es_json_de_la_fila(self):
        fila = _fila(description="PAGO Ñ")
        assert json.loads(_ensamblar(fila).raw) == fila

    def test_banco(self):
        assert _ensamblar(_fila()).banco is IDENTIDAD
