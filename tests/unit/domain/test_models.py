"""
Tests para los modelos de dominio.

Verifican que las validaciones, propiedades derivadas e inmutabilidad
funcionan correctamente.
"""

from decimal import Decimal

import pytest

from bank_export_parser.domain.models import (
    TIPO_ABONO,
    TIPO_CARGO,
    CamposMinados,
    IdentidadBanco,
    MetadatosEncabezado,
    Movimiento,
    Resumen,
    VarianteDescripcion,
)

BANORTE = IdentidadBanco(id="072", codigo="40072", nombre="BANORTE")


def _movimiento(tipo: str = TIPO_ABONO, monto: str = "100.00", saldo: str = "1000.00", **extra) -> Movimiento:
    return Movimiento(
        fecha="2024-12-02",
        tipo=tipo,
        monto=Decimal(monto),
        saldo=Decimal(saldo),
        descripcion="PAGO",
        referencia="REF1",
        banco=BANORTE,
        raw="{}",
        **extra,
    )


class TestIdentidadBanco:
    def test_to_dict(self):
        assert BANORTE.to_dict() == {"id": "072", "code": "40072", "name": "BANORTE"}

    def test_clave_invalida_lanza_error(self):
        with pytest.raises(ValueError, match="Clave de banco inválida"):
            IdentidadBanco(id="72", codigo="4072", nombre="BANORTE")

    def test_codigo_que_no_corresponde_lanza_error(self):
        with pytest.raises(ValueError, match="no corresponde"):
            IdentidadBanco(id="072", codigo="40012", nombre="BANORTE")

    def test_nombre_vacio_lanza_error(self):
        with pytest.raises(ValueError, match="vacío"):
            IdentidadBanco(id="072", codigo="40072", nombre="")


class TestMovimiento:
    """Pruebas para el modelo Movimiento."""

    def test_crear_abono(self):
        mov = _movimiento()
        assert mov.es_abono
        assert mov.importe == Decimal("100.00")

    def test_crear_cargo(self):
        mov = _movimiento(tipo=TIPO_CARGO, monto="-50.00")
        assert not mov.es_abono
        assert mov.importe == Decimal("50.00")

    def test_abono_negativo_lanza_error(self):
        with pytest.raises(ValueError, match="abono no puede tener monto negativo"):
            _movimiento(tipo=TIPO_ABONO, monto="-1")

    def test_cargo_positivo_lanza_error(self):
        with pytest.raises(ValueError, match="cargo no puede tener monto positivo"):
            _movimiento(tipo=TIPO_CARGO, monto="1")

    def test_tipo_invalido_lanza_error(self):
        with pytest.raises(ValueError, match="Tipo de movimiento inválido"):
            _movimiento(tipo="deposito")

    def test_cargo_en_cero_es_valido(self):
        """Una fila sin crédito ni débito se ensambla como cargo de 0."""
        assert _movimiento(tipo=TIPO_CARGO, monto="0").monto == Decimal("0")

    def test_es_inmutable(self):
        mov = _movimiento()
        with pytest.raises(AttributeError):
            mov.monto = Decimal("1")  # type: ignore

    def test_to_dict_claves_publicas(self):
        mov = _movimiento(hora="10:15:30", cuenta="0123", clave_rastreo="ABC123")
        registro = mov.to_dict()
        assert registro["date"] == "2024-12-02"
        assert registro["type"] == "credit"
        assert registro["amount"] == 100.0
        assert registro["balance"] == 1000.0
        assert registro["time"] == "10:15:30"
        assert registro["accountNumber"] == "0123"
        assert registro["trackingKey"] == "ABC123"
        assert registro["beneficiary"] is None
        assert registro["bank"] == {"id": "072", "code": "40072", "name": "BANORTE"}


class TestResumen:
    def test_desde_movimientos(self):
        movimientos = [
            _movimiento(monto="100.00", saldo="1100.00"),
            _movimiento(tipo=TIPO_CARGO, monto="-30.00", saldo="1070.00"),
            _movimiento(monto="20.00", saldo="1090.00"),
        ]
        resumen = Resumen.desde_movimientos(movimientos)
        assert resumen.total_abonos == Decimal("120.00")
        assert resumen.total_cargos == Decimal("30.00")
        assert resumen.num_abonos == 2
        assert resumen.num_cargos == 1
        assert resumen.saldo_final == Decimal("1090.00")
        assert resumen.balance_movimientos == Decimal("90.00")

    def test_sin_movimientos(self):
        resumen = Resumen.desde_movimientos([])
        assert resumen.total_abonos == Decimal("0")
        assert resumen.saldo_final is None


class TestCamposMinados:
    def test_sin_coincidencia_recorta(self):
        campos = CamposMinados.sin_coincidencia("  PAGO NOMINA  ")
        assert campos.variante is VarianteDescripcion.SIN_COINCIDENCIA
        assert campos.descripcion_real == "PAGO NOMINA"
        assert not campos.tiene_enriquecimiento

    def test_sin_coincidencia_con_none(self):
        assert CamposMinados.sin_coincidencia(None).descripcion_real == ""  # type: ignore

    def test_tiene_enriquecimiento(self):
        assert CamposMinados(clave_rastreo="ABC").tiene_enriquecimiento


class TestMetadatosEncabezado:
    def test_vacio(self):
        assert MetadatosEncabezado().vacio

    def test_no_vacio(self):
        assert not MetadatosEncabezado(cuenta="0123").vacio
