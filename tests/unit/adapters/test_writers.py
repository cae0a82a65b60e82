"""
Tests para los escritores de salida (Excel y JSON).

Se escribe a tmp_path y se relee el archivo: con pandas para el Excel,
con json para el JSON.
"""

import json
from decimal import Decimal

import pandas as pd
import pytest

from bank_export_parser.adapters.output.writers.excel_writer import ExcelWriter
from bank_export_parser.adapters.output.writers.json_writer import JsonWriter
from bank_export_parser.domain.exceptions import OutputError
from bank_export_parser.domain.models import IdentidadBanco, Movimiento

BANORTE = IdentidadBanco(id="072", codigo="40072", nombre="BANORTE")


def _movimiento(monto: str, saldo: str, **extra) -> Movimiento:
    valor = Decimal(monto)
    return Movimiento(
        fecha="2024-12-02",
        tipo="credit" if valor > 0 else "debit",
        monto=valor,
        saldo=Decimal(saldo),
        descripcion="SPEI Recibido: PAGO - JUAN PEREZ",
        referencia="1234567",
        banco=BANORTE,
        raw="{}",
        cuenta="0123456789",
        **extra,
    )


@pytest.fixture
def movimientos():
    return [
        _movimiento("1500.00", "11500.00", clave_rastreo="2024120240014"),
        _movimiento("-116.00", "11384.00"),
    ]


class TestExcelWriter:
    def test_dos_hojas(self, movimientos, tmp_path):
        ruta = ExcelWriter().write(movimientos, tmp_path / "salida.xlsx")

        hojas = pd.read_excel(ruta, sheet_name=None, dtype={"Cuenta": str})
        assert list(hojas) == ["Resumen", "Movimientos"]

        resumen = hojas["Resumen"].iloc[0]
        assert resumen["Banco"] == "BANORTE"
        assert resumen["Cuenta"] == "0123456789"
        assert resumen["Total Abonos"] == pytest.approx(1500.0)
        assert resumen["Total Cargos"] == pytest.approx(116.0)
        assert resumen["Saldo Final"] == pytest.approx(11384.0)

        detalle = hojas["Movimientos"]
        assert len(detalle) == 2
        assert list(detalle["Cargos"]) == pytest.approx([0.0, 116.0])
        assert detalle.iloc[0]["Clave de rastreo"] == "2024120240014"

    def test_agrega_extension(self, movimientos, tmp_path):
        ruta = ExcelWriter().write(movimientos, tmp_path / "reportes" / "salida")
        assert ruta.suffix == ".xlsx"
        assert ruta.exists()

    def test_sin_movimientos(self, tmp_path):
        with pytest.raises(OutputError):
            ExcelWriter().write([], tmp_path / "salida.xlsx")


class TestJsonWriter:
    def test_registros_uniformes(self, movimientos, tmp_path):
        ruta = JsonWriter().write(movimientos, tmp_path / "salida.json")

        registros = json.loads(ruta.read_text(encoding="utf-8"))
        assert len(registros) == 2
        assert registros[0]["amount"] == 1500.0
        assert registros[0]["trackingKey"] == "2024120240014"
        assert registros[0]["bank"] == {"id": "072", "code": "40072", "name": "BANORTE"}
        assert registros[1]["type"] == "debit"
        assert registros[1]["amount"] == -116.0

    def test_lista_vacia(self, tmp_path):
        ruta = JsonWriter().write([], tmp_path / "vacio")
        assert ruta.suffix == ".json"
        assert json.loads(ruta.read_text(encoding="utf-8")) == []
