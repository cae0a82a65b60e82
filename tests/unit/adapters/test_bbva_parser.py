"""
Tests para el parser de BBVA México.

Validan:
- Revisión 'tabulado': encabezado con "Día" mal decodificado.
- Revisión 'texto': una línea por movimiento, monto único = cargo.
- Referencia "/dígitos" dentro del concepto.
"""

from decimal import Decimal

import pytest

from bank_export_parser.adapters.input.bank_parsers.bbva_parser import (
    BBVAMiner,
    BBVATabTokenizer,
    BBVATextTokenizer,
)
from bank_export_parser.domain.models.campos_minados import VarianteDescripcion
from bank_export_parser.infrastructure.registry import select_parser

DIA_MOJIBAKE = "Día".encode("utf-8").decode("latin-1")
ENCABEZADO = f"{DIA_MOJIBAKE}\tConcepto / Referencia\tcargo\tAbono\tSaldo"
FILA_SPEI = "02-12-2024\tSPEI RECIBIDO BANORTE/0123456789\t \t1,500.00\t10,500.00"
FILA_CARGO = "03-12-2024\tPAGO TARJETA\t500.00\t \t10,000.00"


class TestBBVATabulado:
    @pytest.fixture
    def tokenizer(self):
        return BBVATabTokenizer()

    def test_columnas_con_encabezado_mal_decodificado(self, tokenizer):
        fila = tokenizer.tokenize(f"{ENCABEZADO}\n{FILA_SPEI}\n").filas[0]

        assert fila == {
            "date": "02-12-2024",
            "description": "SPEI RECIBIDO BANORTE/0123456789",
            "debit": "",
            "credit": "1,500.00",
            "balance": "10,500.00",
        }

    def test_encabezado_bien_decodificado(self, tokenizer):
        doc = tokenizer.tokenize(f"Día\tConcepto / Referencia\tcargo\tAbono\tSaldo\n{FILA_CARGO}")
        assert doc.filas[0]["debit"] == "500.00"

    def test_documento_vacio(self, tokenizer):
        assert tokenizer.tokenize("\n\n").filas == []


class TestBBVATexto:
    @pytest.fixture
    def tokenizer(self):
        return BBVATextTokenizer()

    def test_monto_unico_es_cargo(self, tokenizer):
        fila = tokenizer.tokenize("02-12-2024 PAGO TARJETA 500.00 9,000.00").filas[0]

        assert fila["description"] == "PAGO TARJETA"
        assert fila["debit"] == "500.00"
        assert fila["credit"] == ""
        assert fila["balance"] == "9,000.00"

    def test_linea_con_fecha_sin_montos_se_descarta(self, tokenizer):
        doc = tokenizer.tokenize("MOVIMIENTOS DEL PERIODO\n02-12-2024 PAGO TARJETA\n")

        assert doc.filas == []
        assert len(doc.descartes) == 1
        assert doc.descartes[0].numero_linea == 2


class TestBBVAMiner:
    def test_referencia_despues_de_diagonal(self):
        campos = BBVAMiner().extract("SPEI RECIBIDO BANORTE/0123456789")

        assert campos.variante == VarianteDescripcion.GENERICO
        assert campos.referencia == "0123456789"
        assert campos.descripcion_real == "SPEI RECIBIDO BANORTE/0123456789"

    def test_sin_referencia(self):
        assert BBVAMiner().extract("PAGO TARJETA").variante == VarianteDescripcion.SIN_COINCIDENCIA


class TestBBVAEndToEnd:
    def test_parse_tabulado(self):
        abono, cargo = select_parser("bbva").parse(f"{ENCABEZADO}\n{FILA_SPEI}\n{FILA_CARGO}\n")

        assert abono.fecha == "2024-12-02"
        assert abono.monto == Decimal("1500.00")
        assert abono.referencia == "0123456789"
        assert abono.banco.nombre == "BBVA MEXICO"
        assert cargo.monto == Decimal("-500.00")
        assert cargo.referencia == ""

    def test_parse_texto(self):
        movimientos = select_parser("bbva", "texto").parse("02-12-2024 PAGO TARJETA 500.00 9,000.00")
        assert movimientos[0].tipo == "debit"
        assert movimientos[0].saldo == Decimal("9000.00")
