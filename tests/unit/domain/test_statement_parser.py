"""
Tests para StatementParser con tokenizer y miner falsos.

Validan el flujo y la política de errores sin depender de ningún banco:
- Sin tabla → cero movimientos y diagnóstico, sin excepción.
- Filas sin 'date' o 'description' → descartadas y reportadas.
- Fallo del miner → reportado; el movimiento se conserva.
"""

from decimal import Decimal

import pytest

from bank_export_parser.adapters.output.loggers.memory_logger import MemoryLogger
from bank_export_parser.domain.exceptions import BloqueDatosNoEncontradoError, FormatoInvalidoError
from bank_export_parser.domain.models import (
    CamposMinados,
    DocumentoTokenizado,
    FilaDescartada,
    IdentidadBanco,
    MetadatosEncabezado,
    VarianteDescripcion,
)
from bank_export_parser.domain.ports.bank_parser import DescriptionMiner, Tokenizer
from bank_export_parser.domain.services.statement_parser import StatementParser
from bank_export_parser.domain.shared.date_parser import FormatoFecha

IDENTIDAD = IdentidadBanco(id="062", codigo="40062", nombre="AFIRME")


class TokenizerFalso(Tokenizer):
    def __init__(self, documento=None, error=None):
        self._documento = documento
        self._error = error

    @property
    def formato_fecha(self) -> FormatoFecha:
        return FormatoFecha.DD_MM_YYYY

    def tokenize(self, document):
        if self._error:
            raise self._error
        return self._documento


class MinerFalso(DescriptionMiner):
    def __init__(self, explota: bool = False):
        self.recibidos: list[str] = []
        self._explota = explota

    def extract(self, text):
        self.recibidos.append(text)
        if self._explota:
            raise RuntimeError("regex rota")
        return CamposMinados(descripcion_real=text.upper().strip())


def _parser(tokenizer, miner=None, logger=None):
    return StatementParser(
        bank="afirme",
        revision="posicional",
        tokenizer=tokenizer,
        miner=miner or MinerFalso(),
        identidad=IDENTIDAD,
        logger=logger or MemoryLogger(),
    )


FILA = {"date": "01/03/2024", "description": "pago", "credit": "500", "balance": "1500"}


class TestParse:
    def test_flujo_completo(self):
        documento = DocumentoTokenizado(filas=[dict(FILA)], encabezado=MetadatosEncabezado(cuenta="ACC"))
        movimientos = _parser(TokenizerFalso(documento)).parse("x")

        assert len(movimientos) == 1
        mov = movimientos[0]
        assert mov.fecha == "2024-03-01"
        assert mov.monto == Decimal("500")
        assert mov.descripcion == "PAGO"
        assert mov.cuenta == "ACC"
        assert mov.banco == IDENTIDAD

    @pytest.mark.parametrize(
        "error",
        [
            BloqueDatosNoEncontradoError("afirme", "Fecha,..."),
            FormatoInvalidoError("hsbc", "XLSX"),
        ],
    )
    def test_sin_tabla_devuelve_lista_vacia(self, error):
        logger = MemoryLogger()
        assert _parser(TokenizerFalso(error=error), logger=logger).parse("x") == []
        assert len(logger.eventos_de("data_block_not_found")) == 1
        assert logger.eventos_de("document_parsed") == []

    def test_filas_sin_campos_requeridos_se_descartan(self):
        filas = [dict(FILA), {"date": "", "description": "X"}, {"date": "01/03/2024", "description": "  "}]
        logger = MemoryLogger()
        movimientos = _parser(TokenizerFalso(DocumentoTokenizado(filas=filas)), logger=logger).parse("x")

        assert len(movimientos) == 1
        razones = [e["reason"] for e in logger.eventos_de("row_discarded")]
        assert razones == ["Fila sin date", "Fila sin description"]
        assert logger.eventos_de("document_parsed")[0]["num_descartes"] == 2

    def test_descartes_del_tokenizer_se_reportan(self):
        documento = DocumentoTokenizado(filas=[], descartes=[FilaDescartada(7, "Encabezado repetido")])
        logger = MemoryLogger()
        _parser(TokenizerFalso(documento), logger=logger).parse("x")
        assert logger.eventos_de("row_discarded")[0]["line_number"] == 7

    def test_fallo_del_miner_conserva_el_movimiento(self):
        logger = MemoryLogger()
        documento = DocumentoTokenizado(filas=[dict(FILA)])
        movimientos = _parser(TokenizerFalso(documento), MinerFalso(explota=True), logger).parse("x")

        assert movimientos[0].descripcion == "pago"
        fallo = logger.eventos_de("mining_failed")[0]
        assert fallo["error"] == "RuntimeError: regex rota"

    def test_miner_recibe_descripcion_detallada(self):
        miner = MinerFalso()
        fila = dict(FILA, detailedDescription="SPEI RECIBIDO DEL CLIENTE X")
        _parser(TokenizerFalso(DocumentoTokenizado(filas=[fila])), miner).parse("x")
        assert miner.recibidos == ["SPEI RECIBIDO DEL CLIENTE X"]

    def test_detallada_sin_coincidencia_usa_descripcion_corta(self):
        fila = dict(FILA, detailedDescription="PAGO DE SERVICIO TELMEX FOLIO 998877")
        movimientos = _parser(TokenizerFalso(DocumentoTokenizado(filas=[fila]))).parse("x")
        assert movimientos[0].descripcion == "pago"

    def test_detallada_con_gramatica_conserva_lo_minado(self):
        class MinerSpei(DescriptionMiner):
            def extract(self, text):
                return CamposMinados(
                    variante=VarianteDescripcion.SPEI_RECIBIDO,
                    descripcion_real="SPEI Recibido: X",
                )

        fila = dict(FILA, detailedDescription="SPEI RECIBIDO DEL CLIENTE X")
        movimientos = _parser(TokenizerFalso(DocumentoTokenizado(filas=[fila])), MinerSpei()).parse("x")
        assert movimientos[0].descripcion == "SPEI Recibido: X"

    def test_encabezado_se_reporta(self):
        encabezado = MetadatosEncabezado(cuenta="0123", rfc="PELJ850101AB1", periodo="01/12/2024 - 31/12/2024")
        logger = MemoryLogger()
        documento = DocumentoTokenizado(filas=[dict(FILA)], encabezado=encabezado)
        _parser(TokenizerFalso(documento), logger=logger).parse("x")

        evento = logger.eventos_de("header_found")[0]
        assert evento["cuenta"] == "0123"
        assert evento["rfc"] == "PELJ850101AB1"
        assert evento["periodo"] == "01/12/2024 - 31/12/2024"

    def test_sin_encabezado_no_se_reporta(self):
        logger = MemoryLogger()
        _parser(TokenizerFalso(DocumentoTokenizado(filas=[dict(FILA)])), logger=logger).parse("x")
        assert logger.eventos_de("header_found") == []

    def test_bitacora_documento(self):
        logger = MemoryLogger()
        _parser(TokenizerFalso(DocumentoTokenizado(filas=[dict(FILA)])), logger=logger).parse("x", source="a.csv")
        recibido = logger.eventos_de("document_received")[0]
        assert recibido == {"evento": "document_received", "bank": "afirme", "revision": "posicional", "source": "a.csv"}
        assert logger.get_summary()["total_movimientos"] == 1


class TestMine:
    def test_mine_nunca_lanza(self):
        campos = _parser(TokenizerFalso(), MinerFalso(explota=True)).mine(" texto ")
        assert campos.descripcion_real == "texto"
        assert campos.error is not None
