"""
Tests para bank_export_parser.domain.shared.mining

El minado es un árbol de variantes: gana la primera regla cuyo detector
coincide, y un fallo interno nunca se propaga.
"""

import re

from bank_export_parser.domain.models.campos_minados import CamposMinados, VarianteDescripcion
from bank_export_parser.domain.shared.mining import (
    RFC_PATTERN,
    ReglaMinado,
    buscar,
    buscar_hora,
    buscar_rfc,
    contiene,
    minar_con_reglas,
)


def _regla(variante, marcador, **campos):
    return ReglaMinado(
        variante=variante,
        detecta=contiene(marcador),
        extrae=lambda texto: CamposMinados(descripcion_real=marcador, **campos),
    )


class TestMinarConReglas:
    REGLAS = [
        _regla(VarianteDescripcion.SPEI_RECIBIDO, "SPEI RECIBIDO", clave_rastreo="A1"),
        _regla(VarianteDescripcion.GENERICO, "SPEI"),
    ]

    def test_gana_la_primera_regla(self):
        campos = minar_con_reglas("SPEI RECIBIDO DEL CLIENTE", self.REGLAS)
        assert campos.variante is VarianteDescripcion.SPEI_RECIBIDO
        assert campos.clave_rastreo == "A1"

    def test_segunda_regla(self):
        campos = minar_con_reglas("SPEI ENVIADO", self.REGLAS)
        assert campos.variante is VarianteDescripcion.GENERICO

    def test_sin_coincidencia_devuelve_texto_recortado(self):
        campos = minar_con_reglas("  PAGO NOMINA  ", self.REGLAS)
        assert campos.variante is VarianteDescripcion.SIN_COINCIDENCIA
        assert campos.descripcion_real == "PAGO NOMINA"
        assert not campos.tiene_enriquecimiento

    def test_texto_vacio(self):
        assert minar_con_reglas("   ", self.REGLAS).descripcion_real == ""

    def test_fallo_interno_no_se_propaga(self):
        def explota(texto):
            raise IndexError("list index out of range")

        regla = ReglaMinado(VarianteDescripcion.GENERICO, detecta=lambda t: True, extrae=explota)
        campos = minar_con_reglas(" PAGO ", [regla])
        assert campos.variante is VarianteDescripcion.SIN_COINCIDENCIA
        assert campos.descripcion_real == "PAGO"
        assert campos.error == "IndexError: list index out of range"


class TestHelpers:
    def test_buscar_grupo_vacio_es_none(self):
        assert buscar(re.compile(r"REF:(\s*)"), "REF:  ") is None

    def test_buscar_recorta(self):
        assert buscar(re.compile(r"REF:([^,]+)"), "REF: 123 ,X") == "123"

    def test_buscar_sin_match(self):
        assert buscar(re.compile(r"REF:(\d+)"), "PAGO") is None

    def test_rfc_persona_moral(self):
        assert buscar_rfc("RFC ABC850101XY1 CONCEPTO") == "ABC850101XY1"

    def test_rfc_persona_fisica(self):
        assert buscar_rfc("PELJ850101AB1") == "PELJ850101AB1"

    def test_rfc_dentro_de_otra_palabra_no_cuenta(self):
        assert RFC_PATTERN.search("XPELJ850101AB1Z") is None

    def test_hora(self):
        assert buscar_hora("HR LIQ: 10:15:30,") == "10:15:30"

    def test_contiene_ignora_mayusculas(self):
        assert contiene("Clave de Rastreo:")("CLAVE DE RASTREO: X")
