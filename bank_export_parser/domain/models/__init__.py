"""
Modelos de dominio del proyecto bank-export-parser.

Todos los modelos son dataclasses inmutables (frozen=True) sin
dependencias externas.

Uso:
    from bank_export_parser.domain.models import Movimiento, CamposMinados
"""

from bank_export_parser.domain.models.banco import IdentidadBanco
from bank_export_parser.domain.models.campos_minados import (
    CamposMinados,
    VarianteDescripcion,
)
from bank_export_parser.domain.models.documento_tokenizado import (
    DocumentoTokenizado,
    FilaCruda,
    FilaDescartada,
)
from bank_export_parser.domain.models.encabezado import MetadatosEncabezado
from bank_export_parser.domain.models.movimiento import (
    TIPO_ABONO,
    TIPO_CARGO,
    Movimiento,
)
from bank_export_parser.domain.models.resumen import Resumen

__all__ = [
    "CamposMinados",
    "DocumentoTokenizado",
    "FilaCruda",
    "FilaDescartada",
    "IdentidadBanco",
    "MetadatosEncabezado",
    "Movimiento",
    "Resumen",
    "TIPO_ABONO",
    "TIPO_CARGO",
    "VarianteDescripcion",
]
