"""
Modelo de dominio: Resultado de tokenizar una exportación bancaria.

Un tokenizer recibe el documento crudo y produce:
- Los metadatos del encabezado (cuenta, RFC, periodo...).
- Las filas crudas, en orden, con nombres de columna canónicos.
- Las líneas que descartó y por qué, para que el StatementParser
  las reporte en la bitácora sin que el tokenizer conozca al logger.
"""

from dataclasses import dataclass, field

from bank_export_parser.domain.models.encabezado import MetadatosEncabezado

FilaCruda = dict[str, str]
"""Columna canónica ('date', 'description', 'debit'...) → valor en texto."""


@dataclass(frozen=True)
class FilaDescartada:
    """Línea del documento que no produjo fila."""

    numero_linea: int
    """Número de línea (1-indexed) dentro del documento."""

    razon: str

    contenido: str = ""


@dataclass(frozen=True)
class DocumentoTokenizado:
    """Filas crudas de un documento más su contexto."""

    filas: list[FilaCruda]
    encabezado: MetadatosEncabezado = field(default_factory=MetadatosEncabezado)
    descartes: list[FilaDescartada] = field(default_factory=list)
