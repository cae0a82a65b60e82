"""
Modelo de dominio: Metadatos del encabezado de una exportación.

Se extraen una sola vez por documento, recorriendo las primeras líneas
(10-15) en busca de pares etiqueta/valor como "CUENTA:" o "RFC:".
HSBC los toma de la primera fila de datos de la hoja.

Todos los campos son opcionales: muchos bancos no incluyen encabezado.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class MetadatosEncabezado:
    """Datos de la cuenta que aparecen fuera de la tabla de movimientos."""

    cuenta: str = ""
    """Número de cuenta. String porque puede tener ceros iniciales."""

    nombre_cuenta: str = ""
    """Titular o nombre del contrato."""

    clabe: str = ""
    """CLABE interbancaria de 18 dígitos, si aparece."""

    rfc: str = ""
    """RFC del titular, si aparece."""

    periodo: str = ""
    """Periodo del estado de cuenta como 'DD/MM/YYYY - DD/MM/YYYY'."""

    usuario: str = ""
    """Usuario de banca en línea que generó la exportación (Santander)."""

    nombre_banco: str = ""
    """Nombre del banco tal como viene en el archivo (HSBC)."""

    @property
    def vacio(self) -> bool:
        """True si no se encontró ningún dato de encabezado."""
        return not any(
            (
                self.cuenta,
                self.nombre_cuenta,
                self.clabe,
                self.rfc,
                self.periodo,
                self.usuario,
                self.nombre_banco,
            )
        )
