"""
Modelo de dominio: Campos recuperados de la descripción de un movimiento.

Las exportaciones no traen columnas separadas para beneficiario, clave de
rastreo o RFC: vienen embebidos en el texto libre de la descripción.
Cada DescriptionMiner intenta una lista de gramáticas en orden y devuelve
un CamposMinados etiquetado con la variante que coincidió.

Todos los campos son None por defecto. El minado es "best effort":
si ninguna gramática coincide, solo se llena descripcion_real con el
texto original recortado.
"""

from dataclasses import dataclass
from enum import Enum


class VarianteDescripcion(Enum):
    """Gramática de descripción que produjo los campos."""

    SPEI_RECIBIDO = "spei_recibido"
    SPEI_ENVIADO = "spei_enviado"
    TRANSFERENCIA = "transferencia"
    COMPENSACION = "compensacion"
    TRANSFERENCIA_BPI = "transferencia_bpi"
    GENERICO = "generico"
    SIN_COINCIDENCIA = "sin_coincidencia"


@dataclass(frozen=True)
class CamposMinados:
    """Resultado del minado de una descripción."""

    variante: VarianteDescripcion = VarianteDescripcion.SIN_COINCIDENCIA

    beneficiario: str | None = None
    """Ordenante o beneficiario de la transferencia."""

    clave_rastreo: str | None = None
    """Clave de rastreo SPEI."""

    rfc: str | None = None

    concepto: str | None = None
    """Concepto de pago capturado por quien envía."""

    hora: str | None = None
    """Hora de liquidación HH:MM:SS."""

    fecha_operacion: str | None = None
    """Fecha de operación embebida, cuando difiere de la de aplicación."""

    referencia: str | None = None
    """Referencia encontrada en el texto (tiene prioridad sobre la columna)."""

    descripcion_real: str | None = None
    """Descripción limpia o reescrita para mostrar."""

    error: str | None = None
    """Mensaje del fallo interno que se atrapó durante el minado."""

    @classmethod
    def sin_coincidencia(cls, texto: str, error: str | None = None) -> "CamposMinados":
        """Resultado por defecto: solo la descripción original recortada."""
        return cls(descripcion_real=(texto or "").strip(), error=error)

    @property
    def tiene_enriquecimiento(self) -> bool:
        """True si se recuperó al menos un campo además de la descripción."""
        return any(
            valor is not None
            for valor in (
                self.beneficiario,
                self.clave_rastreo,
                self.rfc,
                self.concepto,
                self.hora,
                self.fecha_operacion,
                self.referencia,
            )
        )
