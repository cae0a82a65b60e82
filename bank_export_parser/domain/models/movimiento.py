"""
Modelo de dominio: Movimiento bancario uniforme.

Un Movimiento es el registro de salida, idéntico para los ocho bancos:
una transferencia, un pago, una comisión, etc.

Decisiones de diseño:
- Se usa `Decimal` para montos; `float` acumula errores de redondeo.
- `monto` lleva signo: positivo para abonos (credit), negativo para
  cargos (debit). `tipo` refleja ese signo.
- `fecha` es texto ISO (YYYY-MM-DD) y no `date`: si el banco trae una
  fecha mal formada se conserva tal cual en lugar de perder el movimiento.
"""

from dataclasses import dataclass
from decimal import Decimal

from bank_export_parser.domain.models.banco import IdentidadBanco

TIPO_ABONO = "credit"
TIPO_CARGO = "debit"


@dataclass(frozen=True)
class Movimiento:
    """Representa un movimiento bancario individual.

    frozen=True: un movimiento no cambia después de ensamblarse.
    """

    # --- Campos obligatorios ---

    fecha: str
    """Fecha de aplicación en formato ISO YYYY-MM-DD."""

    tipo: str
    """'credit' (abono) o 'debit' (cargo)."""

    monto: Decimal
    """Monto con signo: abono positivo, cargo negativo."""

    saldo: Decimal
    """Saldo de la cuenta después del movimiento."""

    descripcion: str
    """Descripción minada si existe; si no, la original recortada."""

    referencia: str
    """Referencia o folio. Cadena vacía si el banco no la proporciona."""

    banco: IdentidadBanco

    raw: str
    """Fila original serializada en JSON, para auditoría."""

    # --- Enriquecimientos opcionales ---

    hora: str | None = None
    cuenta: str | None = None
    beneficiario: str | None = None
    clave_rastreo: str | None = None
    rfc: str | None = None
    concepto: str | None = None
    fecha_operacion: str | None = None

    @property
    def es_abono(self) -> bool:
        return self.tipo == TIPO_ABONO

    @property
    def importe(self) -> Decimal:
        """Monto sin signo."""
        return abs(self.monto)

    def __post_init__(self) -> None:
        """Valida el tipo y que el signo del monto sea consistente."""
        if self.tipo not in (TIPO_ABONO, TIPO_CARGO):
            raise ValueError(f"Tipo de movimiento inválido: '{self.tipo}'")
        if self.tipo == TIPO_ABONO and self.monto < Decimal("0"):
            raise ValueError(f"Un abono no puede tener monto negativo: {self.monto}")
        if self.tipo == TIPO_CARGO and self.monto > Decimal("0"):
            raise ValueError(f"Un cargo no puede tener monto positivo: {self.monto}")

    def to_dict(self) -> dict:
        """Devuelve el registro uniforme con las claves públicas (camelCase).

        Los montos se convierten a float porque este dict es la frontera
        hacia JSON.
        """
        return {
            "date": self.fecha,
            "time": self.hora,
            "type": self.tipo,
            "amount": float(self.monto),
            "balance": float(self.saldo),
            "reference": self.referencia,
            "accountNumber": self.cuenta,
            "description": self.descripcion,
            "beneficiary": self.beneficiario,
            "trackingKey": self.clave_rastreo,
            "rfc": self.rfc,
            "concept": self.concepto,
            "transactionDate": self.fecha_operacion,
            "bank": self.banco.to_dict(),
            "raw": self.raw,
        }
