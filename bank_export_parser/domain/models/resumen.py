"""
Modelo de dominio: Resumen de abonos y cargos.

Alimenta la hoja "Resumen" del Excel de salida y el resumen del CLI.
Es un conteo informativo, no una conciliación contra los totales que
reporta el banco.
"""

from dataclasses import dataclass
from decimal import Decimal

from bank_export_parser.domain.models.movimiento import Movimiento


@dataclass(frozen=True)
class Resumen:
    """Resumen de totales de un conjunto de movimientos."""

    total_abonos: Decimal
    """Suma de todos los abonos (positiva)."""

    total_cargos: Decimal
    """Suma de todos los cargos, sin signo."""

    num_abonos: int

    num_cargos: int

    saldo_final: Decimal | None = None
    """Saldo del último movimiento. None si no hay movimientos."""

    @property
    def balance_movimientos(self) -> Decimal:
        """Neto de los movimientos: total_abonos - total_cargos."""
        return self.total_abonos - self.total_cargos

    @classmethod
    def desde_movimientos(cls, movimientos: list[Movimiento]) -> "Resumen":
        """Calcula los totales a partir de una lista de movimientos."""
        abonos = [m for m in movimientos if m.es_abono]
        cargos = [m for m in movimientos if not m.es_abono]

        return cls(
            total_abonos=sum((m.importe for m in abonos), Decimal("0")),
            total_cargos=sum((m.importe for m in cargos), Decimal("0")),
            num_abonos=len(abonos),
            num_cargos=len(cargos),
            saldo_final=movimientos[-1].saldo if movimientos else None,
        )
