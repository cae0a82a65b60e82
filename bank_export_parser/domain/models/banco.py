"""
Modelo de dominio: Identidad fija de cada banco soportado.

Cada parser tiene una identidad constante que se copia en todos los
movimientos que produce. El código de ruteo es el prefijo de la CLABE
(40 + clave del banco) que usa SPEI.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class IdentidadBanco:
    """Identidad de un banco: clave, código de ruteo y nombre."""

    id: str
    """Clave de tres dígitos del banco. Ejemplo: '072' (Banorte)."""

    codigo: str
    """Código de ruteo SPEI. Ejemplo: '40072'."""

    nombre: str
    """Nombre para mostrar. Ejemplo: 'BANORTE', 'BBVA MEXICO'."""

    def __post_init__(self) -> None:
        if not (self.id.isdigit() and len(self.id) == 3):
            raise ValueError(f"Clave de banco inválida: '{self.id}'")
        if self.codigo != f"40{self.id}":
            raise ValueError(
                f"Código de ruteo '{self.codigo}' no corresponde a la clave '{self.id}'"
            )
        if not self.nombre:
            raise ValueError("El nombre del banco no puede estar vacío")

    def to_dict(self) -> dict[str, str]:
        return {"id": self.id, "code": self.codigo, "name": self.nombre}
