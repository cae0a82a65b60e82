"""
Puerto de salida: Escritor de resultados.

Define el contrato para escribir los movimientos parseados en algún
formato persistente (Excel, JSON).

¿Por qué es un puerto de SALIDA?
Porque el núcleo (tokenizers, miners, ensamblador) no decide NI conoce el
formato de salida. Solo produce una lista de Movimiento y la pasa a quien
implemente este puerto.
"""

from abc import ABC, abstractmethod
from pathlib import Path

from bank_export_parser.domain.models.movimiento import Movimiento


class OutputWriter(ABC):
    """Interfaz para escribir movimientos."""

    @abstractmethod
    def write(self, movimientos: list[Movimiento], output_path: Path) -> Path:
        """Escribe los movimientos de una exportación.

        Args:
            movimientos: Movimientos en el orden que devolvió el parser.
            output_path: Ruta donde crear el archivo de salida.

        Returns:
            Ruta real del archivo creado (puede diferir si se añadió extensión).

        Raises:
            OutputError: Si falla la escritura (permisos, disco lleno, etc.)
        """
        ...
