"""
Adaptador de salida: Escritor de JSON.

Escribe la lista de registros uniformes (Movimiento.to_dict) tal como la
consume un sistema de conciliación: claves en camelCase, montos como
número y la identidad del banco anidada.
"""

import json
from pathlib import Path

from bank_export_parser.domain.exceptions import OutputError
from bank_export_parser.domain.models.movimiento import Movimiento
from bank_export_parser.domain.ports.output_writer import OutputWriter


class JsonWriter(OutputWriter):
    """Genera un arreglo JSON con un objeto por movimiento."""

    def __init__(self, indent: int | None = 2) -> None:
        self._indent = indent

    def write(self, movimientos: list[Movimiento], output_path: Path) -> Path:
        # Una lista vacía es una salida válida en JSON
        if output_path.suffix.lower() != ".json":
            output_path = output_path.with_suffix(".json")

        output_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            registros = [mov.to_dict() for mov in movimientos]
            output_path.write_text(
                json.dumps(registros, ensure_ascii=False, indent=self._indent),
                encoding="utf-8",
            )
        except Exception as e:
            raise OutputError(str(output_path), str(e))

        return output_path
