"""
Puerto de entrada: Lector de documentos.

Define el contrato para obtener el documento crudo de un archivo.
El núcleo nunca abre archivos: recibe texto ya decodificado (o bytes,
para hojas de cálculo) y esta interfaz es la frontera con el disco:

    DocumentReader (interfaz)
    ├── TextFileReader          → CSV, pipes, tabs, ancho fijo (.csv/.txt)
    └── SpreadsheetFileReader   → Hojas de cálculo (.xlsx) como bytes

¿Por qué es una Abstract Base Class (ABC)?
Porque queremos que Python lance un error si alguien crea un adaptador
que no implementa todos los métodos.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class DocumentReader(ABC):
    """Interfaz para leer el documento crudo de un archivo."""

    @abstractmethod
    def can_handle(self, file_path: Path) -> bool:
        """Determina si este lector puede manejar el archivo dado.

        El CLI prueba los lectores en orden y usa el primero cuyo
        can_handle devuelva True.
        """
        ...

    @abstractmethod
    def read(self, file_path: Path) -> str | bytes:
        """Lee el archivo completo.

        Returns:
            Texto decodificado, o bytes crudos para hojas de cálculo.

        Raises:
            ExtractionError: Si el archivo no existe, no se puede leer o
                            no se puede decodificar.
        """
        ...

    @property
    @abstractmethod
    def name(self) -> str:
        """Nombre legible del lector. Para logging y debugging.

        Ejemplo: 'texto', 'hoja-de-calculo'
        """
        ...
