"""
Puertos de entrada: las dos operaciones de un parser bancario.

Cada banco soportado aporta un par Tokenizer + DescriptionMiner:

    Tokenizer (interfaz)            DescriptionMiner (interfaz)
    ├── AfirmePositionalTokenizer   ├── AfirmeMiner
    ├── BanorteTokenizer            ├── BanorteMiner
    ├── ScotiabankTokenizer         ├── ScotiabankMiner
    ├── ...etc                      ├── ...etc

¿Por qué dos interfaces y no una clase base con todo?
Porque las revisiones de formato cambian la forma de TOKENIZAR (columnas,
offsets, encabezados) sin cambiar las gramáticas de la descripción. El
registro combina cualquier revisión de tokenizer con el miner del banco
sin jerarquías de herencia entre bancos.
"""

from abc import ABC, abstractmethod

from bank_export_parser.domain.models.campos_minados import CamposMinados
from bank_export_parser.domain.models.documento_tokenizado import DocumentoTokenizado
from bank_export_parser.domain.shared.date_parser import FormatoFecha


class Tokenizer(ABC):
    """Interfaz para convertir un documento crudo en filas canónicas."""

    @property
    @abstractmethod
    def formato_fecha(self) -> FormatoFecha:
        """Formato de las fechas que producen las filas de este tokenizer.

        El ensamblador lo usa para normalizar 'date' (y 'operationDate'
        cuando existe) a ISO.
        """
        ...

    @abstractmethod
    def tokenize(self, document: str | bytes) -> DocumentoTokenizado:
        """Localiza el bloque de datos y lo divide en filas.

        Args:
            document: Texto ya decodificado, o bytes para hojas de cálculo.

        Returns:
            DocumentoTokenizado con filas en el orden de salida, los
            metadatos del encabezado y las líneas descartadas.

        Raises:
            BloqueDatosNoEncontradoError: Si no aparece el encabezado de
                la tabla de movimientos.
            FormatoInvalidoError: Si el documento no es del tipo esperado
                (ej: texto para un tokenizer de hojas de cálculo).
        """
        ...


class DescriptionMiner(ABC):
    """Interfaz para recuperar campos estructurados de la descripción."""

    @abstractmethod
    def extract(self, text: str) -> CamposMinados:
        """Mina la descripción libre de un movimiento.

        Nunca lanza excepción. Si ninguna gramática coincide devuelve
        CamposMinados.sin_coincidencia(text).
        """
        ...
