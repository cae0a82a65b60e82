"""
Excepciones de dominio del proyecto bank-export-parser.

Jerarquía:
    ParserBaseError
    ├── BancoNoSoportadoError         → La clave de banco no está registrada
    ├── RevisionNoSoportadaError      → El banco existe pero no esa revisión
    ├── BloqueDatosNoEncontradoError  → No aparece el encabezado de la tabla
    ├── FormatoInvalidoError          → El documento no es del tipo esperado
    ├── ExtractionError               → Error al leer el archivo
    └── OutputError                   → Error al generar el archivo de salida

Solo BancoNoSoportadoError y RevisionNoSoportadaError llegan al llamador
de select_parser(). BloqueDatosNoEncontradoError y FormatoInvalidoError
las lanza un tokenizer y las atrapa StatementParser, que las reporta en
la bitácora y devuelve cero movimientos.
"""


class ParserBaseError(Exception):
    """Excepción base del proyecto. Todas las demás heredan de esta."""


class BancoNoSoportadoError(ParserBaseError):
    """Se lanza cuando se pide un parser para una clave de banco desconocida.

    Ejemplo: select_parser("bancoazteca") cuando solo existen afirme,
    banbajio, banorte, banregio, bbva, hsbc, santander y scotiabank.
    """

    def __init__(self, banco: str, disponibles: list[str] | None = None):
        self.banco = banco
        self.disponibles = disponibles or []
        mensaje = f"No hay parser disponible para el banco: {banco}"
        if self.disponibles:
            mensaje += f" — disponibles: {', '.join(self.disponibles)}"
        super().__init__(mensaje)


# Nombre con el que se documenta el error en la interfaz pública.
UnsupportedBankError = BancoNoSoportadoError


class RevisionNoSoportadaError(ParserBaseError):
    """Se lanza cuando el banco existe pero la revisión de formato no.

    Cada banco puede tener varias revisiones de su exportación
    (ej: Scotiabank 'chqmxn' y 'extendido'). Se eligen explícitamente.
    """

    def __init__(self, banco: str, revision: str, disponibles: list[str]):
        self.banco = banco
        self.revision = revision
        self.disponibles = disponibles
        super().__init__(
            f"Revisión '{revision}' no soportada para {banco}. "
            f"Revisiones disponibles: {', '.join(disponibles)}"
        )


class BloqueDatosNoEncontradoError(ParserBaseError):
    """Se lanza cuando un tokenizer no encuentra la tabla de movimientos.

    Esto pasa cuando:
    - El archivo no tiene la línea de encabezado esperada.
    - El banco cambió el texto del encabezado.
    - Se eligió la revisión equivocada para el archivo.
    """

    def __init__(self, banco: str, marcador: str):
        self.banco = banco
        self.marcador = marcador
        super().__init__(
            f"No se encontró el bloque de movimientos de {banco} "
            f"(encabezado esperado: '{marcador}')"
        )


class FormatoInvalidoError(ParserBaseError):
    """Se lanza cuando un documento no tiene el formato esperado.

    Ejemplos:
    - Se esperaba un .xlsx (bytes) pero se recibió texto.
    - El libro de Excel está corrupto o vacío.
    """

    def __init__(self, banco: str, formato_esperado: str, detalle: str = ""):
        self.banco = banco
        self.formato_esperado = formato_esperado
        mensaje = f"Formato inválido para {banco}. Se esperaba: {formato_esperado}"
        if detalle:
            mensaje += f" — {detalle}"
        super().__init__(mensaje)


class ExtractionError(ParserBaseError):
    """Se lanza cuando falla la lectura de un archivo de exportación.

    Esto puede pasar porque:
    - El archivo no existe o no hay permisos de lectura.
    - El texto no se puede decodificar con ninguna codificación conocida.
    """

    def __init__(self, archivo: str, causa: str):
        self.archivo = archivo
        self.causa = causa
        super().__init__(f"Error leyendo '{archivo}': {causa}")


class OutputError(ParserBaseError):
    """Se lanza cuando falla la generación del archivo de salida.

    Esto puede pasar porque:
    - No hay permisos de escritura en el directorio de salida.
    - El disco está lleno.
    - No hay movimientos que escribir.
    """

    def __init__(self, ruta_salida: str, causa: str):
        self.ruta_salida = ruta_salida
        self.causa = causa
        super().__init__(f"Error generando salida en '{ruta_salida}': {causa}")
