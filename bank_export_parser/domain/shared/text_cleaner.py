"""
Utilidades de limpieza de texto.

Funciones reutilizables para normalizar el texto de una exportación
antes de que los tokenizers lo procesen.

Estas funciones NO tienen lógica de negocio (no saben de bancos ni montos).
Solo operan sobre strings puros.
"""

import re

_BOM = "\ufeff"

# Secuencias típicas de UTF-8 leído como Latin-1: "Ã³" (ó), "Ã­" (í), "Ã±" (ñ)
_MOJIBAKE = re.compile(r"[ÃÂ][\x80-\xbf]")


def clean_whitespace(text: str) -> str:
    """Reemplaza múltiples espacios/tabs por un solo espacio y hace strip.

    Ejemplos:
        >>> clean_whitespace("  PAGO   NOMINA   ")
        'PAGO NOMINA'
        >>> clean_whitespace("\\tREFERENCIA\\t123")
        'REFERENCIA 123'
    """
    return re.sub(r"\s+", " ", text).strip()


def normalize_line_endings(text: str) -> str:
    """Normaliza todos los saltos de línea a \\n.

    Las exportaciones de Windows traen \\r\\n; algunos bancos \\r solo.
    """
    return text.replace("\r\n", "\n").replace("\r", "\n")


def strip_bom(text: str) -> str:
    """Quita la marca BOM que Excel antepone a los CSV en UTF-8."""
    return text[1:] if text.startswith(_BOM) else text


def repair_mojibake(text: str) -> str:
    """Repara texto UTF-8 que fue decodificado como Latin-1.

    BBVA y Banorte exportan encabezados como "DÃ­a" o "Fecha De OperaciÃ³n".
    Si el texto no tiene esas secuencias o no se puede reparar, se
    devuelve sin cambios.

    Ejemplos:
        >>> repair_mojibake("DÃ­a")
        'Día'
        >>> repair_mojibake("Descripción")
        'Descripción'
    """
    if not _MOJIBAKE.search(text):
        return text
    try:
        return text.encode("latin-1").decode("utf-8")
    except (UnicodeEncodeError, UnicodeDecodeError):
        return text


def clean_document_text(text: str) -> str:
    """Aplica las limpiezas comunes a un documento completo.

    Secuencia:
    1. Quitar BOM
    2. Normalizar saltos de línea
    (NO aplica clean_whitespace porque eso eliminaría los \\n y los
    espacios que marcan posiciones en los formatos de ancho fijo)
    """
    return normalize_line_endings(strip_bom(text))


def decode_document(document: str | bytes) -> str:
    """Convierte el contenido crudo de una exportación a texto.

    Primero UTF-8 (con o sin BOM); si falla, Latin-1, que nunca falla y
    es la codificación de las exportaciones más viejas.
    """
    if isinstance(document, str):
        return document
    try:
        return bytes(document).decode("utf-8-sig")
    except UnicodeDecodeError:
        return bytes(document).decode("latin-1")
