"""
Conversión unificada de fechas bancarias a ISO (YYYY-MM-DD).

CONTEXTO DEL PROBLEMA:
Cada exportación usa un formato de fecha diferente:

- Afirme:            "01/03/24"     (DD/MM/YY)
- Banregio / Banorte / HSBC: "31/12/2024" (DD/MM/YYYY)
- BBVA:              "31-12-2024"   (DD-MM-YYYY)
- Santander:         "31122024"     (DDMMYYYY)
- BanBajío:          "28-Nov-2024"  (DD-MMM-YYYY)
- Scotiabank:        "2024/12/31"   (YYYY/MM/DD), "20241231" (YYYYMMDD)

El formato NO se adivina: cada tokenizer declara el suyo. Adivinar
confunde DD/MM con MM/DD.

POLÍTICA ANTE ERRORES:
Una fecha mal formada se devuelve SIN CAMBIOS. Un defecto cosmético en la
fecha no justifica perder un movimiento que por lo demás es válido.
"""

import re
from datetime import date
from enum import Enum

from bank_export_parser.domain.shared.month_map import month_to_int


class FormatoFecha(Enum):
    """Formatos de fecha de origen soportados."""

    DD_MM_YY = "DD/MM/YY"
    DD_MM_YYYY = "DD/MM/YYYY"
    DD_MM_YYYY_GUION = "DD-MM-YYYY"
    DDMMYYYY = "DDMMYYYY"
    DD_MMM_YYYY = "DD-MMM-YYYY"
    YYYY_MM_DD = "YYYY/MM/DD"
    YYYYMMDD = "YYYYMMDD"


def format_date(date_text: str, formato: FormatoFecha) -> str:
    """Convierte una fecha bancaria a ISO YYYY-MM-DD.

    Args:
        date_text: Fecha tal como aparece en la exportación.
        formato: Formato de origen declarado por el tokenizer.

    Returns:
        La fecha en ISO, o `date_text` sin cambios si no se puede
        interpretar (número de partes incorrecto, partes no numéricas,
        fecha imposible como 31/02).

    Ejemplos:
        >>> format_date("31/12/2024", FormatoFecha.DD_MM_YYYY)
        '2024-12-31'
        >>> format_date("31122024", FormatoFecha.DDMMYYYY)
        '2024-12-31'
        >>> format_date("28-Nov-2024", FormatoFecha.DD_MMM_YYYY)
        '2024-11-28'
        >>> format_date("sin fecha", FormatoFecha.DD_MM_YYYY)
        'sin fecha'
    """
    if not isinstance(date_text, str):
        return date_text

    try:
        return parse_bank_date(date_text, formato).isoformat()
    except (ValueError, TypeError):
        return date_text


def parse_bank_date(date_text: str, formato: FormatoFecha) -> date:
    """Versión estricta de format_date: devuelve `date` o lanza ValueError."""
    year, month, day = _split_parts(date_text.strip(), formato)
    return _build_date(year, month, day)


# ============================================================
# FUNCIONES INTERNAS (prefijo _ = no exportadas)
# ============================================================


def _split_parts(text: str, formato: FormatoFecha) -> tuple[int, int, int]:
    """Separa año, mes y día según el formato. Lanza ValueError si no cuadra."""
    if formato in (FormatoFecha.DD_MM_YY, FormatoFecha.DD_MM_YYYY):
        day, month, year = _three_numeric_parts(text, "/")
        # Afirme mezcla años de 2 y 4 dígitos en el mismo formato
        return _expand_year(year), month, day

    if formato is FormatoFecha.DD_MM_YYYY_GUION:
        day, month, year = _three_numeric_parts(text, "-")
        return _expand_year(year), month, day

    if formato is FormatoFecha.DDMMYYYY:
        if not re.fullmatch(r"\d{8}", text):
            raise ValueError(f"Se esperaba DDMMYYYY, recibido: '{text}'")
        return int(text[4:8]), int(text[2:4]), int(text[0:2])

    if formato is FormatoFecha.DD_MMM_YYYY:
        parts = text.split("-")
        if len(parts) != 3 or not parts[0].isdigit() or not parts[2].isdigit():
            raise ValueError(f"Se esperaba DD-MMM-YYYY, recibido: '{text}'")
        return _expand_year(int(parts[2])), month_to_int(parts[1]), int(parts[0])

    if formato is FormatoFecha.YYYY_MM_DD:
        year, month, day = _three_numeric_parts(text, "/")
        return year, month, day

    if formato is FormatoFecha.YYYYMMDD:
        if not re.fullmatch(r"\d{8}", text):
            raise ValueError(f"Se esperaba YYYYMMDD, recibido: '{text}'")
        return int(text[0:4]), int(text[4:6]), int(text[6:8])

    raise ValueError(f"Formato de fecha no soportado: {formato}")


def _three_numeric_parts(text: str, separator: str) -> tuple[int, int, int]:
    parts = text.split(separator)
    if len(parts) != 3 or not all(p.strip().isdigit() for p in parts):
        raise ValueError(f"Fecha con partes inválidas: '{text}'")
    return int(parts[0]), int(parts[1]), int(parts[2])


def _expand_year(year_short: int) -> int:
    """Expande un año de 2 dígitos a 4 dígitos.

    Regla: 00-49 → 2000-2049, 50-99 → 1950-1999.
    Si ya tiene 4 dígitos, lo devuelve tal cual.
    """
    if year_short >= 100:
        return year_short
    if year_short < 50:
        return 2000 + year_short
    return 1900 + year_short


def _build_date(year: int, month: int, day: int) -> date:
    """Construye un objeto date; lanza ValueError con los valores si es imposible."""
    try:
        return date(year, month, day)
    except ValueError as e:
        raise ValueError(f"Fecha inválida: año={year}, mes={month}, día={day} — {e}")
