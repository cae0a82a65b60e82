"""
Utilidades para manejo de montos monetarios.

CONTEXTO DEL PROBLEMA:
Cada exportación formatea los montos a su manera:

- Banregio / Banorte: "$13,295.61", y "$0.00" para la columna vacía.
- Santander:          "'1,500.00'" o "\"1,500.00\"" (montos entre comillas).
- Scotiabank:         "00000000001500.00" (relleno con ceros, ancho fijo).
- HSBC (xlsx):        celdas numéricas (float) o texto "1,234.56".
- Afirme / BBVA:      "1,234.56" o "" cuando la columna no aplica.

SOLUCIÓN:
- parse_money(): versión estricta, lanza ValueError ante basura.
- parse_currency(): versión "segura" que usan los tokenizers. Una celda
  vacía, un centinela de cero o un valor ilegible valen Decimal("0");
  un monto mal formado nunca tumba el documento completo.
"""

import math
import re
from decimal import Decimal, InvalidOperation

# Caracteres que se eliminan antes de convertir: símbolo de moneda,
# separador de miles, comillas y espacios (los OCR/exportadores los meten
# dentro del número: "1,234 . 56").
_RUIDO_MONTO = re.compile(r"[$,'\"\s]")

# Valores que los bancos usan para decir "sin monto".
_CENTINELAS_CERO: frozenset[str] = frozenset({"", "-", "N/A", "n/a", "$0.00", "0.00", "0"})


def parse_money(text: str) -> Decimal:
    """Convierte un texto con formato monetario a Decimal.

    Formatos soportados:
    - Con símbolo: "$1,234.56"
    - Sin símbolo: "1,234.56" / "1234.56"
    - Entre comillas: "'1,234.56'" (Santander)
    - Relleno con ceros: "000001234.56" (Scotiabank)
    - Negativo: "-1,234.56"

    Raises:
        TypeError: Si no recibe str.
        ValueError: Si el texto no se puede convertir a un monto válido.

    Ejemplos:
        >>> parse_money("$1,234.56")
        Decimal('1234.56')
        >>> parse_money("'-1,234.56'")
        Decimal('-1234.56')
    """
    if not isinstance(text, str):
        raise TypeError(f"parse_money espera str, recibió {type(text).__name__}")
    if not text.strip():
        raise ValueError("El texto del monto está vacío")

    cleaned = _RUIDO_MONTO.sub("", text)

    if not cleaned or cleaned in ("-", "."):
        raise ValueError(f"No se pudo extraer un monto de: '{text}'")

    try:
        result = Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"No se pudo convertir a monto: '{text}' (limpio: '{cleaned}')")

    if not result.is_finite():
        raise ValueError(f"Monto no finito: '{text}'")

    return result


def parse_currency(value: object) -> Decimal:
    """Versión segura de parse_money: nunca lanza excepción.

    Acepta también celdas numéricas de hojas de cálculo (int, float,
    Decimal). NaN y None valen cero.

    Devuelve Decimal, no float: Decimal("1234.56") != 1234.56. La
    conversión a float ocurre solo al serializar (Movimiento.to_dict()).

    Ejemplos:
        >>> parse_currency("$1,234.56")
        Decimal('1234.56')
        >>> parse_currency("")
        Decimal('0')
        >>> parse_currency("$0.00")
        Decimal('0')
        >>> parse_currency("abc")
        Decimal('0')
        >>> parse_currency(1500.5)
        Decimal('1500.5')
    """
    if value is None or isinstance(value, bool):
        return Decimal("0")

    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal("0")

    if isinstance(value, (int, float)):
        if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
            return Decimal("0")
        # str() evita arrastrar la representación binaria del float
        return Decimal(str(value))

    text = str(value).strip()
    if text in _CENTINELAS_CERO:
        return Decimal("0")

    try:
        return parse_money(text)
    except ValueError:
        return Decimal("0")


def format_money(amount: Decimal) -> str:
    """Formatea un Decimal como string monetario legible.

    Ejemplos:
        >>> format_money(Decimal("1234567.89"))
        '$1,234,567.89'
        >>> format_money(Decimal("-50"))
        '-$50.00'
    """
    amount = amount.quantize(Decimal("0.01"))
    if amount < 0:
        return f"-${abs(amount):,.2f}"
    return f"${amount:,.2f}"

