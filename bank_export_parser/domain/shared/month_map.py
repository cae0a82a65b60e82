"""
Mapeo de abreviaturas de mes a número.

CONTEXTO DEL PROBLEMA:
BanBajío exporta la fecha como "28-Nov-2024" (DD-MMM-YYYY). La
abreviatura depende del idioma de la banca en línea del usuario que
descargó el archivo:
- Español: "28-Dic-2024", "05-Ago-2024", a veces "12-Sept-2024".
- Inglés:  "28-Dec-2024", "05-Aug-2024".

Las abreviaturas que coinciden en ambos idiomas (FEB, MAR, MAY, JUN,
JUL, SEP, OCT, NOV) aparecen una sola vez. El lookup es case-insensitive.
"""

_MESES_ES = ("ENE", "FEB", "MAR", "ABR", "MAY", "JUN", "JUL", "AGO", "SEP", "OCT", "NOV", "DIC")
_MESES_EN = ("JAN", "FEB", "MAR", "APR", "MAY", "JUN", "JUL", "AUG", "SEP", "OCT", "NOV", "DEC")

# Abreviatura → número de mes como string '01'-'12'
_MONTH_MAP: dict[str, str] = {
    abreviatura: f"{numero:02d}"
    for meses in (_MESES_ES, _MESES_EN)
    for numero, abreviatura in enumerate(meses, start=1)
}
_MONTH_MAP["SEPT"] = "09"


def month_to_number(month_name: str) -> str:
    """Convierte una abreviatura de mes a su número '01'-'12'.

    Args:
        month_name: Abreviatura del mes. Ejemplos: 'Nov', 'DIC', 'aug'.

    Returns:
        String de 2 dígitos: '01' a '12'.

    Raises:
        ValueError: Si la abreviatura no se reconoce. Incluye el valor
                    recibido en el mensaje.

    Ejemplos:
        >>> month_to_number("Ene")
        '01'
        >>> month_to_number("AUG")
        '08'
    """
    normalized = month_name.strip().upper()
    result = _MONTH_MAP.get(normalized)
    if result is None:
        raise ValueError(f"Mes no reconocido: '{month_name}'")
    return result


def month_to_int(month_name: str) -> int:
    """Igual que month_to_number pero devuelve int (para construir date).

    Ejemplos:
        >>> month_to_int("Dic")
        12
    """
    return int(month_to_number(month_name))
