"""
Lectura de metadatos etiquetados en el encabezado de una exportación.

Banregio y Santander anteponen a la tabla unas líneas del tipo:

    CUENTA: 012345678,,,,,,
    CLABE: 058580000000000000,,,,,,
    Periodo de: 01/11/2024 al 30/11/2024

Solo se revisa un prefijo acotado del documento (10–15 líneas) para no
confundir una descripción de movimiento con un metadato.
"""

import re


def scan_labeled_values(
    lines: list[str],
    labels: dict[str, str],
    limit: int,
    delimiter: str = ",",
) -> dict[str, str]:
    """Extrae valores del tipo "ETIQUETA: valor" del encabezado.

    El valor es lo que sigue a la etiqueta hasta el siguiente delimitador,
    sin comillas ni espacios. Si la etiqueta aparece varias veces, gana
    la última.

    Args:
        lines: Líneas del documento.
        labels: Etiqueta literal → nombre del campo. Ej: {"CUENTA:": "cuenta"}.
        limit: Cuántas líneas revisar.
        delimiter: Separador que termina el valor.

    Returns:
        Diccionario campo → valor, solo con los campos encontrados.

    Ejemplos:
        >>> scan_labeled_values(["CUENTA: 123,,,"], {"CUENTA:": "cuenta"}, 15)
        {'cuenta': '123'}
    """
    found: dict[str, str] = {}
    for line in lines[:limit]:
        for label, field in labels.items():
            if label not in line:
                continue
            tail = line.split(label, 1)[1]
            value = tail.split(delimiter, 1)[0] if delimiter else tail
            found[field] = value.strip().strip("'\"").strip()
    return found


def scan_period(lines: list[str], pattern: re.Pattern, limit: int) -> str:
    """Busca el periodo del estado de cuenta con un regex de dos grupos.

    Returns:
        "inicio - fin", o "" si ninguna línea del prefijo coincide.
    """
    for line in lines[:limit]:
        match = pattern.search(line)
        if match:
            return f"{match.group(1)} - {match.group(2)}"
    return ""
