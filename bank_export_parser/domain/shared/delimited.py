"""
Utilidades para exportaciones delimitadas (CSV, pipes, tabs).

CONTEXTO DEL PROBLEMA:
Los bancos no respetan un único dialecto de CSV:

- Santander mezcla tokens con comilla simple ('01122024') y doble
  ("1,500.00") en la misma línea; una coma dentro de comillas NO separa.
- Banregio y BanBajío ponen metadatos de la cuenta antes de la tabla, y
  la tabla empieza después de una línea de encabezado literal.
- BBVA y Banorte traen encabezados con acentos mal decodificados
  ("DÃ­a", "OperaciÃ³n").

Estas funciones resuelven esas tres cosas. No saben de bancos: cada
tokenizer les pasa su delimitador, sus marcadores y su tabla de etiquetas.
"""

from bank_export_parser.domain.shared.text_cleaner import clean_document_text, decode_document, repair_mojibake


def split_lines(document: str | bytes) -> list[str]:
    """Divide un documento en líneas normalizadas (sin BOM, sin \\r)."""
    return clean_document_text(decode_document(document)).split("\n")


def split_columns(line: str, delimiter: str = ",", quotes: str = "'\"") -> list[str]:
    """Divide una línea en columnas respetando comillas.

    Reglas:
    - Una comilla abre un token entrecomillado; solo la MISMA comilla
      lo cierra ('...' se cierra con ', "..." con ").
    - Dentro de comillas, el delimitador y la otra comilla son texto.
    - Una comilla duplicada dentro de su token ("" o '') es literal.
    - Las comillas no se incluyen en el valor; cada valor se recorta.

    Ejemplos:
        >>> split_columns("'01122024','1200',\\"1,500.00\\"")
        ['01122024', '1200', '1,500.00']
        >>> split_columns("a|b||c", delimiter="|")
        ['a', 'b', '', 'c']
    """
    columns: list[str] = []
    current: list[str] = []
    quote_char = ""
    i = 0

    while i < len(line):
        char = line[i]
        if quote_char:
            if char == quote_char:
                if i + 1 < len(line) and line[i + 1] == quote_char:
                    current.append(char)
                    i += 1
                else:
                    quote_char = ""
            else:
                current.append(char)
        elif char in quotes:
            quote_char = char
        elif char == delimiter:
            columns.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        i += 1

    columns.append("".join(current).strip())
    return columns


def find_header_line(lines: list[str], markers: tuple[str, ...], limit: int | None = None) -> int | None:
    """Busca la línea de encabezado de la tabla de movimientos.

    Una línea coincide si, recortada, EMPIEZA con alguno de los marcadores
    (Banregio y BanBajío agregan columnas vacías al final del encabezado).

    Args:
        lines: Líneas del documento.
        markers: Encabezados literales aceptados.
        limit: Cantidad máxima de líneas a revisar. None = todo el documento.

    Returns:
        Índice de la línea de encabezado, o None si no aparece.
    """
    scope = lines if limit is None else lines[:limit]
    for index, line in enumerate(scope):
        stripped = line.strip()
        if any(stripped.startswith(marker) for marker in markers):
            return index
    return None


def map_header_labels(labels: list[str], table: dict[str, str]) -> list[str]:
    """Traduce etiquetas de columna del banco a nombres canónicos.

    Se busca la etiqueta tal cual y, si no aparece, reparando el mojibake.
    Las etiquetas sin traducción pasan sin cambios (recortadas).

    Ejemplos:
        >>> map_header_labels(["DÃ­a", "Saldo", "Extra"], {"Día": "date", "Saldo": "balance"})
        ['date', 'balance', 'Extra']
    """
    mapped = []
    for label in labels:
        clean = label.strip()
        canonical = table.get(clean)
        if canonical is None:
            canonical = table.get(repair_mojibake(clean), clean)
        mapped.append(canonical)
    return mapped


def build_row(columns: list[str], values: list[str]) -> dict[str, str]:
    """Combina nombres de columna y valores en una fila cruda.

    Si hay menos valores que columnas, las faltantes quedan en "".
    Los valores sobrantes se ignoran.
    """
    padded = values + [""] * (len(columns) - len(values))
    return {column: padded[i].strip() for i, column in enumerate(columns)}
