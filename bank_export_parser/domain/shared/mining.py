"""
Minado de descripciones como árbol de variantes.

Cada banco describe sus gramáticas conocidas (SPEI recibido, SPEI
enviado, transferencia, compensación...) como una lista ordenada de
ReglaMinado. Se prueba cada detector en orden y gana la primera regla
que coincide; si ninguna coincide, el resultado es la descripción
original recortada sin enriquecimientos.

El minado NUNCA lanza excepción: un fallo interno se atrapa y se
devuelve el resultado por defecto con `error` lleno, para que el
StatementParser lo reporte y el movimiento sobreviva.
"""

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, replace

from bank_export_parser.domain.models.campos_minados import CamposMinados, VarianteDescripcion

# RFC: 3 letras (persona moral) o 4 (persona física), fecha YYMMDD y
# homoclave de 3 caracteres. Ej: ABC850101XY1, GODE561231GR8.
RFC_CUERPO = r"[A-ZÑ&]{3,4}\d{6}[A-Z0-9]{3}"
RFC_PATTERN = re.compile(rf"(?<![A-Z0-9Ñ&])({RFC_CUERPO})(?![A-Z0-9])")

TIME_PATTERN = re.compile(r"(?<!\d)(\d{2}:\d{2}:\d{2})(?!\d)")


@dataclass(frozen=True)
class ReglaMinado:
    """Una gramática de descripción: detector + extractor."""

    variante: VarianteDescripcion

    detecta: Callable[[str], bool]
    """Predicado barato que decide si la gramática aplica."""

    extrae: Callable[[str], CamposMinados]
    """Extracción de campos. Debe ser pura; puede devolver campos en None."""


def minar_con_reglas(texto: str, reglas: Sequence[ReglaMinado]) -> CamposMinados:
    """Aplica las reglas en orden y devuelve el resultado de la primera que coincide.

    Args:
        texto: Descripción libre del movimiento.
        reglas: Gramáticas del banco en orden de prioridad.

    Returns:
        CamposMinados etiquetado con la variante de la regla ganadora, o
        CamposMinados.sin_coincidencia(texto) si ninguna aplica o si una
        regla falló (con `error` descrito).
    """
    if not texto or not texto.strip():
        return CamposMinados.sin_coincidencia(texto)

    try:
        for regla in reglas:
            if regla.detecta(texto):
                return replace(regla.extrae(texto), variante=regla.variante)
    except Exception as e:
        return CamposMinados.sin_coincidencia(texto, error=f"{type(e).__name__}: {e}")

    return CamposMinados.sin_coincidencia(texto)


def buscar(patron: re.Pattern, texto: str, grupo: int = 1) -> str | None:
    """Devuelve el grupo recortado del primer match, o None.

    Un grupo que existe pero queda vacío también vale None.
    """
    match = patron.search(texto)
    if not match:
        return None
    valor = match.group(grupo)
    if valor is None:
        return None
    valor = valor.strip()
    return valor or None


def buscar_rfc(texto: str) -> str | None:
    """Primer RFC con formato válido dentro del texto."""
    return buscar(RFC_PATTERN, texto)


def buscar_hora(texto: str) -> str | None:
    """Primera hora HH:MM:SS dentro del texto."""
    return buscar(TIME_PATTERN, texto)


def contiene(*marcadores: str) -> Callable[[str], bool]:
    """Detector: True si el texto (en mayúsculas) contiene algún marcador."""
    marcadores_upper = tuple(m.upper() for m in marcadores)

    def _detecta(texto: str) -> bool:
        upper = texto.upper()
        return any(m in upper for m in marcadores_upper)

    return _detecta
