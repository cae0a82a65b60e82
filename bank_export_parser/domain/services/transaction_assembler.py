"""
Servicio de dominio: Ensamblador de movimientos.

Combina una FilaCruda (lo que tokenizó el banco), los CamposMinados
(lo que se recuperó de la descripción) y la identidad del banco en un
Movimiento uniforme.

CONVENCIÓN DE SIGNO:
    amount = credit      si credit ≠ 0   → type = 'credit'
    amount = -debit      en otro caso    → type = 'debit'

Las columnas de monto se toman sin signo: algunos bancos escriben el
cargo como "-500.00" y otros como "500.00" en la columna de cargos.

PRIORIDADES:
- descripción: minada > columna 'description' (recortada)
- referencia:  minada > columna 'reference' > ""
- hora:        minada > columna 'time' > None
- cuenta:      columna 'account' > encabezado del documento > None
"""

import json
from decimal import Decimal

from bank_export_parser.domain.models.banco import IdentidadBanco
from bank_export_parser.domain.models.campos_minados import CamposMinados
from bank_export_parser.domain.models.documento_tokenizado import FilaCruda
from bank_export_parser.domain.models.encabezado import MetadatosEncabezado
from bank_export_parser.domain.models.movimiento import TIPO_ABONO, TIPO_CARGO, Movimiento
from bank_export_parser.domain.shared.date_parser import FormatoFecha, format_date
from bank_export_parser.domain.shared.money import parse_currency


def ensamblar_movimiento(
    fila: FilaCruda,
    minados: CamposMinados,
    identidad: IdentidadBanco,
    formato_fecha: FormatoFecha,
    encabezado: MetadatosEncabezado | None = None,
) -> Movimiento:
    """Construye el Movimiento uniforme de una fila.

    Args:
        fila: Fila cruda con 'date' y 'description' no vacíos.
        minados: Resultado del miner para la descripción de la fila.
        identidad: Identidad fija del banco.
        formato_fecha: Formato de las fechas de la fila.
        encabezado: Metadatos del documento (para la cuenta).

    Returns:
        Movimiento inmutable.
    """
    credito = abs(parse_currency(fila.get("credit")))
    debito = abs(parse_currency(fila.get("debit")))

    if credito != 0:
        monto, tipo = credito, TIPO_ABONO
    else:
        monto, tipo = Decimal("0") - debito, TIPO_CARGO

    return Movimiento(
        fecha=format_date(fila["date"].strip(), formato_fecha),
        tipo=tipo,
        monto=monto,
        saldo=parse_currency(fila.get("balance")),
        descripcion=_descripcion(fila, minados),
        referencia=minados.referencia or _texto(fila.get("reference")) or "",
        banco=identidad,
        raw=json.dumps(fila, ensure_ascii=False),
        hora=minados.hora or _texto(fila.get("time")),
        cuenta=_texto(fila.get("account")) or _texto(encabezado.cuenta if encabezado else None),
        beneficiario=minados.beneficiario,
        clave_rastreo=minados.clave_rastreo,
        rfc=minados.rfc,
        concepto=minados.concepto,
        fecha_operacion=minados.fecha_operacion or _fecha_operacion(fila, formato_fecha),
    )


def _descripcion(fila: FilaCruda, minados: CamposMinados) -> str:
    minada = (minados.descripcion_real or "").strip()
    return minada or fila["description"].strip()


def _fecha_operacion(fila: FilaCruda, formato_fecha: FormatoFecha) -> str | None:
    # Banorte trae 'Fecha De Operación' además de la fecha de aplicación
    valor = _texto(fila.get("operationDate"))
    return format_date(valor, formato_fecha) if valor else None


def _texto(valor: str | None) -> str | None:
    """Recorta y convierte "" en None."""
    if valor is None:
        return None
    valor = str(valor).strip()
    return valor or None
