"""
Registro de bancos y revisiones de formato disponibles.

Centraliza la relación (banco, revisión) → (tokenizer, miner, identidad).
Agregar un banco o una revisión nueva requiere solo 2 pasos:
1. Crear el Tokenizer (y el DescriptionMiner si el banco es nuevo).
2. Registrarlo aquí en create_default_registry().

Es una tabla plana de estrategias, no una jerarquía de clases: cada
banco cambia su formato por su cuenta y una revisión nueva no debe tocar
a las demás.

La primera revisión que se registra para un banco es la de por defecto.
"""

from collections.abc import Callable
from dataclasses import dataclass

from bank_export_parser.domain.exceptions import BancoNoSoportadoError, RevisionNoSoportadaError
from bank_export_parser.domain.models.banco import IdentidadBanco
from bank_export_parser.domain.ports.bank_parser import DescriptionMiner, Tokenizer
from bank_export_parser.domain.ports.process_logger import ProcessLogger
from bank_export_parser.domain.services.statement_parser import StatementParser


@dataclass(frozen=True)
class EntradaRegistro:
    """Cómo construir el parser de una revisión de formato.

    Se guardan fábricas (no instancias) para que cada select_parser()
    entregue objetos nuevos.
    """

    banco: str
    revision: str
    crear_tokenizer: Callable[[], Tokenizer]
    crear_miner: Callable[[], DescriptionMiner]
    identidad: IdentidadBanco


class BankParserRegistry:
    """Registro de revisiones de formato por banco."""

    def __init__(self) -> None:
        self._entradas: dict[str, dict[str, EntradaRegistro]] = {}

    def register(
        self,
        banco: str,
        revision: str,
        crear_tokenizer: Callable[[], Tokenizer],
        crear_miner: Callable[[], DescriptionMiner],
        identidad: IdentidadBanco,
    ) -> None:
        """Registra una revisión. Las claves se guardan en minúsculas.

        Raises:
            ValueError: Si ya existe esa revisión para ese banco.
        """
        banco = banco.lower()
        revision = revision.lower()
        revisiones = self._entradas.setdefault(banco, {})
        if revision in revisiones:
            raise ValueError(f"Ya existe la revisión '{revision}' registrada para '{banco}'.")
        revisiones[revision] = EntradaRegistro(banco, revision, crear_tokenizer, crear_miner, identidad)

    def get(self, banco: str, revision: str | None = None) -> EntradaRegistro:
        """Obtiene la entrada de un banco.

        Args:
            banco: Clave del banco (case-insensitive).
            revision: Revisión de formato. None = la de por defecto.

        Raises:
            BancoNoSoportadoError: Si el banco no está registrado.
            RevisionNoSoportadaError: Si el banco no tiene esa revisión.
        """
        revisiones = self._entradas.get(banco.lower())
        if revisiones is None:
            raise BancoNoSoportadoError(banco, self.available_banks)

        if revision is None:
            return next(iter(revisiones.values()))

        entrada = revisiones.get(revision.lower())
        if entrada is None:
            raise RevisionNoSoportadaError(banco, revision, list(revisiones))
        return entrada

    @property
    def available_banks(self) -> list[str]:
        """Lista de bancos con parser disponible."""
        return sorted(self._entradas.keys())

    def revisions(self, banco: str) -> list[str]:
        """Revisiones de un banco; la primera es la de por defecto."""
        revisiones = self._entradas.get(banco.lower())
        if revisiones is None:
            raise BancoNoSoportadoError(banco, self.available_banks)
        return list(revisiones)

    def __len__(self) -> int:
        return len(self._entradas)


def create_default_registry() -> BankParserRegistry:
    """Crea un registro con todos los bancos y revisiones conocidos.

    Returns:
        BankParserRegistry con los 8 bancos registrados.
    """
    registry = BankParserRegistry()

    # --- Importar y registrar parsers disponibles ---
    # Se importan aquí (no al inicio del archivo) para que importar el
    # registro no cargue pandas hasta que se pide el parser de HSBC.

    from bank_export_parser.adapters.input.bank_parsers.afirme_parser import (
        IDENTIDAD_AFIRME,
        AfirmeHeaderTokenizer,
        AfirmeMiner,
        AfirmePositionalTokenizer,
    )

    registry.register("afirme", "posicional", AfirmePositionalTokenizer, AfirmeMiner, IDENTIDAD_AFIRME)
    registry.register("afirme", "columnas", AfirmeHeaderTokenizer, AfirmeMiner, IDENTIDAD_AFIRME)

    from bank_export_parser.adapters.input.bank_parsers.banbajio_parser import (
        IDENTIDAD_BANBAJIO,
        BanBajioHeaderTokenizer,
        BanBajioMiner,
        BanBajioPositionalTokenizer,
    )

    registry.register("banbajio", "encabezado", BanBajioHeaderTokenizer, BanBajioMiner, IDENTIDAD_BANBAJIO)
    registry.register("banbajio", "posicional", BanBajioPositionalTokenizer, BanBajioMiner, IDENTIDAD_BANBAJIO)

    from bank_export_parser.adapters.input.bank_parsers.banorte_parser import (
        IDENTIDAD_BANORTE,
        BanorteMiner,
        BanorteTokenizer,
    )

    registry.register("banorte", "detallado", BanorteTokenizer, BanorteMiner, IDENTIDAD_BANORTE)
    registry.register(
        "banorte",
        "operacion",
        lambda: BanorteTokenizer(fecha_de_operacion=True),
        BanorteMiner,
        IDENTIDAD_BANORTE,
    )

    from bank_export_parser.adapters.input.bank_parsers.banregio_parser import (
        IDENTIDAD_BANREGIO,
        BanregioMiner,
        BanregioTokenizer,
    )

    registry.register("banregio", "clasificacion", BanregioTokenizer, BanregioMiner, IDENTIDAD_BANREGIO)
    registry.register(
        "banregio",
        "basica",
        lambda: BanregioTokenizer(con_clasificacion=False),
        BanregioMiner,
        IDENTIDAD_BANREGIO,
    )

    from bank_export_parser.adapters.input.bank_parsers.bbva_parser import (
        IDENTIDAD_BBVA,
        BBVAMiner,
        BBVATabTokenizer,
        BBVATextTokenizer,
    )

    registry.register("bbva", "tabulado", BBVATabTokenizer, BBVAMiner, IDENTIDAD_BBVA)
    registry.register("bbva", "texto", BBVATextTokenizer, BBVAMiner, IDENTIDAD_BBVA)

    from bank_export_parser.adapters.input.bank_parsers.hsbc_parser import (
        IDENTIDAD_HSBC,
        HSBCMiner,
        HSBCSpreadsheetTokenizer,
    )

    registry.register("hsbc", "xlsx", HSBCSpreadsheetTokenizer, HSBCMiner, IDENTIDAD_HSBC)

    from bank_export_parser.adapters.input.bank_parsers.santander_parser import (
        IDENTIDAD_SANTANDER,
        SantanderMiner,
        SantanderTokenizer,
    )

    registry.register("santander", "csv", SantanderTokenizer, SantanderMiner, IDENTIDAD_SANTANDER)

    from bank_export_parser.adapters.input.bank_parsers.scotiabank_parser import (
        IDENTIDAD_SCOTIABANK,
        LAYOUTS,
        ScotiabankFixedWidthTokenizer,
        ScotiabankMiner,
    )

    # El orden de LAYOUTS define la revisión por defecto
    for nombre, layout in LAYOUTS.items():
        registry.register(
            "scotiabank",
            nombre,
            lambda layout=layout: ScotiabankFixedWidthTokenizer(layout),
            ScotiabankMiner,
            IDENTIDAD_SCOTIABANK,
        )

    return registry


def select_parser(
    bank: str,
    revision: str | None = None,
    logger: ProcessLogger | None = None,
    registry: BankParserRegistry | None = None,
) -> StatementParser:
    """Devuelve un StatementParser nuevo para el banco pedido.

    Args:
        bank: Clave del banco, sin importar mayúsculas ("BBVA", "bbva").
        revision: Revisión de formato. None = la de por defecto.
        logger: Bitácora donde se reportan los diagnósticos.
                None = MemoryLogger (se consulta con parser.logger).
        registry: Registro a usar. None = create_default_registry().

    Raises:
        BancoNoSoportadoError: Si el banco no está registrado.
        RevisionNoSoportadaError: Si el banco no tiene esa revisión.

    Ejemplos:
        >>> parser = select_parser("afirme")
        >>> parser.parse("PAGO TARJETA,01/03/24,REF123,0,500.00,1500.00,ACC001")[0].monto
        Decimal('500.00')
    """
    if registry is None:
        registry = create_default_registry()
    if logger is None:
        from bank_export_parser.adapters.output.loggers.memory_logger import MemoryLogger

        logger = MemoryLogger()

    entrada = registry.get(bank, revision)
    return StatementParser(
        bank=entrada.banco,
        revision=entrada.revision,
        tokenizer=entrada.crear_tokenizer(),
        miner=entrada.crear_miner(),
        identidad=entrada.identidad,
        logger=logger,
    )
