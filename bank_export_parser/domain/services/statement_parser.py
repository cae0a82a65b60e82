"""
Servicio de dominio: Parser de una exportación bancaria.

Orquesta el flujo completo para UN documento:
1. Tokenizer → filas crudas + encabezado + líneas descartadas.
2. Descarta filas sin 'date' o sin 'description' (ruido: pies de página,
   subtotales, separadores de sección).
3. DescriptionMiner → campos embebidos en la descripción.
4. Ensamblador → Movimiento uniforme.

POLÍTICA DE ERRORES (dos niveles):
- Documento: si el tokenizer no encuentra la tabla (o el documento no es
  del tipo esperado), se reporta en la bitácora y se devuelven CERO
  movimientos. No se lanza: en un lote de archivos el llamador quiere los
  resultados parciales.
- Fila: una fila mal formada se descarta y se reporta; un fallo del miner
  se reporta y el movimiento se conserva sin enriquecer.

Cada instancia la crea select_parser() y no guarda estado entre llamadas
a parse(), salvo el logger que provee el llamador.
"""

from dataclasses import replace

from bank_export_parser.domain.exceptions import BloqueDatosNoEncontradoError, FormatoInvalidoError
from bank_export_parser.domain.models.banco import IdentidadBanco
from bank_export_parser.domain.models.campos_minados import CamposMinados, VarianteDescripcion
from bank_export_parser.domain.models.documento_tokenizado import DocumentoTokenizado, FilaCruda
from bank_export_parser.domain.models.movimiento import Movimiento
from bank_export_parser.domain.ports.bank_parser import DescriptionMiner, Tokenizer
from bank_export_parser.domain.ports.process_logger import ProcessLogger
from bank_export_parser.domain.services.transaction_assembler import ensamblar_movimiento

CAMPOS_REQUERIDOS = ("date", "description")


class StatementParser:
    """Combina el tokenizer, el miner y la identidad de un banco.

    Recibe sus dependencias por constructor (Dependency Injection).
    No sabe qué banco concreto está procesando; solo conoce los puertos.
    """

    def __init__(
        self,
        bank: str,
        revision: str,
        tokenizer: Tokenizer,
        miner: DescriptionMiner,
        identidad: IdentidadBanco,
        logger: ProcessLogger,
    ) -> None:
        self._bank = bank
        self._revision = revision
        self._tokenizer = tokenizer
        self._miner = miner
        self._identidad = identidad
        self._logger = logger

    @property
    def bank(self) -> str:
        return self._bank

    @property
    def revision(self) -> str:
        return self._revision

    @property
    def identidad(self) -> IdentidadBanco:
        return self._identidad

    @property
    def logger(self) -> ProcessLogger:
        return self._logger

    def tokenize(self, document: str | bytes) -> DocumentoTokenizado:
        """Delegación directa al tokenizer. Puede lanzar BloqueDatosNoEncontradoError."""
        return self._tokenizer.tokenize(document)

    def mine(self, text: str) -> CamposMinados:
        """Mina una descripción. Nunca lanza excepción."""
        try:
            return self._miner.extract(text)
        except Exception as e:
            return CamposMinados.sin_coincidencia(text, error=f"{type(e).__name__}: {e}")

    def parse(self, document: str | bytes, source: str = "<memoria>") -> list[Movimiento]:
        """Parsea un documento completo.

        Args:
            document: Texto decodificado, o bytes para HSBC.
            source: Nombre del archivo, para la bitácora.

        Returns:
            Movimientos en el orden del tokenizer. Lista vacía si no se
            encontró la tabla de movimientos.
        """
        self._logger.log_document_received(self._bank, self._revision, source)

        try:
            documento = self.tokenize(document)
        except (BloqueDatosNoEncontradoError, FormatoInvalidoError) as e:
            self._logger.log_data_block_not_found(self._bank, e)
            return []

        if not documento.encabezado.vacio:
            self._logger.log_header_found(self._bank, documento.encabezado)

        for descarte in documento.descartes:
            self._logger.log_row_discarded(self._bank, descarte.numero_linea, descarte.razon)

        movimientos: list[Movimiento] = []
        descartadas = len(documento.descartes)

        for numero_fila, fila in enumerate(documento.filas, start=1):
            faltantes = _campos_faltantes(fila)
            if faltantes:
                descartadas += 1
                self._logger.log_row_discarded(
                    self._bank,
                    numero_fila,
                    f"Fila sin {', '.join(faltantes)}",
                )
                continue

            detallada = fila.get("detailedDescription")
            texto = detallada or fila["description"]
            minados = self.mine(texto)
            if minados.error:
                self._logger.log_mining_failed(self._bank, texto, minados.error)
            if detallada and minados.variante is VarianteDescripcion.SIN_COINCIDENCIA:
                # sin gramática, gana la descripción corta
                minados = replace(minados, descripcion_real=None)

            movimientos.append(
                ensamblar_movimiento(
                    fila,
                    minados,
                    self._identidad,
                    self._tokenizer.formato_fecha,
                    documento.encabezado,
                )
            )

        self._logger.log_document_parsed(self._bank, len(movimientos), descartadas)
        return movimientos


def _campos_faltantes(fila: FilaCruda) -> list[str]:
    return [campo for campo in CAMPOS_REQUERIDOS if not (fila.get(campo) or "").strip()]
