"""
Puertos (interfaces) del dominio.

Los puertos definen QUÉ necesita el dominio, sin decir CÓMO se implementa.
Cada puerto tiene uno o más adaptadores que lo implementan.

Uso:
    from bank_export_parser.domain.ports import Tokenizer, DescriptionMiner, ProcessLogger
"""

from bank_export_parser.domain.ports.bank_parser import DescriptionMiner, Tokenizer
from bank_export_parser.domain.ports.document_reader import DocumentReader
from bank_export_parser.domain.ports.output_writer import OutputWriter
from bank_export_parser.domain.ports.process_logger import ProcessLogger

__all__ = [
    "DescriptionMiner",
    "DocumentReader",
    "OutputWriter",
    "ProcessLogger",
    "Tokenizer",
]
