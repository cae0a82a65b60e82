"""
Utilidades compartidas del dominio.

Estas funciones son usadas por múltiples tokenizers y miners y no dependen
de ninguna librería externa. Solo operan sobre tipos nativos de Python.

Uso:
    from bank_export_parser.domain.shared.money import parse_currency, parse_money
    from bank_export_parser.domain.shared.date_parser import FormatoFecha, format_date
    from bank_export_parser.domain.shared.delimited import split_columns, find_header_line
    from bank_export_parser.domain.shared.mining import ReglaMinado, minar_con_reglas
"""
