"""Tests para bank_export_parser.domain.shared.text_cleaner"""

from bank_export_parser.domain.shared.text_cleaner import (
    clean_document_text,
    clean_whitespace,
    decode_document,
    normalize_line_endings,
    repair_mojibake,
    strip_bom,
)


class TestCleanWhitespace:
    def test_espacios_multiples(self):
        assert clean_whitespace("  PAGO   NOMINA  ") == "PAGO NOMINA"

    def test_tabs(self):
        assert clean_whitespace("\tREFERENCIA\t123") == "REFERENCIA 123"


class TestDocumento:
    def test_saltos_de_linea_windows(self):
        assert normalize_line_endings("a\r\nb\rc") == "a\nb\nc"

    def test_quita_bom(self):
        assert strip_bom("\ufeffFecha,Hora") == "Fecha,Hora"

    def test_sin_bom_no_cambia(self):
        assert strip_bom("Fecha") == "Fecha"

    def test_clean_document_text_conserva_espacios(self):
        """Los espacios marcan posiciones en el formato de ancho fijo."""
        assert clean_document_text("\ufeffA  B\r\nC") == "A  B\nC"


class TestRepairMojibake:
    def test_repara_acento(self):
        assert repair_mojibake("DescripciÃ³n") == "Descripción"

    def test_texto_correcto_no_cambia(self):
        assert repair_mojibake("Descripción") == "Descripción"

    def test_texto_ascii_no_cambia(self):
        assert repair_mojibake("Saldo") == "Saldo"


class TestDecodeDocument:
    def test_str_pasa_sin_cambios(self):
        assert decode_document("hola") == "hola"

    def test_utf8_con_bom(self):
        assert decode_document("\ufeffDía".encode("utf-8")) == "Día"

    def test_latin1_de_respaldo(self):
        assert decode_document("Descripción".encode("latin-1")) == "Descripción"
