"""Parser de exportaciones de movimientos de bancos mexicanos."""
