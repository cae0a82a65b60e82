"""Escritores de salida (Excel y JSON)."""
