"""Registro de bancos y revisiones."""
