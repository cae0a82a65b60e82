"""Adaptadores de entrada y salida."""
