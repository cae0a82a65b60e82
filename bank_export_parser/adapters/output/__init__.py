"""Adaptadores de salida: bitácoras y escritores."""
