"""Núcleo: modelos, puertos, servicios y utilidades compartidas."""
