"""Implementaciones de ProcessLogger."""
