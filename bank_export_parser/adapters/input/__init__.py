"""Adaptadores de entrada: lectores de archivo y parsers por banco."""
