"""Tokenizers y miners de cada banco."""
