"""Servicios de dominio: parser de exportación y ensamblador."""
