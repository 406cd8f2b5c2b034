"""Consultas de solo lectura para el panel de administración."""
