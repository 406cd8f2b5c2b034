"""Capa de Infraestructura - adaptadores de los puertos de aplicación."""
