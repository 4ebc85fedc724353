"""Adaptadores de I/O (archivos JSON de formularios y exportaciones)."""
