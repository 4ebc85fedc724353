"""Core del planificador: dominio y servicios puros, sin I/O."""
