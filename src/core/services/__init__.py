"""Servicios del Core.

Por qué:
- Aquí viven las transiciones de estado (motor de etiquetas, confirmaciones)
  como funciones puras que la CLI y la UI reutilizan.
"""
