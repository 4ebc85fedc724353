"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que cumplen las entidades de otras capas.
- El Core depende de abstracciones, no de modelos de persistencia concretos.
"""
