"""Modelos y entidades del dominio.

Por qué:
- Aquí viven las estructuras de datos puras y estrictas (Pydantic v2) y los
  catálogos estáticos del sitio (pilares, clusters, patrones de velas).
- El dominio no conoce HTTP, CLI, ni plantillas: solo conceptos del problema.
"""
