"""Capa CLI (Typer + Rich).

Por qué:
- Aquí solo hay parsing de argumentos y presentación; la lógica vive en `core`.
"""
