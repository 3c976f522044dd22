"""Servicios del Core: probing de modelos, formateo de resultados, preflight del token."""
