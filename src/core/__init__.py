"""Core de hf-sentiment: configuración, dominio, contratos y servicios (sin I/O)."""
