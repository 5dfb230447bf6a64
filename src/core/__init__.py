"""Core del registro de países: dominio, contratos y servicios."""
