"""Adaptadores de I/O (HTTP, archivos).

Cada módulo implementa un contrato de `core.interfaces`.
"""
