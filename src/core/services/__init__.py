"""Servicios del Core.

- `constraint_engine`: reglas puras (sin I/O).
- `roster_store`: dueño del roster vigente.
- `roster_service`: orquesta resolver -> motor -> persistencia.
"""
