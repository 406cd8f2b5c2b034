"""
Tests de integración del adaptador SQL.

Verifican contra SQLite en memoria (aiosqlite):
- CRUD y eventos de cambio de PersistenceService
- Reintento ante contención de locks
- Ciclo de vida completo de una reserva sobre SQL

Para ejecutar solo tests de integración:
    pytest tests/integration/
"""
