"""
Capa de Aplicación - Reservas de autos y captura de leads.

Esta capa contiene los casos de uso, DTOs e interfaces (puertos).
Orquesta la lógica de negocio y define los contratos con la infraestructura.

Estructura:
- use_cases/: Casos de uso del sistema
- queries/: Cargadores y estadísticas de las listas del panel de administración
- dtos/: Data Transfer Objects
- interfaces/: Puertos (contratos para adaptadores)
- draft_session.py, lead_capture.py, booking_lifecycle.py, admin_sync.py: servicios
"""
