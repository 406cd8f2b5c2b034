"""Constantes del dominio: tarifas, catálogos y nombres de colecciones."""

from decimal import Decimal

CURRENCY_CODE = "PHP"

# Tarifa por tramo (recogida o entrega); la oficina no cobra.
OFFICE_LOCATION = "AR Car Rentals Office"
LOCATION_FEES: dict[str, Decimal] = {
    OFFICE_LOCATION: Decimal("0"),
    "Cebu City": Decimal("450"),
    "Mandaue City": Decimal("500"),
    "Lapu-Lapu City": Decimal("600"),
    "Mactan-Cebu International Airport": Decimal("600"),
}

# Tarifa plana por contratación; se paga directo al conductor.
DRIVER_FEE = Decimal("1000")

VEHICLE_CATEGORY_ORDER = ("sedan", "suv", "mpv", "van")

BOOKING_REFERENCE_PREFIX = "AR-"

# Colecciones del servicio de persistencia
BOOKINGS = "bookings"
LEADS = "abandoned_leads"
PAYMENTS = "payments"
CUSTOMERS = "customers"
VEHICLES = "vehicles"

# Tipos de evento de cambio
EVENT_INSERT = "INSERT"
EVENT_UPDATE = "UPDATE"
EVENT_DELETE = "DELETE"
ALL_EVENTS = (EVENT_INSERT, EVENT_UPDATE, EVENT_DELETE)
