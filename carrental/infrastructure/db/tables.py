from sqlalchemy import (
    Boolean,
    Column,
    Date,
    DateTime,
    Index,
    Integer,
    MetaData,
    Numeric,
    String,
    Table,
    Text,
)

metadata = MetaData()

vehicles = Table(
    "vehicles",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("name", String(150)),
    Column("brand", String(100)),
    Column("model", String(100)),
    Column("category", String(20)),
    Column("price_per_day", Numeric(12, 2), nullable=False),
    Column("created_at", DateTime(timezone=True)),
)

customers = Table(
    "customers",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("full_name", String(255), nullable=False),
    Column("email", String(255), nullable=False, index=True),
    Column("contact_number", String(50)),
    Column("created_at", DateTime(timezone=True)),
)

bookings = Table(
    "bookings",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("booking_reference", String(20), nullable=False, unique=True),
    Column("customer_id", String(36), nullable=False),
    Column("vehicle_id", String(36), nullable=False),
    Column("pickup_date", Date),
    Column("return_date", Date),
    Column("pickup_time", String(10)),
    Column("rental_days", Integer, nullable=False),
    Column("pickup_location", String(150)),
    Column("dropoff_location", String(150)),
    Column("drive_option", String(20)),
    Column("total_amount", Numeric(12, 2), nullable=False),
    Column("booking_status", String(32), nullable=False),
    Column("refund_status", String(32), nullable=False),
    Column("refund_reference_id", String(100)),
    Column("refund_proof_url", String(500)),
    Column("cancellation_reason", Text),
    Column("agreed_to_terms", Boolean, nullable=False, default=False),
    Column("created_at", DateTime(timezone=True)),
    Column("updated_at", DateTime(timezone=True)),
)

payments = Table(
    "payments",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("booking_id", String(36), nullable=False, index=True),
    Column("amount", Numeric(12, 2), nullable=False),
    Column("payment_type", String(20), nullable=False),
    Column("payment_method", String(30)),
    Column("payment_status", String(20), nullable=False),
    Column("receipt_url", String(500)),
    Column("payment_proof_url", String(500)),
    Column("created_at", DateTime(timezone=True)),
)

abandoned_leads = Table(
    "abandoned_leads",
    metadata,
    Column("id", String(36), primary_key=True),
    Column("lead_name", String(255)),
    Column("email", String(255), nullable=False),
    Column("phone", String(50)),
    Column("vehicle_id", String(36)),
    Column("pickup_location", String(150)),
    Column("dropoff_location", String(150)),
    Column("pickup_date", Date),
    Column("pickup_time", String(10)),
    Column("return_date", Date),
    Column("rental_days", Integer),
    Column("estimated_price", Numeric(12, 2)),
    Column("drive_option", String(20)),
    Column("last_step", String(30), nullable=False),
    Column("drop_off_timestamp", DateTime(timezone=True)),
    Column("status", String(20), nullable=False),
    Column("automation_status", String(20)),
    Column("recovered_booking_id", String(36)),
    Column("created_at", DateTime(timezone=True)),
    Index("ix_abandoned_leads_email_vehicle", "email", "vehicle_id"),
)
