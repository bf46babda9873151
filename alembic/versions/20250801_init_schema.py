"""Init schema (profiles, devices, sensor_readings, readings, user_roles)

Revision ID: 20250801_init_schema
Revises:
Create Date: 2025-08-01 10:00:00

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "20250801_init_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

subscription_tier = postgresql.ENUM("free", "premium", name="subscription_tier", create_type=False)
device_type = postgresql.ENUM("AIR", "SOIL", name="device_type", create_type=False)
app_role = postgresql.ENUM("admin", "user", name="app_role", create_type=False)


def upgrade() -> None:
    bind = op.get_bind()
    subscription_tier.create(bind, checkfirst=True)
    device_type.create(bind, checkfirst=True)
    app_role.create(bind, checkfirst=True)

    # profiles (id = identidade do provedor de auth)
    op.create_table(
        "profiles",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False),
        sa.Column("display_name", sa.String(), nullable=True),
        sa.Column("email", sa.String(), nullable=True),
        sa.Column("subscription_tier", subscription_tier, nullable=False, server_default="free"),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default=sa.text("false")),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("NOW()")),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.text("NOW()")),
    )
    op.create_index("ix_profiles_id", "profiles", ["id"], unique=False)
    op.create_index("ix_profiles_email", "profiles", ["email"], unique=False)

    # user_roles
    op.create_table(
        "user_roles",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False,
                  server_default=sa.text("gen_random_uuid()")),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("role", app_role, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("NOW()")),
        sa.ForeignKeyConstraint(["user_id"], ["profiles.id"], name="user_roles_user_id_fkey", ondelete="CASCADE"),
        sa.UniqueConstraint("user_id", "role", name="user_roles_user_id_role_key"),
    )
    op.create_index("ix_user_roles_user_id", "user_roles", ["user_id"], unique=False)

    # devices
    op.create_table(
        "devices",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False,
                  server_default=sa.text("gen_random_uuid()")),
        sa.Column("device_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("device_type", device_type, nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("NOW()")),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.text("NOW()")),
        sa.ForeignKeyConstraint(["user_id"], ["profiles.id"], name="devices_user_id_fkey"),
    )
    op.create_index("ix_devices_id", "devices", ["id"], unique=False)
    op.create_index("ix_devices_device_id", "devices", ["device_id"], unique=True)
    op.create_index("ix_devices_user_id", "devices", ["user_id"], unique=False)

    # sensor_readings (schema atual)
    op.create_table(
        "sensor_readings",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False,
                  server_default=sa.text("gen_random_uuid()")),
        sa.Column("device_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("timestamp", sa.DateTime(), nullable=False, server_default=sa.text("NOW()")),
        sa.Column("temperature", sa.Float(), nullable=True),
        sa.Column("humidity", sa.Float(), nullable=True),
        sa.Column("pressure", sa.Float(), nullable=True),
        sa.Column("co2", sa.Float(), nullable=True),
        sa.Column("vpd", sa.Float(), nullable=True),
        sa.Column("heat_index", sa.Float(), nullable=True),
        sa.Column("wet_bulb_temp", sa.Float(), nullable=True),
        sa.Column("absolute_humidity", sa.Float(), nullable=True),
        sa.Column("dew_point", sa.Float(), nullable=True),
        sa.Column("altitude", sa.Float(), nullable=True),
        sa.Column("weather_trend", sa.String(), nullable=True),
        sa.Column("uv_index", sa.Float(), nullable=True),
        sa.Column("light_veml7700", sa.Float(), nullable=True),
        sa.Column("light_tsl2591", sa.Float(), nullable=True),
        sa.Column("par", sa.Float(), nullable=True),
        sa.Column("acceleration_x", sa.Float(), nullable=True),
        sa.Column("acceleration_y", sa.Float(), nullable=True),
        sa.Column("acceleration_z", sa.Float(), nullable=True),
        sa.Column("shock_detected", sa.Boolean(), nullable=True),
        sa.Column("soil_capacitance", sa.Float(), nullable=True),
        sa.Column("soil_moisture_percentage", sa.Float(), nullable=True),
        sa.Column("battery_voltage", sa.Float(), nullable=True),
        sa.Column("battery_percentage", sa.Float(), nullable=True),
        sa.Column("battery_health", sa.String(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("NOW()")),
        sa.ForeignKeyConstraint(["device_id"], ["devices.id"], name="sensor_readings_device_id_fkey"),
    )
    op.create_index("ix_sensor_readings_id", "sensor_readings", ["id"], unique=False)
    op.create_index("ix_sensor_readings_device_timestamp", "sensor_readings", ["device_id", "timestamp"], unique=False)

    # readings (legado)
    op.create_table(
        "readings",
        sa.Column("id", postgresql.UUID(as_uuid=True), primary_key=True, nullable=False,
                  server_default=sa.text("gen_random_uuid()")),
        sa.Column("device_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("timestamp", sa.DateTime(), nullable=False, server_default=sa.text("NOW()")),
        sa.Column("temperature", sa.Float(), nullable=True),
        sa.Column("humidity", sa.Float(), nullable=True),
        sa.Column("pressure", sa.Float(), nullable=True),
        sa.Column("dew_point", sa.Float(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.text("NOW()")),
        sa.ForeignKeyConstraint(["device_id"], ["devices.id"], name="readings_device_id_fkey"),
    )
    op.create_index("ix_readings_id", "readings", ["id"], unique=False)
    op.create_index("ix_readings_device_timestamp", "readings", ["device_id", "timestamp"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_readings_device_timestamp", table_name="readings")
    op.drop_index("ix_readings_id", table_name="readings")
    op.drop_table("readings")

    op.drop_index("ix_sensor_readings_device_timestamp", table_name="sensor_readings")
    op.drop_index("ix_sensor_readings_id", table_name="sensor_readings")
    op.drop_table("sensor_readings")

    op.drop_index("ix_devices_user_id", table_name="devices")
    op.drop_index("ix_devices_device_id", table_name="devices")
    op.drop_index("ix_devices_id", table_name="devices")
    op.drop_table("devices")

    op.drop_index("ix_user_roles_user_id", table_name="user_roles")
    op.drop_table("user_roles")

    op.drop_index("ix_profiles_email", table_name="profiles")
    op.drop_index("ix_profiles_id", table_name="profiles")
    op.drop_table("profiles")

    bind = op.get_bind()
    app_role.drop(bind, checkfirst=True)
    device_type.drop(bind, checkfirst=True)
    subscription_tier.drop(bind, checkfirst=True)
