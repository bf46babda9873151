"""
Concede admin a uma identidade já existente no provedor de auth.

Uso:
    python -m sensorhub.create_admin <uuid> [email]
"""
import sys
from uuid import UUID

from sensorhub.access.predicates import Entitlement
from sensorhub.core.logging import setup_logging
from sensorhub.db.session import SessionLocal
from sensorhub.models.enums import AppRole
from sensorhub.services.profile_service import provision_profile, set_admin
from sensorhub.services.role_service import grant_role

# Chamador de sistema: roda com acesso direto ao banco, fora de qualquer requisição.
SISTEMA = Entitlement(identity=UUID(int=0), admin=True)


def promover(identity: UUID, email=None) -> None:
    db = SessionLocal()
    try:
        provision_profile(db, identity, email=email)
        perfil = set_admin(db, SISTEMA, identity, True)
        grant_role(db, SISTEMA, identity, AppRole.ADMIN)
        print("✅ Admin concedido!")
        print("Identidade:", perfil.id)
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Uso: python -m sensorhub.create_admin <uuid> [email]")
        sys.exit(1)

    setup_logging()
    promover(UUID(sys.argv[1]), sys.argv[2] if len(sys.argv) > 2 else None)
