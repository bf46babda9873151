from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from sensorhub.access.predicates import Entitlement, resolve_entitlement
from sensorhub.core.security import decodificar_token, identidade_do_token
from sensorhub.db.session import SessionLocal
from sensorhub.services.profile_service import provision_profile

bearer_scheme = HTTPBearer(auto_error=False)

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_claims(credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)) -> dict:
    if credentials is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token ausente")
    payload = decodificar_token(credentials.credentials)
    if not payload:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token inválido")
    return payload

def get_caller(claims: dict = Depends(get_claims), db: Session = Depends(get_db)) -> Entitlement:
    """
    Identidade vem do provedor de auth (claim "sub"). Na primeira vez que a
    identidade aparece, o perfil é provisionado; depois o direito do chamador
    é resolvido uma vez para a requisição inteira.
    """
    identity = identidade_do_token(claims)
    if identity is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token sem identidade")

    metadata = claims.get("user_metadata") or {}
    provision_profile(db, identity, email=claims.get("email"), display_name=metadata.get("display_name"))
    return resolve_entitlement(db, identity)
