from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from rent_ledger.api.deps import get_db
from rent_ledger.schemas.owner import AuthOut, OwnerLogin, OwnerRegister
from rent_ledger.services.owner_service import login_owner, register_owner

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=AuthOut, status_code=201)
def register(payload: OwnerRegister, db: Session = Depends(get_db)):
    owner, token = register_owner(db, payload.name, payload.email, payload.password)
    return {"message": "Owner registered", "owner": owner, "token": token}


@router.post("/login", response_model=AuthOut)
def login(payload: OwnerLogin, db: Session = Depends(get_db)):
    owner, token = login_owner(db, payload.email, payload.password)
    return {"message": "Login successful", "owner": owner, "token": token}
