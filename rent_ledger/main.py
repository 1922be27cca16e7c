from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from rent_ledger.core.config import settings
from rent_ledger.core.database import Base, SessionLocal, engine
from rent_ledger.core.errors import LedgerError, ValidationError, error_response
from rent_ledger.core.logging import setup_logging
from rent_ledger.api.routes.auth import router as auth_router
from rent_ledger.api.routes.tenants import router as tenants_router
from rent_ledger.api.routes.payments import router as payments_router
from rent_ledger.api.routes.audit_logs import router as audit_logs_router


setup_logging(settings.LOG_LEVEL, settings.LOG_FILE)

# 1) Create the app FIRST
app = FastAPI(title="PG Rent Ledger")

# 2) Add CORS Middleware BEFORE routes
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# 3) Ledger errors render as {"error": {"code", "message"}}
@app.exception_handler(LedgerError)
def ledger_error_handler(request: Request, exc: LedgerError):
    return JSONResponse(status_code=exc.http_status, content=error_response(exc))


@app.exception_handler(RequestValidationError)
def request_validation_handler(request: Request, exc: RequestValidationError):
    problems = []
    for err in exc.errors():
        where = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        problems.append(f"{where}: {err.get('msg')}" if where else str(err.get("msg")))
    error = ValidationError("; ".join(problems) or "Invalid request")
    return JSONResponse(status_code=error.http_status, content=error_response(error))


# 4) Include routers AFTER app is created
app.include_router(auth_router)
app.include_router(tenants_router)
app.include_router(payments_router)
app.include_router(audit_logs_router)


@app.on_event("startup")
def create_dev_schema():
    # Migrations own the schema everywhere except local development
    if settings.ENV == "dev":
        Base.metadata.create_all(bind=engine)


# 5) Health check endpoints
@app.get("/health")
def health():
    return {"ok": True, "service": "rent-ledger"}

@app.get("/db-health")
def db_health():
    db = SessionLocal()
    try:
        db.execute(text("select 1"))
        return {"ok": True, "db": "connected"}
    finally:
        db.close()
