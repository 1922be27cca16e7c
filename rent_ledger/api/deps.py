from typing import Generator

from sqlalchemy.orm import Session

from rent_ledger.core.database import session_scope


def get_db() -> Generator[Session, None, None]:
    yield from session_scope()
