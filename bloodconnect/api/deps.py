from fastapi import Depends
from sqlalchemy.orm import Session
from bloodconnect.database.database import get_db
from bloodconnect.services.portal_store import PortalStore

def get_store(db: Session = Depends(get_db)) -> PortalStore:
    """One store per request, bound to that request's session."""
    return PortalStore(db)
