"""
Per-company mutual exclusion for reviewer-chain mutations.

Two layers are held for the duration of a mutation:
- an in-process lock per company, serializing request threads of this worker
- a row lock on the company (SELECT ... FOR UPDATE), serializing other workers
  sharing the database. SQLite ignores FOR UPDATE; its single writer already
  serializes transactions.
"""
import threading
import weakref
from contextlib import contextmanager

from sqlmodel import Session, select

from core.exceptions import NotFound
from database.models import Company
from utils.logger import get_logger

logger = get_logger(__name__)

_registry_lock = threading.Lock()
# An entry lives only while some caller holds a reference to its lock
_company_locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()


def _lock_for(company_id: str) -> threading.Lock:
    with _registry_lock:
        lock = _company_locks.get(company_id)
        if lock is None:
            lock = threading.Lock()
            _company_locks[company_id] = lock
        return lock


@contextmanager
def company_lock(session: Session, company_id: str):
    """Hold the company's mutation scope.

    The caller commits inside the block. If the block raises, the session is
    rolled back before both locks are released.
    """
    lock = _lock_for(company_id)
    with lock:
        try:
            company = session.exec(
                select(Company).where(Company.id == company_id).with_for_update()
            ).first()
            if not company:
                raise NotFound("Company not found")
            yield company
        except Exception:
            session.rollback()
            raise
        finally:
            # Ends the transaction (and its row lock) if the caller did not commit
            if session.in_transaction():
                session.rollback()
