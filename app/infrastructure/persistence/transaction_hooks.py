"""Callbacks that run only once the enclosing SQL transaction has committed.

Callbacks are queued in Session.info. A commit of the outermost transaction
runs them in order; any other end of that transaction (rollback, close
without commit) discards them. Savepoint commits leave the queue alone.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import Session, SessionTransaction

logger = logging.getLogger(__name__)

_AFTER_COMMIT_KEY = "leaguedesk.after_commit"


def run_after_commit(session: AsyncSession | Session, callback: Callable[[], None]) -> bool:
    """Queue callback for the commit of session's open transaction.

    Returns False, without queueing, when no transaction is open.
    """
    sync_session = session.sync_session if isinstance(session, AsyncSession) else session
    if not sync_session.in_transaction():
        return False
    sync_session.info.setdefault(_AFTER_COMMIT_KEY, []).append(callback)
    return True


def pending_after_commit(session: AsyncSession | Session) -> int:
    """Number of callbacks waiting for session's commit."""
    sync_session = session.sync_session if isinstance(session, AsyncSession) else session
    return len(sync_session.info.get(_AFTER_COMMIT_KEY, ()))


@event.listens_for(Session, "after_commit")
def _run_queued(session: Session) -> None:
    if session.in_nested_transaction():
        return
    for callback in session.info.pop(_AFTER_COMMIT_KEY, None) or ():
        try:
            callback()
        except Exception as e:
            logger.warning("After-commit callback failed: %s", e, exc_info=True)


@event.listens_for(Session, "after_transaction_end")
def _discard_uncommitted(session: Session, transaction: SessionTransaction) -> None:
    if transaction.parent is None:
        dropped = session.info.pop(_AFTER_COMMIT_KEY, None)
        if dropped:
            logger.debug("Discarded %d after-commit callback(s) on rollback", len(dropped))
