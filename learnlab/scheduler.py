import logging
from typing import Optional

from apscheduler.schedulers.asyncio import AsyncIOScheduler

from learnlab.core.config import settings
from learnlab.crud import crud_session
from learnlab.crud.crud_session import SessionStore

logger = logging.getLogger(__name__)

PRUNE_JOB_ID = "prune_idle_simulations"

scheduler = AsyncIOScheduler(timezone="UTC")

async def prune_idle_simulations(store: Optional[SessionStore] = None) -> int:
    """Drops simulations nobody has advanced within the idle threshold."""
    if store is None:
        store = crud_session.get_store()
    try:
        pruned = crud_session.remove_inactive_sessions(
            store, inactive_hours=settings.INACTIVE_SESSION_CLEANUP_HOURS
        )
    except Exception as e:
        logger.error(f"Pruning idle simulations failed: {e}")
        return 0
    if pruned:
        logger.info(f"Pruned {pruned} idle simulations, {len(store)} still running.")
    return pruned

def setup_scheduler():
    # Idle sessions are checked hourly, so none outlives the threshold by more than an hour.
    scheduler.add_job(
        prune_idle_simulations,
        'interval',
        hours=1,
        id=PRUNE_JOB_ID,
        replace_existing=True,
    )
    logger.info(
        "Idle simulations older than %d hours will be pruned hourly.",
        settings.INACTIVE_SESSION_CLEANUP_HOURS,
    )
