import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Generic, Optional, TypeVar, Union

logger = logging.getLogger(__name__)

T = TypeVar("T")

# --- Tagged outcome of a required generation stage ---

@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T

@dataclass(frozen=True)
class ParseError:
    reason: str
    raw: str = ""

@dataclass(frozen=True)
class CallError:
    reason: str

Outcome = Union[Ok[T], ParseError, CallError]


async def best_effort(stage: Callable[..., Awaitable[Optional[T]]], *args: Any, label: str = "stage") -> Optional[T]:
    """
    Runs an optional stage and absorbs its failure.

    Any exception raised by ``stage`` is logged and turned into ``None`` so the
    caller's required result is never affected by it.
    """
    try:
        return await stage(*args)
    except Exception as e:
        logger.warning(f"Best-effort {label} failed: {e}")
        return None
