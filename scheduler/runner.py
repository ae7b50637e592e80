import logging
from typing import Callable, Tuple, TypeVar

from exceptions.custom_errors import InfeasibleAssignmentError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def run_with_retry(
    attempt_fn: Callable[[int], T], max_attempts: int, label: str = "assignment"
) -> Tuple[T, int]:
    """
    Run a randomized solving attempt until it succeeds or the cap is reached.

    Each attempt restarts from scratch (no backtracking); only
    InfeasibleAssignmentError is retried, anything else propagates.

    Args:
        attempt_fn (Callable[[int], T]): Called with the 1-based attempt number.
        max_attempts (int): Maximum number of attempts, at least 1.
        label (str): Name used in log messages.

    Returns:
        tuple: (result of the successful attempt, number of attempts used)

    Raises:
        InfeasibleAssignmentError: After `max_attempts` failed attempts, naming
            the attempt count and the last infeasible target.
    """
    if max_attempts < 1:
        raise ValueError("max_attempts must be at least 1")

    last_error = None
    for attempt in range(1, max_attempts + 1):
        try:
            result = attempt_fn(attempt)
        except InfeasibleAssignmentError as e:
            last_error = e
            logger.debug(f"{label} attempt {attempt} failed: {e}")
            continue
        logger.info(f"✅ {label} succeeded on attempt {attempt}")
        return result, attempt

    logger.error(
        f"🔥 Could not find a valid {label} after {max_attempts} attempts."
    )
    raise InfeasibleAssignmentError(
        last_error.target,
        last_error.remaining,
        attempts=max_attempts,
        message=str(last_error),
    )
