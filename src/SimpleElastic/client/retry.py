"""Fixed-delay retry around `Request.do()`."""

from __future__ import annotations

import time
from typing import TYPE_CHECKING

from SimpleElastic.core.errors import SimpleElasticError, UsageError
from SimpleElastic.utils.log import log

if TYPE_CHECKING:
    from SimpleElastic.client.request import Request
    from SimpleElastic.client.result import Result


def do_with_retry(request: Request, *, count: int, delay: float) -> Result:
    """Send `request`, retrying every failure up to `count` more times.

    There is no backoff growth, no jitter and no error-class filtering: every
    `SimpleElasticError` is retried after the same `delay`.

    Args:
        request: Fully built request.
        count: Number of retries after the first attempt.
        delay: Seconds to sleep between attempts.

    Returns:
        Result of the first successful attempt.

    Raises:
        SimpleElasticError: The last attempt's error when all attempts failed.
        UsageError: If `count` or `delay` is negative.
    """
    if count < 0 or delay < 0:
        raise UsageError("retry count and delay must not be negative")

    attempts = count + 1
    last_err: SimpleElasticError | None = None
    for attempt in range(1, attempts + 1):
        try:
            return request.do()
        except SimpleElasticError as error:
            last_err = error
            log.debug("Request attempt %d/%d failed: %s", attempt, attempts, error)

        if attempt < attempts:
            log.debug("Retrying in %.2fs", delay)
            time.sleep(delay)

    assert last_err is not None
    raise last_err
