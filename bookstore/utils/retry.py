# bookstore/utils/retry.py
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from bookstore.domain.errors import ConflictError
from bookstore.utils.settings import ORDER_NUMBER_ATTEMPTS


def conflict_retry(attempts: int = ORDER_NUMBER_ATTEMPTS):
    #order number collision -> retry with a fresh number
    return retry(
        reraise=True,
        stop=stop_after_attempt(attempts),
        wait=wait_exponential(multiplier=0.01, min=0, max=0.1),
        retry=retry_if_exception_type(ConflictError),
    )
