# shop/utils/retry.py
from tenacity import (
    retry,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    stop_after_delay,
    wait_exponential,
)
import redis


def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type(redis.RedisError),
    )


def lock_wait_retry(max_wait: float):
    """
    Ponawia probe zalozenia locka dopoki zwraca False.
    Po przekroczeniu max_wait zwraca ostatni wynik (False), bez wyjatku.
    """
    return retry(
        stop=stop_after_delay(max_wait),
        wait=wait_exponential(multiplier=0.01, min=0.01, max=0.2),
        retry=retry_if_result(lambda acquired: not acquired),
        retry_error_callback=lambda state: False,
    )
