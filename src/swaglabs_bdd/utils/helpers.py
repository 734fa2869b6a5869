import asyncio
import string
import time
import logging
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, Union

from faker import Faker

logger = logging.getLogger(__name__)

_faker = Faker()


async def wait(ms: int) -> None:
    """Sleep for the given number of milliseconds"""
    await asyncio.sleep(ms / 1000)


def generate_random_string(length: int = 10) -> str:
    """Random alphanumeric string of the given length"""
    return _faker.lexify('?' * length, letters=string.ascii_letters + string.digits)


def generate_random_email() -> str:
    """Unique throwaway e-mail address"""
    return f"test_{int(time.time() * 1000)}_{_faker.user_name()}@example.com"


def ensure_directory_exists(dir_path: Union[str, Path]) -> Path:
    path = Path(dir_path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def format_date(date: Optional[datetime] = None, fmt: str = 'YYYY-MM-DD') -> str:
    """
    Format a date with YYYY/MM/DD/HH/mm/ss tokens.

    Example:
        format_date(datetime(2024, 1, 2, 3, 4, 5), 'YYYY-MM-DD HH:mm:ss') -> '2024-01-02 03:04:05'
    """
    date = date or datetime.now()
    return (fmt
            .replace('YYYY', f"{date.year:04d}")
            .replace('MM', f"{date.month:02d}")
            .replace('DD', f"{date.day:02d}")
            .replace('HH', f"{date.hour:02d}")
            .replace('mm', f"{date.minute:02d}")
            .replace('ss', f"{date.second:02d}"))


async def retry_with_backoff(
        fn: Callable[[], Awaitable[Any]],
        max_retries: int = 3,
        delay: int = 1000
) -> Any:
    """
    Call fn until it succeeds, sleeping delay * 2**attempt ms between tries.
    The last error is re-raised once max_retries attempts have failed.
    """
    for attempt in range(max_retries):
        try:
            return await fn()
        except Exception as e:
            if attempt == max_retries - 1:
                raise
            backoff = delay * (2 ** attempt)
            logger.warning(f"Attempt {attempt + 1}/{max_retries} failed ({e}), retrying in {backoff}ms")
            await wait(backoff)


def parse_price(text: str) -> Decimal:
    """'$29.99' -> Decimal('29.99')"""
    cleaned = text.strip().replace('$', '').replace(',', '')
    try:
        return Decimal(cleaned)
    except InvalidOperation:
        raise ValueError(f"Not a price: {text!r}")


def artifact_stem(scenario_name: str, timestamp_ms: Optional[int] = None) -> str:
    """File stem for per-scenario artifacts: spaces become underscores, epoch ms appended"""
    if timestamp_ms is None:
        timestamp_ms = int(time.time() * 1000)
    return f"{scenario_name.replace(' ', '_')}_{timestamp_ms}"
