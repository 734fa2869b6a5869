from .wait_strategy import WaitStrategy, wait_for_condition
from .assertions import (
    AssertionHelper,
    assert_equal,
    assert_contains,
    assert_not_contains,
    assert_matches,
    assert_true,
    assert_false,
    assert_greater,
    assert_all,
)
from .helpers import (
    wait,
    generate_random_string,
    generate_random_email,
    ensure_directory_exists,
    format_date,
    retry_with_backoff,
    parse_price,
    artifact_stem,
)

__all__ = [
    'WaitStrategy',
    'wait_for_condition',
    'AssertionHelper',
    'assert_equal',
    'assert_contains',
    'assert_not_contains',
    'assert_matches',
    'assert_true',
    'assert_false',
    'assert_greater',
    'assert_all',
    'wait',
    'generate_random_string',
    'generate_random_email',
    'ensure_directory_exists',
    'format_date',
    'retry_with_backoff',
    'parse_price',
    'artifact_stem',
]
