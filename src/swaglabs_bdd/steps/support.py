from ..data.test_data import get_test_data
from ..executor.world import ScenarioWorld
from ..utils.wait_strategy import wait_for_condition

# UI labels of the sort dropdown -> option codes
SORT_OPTIONS = {
    'Name (A to Z)': get_test_data('sort_options.name_az'),
    'Name (Z to A)': get_test_data('sort_options.name_za'),
    'Price (low to high)': get_test_data('sort_options.price_low_high'),
    'Price (high to low)': get_test_data('sort_options.price_high_low'),
}


def sort_code(label: str) -> str:
    """Map a dropdown label to its option code; codes pass through unchanged"""
    if label in SORT_OPTIONS:
        return SORT_OPTIONS[label]
    if label in SORT_OPTIONS.values():
        return label
    raise ValueError(f"Unknown sort option: {label}")


async def wait_for_url_containing(world: ScenarioWorld, url_part: str, timeout: int = None) -> bool:
    return await wait_for_condition(
        lambda: url_part in world.current_url,
        timeout=timeout or get_test_data('timeouts.short'),
        interval=100,
        description=f"URL to contain '{url_part}'"
    )


async def wait_for_url_equal(world: ScenarioWorld, url: str, timeout: int = None) -> bool:
    """Trailing slashes are ignored"""
    return await wait_for_condition(
        lambda: world.current_url.rstrip('/') == url.rstrip('/'),
        timeout=timeout or get_test_data('timeouts.short'),
        interval=100,
        description=f"URL to be '{url}'"
    )
