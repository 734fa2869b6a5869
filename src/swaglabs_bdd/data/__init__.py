from .test_data import TEST_DATA, get_test_data, get_user, get_product, get_url

__all__ = [
    'TEST_DATA',
    'get_test_data',
    'get_user',
    'get_product',
    'get_url',
]
