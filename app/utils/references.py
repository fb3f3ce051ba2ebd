import secrets
import string
import time

REFERENCE_PREFIX = 'GC'
_SUFFIX_ALPHABET = string.ascii_uppercase + string.digits


def generate_payment_reference() -> str:
    """Mint a reconciliation token, e.g. GC-1700000000000-AB12CD."""
    timestamp = int(time.time() * 1000)
    suffix = ''.join(secrets.choice(_SUFFIX_ALPHABET) for _ in range(6))
    return f'{REFERENCE_PREFIX}-{timestamp}-{suffix}'
