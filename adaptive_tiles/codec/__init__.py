"""
Кодек бинарного геохеша
"""
from .binary_hash import (
    encode,
    encode_many,
    decode,
    code_to_hash,
    hash_to_code,
    check_precision,
    check_hash
)

__all__ = [
    'encode',
    'encode_many',
    'decode',
    'code_to_hash',
    'hash_to_code',
    'check_precision',
    'check_hash'
]
