"""Sequence digest algorithms.

Main entry points:
- get_hash_function: name -> ``bytes -> hex str``
- parse_hash_types / validate_hash_types: configuration-time checks
"""

from seqhasher.hashing.registry import (
    DEFAULT_HASH_TYPE,
    DIGEST_WIDTHS,
    SUPPORTED_HASH_TYPES,
    HashAlgorithm,
    HashFunction,
    get_hash_function,
    is_valid_hash_type,
    parse_hash_types,
    validate_hash_types,
)

__all__ = [
    "DEFAULT_HASH_TYPE",
    "DIGEST_WIDTHS",
    "SUPPORTED_HASH_TYPES",
    "HashAlgorithm",
    "HashFunction",
    "get_hash_function",
    "is_valid_hash_type",
    "parse_hash_types",
    "validate_hash_types",
]
