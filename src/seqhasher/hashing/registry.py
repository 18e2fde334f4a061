"""Hash algorithm registry.

Maps a closed set of algorithm names to pure ``bytes -> hex str``
functions. Every function returns lowercase hexadecimal of a fixed width
and returns an empty string for empty input.
"""

import hashlib
from collections.abc import Callable, Iterable
from enum import Enum

import blake3
import mmh3
import xxhash
from cityhash import CityHash128

from seqhasher.errors import UnsupportedHashError
from seqhasher.hashing.nthash import nthash_forward

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

HashFunction = Callable[[bytes], str]

_MASK64 = 0xFFFFFFFFFFFFFFFF


class HashAlgorithm(str, Enum):
    """Supported digest algorithms, in the order they are documented."""

    SHA1 = "sha1"
    SHA3 = "sha3"
    MD5 = "md5"
    XXHASH = "xxhash"
    CITYHASH = "cityhash"
    MURMUR3 = "murmur3"
    NTHASH = "nthash"
    BLAKE3 = "blake3"


DEFAULT_HASH_TYPE = HashAlgorithm.SHA1.value

SUPPORTED_HASH_TYPES: tuple[str, ...] = tuple(algo.value for algo in HashAlgorithm)

# Hex characters per digest
DIGEST_WIDTHS: dict[HashAlgorithm, int] = {
    HashAlgorithm.SHA1: 40,
    HashAlgorithm.SHA3: 128,
    HashAlgorithm.MD5: 32,
    HashAlgorithm.XXHASH: 16,
    HashAlgorithm.CITYHASH: 32,
    HashAlgorithm.MURMUR3: 32,
    HashAlgorithm.NTHASH: 16,
    HashAlgorithm.BLAKE3: 64,
}


def _sha1(data: bytes) -> str:
    return hashlib.sha1(data).hexdigest()


def _sha3(data: bytes) -> str:
    return hashlib.sha3_512(data).hexdigest()


def _md5(data: bytes) -> str:
    return hashlib.md5(data).hexdigest()


def _xxhash(data: bytes) -> str:
    return f"{xxhash.xxh64_intdigest(data):016x}"


def _cityhash(data: bytes) -> str:
    # CityHash128 packs the low 64-bit half into the upper bits of the int
    value = CityHash128(data)
    low, high = value >> 64, value & _MASK64
    return f"{high:016x}{low:016x}"


def _murmur3(data: bytes) -> str:
    h1, h2 = mmh3.hash64(data, seed=0, x64arch=True, signed=False)
    return f"{h1:016x}{h2:016x}"


def _nthash(data: bytes) -> str:
    return f"{nthash_forward(data):016x}"


def _blake3(data: bytes) -> str:
    return blake3.blake3(data).hexdigest()


_HASH_FUNCTIONS: dict[HashAlgorithm, HashFunction] = {
    HashAlgorithm.SHA1: _sha1,
    HashAlgorithm.SHA3: _sha3,
    HashAlgorithm.MD5: _md5,
    HashAlgorithm.XXHASH: _xxhash,
    HashAlgorithm.CITYHASH: _cityhash,
    HashAlgorithm.MURMUR3: _murmur3,
    HashAlgorithm.NTHASH: _nthash,
    HashAlgorithm.BLAKE3: _blake3,
}


def is_valid_hash_type(name: str) -> bool:
    """Check whether ``name`` is a supported algorithm.

    Parameters
    ----------
    name : str
        Algorithm name (case-sensitive, e.g. 'sha1').

    Returns
    -------
    bool
        True if the registry knows the name.
    """
    return name in SUPPORTED_HASH_TYPES


def validate_hash_types(names: Iterable[str]) -> tuple[str, ...]:
    """Validate an ordered list of algorithm names.

    Parameters
    ----------
    names : Iterable[str]
        Algorithm names in output order. Duplicates are kept.

    Returns
    -------
    tuple[str, ...]
        The same names as an immutable tuple.

    Raises
    ------
    UnsupportedHashError
        On the first unknown name.
    ValueError
        If no names are given.
    """
    validated = tuple(names)
    if not validated:
        raise ValueError("At least one hash type is required")

    for name in validated:
        if not is_valid_hash_type(name):
            raise UnsupportedHashError(name, SUPPORTED_HASH_TYPES)

    return validated


def parse_hash_types(value: str) -> tuple[str, ...]:
    """Split and validate a comma-separated algorithm list.

    Parameters
    ----------
    value : str
        Text such as ``"sha1, xxhash"``.

    Returns
    -------
    tuple[str, ...]
        Validated names with surrounding whitespace removed.
    """
    return validate_hash_types(part.strip() for part in value.split(","))


def get_hash_function(name: str) -> HashFunction:
    """Return the digest function for ``name``.

    The returned function yields an empty string for empty input rather
    than a digest of zero bytes; callers decide how to report it.

    Parameters
    ----------
    name : str
        Supported algorithm name.

    Returns
    -------
    HashFunction
        Pure function mapping bytes to a lowercase hex digest.

    Raises
    ------
    UnsupportedHashError
        If ``name`` is not supported.
    """
    if not is_valid_hash_type(name):
        raise UnsupportedHashError(name, SUPPORTED_HASH_TYPES)

    digest = _HASH_FUNCTIONS[HashAlgorithm(name)]

    def hash_sequence(data: bytes) -> str:
        if not data:
            return ""
        return digest(data)

    hash_sequence.__name__ = f"hash_{name}"
    return hash_sequence
