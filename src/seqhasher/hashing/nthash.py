"""ntHash forward-strand hashing.

ntHash (Mohamadi et al., 2016) hashes a k-mer as the XOR of per-base seed
values, each rotated left by its distance from the k-mer end. Here the
whole sequence is treated as a single k-mer (k = len(sequence)), so only
the initial forward hash is ever needed.
"""

__all__ = ["SEED_TABLE", "nthash_forward"]

_MASK64 = 0xFFFFFFFFFFFFFFFF

_SEED_A = 0x3C8BFBB395C60474
_SEED_C = 0x3193C18562A02B4C
_SEED_G = 0x20323ED082572324
_SEED_T = 0x295549F54BE24456
_SEED_N = 0x0000000000000000


def _build_seed_table() -> tuple[int, ...]:
    table = [_SEED_N] * 256
    for letters, seed in (("Aa", _SEED_A), ("Cc", _SEED_C), ("Gg", _SEED_G), ("Tt", _SEED_T)):
        for letter in letters:
            table[ord(letter)] = seed
    return tuple(table)


SEED_TABLE: tuple[int, ...] = _build_seed_table()


def _rotl64(value: int, shift: int) -> int:
    shift %= 64
    if shift == 0:
        return value
    return ((value << shift) | (value >> (64 - shift))) & _MASK64


def nthash_forward(data: bytes) -> int:
    """Compute the non-canonical ntHash of ``data`` as one k-mer.

    Parameters
    ----------
    data : bytes
        Sequence bytes; anything other than A/C/G/T (either case)
        contributes a zero seed.

    Returns
    -------
    int
        Unsigned 64-bit forward-strand hash.
    """
    k = len(data)
    value = 0
    for i, base in enumerate(data):
        value ^= _rotl64(SEED_TABLE[base], k - 1 - i)
    return value
