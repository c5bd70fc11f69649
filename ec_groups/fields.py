"""Prime field helpers used by the curve arithmetic.

Field elements are mpyc prime field elements. Besides the native
arithmetic of mpyc, the curve code needs a division that tolerates zero,
quadratic residuosity, square roots, a sign bit and a fixed-width bit
decomposition of scalars. These are collected here.
"""

from mpyc import gmpy as gmpy2
from mpyc.finfields import GF


def PrimeField(modulus):
    """Return mpyc prime field GF(modulus) with unsigned integer view."""
    gf = GF(modulus)
    gf.is_signed = False
    return gf


def to_field(gf, value):
    """Return value as element of gf; field elements pass through."""
    if isinstance(value, int):
        return gf(value)

    return value


def safe_inverse(x):
    """Return 1/x, or 0 if x == 0."""
    if x == 0:
        return type(x)(0)

    return x.reciprocal()


def is_square(x):
    """Test quadratic residuosity (0 is also square)."""
    return x.is_sqr()


def sqrt(x):
    """Return a square root of quadratic residue x."""
    assert x.is_sqr(), "Square root of non-residue."
    return x.sqrt()


def sgn0(x):
    """Return sign of x: parity of its representative in [0, p)."""
    return x.value % 2


def bit_length(gf):
    return gf.modulus.bit_length()


def to_bits(n, width):
    """Return little-endian list of width bits of n.

    Args:
        n (int or field element): Scalar to decompose.
        width (int): Number of bits, typically bit length of the modulus.

    Raises:
        ValueError: if n is negative or does not fit in width bits.
    """
    if not isinstance(n, int):
        n = n.value
    if n < 0:
        raise ValueError("Scalar should be non-negative.")

    if n.bit_length() > width:
        raise ValueError(f"Scalar does not fit in {width} bits.")

    return [(n >> i) & 1 for i in range(width)]


def non_square(gf):
    """Return smallest integer z >= 2 that is a non-square in gf."""
    p = gf.modulus
    for z in range(2, p):
        if gmpy2.legendre(z, p) == -1:
            return gf(z)

    raise ValueError("Field has no non-squares.")
