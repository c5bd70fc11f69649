"""This module implements elliptic curve groups in Python.

An elliptic curve group is a set of points together with a binary
operation written additively. Curve types are created by the factory
EllipticCurve() from curve parameters, a coordinate system and an
arithmetic mixin (see ellcurves.py).
"""

import functools
import logging
from typing import NamedTuple

from ec_groups.exceptions import GeneratorNotOnCurve, PointNotOnCurve
from ec_groups.fields import bit_length, to_bits, to_field


logger_fg = logging.getLogger("EllipticCurves")
logger_fg.setLevel(logging.INFO)


class FiniteGroupElement:
    """Abstract base class for finite additive groups.

    Default: @, ~, ^
    Additive: +, -, *
    """

    order = None
    identity = None
    generator = None
    scalar_bits = None

    def __matmul__(self, other):  # overload @
        group = type(self)
        return group.operation(self, other)

    def __invert__(self):  # overload ~
        group = type(self)
        return group.inverse(self)

    def __xor__(self, other):  # overload ^
        group = type(self)
        return group.repeat(self, other)

    def __add__(self, other):
        group = type(self)
        return group.operation(self, other)

    def __neg__(self):
        group = type(self)
        return group.inverse(self)

    def __sub__(self, other):
        group = type(self)
        check_operands(self, other)
        return group.operation(self, group.inverse(other))

    def __mul__(self, other):
        group = type(self)
        return group.repeat(self, other)

    def __rmul__(self, other):
        group = type(self)
        return group.repeat(self, other)

    def operation(a, b):
        """Return a @ b."""
        raise NotImplementedError

    def operation2(a):
        """Return a @ a."""
        group = type(a)
        return group.operation(a, a)

    def double(a):
        group = type(a)
        return group.operation2(a)

    def inverse(a):
        """Return @-inverse of a (written ~a)."""
        raise NotImplementedError

    def equality(a, b):
        """Return a == b."""
        raise NotImplementedError

    def repeat(a, n):
        """Return nth @-power of a (written a^n), for any integer n.

        The scalar is decomposed into scalar_bits bits, see bit_repeat().
        Negative n repeats the inverse of a.
        """
        group = type(a)
        if isinstance(n, int) and n < 0:
            a = group.inverse(a)
            n = -n
        return group.bit_repeat(a, to_bits(n, group.scalar_bits))

    def bit_repeat(a, bits):
        """Return sum of bits[i] * 2^i * a for little-endian bits.

        Left-to-right double-and-add starting from the identity; each step
        adds either a or the identity.
        """
        group = type(a)
        check_on_curve(a)
        b = group.identity
        for bit in reversed(bits):
            b = group.operation2(b)
            b = group.operation(b, a if bit else group.identity)
        return b

    @classmethod
    def msm(group, scalars, points):
        """Return sum of scalars[i] * points[i], accumulated left to right."""
        if len(scalars) != len(points):
            raise ValueError("Number of scalars and points differ.")

        for pt in points:
            check_operands(group.identity, pt)
        b = group.identity
        for n, pt in zip(scalars, points):
            b = group.operation(b, group.repeat(pt, n))
        return b


class EllCoordSys(NamedTuple):
    """Define coordinate system by identity and inverse/negative.

    Affine Weierstrass and Montgomery points carry an infinity flag as
    third entry; their negative is None (flip y, keep flag).
    """

    identity: tuple
    negative: tuple
    name: str


WEI_AFF = EllCoordSys((0, 0, True), None, "Weierstrass Affine")
WEI_JAC = EllCoordSys((1, 1, 0), (1, -1, 1), "Weierstrass Jacobian")
MONT_AFF = EllCoordSys((0, 0, True), None, "Montgomery Affine")
MONT_PROJ = EllCoordSys((0, 1, 0), (1, -1, 1), "Montgomery Projective")
ED_AFF = EllCoordSys((0, 1), (-1, 1), "Edwards Affine")
ED_EXT_HOM_PROJ = EllCoordSys(
    (0, 1, 0, 1), (-1, 1, -1, 1), "Edwards Extended Homogeneous Projective"
)
AFFINE_COORDS = (WEI_AFF, MONT_AFF, ED_AFF)


def affine_tuple_to_coord(CurveElt_subtype, pt_tuple):
    """Convert tuple in affine notation to curve element.

    Invariant: pt_tuple should be defined as (x, y) tuple of field elements
    in affine notation, or None for the point at infinity.
    """
    if pt_tuple is None:
        return CurveElt_subtype.identity

    assert len(pt_tuple) == 2
    gf = CurveElt_subtype.field
    target_coord = CurveElt_subtype.coord
    x, y = (to_field(gf, c) for c in pt_tuple)

    if target_coord == WEI_AFF or target_coord == MONT_AFF:
        return CurveElt_subtype((x, y, False))

    if target_coord == ED_AFF:
        return CurveElt_subtype((x, y))

    if target_coord == WEI_JAC or target_coord == MONT_PROJ:
        return CurveElt_subtype((x, y, gf(1)))

    if target_coord == ED_EXT_HOM_PROJ:
        return CurveElt_subtype((x, y, x * y, gf(1)))

    raise NotImplementedError


def check_on_curve(*pts):
    for pt in pts:
        if not pt.on_curve():
            raise PointNotOnCurve(f"{pt} is not on {type(pt).__name__}.")


def check_operands(pt1, pt2):
    """Require pt2 to be a point of the same curve type as pt1, both on curve."""
    if type(pt2) is not type(pt1):
        raise TypeError(f"Cannot combine {type(pt1).__name__} and {type(pt2).__name__}.")

    check_on_curve(pt1, pt2)


class EllipticCurveElement(FiniteGroupElement):
    """Common base class for elliptic curve group elements.

    Note: Attribute access of x, y, z (and t) coordinates is defined in
    ellcurves.CurveArithmetic class.
    """

    def __init__(self, value):
        gf = self.field
        self.value = tuple(c if isinstance(c, bool) or not isinstance(c, int) else gf(c)
                           for c in value)

    def __eq__(self, other):
        if not isinstance(other, EllipticCurveElement):
            return NotImplemented

        group = type(self)
        if type(other) is not group:
            if other.family != group.family or other.curve != group.curve:
                return False

            return self.to_affine() == other.to_affine()

        return group.equality(self, other)

    __hash__ = None

    def __repr__(self):
        return f"{self.value}"


@functools.lru_cache(maxsize=None)
def EllipticCurve(params, coord, arithm):
    """Create elliptic curve type for given curve parameters.

    Raises:
        GeneratorNotOnCurve: if base point of params is not on the curve in
            the given coordinate system.
    """
    assert params.family == arithm.family, "Curve parameters do not match arithmetic."
    assert coord in arithm.coords, "Coordinate system does not match arithmetic."

    name = f'Curve({params.name})_{arithm.__name__}'
    EC = type(name, (arithm, EllipticCurveElement), {})
    EC.curve = params
    EC.order = params.order
    EC.field = params.field
    EC.coord = coord
    EC.arithm = arithm
    EC.scalar_bits = bit_length(params.field)

    # Add identity and generator to class. Ensure rest of type gets defined above this line.
    EC.identity = EC(coord.identity)
    EC.base_pt = affine_tuple_to_coord(EC, params.base_pt_tuple)
    if not EC.on_curve(EC.base_pt):
        raise GeneratorNotOnCurve(f"Base point {EC.base_pt} not on {name}.")

    EC.generator = EC.base_pt  # alias
    logger_fg.debug(f"Created curve type {name} ({coord.name}).")
    return EC
