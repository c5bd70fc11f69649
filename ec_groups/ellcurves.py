"""Elliptic curve parameters and arithmetic.

Three birationally equivalent curve models are supported, each in affine
and in group coordinates:

    short Weierstrass   y^2 = x^3 + a*x + b           affine, Jacobian
    Montgomery          k*y^2 = x^3 + j*x^2 + x       affine, projective
    twisted Edwards     a*x^2 + y^2 = 1 + d*x^2*y^2   affine, extended

Twisted Edwards and short Weierstrass curves have native formulas;
Montgomery arithmetic is computed on the equivalent twisted Edwards curve.
Curve types are created with fingroups.EllipticCurve(), e.g.:

    EllipticCurve(BABYJUBJUB, ED_EXT_HOM_PROJ, Edwards_ExtProj_Arithm)
"""

import logging
from typing import NamedTuple, Any

from ec_groups.exceptions import (
    CurveError,
    GeneratorNotOnCurve,
    InvalidCurveParameters,
)
from ec_groups.fields import PrimeField, safe_inverse, to_field
from ec_groups.fingroups import (
    EllipticCurve,
    affine_tuple_to_coord,
    check_on_curve,
    check_operands,
    WEI_AFF,
    WEI_JAC,
    MONT_AFF,
    MONT_PROJ,
    ED_AFF,
    ED_EXT_HOM_PROJ,
)


logger_ec = logging.getLogger("CurveModels")
logger_ec.setLevel(logging.INFO)

WEIERSTRASS = "Short Weierstrass"
MONTGOMERY = "Montgomery"
EDWARDS = "Twisted Edwards"


class CurveParams:
    """Contains curve parameters.

    Invariants:
        curve is non-singular
        self.equation assumes affine coordinates
        self.base_pt_tuple assumes affine coordinates (None for infinity)
        self.base_pt_tuple satisfies self.equation
    """

    family = None
    constants = ()

    def __init__(self, *, name, order, gf):
        self.name = name
        self.order = order
        self.field = gf
        self._models = {}

    def set_constants(self, **constants):
        for key, value in constants.items():
            if isinstance(value, int):
                value = self.field(value)
            setattr(self, key, value)
        if self.is_singular():
            raise InvalidCurveParameters(f"Singular {self.family} curve {self.name}.")

    def set_equation(self, eq):
        self.equation = eq

    def set_base_pt(self, value):
        if value is not None:
            assert len(value) == 2, "Base point should be (x, y) tuple, in affine notation."
            value = tuple(to_field(self.field, c) for c in value)
            if not self.equation(*value):
                raise GeneratorNotOnCurve(f"Base point {value} not on {self.name}.")

        self.base_pt_tuple = value

    def is_singular(self):
        raise NotImplementedError

    def _key(self):
        consts = tuple(getattr(self, c).value for c in self.constants)
        base = self.base_pt_tuple
        if base is not None:
            base = tuple(c.value for c in base)
        return (self.family, self.field.modulus, consts, base)

    def __eq__(self, other):
        if not isinstance(other, CurveParams):
            return NotImplemented

        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        consts = ", ".join(f"{c}={getattr(self, c)}" for c in self.constants)
        return f"{type(self).__name__}({self.name}: {consts})"


def set_edwards_eq(*, a=1, d=1):
    """Return equation that defines twisted Edwards curve.

    To check if point is on curve: a * x**2 + y**2 == 1 + d * x**2 * y**2
    """

    def edwards_eq(x, y):
        return a * x ** 2 + y ** 2 == 1 + d * x ** 2 * y ** 2

    return edwards_eq


def set_montgomery_eq(*, j=0, k=1):
    """Return equation that defines Montgomery curve: k * y**2 == x**3 + j * x**2 + x."""

    def mont_eq(x, y):
        return k * y ** 2 == x ** 3 + j * x ** 2 + x

    return mont_eq


def set_weierstrass_eq(*, a=1, b=1):
    """Return equation that defines Weierstrass curve. """

    def wei_eq(x, y):
        return y ** 2 == x ** 3 + a * x + b

    return wei_eq


class TwistedEdwardsParams(CurveParams):
    """Twisted Edwards curve a*x^2 + y^2 = 1 + d*x^2*y^2."""

    family = EDWARDS
    constants = ("a", "d")

    def __init__(self, *, name, gf, a, d, base_pt, order=None):
        super().__init__(name=name, order=order, gf=gf)
        self.set_constants(a=a, d=d)
        self.set_equation(set_edwards_eq(a=self.a, d=self.d))
        self.set_base_pt(base_pt)

    def is_singular(self):
        return self.a * self.d * (self.a - self.d) == 0

    def to_montgomery(self):
        """Return parameters of the equivalent Montgomery curve.

        j = 2(a + d)/(a - d), k = 4/(a - d).
        """
        if MONTGOMERY not in self._models:
            a, d = self.a, self.d
            mont = MontgomeryParams(
                name=f"{self.name}_mont",
                gf=self.field,
                order=self.order,
                j=2 * (a + d) / (a - d),
                k=4 / (a - d),
                base_pt=_ed_to_mont_xy(self.base_pt_tuple),
            )
            mont._models[EDWARDS] = self
            self._models[MONTGOMERY] = mont
            logger_ec.debug(f"Derived {mont} from {self}.")
        return self._models[MONTGOMERY]

    def to_weierstrass(self):
        return self.to_montgomery().to_weierstrass()


class MontgomeryParams(CurveParams):
    """Montgomery curve k*y^2 = x^3 + j*x^2 + x."""

    family = MONTGOMERY
    constants = ("j", "k")

    def __init__(self, *, name, gf, j, k, base_pt, order=None):
        super().__init__(name=name, order=order, gf=gf)
        self.set_constants(j=j, k=k)
        self.set_equation(set_montgomery_eq(j=self.j, k=self.k))
        self.set_base_pt(base_pt)

    def is_singular(self):
        return self.k == 0 or self.j ** 2 == 4

    def to_edwards(self):
        """Return parameters of the equivalent twisted Edwards curve.

        a = (j + 2)/k, d = (j - 2)/k.
        """
        if EDWARDS not in self._models:
            j, k = self.j, self.k
            ed = TwistedEdwardsParams(
                name=f"{self.name}_ed",
                gf=self.field,
                order=self.order,
                a=(j + 2) / k,
                d=(j - 2) / k,
                base_pt=_mont_to_ed_xy(self.field, self.base_pt_tuple),
            )
            ed._models[MONTGOMERY] = self
            self._models[EDWARDS] = ed
            logger_ec.debug(f"Derived {ed} from {self}.")
        return self._models[EDWARDS]

    def to_weierstrass(self):
        """Return parameters of the equivalent short Weierstrass curve.

        a = (3 - j^2)/(3k^2), b = (2j^3 - 9j)/(27k^3).
        """
        if WEIERSTRASS not in self._models:
            j, k = self.j, self.k
            wei = WeierstrassParams(
                name=f"{self.name}_wei",
                gf=self.field,
                order=self.order,
                a=(3 - j ** 2) / (3 * k ** 2),
                b=(2 * j ** 3 - 9 * j) / (27 * k ** 3),
                base_pt=_mont_to_wei_xy(j, k, self.base_pt_tuple),
            )
            wei._models[MONTGOMERY] = self
            self._models[WEIERSTRASS] = wei
            logger_ec.debug(f"Derived {wei} from {self}.")
        return self._models[WEIERSTRASS]


class WeierstrassParams(CurveParams):
    """Short Weierstrass curve y^2 = x^3 + a*x + b.

    Conversion to the other models requires a Weierstrass curve obtained
    from MontgomeryParams.to_weierstrass().
    """

    family = WEIERSTRASS
    constants = ("a", "b")

    def __init__(self, *, name, gf, a, b, base_pt, order=None):
        super().__init__(name=name, order=order, gf=gf)
        self.set_constants(a=a, b=b)
        self.set_equation(set_weierstrass_eq(a=self.a, b=self.b))
        self.set_base_pt(base_pt)

    def is_singular(self):
        return 4 * self.a ** 3 + 27 * self.b ** 2 == 0

    def _key(self):
        # Montgomery origin is part of the identity: it decides to_montgomery()
        mont = self._models.get(MONTGOMERY)
        return super()._key() + (None if mont is None else mont._key(),)

    def to_montgomery(self):
        if MONTGOMERY not in self._models:
            raise CurveError(f"No Montgomery model known for {self.name}.")

        return self._models[MONTGOMERY]

    def to_edwards(self):
        return self.to_montgomery().to_edwards()


def _babyjubjub():
    """Twisted Edwards curve Baby Jubjub over the BN254 scalar field.

    Link: https://eips.ethereum.org/EIPS/eip-2494
    """
    q = 21888242871839275222246405745257275088548364400416034343698204186575808495617
    gf = PrimeField(q)
    return TwistedEdwardsParams(
        name="BABYJUBJUB",
        gf=gf,
        order=8 * BABYJUBJUB_SUBORDER,
        a=168700,
        d=168696,
        base_pt=(
            995203441582195749578291179787384436505546430278305826713579947235728471134,
            5472060717959818805561601436314318772137091100104008585924551046643952123905,
        ),
    )


def _ed25519():
    """Edwards curve Ed25519.

    Link: https://en.wikipedia.org/wiki/EdDSA#Ed25519
    """
    q = 2 ** 255 - 19
    order = 2 ** 252 + 27742317777372353535851937790883648493
    gf = PrimeField(q)
    return TwistedEdwardsParams(
        name="ED25519",
        gf=gf,
        order=order,
        a=gf(-1),
        d=gf(-121665) / gf(121666),
        base_pt=(
            gf(
                15112221349535400772501151409588531511454012693041857206046113283949847762202
            ),
            gf(4) / gf(5),
        ),
    )


def _ed448():
    """Edwards curve Ed448 'Goldilocks'.

    Link: https://en.wikipedia.org/wiki/Curve448
    """
    q = 2 ** 448 - 2 ** 224 - 1
    order = 2 ** 446 - int(
        "0x8335dc163bb124b65129c96fde933d8d723a70aadc873d6d54a7bb0d", 16
    )  # from: https://eprint.iacr.org/2015/625.pdf
    gf = PrimeField(q)
    return TwistedEdwardsParams(
        name="ED448",
        gf=gf,
        order=order,
        a=1,
        d=-39081,
        base_pt=(
            117812161263436946737282484343310064665180535357016373416879082147939404277809514858788439644911793978499419995990477371552926308078495,
            19,
        ),
    )


def _bn256():
    """Define Barreto-Naehrig 256 curve.

    Curve equation: y^2 = x^3 + 3 over F_p
    """
    u = 1868033 ** 3
    p = (((u + 1) * 6 * u + 4) * u + 1) * 6 * u + 1
    order = p - 6 * u ** 2
    gf = PrimeField(p)
    return WeierstrassParams(name="BN256", gf=gf, order=order, a=0, b=3, base_pt=(1, -2))


def _p256():
    """NIST curve P-256 (secp256r1).

    Link: https://neuromancer.sk/std/nist/P-256
    """
    p = 0xffffffff00000001000000000000000000000000ffffffffffffffffffffffff
    order = 0xffffffff00000000ffffffffffffffffbce6faada7179e84f3b9cac2fc632551
    gf = PrimeField(p)
    return WeierstrassParams(
        name="P256",
        gf=gf,
        order=order,
        a=-3,
        b=0x5ac635d8aa3a93e7b3ebbd55769886bc651d06b0cc53b0f63bce3c3e27d2604b,
        base_pt=(
            0x6b17d1f2e12c4247f8bce6e563a440f277037d812deb33a0f4a13945d898c296,
            0x4fe342e2fe1a7f9b8ee7eb4a7c0f9e162bce33576b315ececbb6406837bf51f5,
        ),
    )


BABYJUBJUB_SUBORDER = 2736030358979909402780800718157159386076813972158567259200215660948447373041
BABYJUBJUB_BASE8 = (
    5299619240641551281634865583518297030282874472190772894086521144482721001553,
    16950150798460657717958625567821834550301663161624707787222815936182638968203,
)
BABYJUBJUB = _babyjubjub()
ED25519 = _ed25519()
ED448 = _ed448()
BN256 = _bn256()
P256 = _p256()


def negative(pt):
    check_on_curve(pt)
    if pt.coord.negative is None:
        x, y, infty = pt.value
        return type(pt)((x, -y, infty))

    neg = tuple([z1 * z2 for z1, z2 in zip(pt.coord.negative, pt.value)])
    return type(pt)(neg)


class _Point_xyz(NamedTuple):
    """Lightweight helper container to represent point.

    Note: This is not a curve element with all attributes.
    Attributes:
        x, y, z: Access coordinate of point (x, y, z)
    """

    x: Any
    y: Any
    z: Any


class _Point_xytz(NamedTuple):
    """Helper container for extended twisted Edwards coordinates (x, y, t, z)."""

    x: Any
    y: Any
    t: Any
    z: Any


def add_2008_hwcd(pt1, pt2):
    """Apply unified addition law "add-2008-hwcd".

    Requires twisted Edwards curve in extended coordinates, any a.
    Complete if a is a square and d is a non-square.
    See Hisil et al. (2008) [HWCD08], Section 3.1.
    Link: https://hyperelliptic.org/EFD/g1p/auto-twisted-extended.html#addition-add-2008-hwcd
    """
    x1, y1, t1, z1 = pt1.value
    x2, y2, t2, z2 = pt2.value

    a = pt1.curve.a
    d = pt1.curve.d

    A = x1 * x2
    B = y1 * y2
    C = d * t1 * t2
    D = z1 * z2
    E = (x1 + y1) * (x2 + y2) - A - B
    F = D - C
    G = D + C
    H = B - a * A

    x3 = E * F
    y3 = G * H
    t3 = E * H
    z3 = F * G
    return _Point_xytz(x3, y3, t3, z3)


def dbl_2008_hwcd(pt1):
    """Apply doubling law "dbl-2008-hwcd".

    Link: https://hyperelliptic.org/EFD/g1p/auto-twisted-extended.html#doubling-dbl-2008-hwcd
    """
    x1, y1, _, z1 = pt1.value

    a = pt1.curve.a

    A = x1 ** 2
    B = y1 ** 2
    C = 2 * z1 ** 2
    D = a * A
    E = (x1 + y1) ** 2 - A - B
    G = D + B
    F = G - C
    H = D - B

    x3 = E * F
    y3 = G * H
    t3 = E * H
    z3 = F * G
    return _Point_xytz(x3, y3, t3, z3)


def add_edwards_extended(pt1, pt2):
    """Add twisted Edwards points with extended coordinates."""
    check_operands(pt1, pt2)
    pt3 = add_2008_hwcd(pt1, pt2)
    return type(pt1)(pt3)


def double_edwards_extended(pt1):
    check_on_curve(pt1)
    pt3 = dbl_2008_hwcd(pt1)
    return type(pt1)(pt3)


def add_edwards_affine(pt1, pt2):
    """Add twisted Edwards points in extended coordinates, convert to affine."""
    check_operands(pt1, pt2)
    pt3 = pt1.to_extended() + pt2.to_extended()
    return pt3.to_affine()


def double_edwards_affine(pt1):
    return pt1.to_extended().operation2().to_affine()


def add_2007_bl(pt1, pt2):
    """Add points, formula add_2007_bl by Bernstein and Lange (2007).

    Link: http://hyperelliptic.org/EFD/g1p/auto-shortw-jacobian.html#addition-add-2007-bl
    """
    x1, y1, z1 = pt1.x, pt1.y, pt1.z
    x2, y2, z2 = pt2.x, pt2.y, pt2.z

    z1z1 = z1 ** 2
    z2z2 = z2 ** 2
    u1 = x1 * z2z2
    u2 = x2 * z1z1
    s1 = y1 * z2 * z2z2
    s2 = y2 * z1 * z1z1
    h = u2 - u1
    i = (2 * h) ** 2
    j = h * i
    r = 2 * (s2 - s1)
    v = u1 * i
    x3 = r ** 2 - j - 2 * v
    y3 = r * (v - x3) - 2 * s1 * j
    z3 = ((z1 + z2) ** 2 - z1z1 - z2z2) * h

    return _Point_xyz(x3, y3, z3)


def dbl_2007_bl(pt1):
    """Double point, formula dbl-2007-bl by Bernstein and Lange (2007), any a.

    Link: http://hyperelliptic.org/EFD/g1p/auto-shortw-jacobian.html#doubling-dbl-2007-bl
    """
    x1, y1, z1 = pt1.x, pt1.y, pt1.z

    a = pt1.curve.a

    xx = x1 ** 2
    yy = y1 ** 2
    yyyy = yy ** 2
    zz = z1 ** 2
    s = 2 * ((x1 + yy) ** 2 - xx - yyyy)
    m = 3 * xx + a * zz ** 2
    x3 = m ** 2 - 2 * s
    y3 = m * (s - x3) - 8 * yyyy
    z3 = (y1 + z1) ** 2 - yy - zz

    return _Point_xyz(x3, y3, z3)


def add_weierstrass_jacobian(pt1, pt2):
    """Add Weierstrass points with Jacobian coordinates.

    Requires short Weierstrass form and Jacobian coordinates.
    Does not assume z1 = 1 or z2 = 1.

    Args:
        pt1, pt2 (CurveElement): Points to apply group law to.

    Returns:
        type(pt1)
    """
    check_operands(pt1, pt2)
    group = type(pt1)

    if pt1.is_zero():
        return pt2
    elif pt2.is_zero():
        return pt1

    z1z1 = pt1.z ** 2
    z2z2 = pt2.z ** 2
    u1 = pt1.x * z2z2
    u2 = pt2.x * z1z1
    if u1 == u2:
        s1 = pt1.y * pt2.z * z2z2
        s2 = pt2.y * pt1.z * z1z1
        if s1 != s2:
            return group.identity

        return double_weierstrass_jacobian(pt1)

    pt3 = add_2007_bl(pt1, pt2)
    return group((pt3.x, pt3.y, pt3.z))


def double_weierstrass_jacobian(pt1):
    """Double Weierstrass point with Jacobian coordinates.

    Requires short Weierstrass form and Jacobian coordinates.
    Does not assume z1 = 1.

    Args:
        pt1 (CurveElement): Point to double.

    Returns:
        type(pt1)
    """
    check_on_curve(pt1)
    group = type(pt1)
    if pt1.is_zero() or pt1.y == 0:
        return group.identity

    pt3 = dbl_2007_bl(pt1)
    return group((pt3.x, pt3.y, pt3.z))


def add_weierstrass_affine(pt1, pt2):
    """Add Weierstrass points via Jacobian coordinates, convert to affine."""
    check_operands(pt1, pt2)
    pt3 = pt1.to_jacobian() + pt2.to_jacobian()
    return pt3.to_affine()


def double_weierstrass_affine(pt1):
    return pt1.to_jacobian().operation2().to_affine()


def add_montgomery(pt1, pt2):
    """Add Montgomery points on the equivalent twisted Edwards curve.

    Works for affine and projective coordinates alike: affine points map
    to affine Edwards points, projective points to extended ones.
    """
    check_operands(pt1, pt2)
    pt3 = pt1.to_edwards() + pt2.to_edwards()
    return pt3.to_montgomery()


def double_montgomery(pt1):
    return pt1.to_edwards().operation2().to_montgomery()


def bit_repeat_montgomery(pt, bits):
    check_on_curve(pt)
    return pt.to_edwards().bit_repeat(bits).to_montgomery()


def bit_repeat_via_group(pt, bits):
    """Repeat affine point in group coordinates, convert result to affine."""
    check_on_curve(pt)
    return pt.to_group().bit_repeat(bits).to_affine()


def ed_affine_to_extended(pt):
    """Map (x, y) to (x : y : x*y : 1)."""
    check_on_curve(pt)
    new_curve = EllipticCurve(pt.curve, ED_EXT_HOM_PROJ, Edwards_ExtProj_Arithm)
    return new_curve((pt.x, pt.y, pt.x * pt.y, new_curve.field(1)))


def extended_to_affine(pt):
    """Convert extended Edwards point to affine point."""
    check_on_curve(pt)
    x, y, t, z, = pt.x, pt.y, pt.t, pt.z
    z_inv = z.reciprocal()
    x = x * z_inv
    y = y * z_inv
    new_curve = EllipticCurve(pt.curve, ED_AFF, Edwards_Affine_Arithm)
    return new_curve((x, y))


def wei_jacobian_to_affine(pt):
    """Map (X:Y:Z) to (X/Z^2, Y/Z^3), assumes Jacobian coordinates."""
    check_on_curve(pt)
    new_curve = EllipticCurve(pt.curve, WEI_AFF, Weierstr_Affine_Arithm)
    if pt.is_zero():
        return new_curve.identity

    z_inv = pt.z.reciprocal()
    new_x = pt.x * (z_inv ** 2)
    new_y = pt.y * (z_inv ** 3)
    return new_curve((new_x, new_y, False))


def wei_affine_to_jacobian(pt):
    """Map (x, y) to (x : y : 1), infinity to (1 : 1 : 0)."""
    check_on_curve(pt)
    new_curve = EllipticCurve(pt.curve, WEI_JAC, Weierstr_Jacobian_Arithm)
    if pt.is_zero():
        return new_curve.identity

    return new_curve((pt.x, pt.y, new_curve.field(1)))


def mont_proj_to_affine(pt):
    """Map (X:Y:Z) to (X/Z, Y/Z), assumes projective coordinates."""
    check_on_curve(pt)
    new_curve = EllipticCurve(pt.curve, MONT_AFF, Montgomery_Affine_Arithm)
    if pt.is_zero():
        return new_curve.identity

    z_inv = pt.z.reciprocal()
    return new_curve((pt.x * z_inv, pt.y * z_inv, False))


def mont_affine_to_proj(pt):
    """Map (x, y) to (x : y : 1), infinity to (0 : 1 : 0)."""
    check_on_curve(pt)
    new_curve = EllipticCurve(pt.curve, MONT_PROJ, Montgomery_Proj_Arithm)
    if pt.is_zero():
        return new_curve.identity

    return new_curve((pt.x, pt.y, new_curve.field(1)))


def _ed_to_mont_xy(xy):
    """Map affine Edwards (x, y) to affine Montgomery (u, v), or None at infinity.

    u = (1 + y)/(1 - y), v = (1 + y)/(x(1 - y)); zero denominators give 0.
    """
    x, y = xy
    if x == 0 and y == 1:
        return None

    return ((1 + y) * safe_inverse(1 - y), (1 + y) * safe_inverse(x * (1 - y)))


def _mont_to_ed_xy(gf, xy):
    """Map affine Montgomery (x, y) or None to affine Edwards (x/y, (x - 1)/(x + 1))."""
    if xy is None:
        return (gf(0), gf(1))

    x, y = xy
    if y * (x + 1) == 0:
        return (gf(0), gf(1))

    return (x / y, (x - 1) / (x + 1))


def _mont_to_wei_xy(j, k, xy):
    if xy is None:
        return None

    x, y = xy
    return ((3 * x + j) / (3 * k), y / k)


def _wei_to_mont_xy(j, k, xy):
    if xy is None:
        return None

    x, y = xy
    return ((3 * k * x - j) / 3, y * k)


def _affine_xy(pt):
    if pt.is_zero():
        return None

    return (pt.x, pt.y)


def ed_affine_to_mont(pt):
    """Map twisted Edwards point to the equivalent Montgomery curve."""
    check_on_curve(pt)
    new_curve = EllipticCurve(pt.curve.to_montgomery(), MONT_AFF, Montgomery_Affine_Arithm)
    new_pt = affine_tuple_to_coord(new_curve, _ed_to_mont_xy(pt.value))
    assert new_curve.on_curve(new_pt), "Edwards to Montgomery map left the curve."
    return new_pt


def mont_affine_to_ed(pt):
    """Map Montgomery point to the equivalent twisted Edwards curve.

    Infinity and points with y(x + 1) = 0 map to the identity (0, 1).
    """
    check_on_curve(pt)
    new_curve = EllipticCurve(pt.curve.to_edwards(), ED_AFF, Edwards_Affine_Arithm)
    new_pt = affine_tuple_to_coord(new_curve, _mont_to_ed_xy(new_curve.field, _affine_xy(pt)))
    assert new_curve.on_curve(new_pt), "Montgomery to Edwards map left the curve."
    return new_pt


def mont_affine_to_wei(pt):
    """Map Montgomery point to the equivalent short Weierstrass curve."""
    check_on_curve(pt)
    mont = pt.curve
    new_curve = EllipticCurve(mont.to_weierstrass(), WEI_AFF, Weierstr_Affine_Arithm)
    new_pt = affine_tuple_to_coord(new_curve, _mont_to_wei_xy(mont.j, mont.k, _affine_xy(pt)))
    assert new_curve.on_curve(new_pt), "Montgomery to Weierstrass map left the curve."
    return new_pt


def wei_affine_to_mont(pt):
    """Map short Weierstrass point back to its Montgomery curve."""
    check_on_curve(pt)
    mont = pt.curve.to_montgomery()
    new_curve = EllipticCurve(mont, MONT_AFF, Montgomery_Affine_Arithm)
    new_pt = affine_tuple_to_coord(new_curve, _wei_to_mont_xy(mont.j, mont.k, _affine_xy(pt)))
    assert new_curve.on_curve(new_pt), "Weierstrass to Montgomery map left the curve."
    return new_pt


def ed_affine_to_wei(pt):
    return mont_affine_to_wei(ed_affine_to_mont(pt))


def wei_affine_to_ed(pt):
    return mont_affine_to_ed(wei_affine_to_mont(pt))


def via_affine(convert):
    """Lift affine conversion to group coordinates: project, convert, lift."""

    def convert_group(pt):
        return convert(pt.to_affine()).to_group()

    convert_group.__name__ = f"{convert.__name__}_group"
    return convert_group


def is_zero_flagged(pt):
    return pt.infty


def is_zero_edwards_affine(pt):
    return pt.x == 0 and pt.y == 1


def is_zero_edwards_extended(pt):
    return pt.x == 0 and pt.y == pt.z


def is_zero_z(pt):
    return pt.z == 0


def on_curve_affine(pt):
    return pt.curve.equation(pt.x, pt.y)


def on_curve_flagged_affine(pt):
    return pt.infty or pt.curve.equation(pt.x, pt.y)


def on_curve_weierstrass_jacobian(pt):
    """Check Y^2 = X^3 + a X Z^4 + b Z^6."""
    x, y, z = pt.value
    a, b = pt.curve.a, pt.curve.b
    z2 = z ** 2
    z4 = z2 ** 2
    return y ** 2 == x ** 3 + a * x * z4 + b * z4 * z2


def on_curve_montgomery_proj(pt):
    """Check k Y^2 Z = X^3 + j X^2 Z + X Z^2."""
    x, y, z = pt.value
    j, k = pt.curve.j, pt.curve.k
    return k * y ** 2 * z == x ** 3 + j * x ** 2 * z + x * z ** 2


def on_curve_edwards_extended(pt):
    """Check (a X^2 + Y^2) Z^2 = Z^4 + d X^2 Y^2 and Z T = X Y, Z != 0."""
    x, y, t, z = pt.value
    a, d = pt.curve.a, pt.curve.d
    x2 = x ** 2
    y2 = y ** 2
    z2 = z ** 2
    return (
        z != 0
        and z * t == x * y
        and (a * x2 + y2) * z2 == z2 ** 2 + d * x2 * y2
    )


def equal_affine(pt1, pt2):
    return pt1.value == pt2.value


def equal_flagged_affine(pt1, pt2):
    if pt1.infty or pt2.infty:
        return pt1.infty and pt2.infty

    return pt1.x == pt2.x and pt1.y == pt2.y


def equal_projective(pt1, pt2):
    """Compare (X1:Y1:Z1) and (X2:Y2:Z2) up to scaling of Z."""
    if pt1.is_zero() or pt2.is_zero():
        return pt1.is_zero() and pt2.is_zero()

    return pt1.x * pt2.z == pt2.x * pt1.z and pt1.y * pt2.z == pt2.y * pt1.z


def equal_jacobian(pt1, pt2):
    """Compare Jacobian points: X1 Z2^2 == X2 Z1^2 and Y1 Z2^3 == Y2 Z1^3."""
    if pt1.is_zero() or pt2.is_zero():
        return pt1.is_zero() and pt2.is_zero()

    z1z1 = pt1.z ** 2
    z2z2 = pt2.z ** 2
    return (
        pt1.x * z2z2 == pt2.x * z1z1
        and pt1.y * pt2.z * z2z2 == pt2.y * pt1.z * z1z1
    )


def same_point(pt):
    return pt


class CurveArithmetic:
    """Abstract base class for curve arithmetic.

    Defaults are defined via mixins. Subtype factory EllipticCurve()
    consumes mixin to add default operators to curve() instance.
    """

    __slots__ = ()

    family = None
    coords = ()

    @property
    def x(self):
        return self.value[0]

    @property
    def y(self):
        return self.value[1]

    @property
    def z(self):
        return self.value[2]

    def contains(self):
        return self.on_curve()

    inverse = negative
    negate = negative


class _FlaggedAffine:
    """Affine points (x, y, infty) with explicit point at infinity."""

    __slots__ = ()

    @property
    def infty(self):
        return self.value[2]

    on_curve = on_curve_flagged_affine
    is_zero = is_zero_flagged
    equality = equal_flagged_affine
    to_affine = same_point


class Edwards_Affine_Arithm(CurveArithmetic):
    """Implement twisted Edwards curve arithmetic for affine coordinates."""

    family = EDWARDS
    coords = (ED_AFF,)
    operation = add_edwards_affine
    operation2 = double_edwards_affine
    bit_repeat = bit_repeat_via_group
    on_curve = on_curve_affine
    is_zero = is_zero_edwards_affine
    equality = equal_affine
    to_affine = same_point
    to_extended = ed_affine_to_extended
    to_group = ed_affine_to_extended
    to_montgomery = ed_affine_to_mont
    to_weierstrass = ed_affine_to_wei


class Edwards_ExtProj_Arithm(CurveArithmetic):
    """Implement twisted Edwards curve arithmetic for extended coordinates."""

    family = EDWARDS
    coords = (ED_EXT_HOM_PROJ,)
    operation = add_edwards_extended
    operation2 = double_edwards_extended
    on_curve = on_curve_edwards_extended
    is_zero = is_zero_edwards_extended
    equality = equal_projective
    to_affine = extended_to_affine
    to_group = same_point
    to_montgomery = via_affine(ed_affine_to_mont)
    to_weierstrass = via_affine(ed_affine_to_wei)

    @property
    def t(self):
        return self.value[2]

    @property
    def z(self):
        return self.value[3]


class Montgomery_Affine_Arithm(_FlaggedAffine, CurveArithmetic):
    """Implement Montgomery curve arithmetic for affine coordinates."""

    family = MONTGOMERY
    coords = (MONT_AFF,)
    operation = add_montgomery
    operation2 = double_montgomery
    bit_repeat = bit_repeat_montgomery
    to_projective = mont_affine_to_proj
    to_group = mont_affine_to_proj
    to_edwards = mont_affine_to_ed
    to_weierstrass = mont_affine_to_wei


class Montgomery_Proj_Arithm(CurveArithmetic):
    """Implement Montgomery curve arithmetic for projective coordinates."""

    family = MONTGOMERY
    coords = (MONT_PROJ,)
    operation = add_montgomery
    operation2 = double_montgomery
    bit_repeat = bit_repeat_montgomery
    on_curve = on_curve_montgomery_proj
    is_zero = is_zero_z
    equality = equal_projective
    to_affine = mont_proj_to_affine
    to_group = same_point
    to_edwards = via_affine(mont_affine_to_ed)
    to_weierstrass = via_affine(mont_affine_to_wei)


class Weierstr_Affine_Arithm(_FlaggedAffine, CurveArithmetic):
    """Implement Weierstrass curve arithmetic for affine coordinates."""

    family = WEIERSTRASS
    coords = (WEI_AFF,)
    operation = add_weierstrass_affine
    operation2 = double_weierstrass_affine
    bit_repeat = bit_repeat_via_group
    to_jacobian = wei_affine_to_jacobian
    to_group = wei_affine_to_jacobian
    to_montgomery = wei_affine_to_mont
    to_edwards = wei_affine_to_ed


class Weierstr_Jacobian_Arithm(CurveArithmetic):
    """Implement Weierstrass curve arithmetic for Jacobian coordinates."""

    family = WEIERSTRASS
    coords = (WEI_JAC,)
    operation = add_weierstrass_jacobian
    operation2 = double_weierstrass_jacobian
    on_curve = on_curve_weierstrass_jacobian
    is_zero = is_zero_z
    equality = equal_jacobian
    to_affine = wei_jacobian_to_affine
    to_group = same_point
    to_montgomery = via_affine(wei_affine_to_mont)
    to_edwards = via_affine(wei_affine_to_ed)
