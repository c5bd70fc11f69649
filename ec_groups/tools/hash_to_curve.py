"""Deterministic maps from field elements to curve points.

Elligator2 is defined on Montgomery curves, simplified SWU on short
Weierstrass curves. Both maps accept a curve type of any model and
coordinate system: the map runs on the equivalent curve of the model it
is defined on and the result is converted back into the given type.

Links:
    Elligator2: https://www.rfc-editor.org/rfc/rfc9380#name-elligator-2-method
    Simplified SWU: https://www.rfc-editor.org/rfc/rfc9380#name-simplified-shallue-van-de-w
"""

import logging

from ec_groups.exceptions import CurveError, InadmissibleCurveForHashing
from ec_groups.fields import is_square, non_square, safe_inverse, sgn0, sqrt, to_field
from ec_groups.fingroups import AFFINE_COORDS, EllipticCurve, MONT_AFF, WEI_AFF
import ec_groups.ellcurves as ell


logger_h2c = logging.getLogger("HashToCurve")
logger_h2c.setLevel(logging.INFO)


def _montgomery_group(group):
    try:
        mont = group.curve if group.family == ell.MONTGOMERY else group.curve.to_montgomery()
    except CurveError as e:
        raise InadmissibleCurveForHashing(f"Elligator2 requires a Montgomery model: {e}") from e

    return EllipticCurve(mont, MONT_AFF, ell.Montgomery_Affine_Arithm)


def _weierstrass_group(group):
    wei = group.curve if group.family == ell.WEIERSTRASS else group.curve.to_weierstrass()
    return EllipticCurve(wei, WEI_AFF, ell.Weierstr_Affine_Arithm)


def _into(group, pt):
    """Convert affine point pt into the model and coordinates of group."""
    if group.family == ell.EDWARDS and pt.family != ell.EDWARDS:
        pt = pt.to_edwards()
    elif group.family == ell.MONTGOMERY and pt.family != ell.MONTGOMERY:
        pt = pt.to_montgomery()
    elif group.family == ell.WEIERSTRASS and pt.family != ell.WEIERSTRASS:
        pt = pt.to_weierstrass()
    if group.coord not in AFFINE_COORDS:
        pt = pt.to_group()
    assert type(pt) is group
    return pt


def elligator2_map(group, u, z=None):
    """Map field element u to a point of group using Elligator2.

    Args:
        group: Curve type of any model with a Montgomery equivalent.
        u (int or field element): Input of the map.
        z (int or field element): Non-square constant, defaults to the
            smallest non-square of the field.

    Returns:
        group: Point on the curve.

    Raises:
        InadmissibleCurveForHashing: if j == 0 or (j^2 - 4)/k^2 is a square.
    """
    mont_group = _montgomery_group(group)
    gf = mont_group.field
    j, k = mont_group.curve.j, mont_group.curve.k
    if j == 0:
        raise InadmissibleCurveForHashing("Elligator2 requires j != 0.")

    if is_square((j ** 2 - 4) / k ** 2):
        raise InadmissibleCurveForHashing("Elligator2 requires (j^2 - 4)/k^2 to be a non-square.")

    u = to_field(gf, u)
    z = non_square(gf) if z is None else to_field(gf, z)
    if is_square(z):
        raise InadmissibleCurveForHashing("Elligator2 requires z to be a non-square.")

    # Curve scaled to y^2 = x^3 + (j/k) x^2 + x/k^2, point scaled back by k.
    jk = j / k
    k2_inv = 1 / k ** 2
    x1 = -jk * safe_inverse(1 + z * u ** 2)
    gx1 = x1 ** 3 + jk * x1 ** 2 + x1 * k2_inv
    x2 = -x1 - jk
    gx2 = x2 ** 3 + jk * x2 ** 2 + x2 * k2_inv

    if is_square(gx1):
        logger_h2c.debug(f"Elligator2: u={u} maps to x1.")
        x = x1
        y = sqrt(gx1)
        if sgn0(y) != 1:
            y = -y
    else:
        logger_h2c.debug(f"Elligator2: u={u} maps to x2.")
        x = x2
        y = sqrt(gx2)
        if sgn0(y) != 0:
            y = -y

    pt = mont_group((x * k, y * k, False))
    assert pt.on_curve(), "Elligator2 output not on curve."
    return _into(group, pt)


def _swu_exceptional_ok(a, b, z):
    # x1 = b/(z*a) is used when z^2 u^4 + z u^2 == 0, e.g. u == 0
    x = b / (z * a)
    return is_square(x ** 3 + a * x + b)


def find_swu_z(group):
    """Return a simplified SWU constant z for group.

    Candidates 1, -1, 2, -2, ... are tried in turn; z is accepted if it is a
    non-square, z != -1 and g(b/(z*a)) is a square.
    See: https://www.rfc-editor.org/rfc/rfc9380#name-finding-z-for-simplified-sw

    Raises:
        InadmissibleCurveForHashing: if a * b == 0.
    """
    wei_group = _weierstrass_group(group)
    gf = wei_group.field
    a, b = wei_group.curve.a, wei_group.curve.b
    if a * b == 0:
        raise InadmissibleCurveForHashing("Simplified SWU requires a * b != 0.")

    for c in range(1, gf.modulus):
        for z in (gf(c), gf(-c)):
            if is_square(z) or z == -1:
                continue

            if _swu_exceptional_ok(a, b, z):
                logger_h2c.debug(f"SWU constant for {wei_group.curve.name}: z={z}.")
                return z

    raise InadmissibleCurveForHashing("No simplified SWU constant found.")


def swu_map(group, z, u):
    """Map field element u to a point of group using simplified SWU.

    Args:
        group: Curve type of any model with a short Weierstrass equivalent.
        z (int or field element): Non-square parameter of the map.
        u (int or field element): Input of the map.

    Returns:
        group: Point on the curve.

    Raises:
        InadmissibleCurveForHashing: if a * b == 0, z is a square, or
            g(b/(z*a)) is a non-square.
    """
    wei_group = _weierstrass_group(group)
    gf = wei_group.field
    a, b = wei_group.curve.a, wei_group.curve.b
    if a * b == 0:
        raise InadmissibleCurveForHashing("Simplified SWU requires a * b != 0.")

    z = to_field(gf, z)
    u = to_field(gf, u)
    if is_square(z):
        raise InadmissibleCurveForHashing("Simplified SWU requires z to be a non-square.")

    if not _swu_exceptional_ok(a, b, z):
        raise InadmissibleCurveForHashing("Simplified SWU requires g(b/(z*a)) to be a square.")

    tv1 = safe_inverse(z ** 2 * u ** 4 + z * u ** 2)
    if tv1 == 0:
        x1 = b / (z * a)
    else:
        x1 = (-b / a) * (1 + tv1)
    gx1 = x1 ** 3 + a * x1 + b
    x2 = z * u ** 2 * x1
    gx2 = x2 ** 3 + a * x2 + b

    if is_square(gx1):
        logger_h2c.debug(f"SWU: u={u} maps to x1.")
        x, y = x1, sqrt(gx1)
    else:
        logger_h2c.debug(f"SWU: u={u} maps to x2.")
        x, y = x2, sqrt(gx2)
    if sgn0(u) != sgn0(y):
        y = -y

    pt = wei_group((x, y, False))
    assert pt.on_curve(), "SWU output not on curve."
    return _into(group, pt)
