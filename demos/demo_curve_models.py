"""Demonstrate Baby Jubjub in its three curve models.

Computes the same scalar multiple in twisted Edwards, Montgomery and short
Weierstrass form, converts between the models, and hashes a few inputs to
the curve with Elligator2 and simplified SWU.
"""
import logging
import os
import sys

project_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from ec_groups.fingroups import EllipticCurve
from ec_groups.tools.hash_to_curve import elligator2_map, find_swu_z, swu_map
import ec_groups.fingroups as fg
import ec_groups.ellcurves as ell

logger_demo = logging.getLogger("DemoCurveModels")
logger_demo.setLevel(logging.INFO)


def main():
    ed_group = EllipticCurve(ell.BABYJUBJUB, fg.ED_EXT_HOM_PROJ, ell.Edwards_ExtProj_Arithm)
    mont_group = EllipticCurve(ell.BABYJUBJUB.to_montgomery(), fg.MONT_PROJ, ell.Montgomery_Proj_Arithm)
    wei_group = EllipticCurve(ell.BABYJUBJUB.to_weierstrass(), fg.WEI_JAC, ell.Weierstr_Jacobian_Arithm)
    verification = {}

    n = 3809836274351126414438016410872729431457283748709071912489406741072364988984
    ed_pt = n * ed_group.generator
    mont_pt = n * mont_group.generator
    wei_pt = n * wei_group.generator
    logger_demo.info(f"n * G in affine Edwards coordinates: {ed_pt.to_affine()}")
    verification["scalar_mul"] = (
        ed_pt.to_montgomery() == mont_pt and ed_pt.to_weierstrass() == wei_pt
    )

    base8 = fg.affine_tuple_to_coord(ed_group, ell.BABYJUBJUB_BASE8)
    verification["base8"] = 8 * ed_group.generator == base8
    verification["suborder"] = (ell.BABYJUBJUB_SUBORDER * base8).is_zero()

    pts = [ed_group.generator, base8, ed_pt]
    scalars = [5, 7, 11]
    verification["msm"] = ed_group.msm(scalars, pts) == 5 * pts[0] + 7 * pts[1] + 11 * pts[2]

    verification["round_trip"] = wei_pt.to_montgomery().to_edwards() == ed_pt

    z = find_swu_z(ed_group)
    h_ell = [elligator2_map(ed_group, u) for u in range(1, 4)]
    h_swu = [swu_map(ed_group, z, u) for u in range(1, 4)]
    for u, (p, q) in enumerate(zip(h_ell, h_swu), start=1):
        logger_demo.info(f"u={u}: Elligator2 {p.to_affine()}, SWU {q.to_affine()}")
    verification["hash_to_curve"] = all(p.on_curve() for p in h_ell + h_swu)

    return verification


if __name__ == "__main__":
    logging.basicConfig()
    results = main()
    for name, ok in results.items():
        print(f"{name}: {'ok' if ok else 'FAILED'}")
