import unittest

import ec_groups.fingroups as fg
import ec_groups.ellcurves as ell
from ec_groups.exceptions import (
    CurveError,
    GeneratorNotOnCurve,
    InvalidCurveParameters,
    PointNotOnCurve,
)
from ec_groups.fields import PrimeField


class CurveParameters(unittest.TestCase):
    def test_singular_curves(self):
        gf = PrimeField(11)
        self.assertRaises(InvalidCurveParameters, ell.WeierstrassParams,
                          name="w", gf=gf, a=0, b=0, base_pt=(0, 0))
        self.assertRaises(InvalidCurveParameters, ell.MontgomeryParams,
                          name="m", gf=gf, j=2, k=1, base_pt=(0, 0))
        self.assertRaises(InvalidCurveParameters, ell.MontgomeryParams,
                          name="m", gf=gf, j=3, k=0, base_pt=(0, 0))
        self.assertRaises(InvalidCurveParameters, ell.TwistedEdwardsParams,
                          name="e", gf=gf, a=3, d=3, base_pt=(0, 1))
        self.assertRaises(InvalidCurveParameters, ell.TwistedEdwardsParams,
                          name="e", gf=gf, a=0, d=3, base_pt=(0, 1))

    def test_generator_not_on_curve(self):
        gf = PrimeField(11)
        self.assertRaises(GeneratorNotOnCurve, ell.WeierstrassParams,
                          name="w", gf=gf, a=1, b=6, base_pt=(5, 8))
        self.assertRaises(GeneratorNotOnCurve, ell.TwistedEdwardsParams,
                          name="e", gf=gf, a=1, d=3, base_pt=(1, 1))
        self.assertRaises(GeneratorNotOnCurve, ell.TwistedEdwardsParams,
                          name="bjj", gf=ell.BABYJUBJUB.field, a=168700, d=168696,
                          base_pt=(ell.BABYJUBJUB_BASE8[0], 1))

    def test_named_curves(self):
        for params, coords in (
            (ell.BABYJUBJUB, ((fg.ED_AFF, ell.Edwards_Affine_Arithm),
                              (fg.ED_EXT_HOM_PROJ, ell.Edwards_ExtProj_Arithm))),
            (ell.ED25519, ((fg.ED_AFF, ell.Edwards_Affine_Arithm),
                           (fg.ED_EXT_HOM_PROJ, ell.Edwards_ExtProj_Arithm))),
            (ell.ED448, ((fg.ED_AFF, ell.Edwards_Affine_Arithm),)),
            (ell.BN256, ((fg.WEI_JAC, ell.Weierstr_Jacobian_Arithm),)),
            (ell.P256, ((fg.WEI_AFF, ell.Weierstr_Affine_Arithm),
                        (fg.WEI_JAC, ell.Weierstr_Jacobian_Arithm))),
        ):
            for coord, arithm in coords:
                group = fg.EllipticCurve(params, coord, arithm)
                self.assertTrue(group.generator.on_curve())
                self.assertIs(group.curve, params)

    def test_equal_params_share_type(self):
        gf = PrimeField(11)
        mont = ell.MontgomeryParams(name="m11", gf=gf, j=3, k=2, base_pt=(3, 1))
        copy = ell.MontgomeryParams(name="copy", gf=gf, j=gf(3), k=gf(2),
                                    base_pt=mont.base_pt_tuple)
        self.assertEqual(copy, mont)
        self.assertEqual(hash(copy), hash(mont))
        self.assertIs(fg.EllipticCurve(copy, fg.MONT_AFF, ell.Montgomery_Affine_Arithm),
                      fg.EllipticCurve(mont, fg.MONT_AFF, ell.Montgomery_Affine_Arithm))
        other = ell.MontgomeryParams(name="m11", gf=gf, j=3, k=2, base_pt=(2, 0))
        self.assertNotEqual(other, mont)
        self.assertNotEqual(mont, ell.BABYJUBJUB.to_montgomery())

    def test_model_conversion(self):
        bjj = ell.BABYJUBJUB
        mont = bjj.to_montgomery()
        self.assertEqual(mont.j, 168698)
        self.assertEqual(mont.k, 1)
        self.assertIs(mont.to_edwards(), bjj)
        wei = bjj.to_weierstrass()
        self.assertIs(wei, mont.to_weierstrass())
        self.assertIs(wei.to_montgomery(), mont)
        self.assertIs(wei.to_edwards(), bjj)
        self.assertEqual(wei.a, (3 - mont.j ** 2) / 3)
        self.assertEqual(wei.order, bjj.order)
        self.assertRaises(CurveError, ell.P256.to_montgomery)

    def test_weierstrass_origin_kept_apart(self):
        derived = ell.BABYJUBJUB.to_weierstrass()
        direct = ell.WeierstrassParams(name="bjj_wei_direct", gf=derived.field, a=derived.a,
                                       b=derived.b, base_pt=derived.base_pt_tuple)
        self.assertNotEqual(direct, derived)
        direct_group = fg.EllipticCurve(direct, fg.WEI_AFF, ell.Weierstr_Affine_Arithm)
        derived_group = fg.EllipticCurve(derived, fg.WEI_AFF, ell.Weierstr_Affine_Arithm)
        self.assertIsNot(direct_group, derived_group)
        self.assertIs(direct_group.curve, direct)
        self.assertIs(derived_group.curve, derived)
        self.assertRaises(CurveError, direct_group.generator.to_montgomery)
        mont_gen = derived_group.generator.to_montgomery()
        self.assertIs(mont_gen.curve, ell.BABYJUBJUB.to_montgomery())

    def test_montgomery_first(self):
        gf = PrimeField(11)
        # 2 y^2 = x^3 + 3 x^2 + x through (3, 1): 2 = 27 + 27 + 3 mod 11
        mont = ell.MontgomeryParams(name="m11_first", gf=gf, j=3, k=2, base_pt=(3, 1))
        ed = mont.to_edwards()
        self.assertEqual(ed.a, gf(5) / 2)
        self.assertEqual(ed.d, gf(1) / 2)
        self.assertEqual(ed.base_pt_tuple, (gf(3), gf(1) / 2))
        self.assertIs(ed.to_montgomery(), mont)
        group = fg.EllipticCurve(mont, fg.MONT_AFF, ell.Montgomery_Affine_Arithm)
        gen = group.generator
        self.assertEqual(gen.to_edwards().value, (3, 6))
        self.assertEqual(gen.to_edwards().to_montgomery(), gen)


class Conversions(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.ed_aff = fg.EllipticCurve(ell.BABYJUBJUB, fg.ED_AFF, ell.Edwards_Affine_Arithm)
        cls.ed_ext = fg.EllipticCurve(ell.BABYJUBJUB, fg.ED_EXT_HOM_PROJ, ell.Edwards_ExtProj_Arithm)
        mont = ell.BABYJUBJUB.to_montgomery()
        cls.mont_aff = fg.EllipticCurve(mont, fg.MONT_AFF, ell.Montgomery_Affine_Arithm)
        cls.mont_proj = fg.EllipticCurve(mont, fg.MONT_PROJ, ell.Montgomery_Proj_Arithm)
        wei = ell.BABYJUBJUB.to_weierstrass()
        cls.wei_aff = fg.EllipticCurve(wei, fg.WEI_AFF, ell.Weierstr_Affine_Arithm)
        cls.wei_jac = fg.EllipticCurve(wei, fg.WEI_JAC, ell.Weierstr_Jacobian_Arithm)

    def points(self, group):
        gen = group.generator
        return [group.identity, gen, 5 * gen, -gen]

    def test_generators_correspond(self):
        gen = self.ed_aff.generator
        self.assertEqual(gen.to_montgomery(), self.mont_aff.generator)
        self.assertEqual(gen.to_weierstrass(), self.wei_aff.generator)
        self.assertEqual(self.ed_ext.generator.to_montgomery(), self.mont_proj.generator)
        self.assertEqual(self.ed_ext.generator.to_weierstrass(), self.wei_jac.generator)

    def test_edwards_round_trips(self):
        for pt in self.points(self.ed_aff):
            self.assertEqual(pt.to_montgomery().to_edwards(), pt)
            self.assertEqual(pt.to_weierstrass().to_edwards(), pt)
            self.assertEqual(pt.to_extended().to_affine().value, pt.value)
        for pt in self.points(self.ed_ext):
            self.assertIs(type(pt.to_montgomery()), self.mont_proj)
            self.assertEqual(pt.to_montgomery().to_edwards(), pt)
            self.assertEqual(pt.to_weierstrass().to_edwards(), pt)

    def test_montgomery_round_trips(self):
        for pt in self.points(self.mont_aff):
            self.assertEqual(pt.to_edwards().to_montgomery(), pt)
            self.assertEqual(pt.to_weierstrass().to_montgomery(), pt)
            self.assertEqual(pt.to_projective().to_affine(), pt)
        for pt in self.points(self.mont_proj):
            self.assertIs(type(pt.to_edwards()), self.ed_ext)
            self.assertEqual(pt.to_edwards().to_montgomery(), pt)
            self.assertEqual(pt.to_weierstrass().to_montgomery(), pt)

    def test_weierstrass_round_trips(self):
        for pt in self.points(self.wei_aff):
            self.assertEqual(pt.to_montgomery().to_weierstrass(), pt)
            self.assertEqual(pt.to_edwards().to_weierstrass(), pt)
            self.assertEqual(pt.to_jacobian().to_affine(), pt)
        for pt in self.points(self.wei_jac):
            self.assertIs(type(pt.to_montgomery()), self.mont_proj)
            self.assertEqual(pt.to_montgomery().to_weierstrass(), pt)
            self.assertEqual(pt.to_edwards().to_weierstrass(), pt)

    def test_identity_maps(self):
        self.assertTrue(self.ed_aff.identity.to_montgomery().infty)
        self.assertEqual(self.mont_aff.identity.to_edwards().value, (0, 1))
        self.assertTrue(self.mont_aff.identity.to_weierstrass().is_zero())
        self.assertTrue(self.wei_jac.identity.to_edwards().is_zero())

    def test_scalar_multiplication_across_models(self):
        ed_gen = self.ed_ext.generator
        wei_gen = self.wei_jac.generator
        for n in (0, 1, 2, 5, 123456789):
            ed_n = n * ed_gen
            self.assertEqual(ed_n.to_weierstrass(), n * wei_gen)
            self.assertEqual(ed_n.to_montgomery(), n * self.mont_proj.generator)
            self.assertEqual((n * wei_gen).to_edwards(), ed_n)
            self.assertEqual(n * self.ed_aff.generator, ed_n.to_affine())

    def test_addition_across_models(self):
        p = 3 * self.ed_ext.generator
        q = 7 * self.ed_ext.generator
        self.assertEqual((p + q).to_weierstrass(), p.to_weierstrass() + q.to_weierstrass())
        self.assertEqual((p + q).to_montgomery(), p.to_montgomery() + q.to_montgomery())
        self.assertEqual(p.double().to_weierstrass(), p.to_weierstrass().double())

    def test_conversion_rejects_off_curve(self):
        bad = self.ed_aff((1, 2))
        self.assertRaises(PointNotOnCurve, bad.to_montgomery)
        self.assertRaises(PointNotOnCurve, bad.to_extended)
        bad = self.wei_aff((1, 2, False))
        self.assertRaises(PointNotOnCurve, bad.to_montgomery)
        self.assertRaises(PointNotOnCurve, bad.to_jacobian)

    def test_weierstrass_without_montgomery_model(self):
        group = fg.EllipticCurve(ell.P256, fg.WEI_AFF, ell.Weierstr_Affine_Arithm)
        self.assertRaises(CurveError, group.generator.to_montgomery)
        self.assertRaises(CurveError, group.generator.to_edwards)


class KnownValues(unittest.TestCase):
    def test_p256_vectors(self):
        vectors = [
            (0xcc496a11d4cfc0958657918858041182ac6a9570df89fd21f486fda95fd0dc4d,
             0x2b953776b6c5bf472bc8dc016004aad9eb264b80b1e7b030ffd21df1632ab5ea,
             0xc9fd1ce99f3abee0cd212ffdd399a58bbc60466db2e8f4badfda8d53be4f8073),
            (0xf0bbbbf1048810db67440edbbb4040009bdc01e0cd00b10973f2387c17907cf5,
             0xa8cc7306c34dbfbc4164c1ec3a1734e3dbece5b611a09496196098746c3178f7,
             0xdb53860d50d88205f928b8450bc8ad2f3296690c9ed6f2025d6333f2fb302862),
            (0xa5b6109e1622bfaff803a3dd53397f61d64ba9fb6499d5b5aa38201f71a2244b,
             0x5392a2b409193094bb8ce8b6c53f10496b3a093f82728a93fd81f6231b70458a,
             0xc28201bd1d37458776b20807a5106f3432e7289b2294b04b22817284edfae7d3),
        ]
        group = fg.EllipticCurve(ell.P256, fg.WEI_JAC, ell.Weierstr_Jacobian_Arithm)
        affine = fg.EllipticCurve(ell.P256, fg.WEI_AFF, ell.Weierstr_Affine_Arithm)
        for k, x, y in vectors:
            expected = fg.affine_tuple_to_coord(affine, (x, y))
            self.assertEqual((k * group.generator).to_affine(), expected)
        k, x, y = vectors[0]
        self.assertEqual(k * affine.generator, fg.affine_tuple_to_coord(affine, (x, y)))

    def test_p256_order(self):
        group = fg.EllipticCurve(ell.P256, fg.WEI_JAC, ell.Weierstr_Jacobian_Arithm)
        self.assertTrue((group.order * group.generator).is_zero())
        self.assertEqual((group.order - 1) * group.generator, -group.generator)

    def test_babyjubjub_base8(self):
        group = fg.EllipticCurve(ell.BABYJUBJUB, fg.ED_EXT_HOM_PROJ, ell.Edwards_ExtProj_Arithm)
        base8 = fg.affine_tuple_to_coord(group, ell.BABYJUBJUB_BASE8)
        self.assertTrue(base8.on_curve())
        self.assertEqual(8 * group.generator, base8)
        self.assertTrue((ell.BABYJUBJUB_SUBORDER * base8).is_zero())
        self.assertFalse(((ell.BABYJUBJUB_SUBORDER - 1) * base8).is_zero())

    def test_double_equals_add(self):
        for params, coord, arithm in (
            (ell.BABYJUBJUB, fg.ED_AFF, ell.Edwards_Affine_Arithm),
            (ell.ED25519, fg.ED_EXT_HOM_PROJ, ell.Edwards_ExtProj_Arithm),
            (ell.P256, fg.WEI_JAC, ell.Weierstr_Jacobian_Arithm),
        ):
            group = fg.EllipticCurve(params, coord, arithm)
            gen = group.generator
            self.assertEqual(gen.double(), gen + gen)


if __name__ == "__main__":
    unittest.main()
