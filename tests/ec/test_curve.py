#!/usr/bin/env python3

# Copyright (C) The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `ecsig.ec.curve` module."

import secrets
from typing import Dict

import pytest

from ecsig.alias import INF, Point
from ecsig.ec import CURVES, Curve, secp256k1
from ecsig.ec.curve_group import _mult
from ecsig.exceptions import ECSigValueError, InvalidCurvePointError

# test curves: very low cardinality, all with p = 3 (mod 4)
low_card_curves: Dict[str, Curve] = {}
low_card_curves["ec11_7"] = Curve(11, 2, 7, (6, 9), 7, 1, False)
low_card_curves["ec19_13"] = Curve(19, 0, 2, (4, 16), 13, 1, False)
low_card_curves["ec19_23"] = Curve(19, 2, 9, (0, 16), 23, 1, False)
low_card_curves["ec23_19"] = Curve(23, 9, 7, (5, 4), 19, 1, False)
low_card_curves["ec23_31"] = Curve(23, 5, 1, (0, 1), 31, 1, False)
# 22 points: (1, 0) has order 2, (6, 5) has order 22
low_card_curves["ec23_11"] = Curve(23, 8, 14, (10, 17), 11, 2, False)

all_curves: Dict[str, Curve] = {}
all_curves.update(low_card_curves)
all_curves.update(CURVES)


def _mult_aff(m: int, Q: Point, ec: Curve) -> Point:
    return ec.aff_from_jac(_mult(m, (Q[0], Q[1], 1), ec))


def test_exceptions() -> None:

    # good curve
    Curve(23, 5, 1, (0, 1), 31, 1, False)

    with pytest.raises(ECSigValueError, match="p is not prime: "):
        Curve(27, 5, 1, (0, 1), 31, 1, False)

    with pytest.raises(ECSigValueError, match="zero discriminant"):
        Curve(11, 7, 7, (1, 9), 19, 1, False)

    with pytest.raises(ECSigValueError, match="invalid generator: "):
        Curve(23, 5, 1, (0, 1, 1), 31, 1, False)  # type: ignore
    with pytest.raises(ECSigValueError, match="invalid generator: "):
        Curve(23, 5, 1, INF, 31, 1, False)
    with pytest.raises(ECSigValueError, match="invalid generator: "):
        Curve(23, 5, 1, (0, 2), 31, 1, False)

    with pytest.raises(ECSigValueError, match="n is not prime: "):
        Curve(23, 5, 1, (0, 1), 30, 1, False)

    err_msg = "cofactor\\*n not in p\\+1-delta..p\\+1\\+delta: "
    with pytest.raises(ECSigValueError, match=err_msg):
        Curve(23, 5, 1, (0, 1), 37, 1, False)
    with pytest.raises(ECSigValueError, match=err_msg):
        Curve(23, 5, 1, (0, 1), 31, 2, False)
    # 2*11 points, not 11
    with pytest.raises(ECSigValueError, match=err_msg):
        Curve(23, 8, 14, (10, 17), 11, 1, False)

    with pytest.raises(ECSigValueError, match="n is not the order of G: "):
        Curve(23, 5, 1, (0, 1), 29, 1, False)

    # y^2 = x^3 + x + 5 has exactly 11 points over F11
    with pytest.raises(ECSigValueError, match="anomalous curve: n = p"):
        Curve(11, 1, 5, (0, 4), 11, 1, False)

    # 11^3 = 1 (mod 7): small embedding degree
    with pytest.raises(ECSigValueError, match="weak curve"):
        Curve(11, 2, 7, (6, 9), 7, 1, True)


def test_shipped_curves() -> None:
    assert set(CURVES) == {"secp256k1", "secp256r1"}
    for ec in CURVES.values():
        assert ec.p % 4 == 3
        assert ec.nlen == 256
        assert ec.n_size == 32
        assert ec.cofactor == 1
        assert ec.GJ == (ec.G[0], ec.G[1], 1)
        assert ec.is_on_curve(ec.G)

    assert CURVES["secp256k1"] is secp256k1


def test_repr() -> None:
    ec = low_card_curves["ec23_11"]
    assert repr(ec) == "Curve(p=23, n=11, cofactor=2)"

    ec_repr = repr(secp256k1)
    assert ec_repr.startswith("Curve(p='FFFFFFFF FFFFFFFF ")
    assert ec_repr.endswith(", cofactor=1)")


def test_point_from_x() -> None:
    for ec in all_curves.values():
        Q = _mult_aff(1 + secrets.randbelow(ec.n - 1), ec.G, ec)
        assert ec.point_from_x(Q[0], Q[1] % 2) == Q
        assert ec.point_from_x(Q[0], 1 - Q[1] % 2) == (Q[0], ec.p - Q[1])

        err_msg = "x-coordinate not in 0..p-1: "
        with pytest.raises(InvalidCurvePointError, match=err_msg):
            ec.point_from_x(ec.p, 1)

    # 5 is not a valid x-coordinate in secp256k1
    with pytest.raises(InvalidCurvePointError, match="invalid x-coordinate: "):
        secp256k1.point_from_x(5, 0)
    # and neither is 5 + n
    with pytest.raises(InvalidCurvePointError, match="invalid x-coordinate: "):
        secp256k1.point_from_x(5 + secp256k1.n, 1)


def test_validate() -> None:
    for ec in all_curves.values():
        assert ec.is_infinity(INF)
        assert not ec.is_infinity(ec.G)

        ec.validate(ec.G)
        ec.validate(_mult_aff(1 + secrets.randbelow(ec.n - 1), ec.G, ec))

        with pytest.raises(InvalidCurvePointError, match="INF is not a valid"):
            ec.validate(INF)

        Q = ec.G[0], (ec.G[1] + 1) % ec.p
        with pytest.raises(InvalidCurvePointError, match="point not on curve"):
            ec.validate(Q)

        with pytest.raises(InvalidCurvePointError, match="not a point: "):
            ec.validate((ec.G[0], ec.G[1], 1))  # type: ignore

        # InvalidCurvePointError is a ValueError
        with pytest.raises(ValueError):
            ec.validate((ec.p, ec.G[1]))
        with pytest.raises(ValueError):
            ec.validate((ec.G[0], ec.G[1] + ec.p))

    # on the curve, but outside the subgroup of order n
    ec = low_card_curves["ec23_11"]
    for Q in ((6, 5), (20, 3), (15, 6)):
        assert ec.is_on_curve(Q)
        with pytest.raises(InvalidCurvePointError, match="point has not order n"):
            ec.validate(Q)
    for Q in ((10, 6), (5, 8), (14, 8), (17, 16), (4, 15)):
        ec.validate(Q)
