#!/usr/bin/env python3

# Copyright (C) The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Prime order subgroups of elliptic curves, and the shipped curves.

* SEC 2 v.2 curves
  http://www.secg.org/sec2-v2.pdf
"""

from math import sqrt
from typing import Dict

from ecsig.alias import Point
from ecsig.ec.curve_group import CurveGroup, _mult, jac_from_aff
from ecsig.exceptions import ECSigValueError, InvalidCurvePointError
from ecsig.utils import int_repr


class Curve(CurveGroup):
    """Subgroup of prime order n generated by G.

    The curve has cofactor*n points.
    """

    def __init__(
        self,
        p: int,
        a: int,
        b: int,
        G: Point,
        n: int,
        cofactor: int,
        weakness_check: bool = True,
    ) -> None:

        super().__init__(p, a, b)

        # SEC 1 v.2 section 3.1.1.2.1 steps 4 to 8
        if len(G) != 2 or G[1] == 0 or not self.is_on_curve(G):
            raise ECSigValueError(f"invalid generator: {G!r}")
        self.G = G[0], G[1]
        self.GJ = jac_from_aff(self.G)

        if n < 3 or pow(2, n - 1, n) != 1:
            raise ECSigValueError(f"n is not prime: {int_repr(n)}")
        # Hasse bound on the number of curve points
        delta = int(2 * sqrt(p))
        if not p + 1 - delta <= cofactor * n <= p + 1 + delta:
            err_msg = "cofactor*n not in p+1-delta..p+1+delta: "
            err_msg += f"{cofactor}*{int_repr(n)}"
            raise ECSigValueError(err_msg)
        if _mult(n, self.GJ, self)[2] != 0:
            raise ECSigValueError(f"n is not the order of G: {int_repr(n)}")
        if n == p:
            raise ECSigValueError("anomalous curve: n = p")
        # MOV: the embedding degree must not be small
        if weakness_check and any(pow(p, i, n) == 1 for i in range(1, 100)):
            raise ECSigValueError("weak curve")

        self.n = n
        self.nlen = n.bit_length()
        self.n_size = (self.nlen + 7) // 8
        self.cofactor = cofactor

    def __repr__(self) -> str:
        return (
            f"Curve(p={int_repr(self.p)}, n={int_repr(self.n)}, "
            f"cofactor={self.cofactor})"
        )

    @staticmethod
    def is_infinity(Q: Point) -> bool:
        return Q[1] == 0

    def point_from_x(self, x: int, odd1even0: int) -> Point:
        """Return the curve point with x-coordinate x and given y parity.

        SEC 1 v.2 section 2.3.4: an error is raised
        if x is not the x-coordinate of a curve point.
        """
        return x, self.y_odd(x, odd1even0)

    def validate(self, Q: Point) -> None:
        """Require Q to be a finite curve point of order n.

        SEC 1 v.2 section 3.2.2.1: coordinates in 0..p-1,
        on the curve, not INF, and n*Q = INF (implied when cofactor is 1).
        """
        if len(Q) != 2:
            raise InvalidCurvePointError(f"not a point: {Q!r}")
        if self.is_infinity(Q):
            raise InvalidCurvePointError("INF is not a valid public key")
        if not self.is_on_curve(Q):
            raise InvalidCurvePointError(f"point not on curve: {Q!r}")
        if self.cofactor > 1 and _mult(self.n, jac_from_aff(Q), self)[2] != 0:
            raise InvalidCurvePointError("point has not order n")


# bitcoin curve
secp256k1 = Curve(
    2 ** 256 - 2 ** 32 - 977,
    0,
    7,
    (
        0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
        0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
    ),
    0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
    1,
)

# NIST P-256
secp256r1 = Curve(
    2 ** 256 - 2 ** 224 + 2 ** 192 + 2 ** 96 - 1,
    0xFFFFFFFF00000001000000000000000000000000FFFFFFFFFFFFFFFFFFFFFFFC,
    0x5AC635D8AA3A93E7B3EBBD55769886BC651D06B0CC53B0F63BCE3C3E27D2604B,
    (
        0x6B17D1F2E12C4247F8BCE6E563A440F277037D812DEB33A0F4A13945D898C296,
        0x4FE342E2FE1A7F9B8EE7EB4A7C0F9E162BCE33576B315ECECBB6406837BF51F5,
    ),
    0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551,
    1,
)

CURVES: Dict[str, Curve] = {
    "secp256k1": secp256k1,
    "secp256r1": secp256r1,
}
