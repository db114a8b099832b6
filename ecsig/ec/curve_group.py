#!/usr/bin/env python3

# Copyright (C) The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic curve group y^2 = x^3 + a*x + b over Fp, in Jacobian coordinates.

Addition and doubling are the 'add-1998-cmo-2' and 'dbl-1998-cmo-2'
formulas of http://hyperelliptic.org/EFD/g1p/auto-shortw-jacobian.html

Only primes p = 3 (mod 4) are accepted,
so that a square root costs a single modular exponentiation.
No constant-time guarantee is given.
"""

from ecsig.alias import INF, INFJ, JacPoint, Point
from ecsig.exceptions import ECSigValueError, InvalidCurvePointError
from ecsig.number_theory import mod_inv, mod_sqrt
from ecsig.utils import int_repr


def jac_from_aff(Q: Point) -> JacPoint:
    # INF (y=0) becomes a Z=0 point
    return Q[0], Q[1], 1 if Q[1] else 0


class CurveGroup:
    "Points of y^2 = x^3 + a*x + b over Fp, plus INF."

    def __init__(self, p: int, a: int, b: int) -> None:
        # SEC 1 v.2 section 3.1.1.2.1 steps 1 to 3
        if p < 3 or pow(2, p - 1, p) != 1:
            raise ECSigValueError(f"p is not prime: {int_repr(p)}")
        if p % 4 != 3:
            raise ECSigValueError(f"p is not 3 mod 4: {int_repr(p)}")
        for name, coeff in (("a", a), ("b", b)):
            if not 0 <= coeff < p:
                raise ECSigValueError(f"{name} not in 0..p-1: {int_repr(coeff)}")
        if (4 * a * a * a + 27 * b * b) % p == 0:
            raise ECSigValueError("zero discriminant")

        self.p = p
        self._a = a
        self._b = b

    def aff_from_jac(self, QJ: JacPoint) -> Point:
        if QJ[2] == 0:
            return INF
        z_inv = mod_inv(QJ[2], self.p)
        z_inv2 = z_inv * z_inv
        return QJ[0] * z_inv2 % self.p, QJ[1] * z_inv2 * z_inv % self.p

    def x_aff_from_jac(self, QJ: JacPoint) -> int:
        "Return the affine x-coordinate, saving the y-coordinate inversion."
        if QJ[2] == 0:
            raise InvalidCurvePointError("INF has no x-coordinate")
        z_inv = mod_inv(QJ[2], self.p)
        return QJ[0] * z_inv * z_inv % self.p

    def double_jac(self, QJ: JacPoint) -> JacPoint:
        X, Y, Z = QJ
        # points of order 2 (Y=0) double to INF too
        if Y == 0 or Z == 0:
            return INFJ
        p = self.p
        YY = Y * Y % p
        S = 4 * X * YY % p
        ZZ = Z * Z % p
        M = (3 * X * X + self._a * ZZ * ZZ) % p
        X3 = (M * M - 2 * S) % p
        Y3 = (M * (S - X3) - 8 * YY * YY) % p
        return X3, Y3, 2 * Y * Z % p

    def add_jac(self, PJ: JacPoint, QJ: JacPoint) -> JacPoint:
        if PJ[2] == 0:
            return QJ
        if QJ[2] == 0:
            return PJ
        p = self.p
        PZ2 = PJ[2] * PJ[2] % p
        QZ2 = QJ[2] * QJ[2] % p
        U1 = PJ[0] * QZ2 % p
        U2 = QJ[0] * PZ2 % p
        S1 = PJ[1] * QZ2 * QJ[2] % p
        S2 = QJ[1] * PZ2 * PJ[2] % p
        H = (U2 - U1) % p
        R = (S2 - S1) % p
        if H == 0:
            # same affine x: either P = Q or P = -Q
            return self.double_jac(PJ) if R == 0 else INFJ
        HH = H * H % p
        HHH = H * HH % p
        V = U1 * HH % p
        X3 = (R * R - HHH - 2 * V) % p
        Y3 = (R * (V - X3) - S1 * HHH) % p
        return X3, Y3, H * PJ[2] * QJ[2] % p

    def _y2(self, x: int) -> int:
        return ((x * x + self._a) * x + self._b) % self.p

    def y(self, x: int) -> int:
        "Return one of the two y-coordinates of the curve points with abscissa x."
        if not 0 <= x < self.p:
            raise InvalidCurvePointError(f"x-coordinate not in 0..p-1: {int_repr(x)}")
        try:
            return mod_sqrt(self._y2(x), self.p)
        except ECSigValueError as e:
            err_msg = f"invalid x-coordinate: {int_repr(x)}"
            raise InvalidCurvePointError(err_msg) from e

    def y_odd(self, x: int, odd1even0: int = 1) -> int:
        "Return the y-coordinate for x having the requested parity."
        if odd1even0 not in (0, 1):
            raise ECSigValueError(f"parity must be 0 or 1: {odd1even0!r}")
        root = self.y(x)
        # for root == 0 there is no odd alternative
        return root if root % 2 == odd1even0 else (self.p - root) % self.p

    def is_on_curve(self, Q: Point) -> bool:
        "Return True if Q is INF or a point of the curve."
        x, y = Q
        if y == 0:
            return True
        if not (0 <= x < self.p and 0 < y < self.p):
            return False
        return self._y2(x) == y * y % self.p


def _mult(m: int, QJ: JacPoint, ec: CurveGroup) -> JacPoint:
    "Return m*Q, by left-to-right double and add over the bits of m."
    if m < 0:
        raise ECSigValueError(f"negative m: {int_repr(m)}")
    RJ = INFJ
    for bit in bin(m)[2:]:
        RJ = ec.double_jac(RJ)
        if bit == "1":
            RJ = ec.add_jac(RJ, QJ)
    return RJ


def _double_mult(
    u: int, HJ: JacPoint, v: int, QJ: JacPoint, ec: CurveGroup
) -> JacPoint:
    """Return u*H + v*Q with a single chain of doublings.

    Shamir's trick: at each bit the precomputed INF, H, Q or H+Q is added.
    """
    if u < 0 or v < 0:
        raise ECSigValueError(f"negative coefficient: {int_repr(min(u, v))}")
    table = (INFJ, HJ, QJ, ec.add_jac(HJ, QJ))
    RJ = INFJ
    for i in range(max(u.bit_length(), v.bit_length()) - 1, -1, -1):
        RJ = ec.double_jac(RJ)
        RJ = ec.add_jac(RJ, table[(u >> i & 1) | (v >> i & 1) << 1])
    return RJ
