#!/usr/bin/env python3

# Copyright (C) The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Modular inverse and square root."

from ecsig.exceptions import ECSigValueError
from ecsig.utils import int_repr


def mod_inv(a: int, m: int) -> int:
    """Return the inverse of a modulo m.

    Extended Euclidean algorithm, keeping r = s*a (mod m) at each step.
    """
    r0, r1 = a % m, m
    s0, s1 = 1, 0
    while r1:
        quot = r0 // r1
        r0, r1 = r1, r0 - quot * r1
        s0, s1 = s1, s0 - quot * s1
    if r0 != 1:
        raise ECSigValueError(f"no inverse for {int_repr(a % m)} mod {int_repr(m)}")
    return s0 % m


def mod_sqrt(a: int, p: int) -> int:
    """Return a square root of a modulo the prime p = 3 (mod 4).

    The root is a^((p+1)/4) mod p; the other one is p minus it.
    """
    if p % 4 != 3:
        raise ECSigValueError(f"p is not 3 mod 4: {int_repr(p)}")
    a %= p
    root = pow(a, (p + 1) // 4, p)
    if root * root % p != a:
        raise ECSigValueError(f"no root for {int_repr(a)} mod {int_repr(p)}")
    return root
