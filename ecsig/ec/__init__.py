#!/usr/bin/env python3

# Copyright (C) The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Module ecsig.ec."""

from ecsig.ec.curve import CURVES, Curve, secp256k1, secp256r1
from ecsig.ec.curve_group import CurveGroup, jac_from_aff

__all__ = [
    "CURVES",
    "Curve",
    "secp256k1",
    "secp256r1",
    "CurveGroup",
    "jac_from_aff",
]
