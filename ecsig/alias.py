#!/usr/bin/env python3

# Copyright (C) The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Type aliases and the point at infinity."""

from typing import Tuple, Union

# bytes or hex-string, e.g. "a0dc65ff ca799873" (whitespace allowed)
Octets = Union[bytes, str]

# affine point (x, y)
Point = Tuple[int, int]

# y=0 marks INF: over odd order groups no finite point has it
INF = 5, 0

# Jacobian point (X, Y, Z), i.e. the affine point (X/Z^2, Y/Z^3)
JacPoint = Tuple[int, int, int]

# any point with Z=0 is INF
INFJ = 7, 0, 0
