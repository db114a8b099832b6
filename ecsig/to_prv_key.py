#!/usr/bin/env python3

# Copyright (C) The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Conversion of private key inputs to a verified-as-valid integer."

from typing import Union

from ecsig.ec.curve import Curve, secp256k1
from ecsig.exceptions import InputValidationError
from ecsig.utils import bytes_from_octets, int_repr

# private key inputs:
# integer as Union[int, Octets]
PrvKey = Union[int, bytes, str]


def int_from_prv_key(prv_key: PrvKey, ec: Curve = secp256k1) -> int:
    """Return a verified-as-valid private key integer.

    It supports:

    - integer (native int)
    - Octets (bytes or hex-string) of exactly ec.n_size bytes
    """

    if isinstance(prv_key, int):
        q = prv_key
    else:
        try:
            q = int.from_bytes(bytes_from_octets(prv_key, ec.n_size), "big")
        except InputValidationError as e:
            raise InputValidationError(f"not a private key: {prv_key!r}") from e

    if not 0 < q < ec.n:
        raise InputValidationError(f"private key not in 1..n-1: {int_repr(q)}")

    return q
