#!/usr/bin/env python3

# Copyright (C) The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"SHA256 and HMAC-SHA256 helpers."

import hashlib
import hmac

from ecsig.alias import Octets
from ecsig.utils import bytes_from_octets


def sha256(octets: Octets) -> bytes:
    return hashlib.sha256(bytes_from_octets(octets)).digest()


def hmac_sha256(key: bytes, data: bytes) -> bytes:
    "Return HMAC_K(data) as used by the RFC6979 HMAC_DRBG."
    return hmac.new(key, data, hashlib.sha256).digest()


def reduce_to_hlen(msg: Octets) -> bytes:
    """Return the 32 bytes message hash that is signed in place of msg.

    SEC 1 v.2 section 4.1.3 step 4, the hash function being SHA256.
    """
    return sha256(msg)
