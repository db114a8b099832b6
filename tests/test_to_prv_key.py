#!/usr/bin/env python3

# Copyright (C) The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"Tests for the `ecsig.to_prv_key` module."

import pytest

from ecsig.ec import secp256k1, secp256r1
from ecsig.exceptions import InputValidationError
from ecsig.to_prv_key import int_from_prv_key

q = 0xB3A7D4E1F3C96E6DBD42A0A3F6A3A4B3C7E9F0A1B2C3D4E5F60718293A4B5C6D


def test_int_from_prv_key() -> None:
    q_bytes = q.to_bytes(32, byteorder="big", signed=False)
    for prv_key in (q, q_bytes, q_bytes.hex(), " " + q_bytes.hex().upper() + " "):
        assert q == int_from_prv_key(prv_key)
        assert q == int_from_prv_key(prv_key, secp256r1)

    assert int_from_prv_key(1) == 1
    assert int_from_prv_key(secp256k1.n - 1) == secp256k1.n - 1
    assert int_from_prv_key(b"\x00" * 31 + b"\x01") == 1


def test_invalid_prv_keys() -> None:
    for ec in (secp256k1, secp256r1):
        for invalid_q in (0, -1, ec.n, ec.n + 1):
            err_msg = "private key not in 1..n-1: "
            with pytest.raises(InputValidationError, match=err_msg):
                int_from_prv_key(invalid_q, ec)

        n_bytes = ec.n.to_bytes(32, byteorder="big", signed=False)
        with pytest.raises(InputValidationError, match="private key not in 1..n-1: "):
            int_from_prv_key(n_bytes, ec)
        with pytest.raises(InputValidationError, match="private key not in 1..n-1: "):
            int_from_prv_key(b"\x00" * 32, ec)

    for not_a_prv_key in (b"\x01" * 31, b"\x01" * 33, "01" * 31, "not a key"):
        with pytest.raises(InputValidationError, match="not a private key: "):
            int_from_prv_key(not_a_prv_key)
