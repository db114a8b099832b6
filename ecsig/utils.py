#!/usr/bin/env python3

# Copyright (C) The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Octets input handling and integer formatting for error messages."""

from typing import Optional

from ecsig.alias import Octets
from ecsig.exceptions import ECSigValueError, InputValidationError

# integers above this are shown as hex-strings in error messages
HEX_THRESHOLD = 0xFFFFFFFF


def bytes_from_octets(octets: Octets, out_size: Optional[int] = None) -> bytes:
    """Return bytes from a bytes or hex-string input.

    If out_size is given, the result must be exactly out_size bytes long.
    """
    if isinstance(octets, str):
        try:
            octets = bytes.fromhex(octets)
        except ValueError as e:
            raise InputValidationError(f"not a hex-string: {octets!r}") from e

    if out_size is not None and len(octets) != out_size:
        err_msg = f"invalid size: {len(octets)} bytes instead of {out_size}"
        raise InputValidationError(err_msg)
    return octets


def hex_string(i: int) -> str:
    """Return the upper-case hex-string of a non-negative int.

    Digits are zero-padded to whole bytes and grouped
    by four bytes from the right, e.g. '01 DEADBEEF 00000000'.
    """
    if i < 0:
        raise ECSigValueError(f"negative integer: {i}")
    digits = f"{i:X}"
    if len(digits) % 2:
        digits = "0" + digits
    head = len(digits) % 8
    groups = [digits[:head]] if head else []
    groups += [digits[j : j + 8] for j in range(head, len(digits), 8)]
    return " ".join(groups)


def int_repr(i: int) -> str:
    "Return i as shown in error messages."
    return f"'{hex_string(i)}'" if i > HEX_THRESHOLD else f"{i}"
