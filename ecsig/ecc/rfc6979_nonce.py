#!/usr/bin/env python3

# Copyright (C) The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Deterministic generation of the ephemeral key following RFC6979.

https://tools.ietf.org/html/rfc6979

ECDSA needs to produce, for each signature generation,
a fresh random value (ephemeral key, hereafter designated as nonce).
For effective security, nonce must be chosen randomly and uniformly
from a set of modular integers, using a cryptographically secure
process. Even slight biases in that process may be turned into
attacks on the signature scheme.
Moreover, reusing the same ephemeral key for a different message
signed with the same private key reveals the private key!

RFC6979 turns ECDSA into a deterministic scheme by deriving the nonce
from the private key and the message hash with HMAC_DRBG.

This implementation is specialized for HMAC-SHA256 and 256-bit curve
orders (qlen = hlen = 256): the message hash is used unreduced,
and each HMAC output is a full candidate.

Callers may supply acceptance criteria for the candidates
(e.g. ECDSA rejecting r = 0 or s = 0) and an integer nonce that
selects an alternate, still deterministic, derivation.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple, TypeVar

from ecsig.alias import Octets
from ecsig.ec import Curve, secp256k1
from ecsig.exceptions import InputValidationError
from ecsig.hashes import hmac_sha256, sha256
from ecsig.to_prv_key import PrvKey, int_from_prv_key
from ecsig.utils import bytes_from_octets

logger = logging.getLogger(__name__)

HASH_SIZE = 32
QLEN = 8 * HASH_SIZE

_T = TypeVar("_T")

# check(k) returns the value derived from the candidate k,
# or None to have the candidate rejected
CheckF = Callable[[int], Optional[_T]]


def _rfc6979_msg_hash(msg_hash: Octets, nonce: int) -> bytes:
    msg_hash = bytes_from_octets(msg_hash, HASH_SIZE)
    if nonce < 0:
        raise InputValidationError(f"negative nonce: {nonce}")
    if nonce:
        # nonce is the size of the zero padding, not a value to be encoded
        msg_hash = sha256(msg_hash + b"\x00" * nonce)
    return msg_hash


def generate_nonce_(
    msg_hash: Octets,
    prv_key: PrvKey,
    check: CheckF[_T],
    nonce: int = 0,
    ec: Curve = secp256k1,
) -> Tuple[int, _T]:
    """Return the first acceptable RFC6979 nonce and its checked value.

    The candidates are the RFC6979 section 3.2 step h outputs
    in the [1, n-1] range; the first one for which check does not
    return None is returned together with check's result.
    """

    if ec.nlen != QLEN:
        err_msg = f"curve order is {ec.nlen} bits, not {QLEN}"
        raise InputValidationError(err_msg)

    msg_hash = _rfc6979_msg_hash(msg_hash, nonce)
    q = int_from_prv_key(prv_key, ec)
    q_bytes = q.to_bytes(HASH_SIZE, byteorder="big", signed=False)

    v = b"\x01" * HASH_SIZE  # 3.2.b
    k = b"\x00" * HASH_SIZE  # 3.2.c

    k = hmac_sha256(k, v + b"\x00" + q_bytes + msg_hash)  # 3.2.d
    v = hmac_sha256(k, v)  # 3.2.e
    k = hmac_sha256(k, v + b"\x01" + q_bytes + msg_hash)  # 3.2.f
    v = hmac_sha256(k, v)  # 3.2.g

    attempt = 0
    while True:  # 3.2.h
        # tlen == qlen: a single HMAC output is a whole candidate
        v = hmac_sha256(k, v)
        candidate = int.from_bytes(v, byteorder="big", signed=False)
        if 0 < candidate < ec.n:
            checked = check(candidate)
            if checked is not None:
                return candidate, checked
        attempt += 1
        logger.debug("nonce candidate #%d rejected", attempt)
        k = hmac_sha256(k, v + b"\x00")
        v = hmac_sha256(k, v)


def deterministic_generate_k(
    msg_hash: Octets,
    prv_key: PrvKey,
    accept: Callable[[int], bool] | None = None,
    nonce: int = 0,
    ec: Curve = secp256k1,
) -> int:
    """Return an RFC6979 deterministic ephemeral key (nonce).

    If provided, accept(k) must return True for k to be returned;
    otherwise the RFC6979 generation goes on with the next candidate.
    A nonzero nonce selects an alternate derivation:
    msg_hash is replaced by sha256(msg_hash + b"\\x00" * nonce).
    """

    def check(k: int) -> bool | None:
        return True if accept is None or accept(k) else None

    k, _ = generate_nonce_(msg_hash, prv_key, check, nonce, ec)
    return k


def rfc6979_nonce_(msg_hash: Octets, prv_key: PrvKey, ec: Curve = secp256k1) -> int:
    """Return the plain RFC6979 deterministic ephemeral key (nonce).

    see https://tools.ietf.org/html/rfc6979 section 3.2
    """
    return deterministic_generate_k(msg_hash, prv_key, ec=ec)
