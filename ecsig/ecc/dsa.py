#!/usr/bin/env python3

# Copyright (C) The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Elliptic Curve Digital Signature Algorithm (ECDSA).

Implementation according to SEC 1 v.2:

http://www.secg.org/sec1-v2.pdf

with RFC6979 deterministic nonces,
specialized with bitcoin canonical 'lower-s' form
to avoid producing malleable signatures,
and with public key recovery (SEC 1 v.2 section 4.1.6).

Functions with a trailing underscore take the 32 bytes message hash,
the ones without take the message itself (hashed with SHA256),
the '_raw' ones take the message hash already converted to int.
"""

from __future__ import annotations

import contextlib
import logging
import secrets
from dataclasses import InitVar, dataclass

from ecsig.alias import Octets, Point
from ecsig.ec import Curve, secp256k1
from ecsig.ec.curve_group import _double_mult, _mult, jac_from_aff
from ecsig.ecc.rfc6979_nonce import HASH_SIZE, generate_nonce_
from ecsig.exceptions import (
    ECSigRuntimeError,
    ECSigValueError,
    InputValidationError,
    InvalidCurvePointError,
    RecoveryFailureError,
    RecoveryNotFoundError,
)
from ecsig.hashes import reduce_to_hlen
from ecsig.number_theory import mod_inv
from ecsig.to_prv_key import PrvKey, int_from_prv_key
from ecsig.utils import bytes_from_octets, int_repr

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Sig:
    """ECDSA signature.

    Both r and s are scalars in the [1, n-1] range,
    n being the order of the ec curve.

    Signatures produced by this module are in the canonical
    'lower-s' form (s <= n/2): for each (r, s) signature, (r, n - s)
    would be valid too and only one of the two is emitted.
    """

    # scalar, 0 < r < ec.n
    r: int
    # scalar, 0 < s < ec.n
    s: int
    ec: Curve = secp256k1
    check_validity: InitVar[bool] = True

    def __post_init__(self, check_validity: bool) -> None:
        if check_validity:
            self.assert_valid()

    def assert_valid(self) -> None:
        # r is a scalar, fail if r is not in [1, n-1]
        if not 0 < self.r < self.ec.n:
            raise InputValidationError(f"scalar r not in 1..n-1: {int_repr(self.r)}")

        # s is a scalar, fail if s is not in [1, n-1]
        if not 0 < self.s < self.ec.n:
            raise InputValidationError(f"scalar s not in 1..n-1: {int_repr(self.s)}")

    @property
    def is_lower_s(self) -> bool:
        return self.s <= self.ec.n >> 1


def gen_keys(prv_key: PrvKey | None = None, ec: Curve = secp256k1) -> tuple[int, Point]:
    """Return a private/public (int, Point) key-pair."""
    if prv_key is None:
        # q in the range [1, ec.n-1]
        q = 1 + secrets.randbelow(ec.n - 1)
    else:
        q = int_from_prv_key(prv_key, ec)

    QJ = _mult(q, ec.GJ, ec)
    Q = ec.aff_from_jac(QJ)
    return q, Q


def _sign_candidate_(e: int, q: int, k: int, ec: Curve) -> tuple[int, int] | None:
    # Return (r, s) for the nonce k, or None if k must be discarded.
    # Steps numbering follows SEC 1 v.2 section 4.1.3
    KJ = _mult(k, ec.GJ, ec)  # 1
    if KJ[2] == 0:
        return None

    # affine x_K-coordinate of K (field element)
    x_K = ec.x_aff_from_jac(KJ)
    # mod n makes it a scalar
    r = x_K % ec.n  # 2, 3
    if r == 0:  # r≠0 required as it multiplies the public key
        return None

    s = mod_inv(k, ec.n) * (e + r * q) % ec.n  # 6
    if s == 0:  # s≠0 required as verify will need the inverse of s
        return None

    return r, s


def _sign_(e: int, q: int, k: int, lower_s: bool, ec: Curve) -> Sig:
    # Private function for testing purposes: it allows to explore all
    # possible values of e and k (for low-cardinality curves).
    # It assumes that q and k are in [1, n-1]
    rs = _sign_candidate_(e, q, k, ec)
    if rs is None:
        raise ECSigRuntimeError("failed to sign: r = 0 or s = 0")
    r, s = rs
    if lower_s and s > ec.n >> 1:
        s = ec.n - s
    return Sig(r, s, ec)


def sign_(
    msg_hash: Octets,
    prv_key: PrvKey,
    nonce: int = 0,
    lower_s: bool = True,
    ec: Curve = secp256k1,
) -> Sig:
    """Sign a 32 bytes message hash according to ECDSA.

    The ephemeral key is the first RFC6979 deterministic candidate
    yielding r ≠ 0 and s ≠ 0.
    A nonzero nonce selects an alternate RFC6979 derivation
    (see ecsig.ecc.rfc6979_nonce.deterministic_generate_k).

    The resulting signature is in canonical 'lower-s' form,
    unless lower_s is False (useful only to reproduce
    third party test vectors).
    """

    # the message msg_hash: a 32 bytes array
    msg_hash = bytes_from_octets(msg_hash, HASH_SIZE)
    # the secret key q: an integer in the range 1..n-1.
    # SEC 1 v.2 section 3.2.1
    q = int_from_prv_key(prv_key, ec)
    e = int.from_bytes(msg_hash, byteorder="big", signed=False)  # 4, 5

    _, (r, s) = generate_nonce_(
        msg_hash, q, lambda k: _sign_candidate_(e, q, k, ec), nonce, ec
    )

    # bitcoin canonical 'low-s' encoding for ECDSA signatures
    # it removes signature malleability as cause of transaction malleability
    # see https://github.com/bitcoin/bitcoin/pull/6769
    if lower_s and s > ec.n >> 1:
        s = ec.n - s

    return Sig(r, s, ec)


def sign(
    msg: Octets,
    prv_key: PrvKey,
    nonce: int = 0,
    lower_s: bool = True,
    ec: Curve = secp256k1,
) -> Sig:
    """ECDSA signature of the SHA256 hash of msg.

    See sign_ for details.
    """
    msg_hash = reduce_to_hlen(msg)
    return sign_(msg_hash, prv_key, nonce, lower_s, ec)


def assert_as_valid_raw(e: int, key: Point, sig: Sig) -> None:
    """Raise an Error if sig is not a valid signature of e for key.

    Steps numbering follows SEC 1 v.2 section 4.1.4
    """
    ec = sig.ec
    sig.assert_valid()  # 1
    ec.validate(key)

    w = mod_inv(sig.s, ec.n)
    u = e * w % ec.n
    v = sig.r * w % ec.n  # 4
    # Let K = u*G + v*Q.
    KJ = _double_mult(u, ec.GJ, v, jac_from_aff(key), ec)  # 5

    # Fail if infinite(K).
    if KJ[2] == 0:  # 5
        raise ECSigRuntimeError("invalid (INF) key")

    # affine x_K-coordinate of K
    x_K = ec.x_aff_from_jac(KJ)
    # Fail if r ≠ x_K %n.
    if sig.r != x_K % ec.n:  # 6, 7, 8
        raise ECSigRuntimeError("signature verification failed")


def assert_as_valid_(msg_hash: Octets, key: Point, sig: Sig) -> None:
    msg_hash = bytes_from_octets(msg_hash, HASH_SIZE)
    e = int.from_bytes(msg_hash, byteorder="big", signed=False)  # 2, 3
    assert_as_valid_raw(e, key, sig)


def verify_raw(e: int, key: Point, sig: Sig) -> bool:
    """ECDSA signature verification (SEC 1 v.2 section 4.1.4).

    A malformed or mismatching signature is not an error:
    False is returned.
    """
    try:
        assert_as_valid_raw(e, key, sig)
    except (ECSigValueError, ECSigRuntimeError):
        return False

    return True


def verify_(msg_hash: Octets, key: Point, sig: Sig) -> bool:
    """ECDSA signature verification (SEC 1 v.2 section 4.1.4).

    The message hash must be 32 bytes long.
    """
    msg_hash = bytes_from_octets(msg_hash, HASH_SIZE)
    e = int.from_bytes(msg_hash, byteorder="big", signed=False)  # 2, 3
    return verify_raw(e, key, sig)


def verify(msg: Octets, key: Point, sig: Sig) -> bool:
    """ECDSA signature verification of the SHA256 hash of msg."""
    msg_hash = reduce_to_hlen(msg)
    return verify_(msg_hash, key, sig)


def recover_pub_key_raw(key_id: int, e: int, sig: Sig) -> Point:
    """ECDSA public key recovery (SEC 1 v.2 section 4.1.6).

    key_id is a 2-bit recovery id: the least significant bit
    is the parity of the ephemeral point y-coordinate,
    the other one selects x = r + n instead of x = r.

    See also:
    - https://crypto.stackexchange.com/questions/18105/how-does-recovering-the-public-key-from-an-ecdsa-signature-work/18106#18106
    """
    if not isinstance(key_id, int) or key_id & 0b11 != key_id:
        raise InputValidationError(f"invalid recovery id: {key_id!r}")
    sig.assert_valid()
    ec = sig.ec

    # r = K[0] % ec.n
    # if ec.n < K[0] < ec.p then x_K = r + ec.n
    x_K = sig.r + ec.n if key_id >> 1 else sig.r  # 1.1
    K = ec.point_from_x(x_K, key_id & 0b01)  # 1.2, 1.3
    KJ = jac_from_aff(K)

    # y=0 would be a point of order 2
    if K[1] == 0 or _mult(ec.n, KJ, ec)[2] != 0:  # 1.4
        raise RecoveryFailureError("n*K is not INF: K has not order n")

    # -e mod n, always in [0, n-1] as Python's % follows the divisor sign
    e_neg = -e % ec.n  # 1.5

    # Q = r^-1 (s*K - e*G)
    r_1 = mod_inv(sig.r, ec.n)
    QJ = _mult(r_1, _double_mult(sig.s, KJ, e_neg, ec.GJ, ec), ec)  # 1.6.1
    Q = ec.aff_from_jac(QJ)
    ec.validate(Q)
    return Q


def recover_pub_key_(key_id: int, msg_hash: Octets, sig: Sig) -> Point:
    msg_hash = bytes_from_octets(msg_hash, HASH_SIZE)
    e = int.from_bytes(msg_hash, byteorder="big", signed=False)
    return recover_pub_key_raw(key_id, e, sig)


def recover_pub_key(key_id: int, msg: Octets, sig: Sig) -> Point:
    msg_hash = reduce_to_hlen(msg)
    return recover_pub_key_(key_id, msg_hash, sig)


def recover_pub_keys_(msg_hash: Octets, sig: Sig) -> list[Point]:
    """Return all the public keys recoverable from the signature.

    Keys are listed in recovery id order.
    """
    msg_hash = bytes_from_octets(msg_hash, HASH_SIZE)
    e = int.from_bytes(msg_hash, byteorder="big", signed=False)
    keys: list[Point] = []
    for key_id in range(4):
        with contextlib.suppress(InvalidCurvePointError, RecoveryFailureError):
            keys.append(recover_pub_key_raw(key_id, e, sig))
    return keys


def calc_pub_key_recovery_param_raw(e: int, sig: Sig, key: Point) -> int:
    """Return the recovery id that allows to recover key from sig.

    All four cases are tried;
    candidates that cannot be reconstructed are skipped.
    """
    for key_id in range(4):
        try:
            Q = recover_pub_key_raw(key_id, e, sig)
        except (InvalidCurvePointError, RecoveryFailureError) as ex:
            logger.debug("recovery id %d skipped: %s", key_id, ex)
            continue
        if Q == tuple(key):  # 1.6.2
            return key_id

    raise RecoveryNotFoundError("unable to find a valid recovery id")


def calc_pub_key_recovery_param_(msg_hash: Octets, sig: Sig, key: Point) -> int:
    msg_hash = bytes_from_octets(msg_hash, HASH_SIZE)
    e = int.from_bytes(msg_hash, byteorder="big", signed=False)
    return calc_pub_key_recovery_param_raw(e, sig, key)
