#!/usr/bin/env python3

# Copyright (C) The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"""Exception classes.

These are meant to discriminate between Exceptions being raised
by ecsig from those raised by other codebase.

Users are usually better off just dealing with the regular
ValueError and RuntimeError
from which the ecsig versions are derived.
"""


class ECSigValueError(ValueError):
    pass


class ECSigRuntimeError(RuntimeError):
    pass


class InputValidationError(ECSigValueError):
    """Malformed input: digest size, scalar range, recovery id."""


class InvalidCurvePointError(ECSigValueError):
    """No curve point for the given data, or not a valid group element."""


class RecoveryFailureError(ECSigRuntimeError):
    """The reconstructed ephemeral point has not the expected order."""


class RecoveryNotFoundError(ECSigRuntimeError):
    """No recovery id reproduces the given public key."""
