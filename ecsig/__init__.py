#!/usr/bin/env python3

# Copyright (C) The ecsig developers
#
# This file is part of ecsig. It is subject to the license terms in the
# LICENSE file found in the top-level directory of this distribution.
#
# No part of ecsig including this file, may be copied, modified, propagated,
# or distributed except according to the terms contained in the LICENSE file.

"__init__ module for the ecsig package."

name = "ecsig"
__version__ = "2024.3.1"
__author__ = "The ecsig developers"
__author_email__ = "devs@ecsig.org"
__copyright__ = "Copyright (C) 2024 The ecsig developers"
__license__ = "MIT License"
