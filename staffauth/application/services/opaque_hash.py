# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets


def generate_opaque_hash() -> str:
    """Return an unguessable 64-char hex value for activation and reset links."""
    seed = secrets.token_urlsafe(32)
    return hashlib.sha256(seed.encode("utf-8")).hexdigest()
