from __future__ import annotations

import hashlib
from typing import Optional

from ..core.constants import DEFAULT_NAMESPACE, NAMESPACE_HEX_LENGTH


def resolve_namespace(account_id: Optional[str]) -> str:
    """Storage namespace for an account: first 12 hex chars of sha256(account_id), or "default"."""

    if not account_id:
        return DEFAULT_NAMESPACE
    digest = hashlib.sha256(account_id.encode("utf-8")).hexdigest()
    return digest[:NAMESPACE_HEX_LENGTH]
