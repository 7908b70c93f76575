from __future__ import annotations

import uuid
from datetime import datetime, timezone


def new_run_id() -> str:
    """
    Time-sortable run id, e.g. `20261018T093000Z-1a2b3c4d`.
    """
    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    return f"{stamp}-{uuid.uuid4().hex[:8]}"
