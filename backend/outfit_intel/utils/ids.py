"""
Outfit Intelligence ID Utilities
"""
import uuid
from datetime import datetime, timezone
from typing import Optional


def generate_analysis_id(instant: Optional[datetime] = None) -> str:
    """
    Build an analysis ID of the form ``ana-<UTC yyyymmddHHMMSS>-<uuid8>``.

    Args:
        instant: Moment the analysis was made; naive values are taken as UTC.
            Defaults to now.
    """
    if instant is None:
        instant = datetime.now(timezone.utc)
    elif instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)
    stamp = instant.astimezone(timezone.utc).strftime("%Y%m%d%H%M%S")
    return f"ana-{stamp}-{uuid.uuid4().hex[:8]}"
