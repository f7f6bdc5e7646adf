# =============================================================================
# File: membership/notifications/field_extractor.py
# Description: Flatten a notification payload into a string FieldMap
# =============================================================================

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from membership.notifications.message import FieldMap

log = logging.getLogger("membership.notifications.field_extractor")


def extract_fields(payload: Optional[Mapping[str, Any]]) -> FieldMap:
    """
    Convert each payload member to its string form.

    Members that are None, render as an empty string, or fail to render are
    left out. Never raises for a bad member.
    """
    fields: FieldMap = {}
    if not payload:
        return fields

    for name, value in payload.items():
        if value is None:
            continue
        try:
            text = str(value)
        except Exception as exc:
            log.debug(f"Skipping field '{name}': cannot render {type(value).__name__} ({exc})")
            continue
        if text:
            fields[name] = text

    return fields
