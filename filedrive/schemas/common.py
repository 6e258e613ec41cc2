"""Small shared schemas and helpers."""

from typing import Optional

from pydantic import BaseModel


class OkResponse(BaseModel):
    ok: bool = True


def normalize_folder_ref(value: Optional[str]) -> Optional[str]:
    """Map the root spellings the browser sends ("", "null", missing) to None."""
    if value is None:
        return None
    value = value.strip()
    if value in ("", "null", "None"):
        return None
    return value
