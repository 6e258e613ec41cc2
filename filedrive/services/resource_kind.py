"""Ordered fallback chain for resource-kind detection.

No store access here; the object store adapter supplies the probe. A probe
takes a candidate kind and returns the kind the store reports for the
locator, or None when the locator does not resolve under that kind.
"""

import logging
from typing import Callable, Iterable, Optional

from ..models.file_record import ResourceKind

logger = logging.getLogger(__name__)

# raw first: a miss is cheap and raw covers arbitrary content.
DEFAULT_PROBE_ORDER = (ResourceKind.RAW, ResourceKind.IMAGE, ResourceKind.VIDEO)

# Not a confident inference; images are the most common upload.
FALLBACK_KIND = ResourceKind.IMAGE

KIND_VALUES = frozenset(kind.value for kind in ResourceKind)

Probe = Callable[[str], Optional[str]]


def resolve_first_kind(
    probe: Probe,
    candidates: Iterable[ResourceKind] = DEFAULT_PROBE_ORDER,
    fallback: ResourceKind = FALLBACK_KIND,
) -> str:
    """Return the first kind for which *probe* succeeds, else *fallback*.

    Candidates are tried strictly in order and the chain stops at the first
    hit, so later candidates are never probed.
    """
    for candidate in candidates:
        kind = ResourceKind(candidate).value
        reported = probe(kind)
        if reported:
            return reported
    logger.warning("No probe matched, using fallback kind", extra={"resource_kind": ResourceKind(fallback).value})
    return ResourceKind(fallback).value


def is_known_kind(value: Optional[str]) -> bool:
    return value in KIND_VALUES
