"""Ordering of an already-filtered specialist collection."""
import logging
from typing import List, Optional, Sequence

import numpy as np

from healthvia.models import GeoCoordinate, Specialist

from .distance import calculate_distances

logger = logging.getLogger(__name__)


def rank_specialists(
    specialists: Sequence[Specialist], user_location: Optional[GeoCoordinate] = None
) -> List[Specialist]:
    """Order specialists for display.

    Without a user location the input order is kept as-is (the record store
    already serves rows sorted by name). With a location, each record is copied
    with its ``distance`` in km attached and the copies are stably sorted by
    ascending distance; equal distances keep their input order.

    Args:
        specialists: Filtered specialists, in store (name) order
        user_location: Optional coordinate of the user

    Returns:
        List[Specialist]: The same specialists, reordered
    """
    if user_location is None or not specialists:
        return list(specialists)

    distances = calculate_distances(user_location, specialists)
    # Records without coordinates sort last
    keys = np.array([np.inf if d is None else d for d in distances], dtype=float)
    order = np.argsort(keys, kind="stable")

    ranked = [specialists[i].with_distance(distances[i]) for i in order]
    logger.debug(f"Ranked {len(ranked)} specialists by distance from {user_location}")
    return ranked
