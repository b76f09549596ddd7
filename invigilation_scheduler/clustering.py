"""
Grouping of exam rooms into supervision clusters.
"""

from typing import List, Optional, Sequence

from .models import RoomCluster, RoomLayout

MIN_CLUSTER_SIZE = 3
MAX_CLUSTER_SIZE = 7


def validate_room_layouts(room_layouts: Sequence[RoomLayout], num_rooms: int) -> None:
    """
    Check a room layout before clustering.

    Args:
        room_layouts: Layout records supplied by the caller
        num_rooms: Configured number of rooms

    Raises:
        ValueError: If the room count does not match the configuration,
            a room number repeats or a record has no floor
    """
    if len(room_layouts) != num_rooms:
        raise ValueError(
            f"Room layout lists {len(room_layouts)} rooms but the configuration "
            f"expects {num_rooms}"
        )

    numbers = [room.room_number for room in room_layouts]
    duplicates = sorted({n for n in numbers if numbers.count(n) > 1})
    if duplicates:
        raise ValueError(f"Duplicate room numbers in layout: {', '.join(map(str, duplicates))}")

    missing_floor = [room.room_number for room in room_layouts if not room.floor]
    if missing_floor:
        raise ValueError(f"Rooms without a floor: {', '.join(map(str, missing_floor))}")


def build_clusters(room_layouts: Sequence[RoomLayout]) -> List[RoomCluster]:
    """
    Group rooms into clusters of neighbouring rooms on the same floor and building.

    Rooms are walked in ascending number order. A new cluster starts when the
    (floor, building) key changes or the current cluster is full. A cluster
    closing with fewer than MIN_CLUSTER_SIZE rooms is merged into the previous
    cluster when both share a key and the result still fits, otherwise it is
    kept on its own.

    Args:
        room_layouts: Validated layout records

    Returns:
        Ordered list of clusters
    """
    clusters: List[RoomCluster] = []
    current: Optional[RoomCluster] = None
    next_id = 1

    for room in sorted(room_layouts, key=lambda r: r.room_number):
        if (current is None
                or current.key != (room.floor, room.building)
                or current.room_count >= MAX_CLUSTER_SIZE):
            if current is not None:
                _close_cluster(clusters, current)
            current = RoomCluster(next_id, room.floor, room.building, [room.room_number])
            next_id += 1
        else:
            current.rooms.append(room.room_number)

    if current is not None:
        _close_cluster(clusters, current)

    return clusters


def _close_cluster(clusters: List[RoomCluster], cluster: RoomCluster) -> None:
    """Append a finished cluster, merging it backwards when it is too small."""
    if cluster.room_count < MIN_CLUSTER_SIZE and clusters:
        previous = clusters[-1]
        if (previous.key == cluster.key
                and previous.room_count + cluster.room_count <= MAX_CLUSTER_SIZE):
            previous.rooms.extend(cluster.rooms)
            return
    clusters.append(cluster)
