import pytest

from invigilation_scheduler.clustering import (
    MAX_CLUSTER_SIZE,
    _close_cluster,
    build_clusters,
    validate_room_layouts,
)
from invigilation_scheduler.models import RoomCluster, RoomLayout

from conftest import two_floor_layout


def test_two_floors_give_two_clusters_of_five():
    clusters = build_clusters(two_floor_layout())

    assert len(clusters) == 2
    assert clusters[0].rooms == [1, 2, 3, 4, 5]
    assert clusters[1].rooms == [6, 7, 8, 9, 10]
    assert [c.room_count for c in clusters] == [5, 5]
    assert clusters[0].floor == 'Floor 1'
    assert clusters[1].building == 'Block A'


def test_rooms_are_sorted_before_grouping():
    layout = list(reversed(two_floor_layout()))

    clusters = build_clusters(layout)

    assert [c.rooms for c in clusters] == [[1, 2, 3, 4, 5], [6, 7, 8, 9, 10]]


def test_full_cluster_starts_a_new_one():
    layout = [RoomLayout(room, 'Floor 1') for room in range(1, 15)]

    clusters = build_clusters(layout)

    assert [c.room_count for c in clusters] == [7, 7]
    assert all(c.room_count <= MAX_CLUSTER_SIZE for c in clusters)


def test_small_trailing_cluster_kept_when_merge_would_overflow():
    layout = [RoomLayout(room, 'Floor 1') for room in range(1, 10)]

    clusters = build_clusters(layout)

    assert [c.rooms for c in clusters] == [[1, 2, 3, 4, 5, 6, 7], [8, 9]]
    assert sum(c.room_count for c in clusters) == 9


def test_small_cluster_not_merged_across_floors():
    layout = [RoomLayout(1, 'Floor 1'), RoomLayout(2, 'Floor 1')]
    layout += [RoomLayout(room, 'Floor 2') for room in range(3, 8)]

    clusters = build_clusters(layout)

    assert [c.rooms for c in clusters] == [[1, 2], [3, 4, 5, 6, 7]]


def test_building_is_part_of_the_cluster_key():
    layout = [RoomLayout(room, 'Floor 1', 'North') for room in range(1, 5)]
    layout += [RoomLayout(room, 'Floor 1', '') for room in range(5, 9)]

    clusters = build_clusters(layout)

    assert [(c.building, c.room_count) for c in clusters] == [('North', 4), ('', 4)]


def test_close_cluster_merges_small_cluster_into_matching_predecessor():
    clusters = [RoomCluster(1, 'Floor 1', '', [1, 2, 3, 4])]

    _close_cluster(clusters, RoomCluster(2, 'Floor 1', '', [5, 6]))

    assert len(clusters) == 1
    assert clusters[0].rooms == [1, 2, 3, 4, 5, 6]


def test_close_cluster_keeps_small_first_cluster():
    clusters = []

    _close_cluster(clusters, RoomCluster(1, 'Floor 1', '', [1]))

    assert [c.rooms for c in clusters] == [[1]]


def test_total_rooms_preserved():
    layout = [RoomLayout(room, f'Floor {room // 4}') for room in range(1, 31)]

    clusters = build_clusters(layout)

    rooms = [room for c in clusters for room in c.rooms]
    assert sorted(rooms) == list(range(1, 31))


def test_validate_room_layouts_accepts_valid_layout():
    validate_room_layouts(two_floor_layout(), 10)


def test_validate_room_layouts_rejects_count_mismatch():
    with pytest.raises(ValueError, match='expects 12'):
        validate_room_layouts(two_floor_layout(), 12)


def test_validate_room_layouts_rejects_duplicates():
    layout = two_floor_layout()
    layout[9] = RoomLayout(3, 'Floor 2', 'Block A')

    with pytest.raises(ValueError, match='Duplicate room numbers in layout: 3'):
        validate_room_layouts(layout, 10)


def test_validate_room_layouts_rejects_missing_floor():
    layout = two_floor_layout()
    layout[0] = RoomLayout(1, '', 'Block A')

    with pytest.raises(ValueError, match='without a floor'):
        validate_room_layouts(layout, 10)
