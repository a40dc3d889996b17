# Copyright (C) 2025 Frederik Pasch
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
# http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing,
# software distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions
# and limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0


import math

import pytest

from scene_waypoints import (DegenerateSegment, InsufficientPoints, ScenePath, WorldPoint,
                             append_point, commit, to_poses)
from scene_waypoints.path_model import dedup, poses_to_array, segment_headings, to_array


def make_path(*coords):
    return ScenePath([WorldPoint(x, y) for x, y in coords])


def headings(path):
    return [pose.heading for pose in to_poses(path)]


def test_append_point():
    path = ScenePath()
    append_point(path, WorldPoint(1.0, 2.0))
    append_point(path, WorldPoint(3.0, 4.0))
    assert path.points == [WorldPoint(1.0, 2.0), WorldPoint(3.0, 4.0)]


@pytest.mark.parametrize("x, y", [(math.nan, 0.0), (0.0, math.inf), (-math.inf, 1.0)])
def test_append_point_rejects_non_finite(x, y):
    path = ScenePath()
    with pytest.raises(ValueError):
        append_point(path, WorldPoint(x, y))
    assert len(path) == 0


def test_commit_requires_two_points():
    with pytest.raises(InsufficientPoints):
        commit(make_path((1, 1)))
    with pytest.raises(InsufficientPoints):
        commit(ScenePath())


def test_commit_rejects_path_of_one_repeated_point():
    with pytest.raises(InsufficientPoints):
        commit(make_path((2, 2), (2, 2), (2, 2)))


def test_commit_removes_duplicates_keeping_first_occurrence():
    path = make_path((0, 0), (0, 0), (5, 0), (5, 5), (0, 0), (5, 5), (9, 9))
    committed = commit(path)
    assert committed.points == [WorldPoint(0, 0), WorldPoint(5, 0), WorldPoint(5, 5), WorldPoint(9, 9)]
    # the drawn path is left untouched
    assert len(path) == 7


def test_dedup_preserves_order():
    points = [WorldPoint(3, 3), WorldPoint(1, 1), WorldPoint(3, 3), WorldPoint(2, 2)]
    assert dedup(points) == [WorldPoint(3, 3), WorldPoint(1, 1), WorldPoint(2, 2)]


def test_dedup_example_poses():
    committed = commit(make_path((0, 0), (0, 0), (5, 0)))
    assert committed.points == [WorldPoint(0, 0), WorldPoint(5, 0)]

    poses = to_poses(committed)
    assert [(p.x, p.y) for p in poses] == [(0, 0), (5, 0)]
    assert headings(committed) == pytest.approx([0.0, 0.0])


def test_diagonal_heading():
    assert headings(make_path((0, 0), (1, 1))) == pytest.approx([45.0, 45.0])


def test_southward_heading_is_corrected():
    assert headings(make_path((0, 0), (0, -1))) == pytest.approx([270.0, 270.0])


@pytest.mark.parametrize("end, expected", [
    ((1, 0), 0.0),
    ((0, 1), 90.0),
    ((-1, 0), 180.0),
    ((-1, -1), 225.0),
    ((1, -1), 315.0),
    ((-1, 1), 135.0),
])
def test_segment_heading_quadrants(end, expected):
    assert segment_headings([WorldPoint(0, 0), WorldPoint(*end)])[0] == pytest.approx(expected)


def test_headings_stay_below_360():
    theta = segment_headings([WorldPoint(0, 0), WorldPoint(1e6, -1e-12)])
    assert 0.0 <= theta[0] < 360.0


def test_first_and_last_pose_heading_policy():
    # east, then north, then west
    path = make_path((0, 0), (1, 0), (1, 1), (0, 1))
    assert headings(path) == pytest.approx([0.0, 0.0, 90.0, 180.0])


def test_to_poses_rejects_coincident_neighbours():
    with pytest.raises(DegenerateSegment):
        to_poses(make_path((0, 0), (1, 1), (1, 1)))


def test_to_poses_requires_two_points():
    with pytest.raises(InsufficientPoints):
        to_poses(make_path((0, 0)))


def test_arrays():
    path = make_path((0, 0), (1, 1))
    assert to_array(path).shape == (2, 2)
    poses = poses_to_array(to_poses(path))
    assert poses.shape == (2, 3)
    assert poses[:, 2] == pytest.approx([45.0, 45.0])
    assert to_array(ScenePath()).shape == (0, 2)
