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


import pytest

from scene_waypoints import ScenePath, WorldPoint, export_paths
from scene_waypoints.export import log_export


def make_path(*coords):
    return ScenePath([WorldPoint(x, y) for x, y in coords])


def test_export_keeps_draw_order(document):
    document.add_path(make_path((0, 0), (1, 1)))
    document.add_path(make_path((5, 5), (5, 0), (10, 0)))

    result = export_paths(document)

    assert list(result.waypoints) == [0, 1]
    assert list(result.ref_poses) == [0, 1]
    assert result.waypoints[1] == [WorldPoint(5, 5), WorldPoint(5, 0), WorldPoint(10, 0)]
    for index, waypoints in result.waypoints.items():
        assert len(result.ref_poses[index]) == len(waypoints)
    assert [p.heading for p in result.ref_poses[1]] == pytest.approx([270.0, 270.0, 0.0])
    assert result.skipped == {}


def test_export_deduplicates_again(document):
    document.add_path(make_path((0, 0), (0, 0), (5, 0)))
    result = export_paths(document)
    assert result.waypoints[0] == [WorldPoint(0, 0), WorldPoint(5, 0)]
    assert [p.heading for p in result.ref_poses[0]] == pytest.approx([0.0, 0.0])


def test_unusable_path_is_skipped(document, caplog):
    document.add_path(make_path((0, 0), (1, 0)))
    document.add_path(make_path((2, 2), (2, 2)))
    document.add_path(make_path((3, 3), (4, 4)))

    with caplog.at_level("WARNING"):
        result = export_paths(document)

    assert list(result.waypoints) == [0, 2]
    assert list(result.ref_poses) == [0, 2]
    assert list(result.skipped) == [1]
    assert "Path 1 not exported" in caplog.text


def test_empty_document(document):
    result = export_paths(document)
    assert result.waypoints == {}
    assert result.ref_poses == {}


def test_as_arrays_and_dict(document):
    document.add_path(make_path((0, 0), (1, 1), (2, 1)))
    result = export_paths(document)

    arrays = result.as_arrays()
    assert arrays["waypoints"][0].shape == (3, 2)
    assert arrays["ref_poses"][0].shape == (3, 3)

    data = result.to_dict()
    assert data["waypoints"][0][2] == {"x": 2, "y": 1}
    assert data["ref_poses"][0][0]["heading"] == pytest.approx(45.0)


def test_log_export(document, caplog):
    document.add_path(make_path((0, 0), (1, 1)))
    with caplog.at_level("INFO"):
        log_export(export_paths(document))
    assert "Waypoints ([x y] only) has been exported" in caplog.text
    assert "Poses ([x y theta]) has been exported" in caplog.text
