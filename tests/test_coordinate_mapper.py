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

from scene_waypoints import CoordinateMapper, ImageReference, WorldPoint


def test_image_corners(reference):
    mapper = CoordinateMapper(reference)

    assert mapper.pixel_to_world(0, 0) == WorldPoint(-3.5, 18.5)
    top_right = mapper.pixel_to_world(700, 0)
    assert top_right.x == pytest.approx(66.5)
    assert top_right.y == pytest.approx(18.5)
    bottom_left = mapper.pixel_to_world(0, 450)
    assert bottom_left.x == pytest.approx(-3.5)
    assert bottom_left.y == pytest.approx(-26.5)


def test_y_axis_is_flipped(reference):
    mapper = CoordinateMapper(reference)
    upper = mapper.pixel_to_world(100, 10)
    lower = mapper.pixel_to_world(100, 400)
    assert upper.y > lower.y


@pytest.mark.parametrize("pixel", [(0, 0), (0.5, 0.5), (123.25, 77.5), (699, 449), (350, 225)])
def test_round_trip(reference, pixel):
    mapper = CoordinateMapper(reference)
    world = mapper.pixel_to_world(*pixel)
    assert mapper.world_to_pixel(world.x, world.y) == pytest.approx(pixel)


def test_round_trip_non_square_resolution():
    reference = ImageReference(pixel_width=64, pixel_height=300,
                               x_world_limits=(1000.0, 1001.0), y_world_limits=(-5.0, 95.0))
    mapper = CoordinateMapper(reference)
    for pixel in [(0, 0), (10.5, 299.0), (63.9, 150.1)]:
        world = mapper.pixel_to_world(*pixel)
        assert mapper.world_to_pixel(world.x, world.y) == pytest.approx(pixel)


def test_points_outside_image_are_mapped(reference):
    mapper = CoordinateMapper(reference)
    world = mapper.pixel_to_world(-100, 900)
    assert world.x < reference.x_min
    assert world.y < reference.y_min
    assert not mapper.contains(world)


def test_meters_per_pixel(reference):
    mapper = CoordinateMapper(reference)
    assert mapper.meters_per_pixel() == pytest.approx((0.1, 0.1))


def test_contains_and_clamp(reference):
    mapper = CoordinateMapper(reference)
    assert mapper.contains(WorldPoint(-3.5, 18.5))
    assert mapper.contains(WorldPoint(10.0, 0.0))
    assert not mapper.contains(WorldPoint(70.0, 0.0))
    assert mapper.clamp(WorldPoint(70.0, -40.0)) == WorldPoint(66.5, -26.5)
