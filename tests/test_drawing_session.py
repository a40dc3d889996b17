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

from scene_waypoints import DrawingSession, DrawingState, WorldPoint


@pytest.fixture
def session(document):
    return DrawingSession(document)


def test_pointer_down_inside_starts_drawing(session, document):
    assert session.pointer_down(WorldPoint(1.0, 2.0), inside_image=True)
    assert session.state is DrawingState.DRAWING
    assert document.in_progress.points == [WorldPoint(1.0, 2.0)]


def test_pointer_down_outside_is_ignored(session, document):
    assert not session.pointer_down(WorldPoint(100.0, 2.0), inside_image=False)
    assert session.state is DrawingState.IDLE
    assert document.in_progress is None


def test_clicks_append_points(session):
    session.pointer_down(WorldPoint(0.0, 0.0), True)
    assert session.click(WorldPoint(1.0, 0.0))
    assert not session.click(WorldPoint(99.0, 0.0), inside_image=False)
    assert session.path.points == [WorldPoint(0.0, 0.0), WorldPoint(1.0, 0.0)]


def test_click_while_idle_is_ignored(session):
    assert not session.click(WorldPoint(1.0, 0.0))
    assert session.state is DrawingState.IDLE


def test_finish_commits_path(session, document):
    session.pointer_down(WorldPoint(0.0, 0.0), True)
    session.click(WorldPoint(1.0, 0.0))
    session.click(WorldPoint(1.0, 0.0))
    session.click(WorldPoint(2.0, 1.0))

    committed = session.finish()

    assert session.state is DrawingState.COMMITTED
    assert committed.points == [WorldPoint(0.0, 0.0), WorldPoint(1.0, 0.0), WorldPoint(2.0, 1.0)]
    assert document.paths == [committed]
    assert document.in_progress is None
    assert session.last_committed_index == 0


def test_single_click_is_discarded(session, document):
    session.pointer_down(WorldPoint(3.0, 3.0), True)
    assert session.finish() is None
    assert session.state is DrawingState.DISCARDED
    assert document.paths == []
    assert document.in_progress is None


def test_repeated_single_point_is_discarded(session, document):
    session.pointer_down(WorldPoint(3.0, 3.0), True)
    session.click(WorldPoint(3.0, 3.0))
    assert session.finish() is None
    assert session.state is DrawingState.DISCARDED
    assert document.paths == []


def test_new_path_only_from_idle(session, document):
    session.pointer_down(WorldPoint(0.0, 0.0), True)
    assert not session.pointer_down(WorldPoint(5.0, 5.0), True)
    assert document.in_progress.points == [WorldPoint(0.0, 0.0)]

    session.click(WorldPoint(1.0, 1.0))
    session.finish()
    assert not session.pointer_down(WorldPoint(5.0, 5.0), True)

    session.reset()
    assert session.pointer_down(WorldPoint(5.0, 5.0), True)


def test_reset_while_drawing_fails(session):
    session.pointer_down(WorldPoint(0.0, 0.0), True)
    with pytest.raises(RuntimeError):
        session.reset()


def test_cancel(session, document):
    session.pointer_down(WorldPoint(0.0, 0.0), True)
    session.click(WorldPoint(1.0, 1.0))
    session.cancel()
    assert session.state is DrawingState.DISCARDED
    assert document.in_progress is None
    assert document.paths == []


def test_undo_point_keeps_start_point(session):
    session.pointer_down(WorldPoint(0.0, 0.0), True)
    session.click(WorldPoint(1.0, 1.0))
    assert session.undo_point()
    assert not session.undo_point()
    assert session.path.points == [WorldPoint(0.0, 0.0)]
