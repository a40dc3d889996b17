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


import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402
import pytest  # noqa: E402

from scene_waypoints import ImageReference, SceneDocument  # noqa: E402

# Extent of the vineyard scene in meters
VINEYARD_X_LIMITS = (-3.5, 66.5)
VINEYARD_Y_LIMITS = (-26.5, 18.5)


@pytest.fixture
def reference():
    return ImageReference(pixel_width=700, pixel_height=450,
                          x_world_limits=VINEYARD_X_LIMITS,
                          y_world_limits=VINEYARD_Y_LIMITS)


@pytest.fixture
def image():
    return np.zeros((450, 700, 3), dtype=np.uint8)


@pytest.fixture
def document(reference, image):
    return SceneDocument(reference, image=image, name="vineyard")


@pytest.fixture(autouse=True)
def close_figures():
    yield
    plt.close("all")
