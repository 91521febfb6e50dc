import math
from types import SimpleNamespace

import bpy  # noqa: F401  (bpy registers mathutils)
import pytest
from mathutils import Matrix

from tests.fakes import make_camera


@pytest.fixture
def front_camera():
    """Camera at the world origin looking down +Z."""
    return make_camera(Matrix.Rotation(math.pi, 4, "Y"))


@pytest.fixture
def tilted_camera():
    """Perspective camera away from the origin with a compound rotation."""
    mw = (
        Matrix.Translation((1.0, -2.0, 0.5))
        @ Matrix.Rotation(math.radians(30), 4, "Z")
        @ Matrix.Rotation(math.radians(70), 4, "X")
    )
    return make_camera(mw, half_width=0.8, half_height=0.45, frame_z=-1.6)


@pytest.fixture
def ortho_camera():
    mw = Matrix.Translation((0.0, 0.0, 10.0)) @ Matrix.Rotation(math.radians(15), 4, "Z")
    return make_camera(mw, type="ORTHO", half_width=4.0, half_height=2.25, frame_z=-1.0)


@pytest.fixture
def scene():
    return SimpleNamespace(name="Scene", camera=None, objects=[])
