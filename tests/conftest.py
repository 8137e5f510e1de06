"""Pytest configuration for normalcast tests.

This module provides shared fixtures for all test modules, including
Taichi initialization which must happen once per session.
"""

import pytest
import taichi as ti


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Using session scope prevents multiple ti.init() calls, which would
    discard every field allocated by modules imported earlier.
    """
    ti.init(arch=ti.cpu, random_seed=42)
    yield


@pytest.fixture(autouse=True)
def clear_all_scene_data():
    """Clear the scene and render target before and after each test.

    This ensures tests are isolated from each other.
    """
    # Import here so the fields are allocated after Taichi is initialized
    from normalcast.core.render import reset_render_target
    from normalcast.scene.surface_list import clear_surfaces

    def _clear_all():
        clear_surfaces()
        reset_render_target()

    _clear_all()

    yield

    _clear_all()
