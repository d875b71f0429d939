"""Tests for SceneParams configuration.

Tests cover:
- Reference scene defaults
- Immutability and derived variants via dataclasses.replace
- Validation of out-of-range and non-finite values
"""

import dataclasses
import math

import pytest

from spheretrace.scene.params import SceneParams


class TestSceneParamsDefaults:
    """Test the reference scene defaults."""

    def test_defaults(self):
        """Test defaults match the reference scene."""
        params = SceneParams()

        assert params.radius == 1.5
        assert params.amplitude == 1.0
        assert params.eye == (0.0, 0.0, 3.0)
        assert params.light_position == (0.0, 10.0, 10.0)
        assert params.background == (0.3, 0.9, 0.2)
        assert params.surface_color == (1.0, 1.0, 1.0)
        assert params.ambient == 0.4

    def test_params_are_frozen(self):
        """Test fields cannot be reassigned."""
        params = SceneParams()

        with pytest.raises(dataclasses.FrozenInstanceError):
            params.radius = 2.0  # type: ignore[misc]

    def test_replace_derives_new_params(self):
        """Test replace() leaves the original untouched."""
        params = SceneParams()
        smooth = dataclasses.replace(params, amplitude=0.0)

        assert smooth.amplitude == 0.0
        assert params.amplitude == 1.0
        assert smooth.radius == params.radius


class TestSceneParamsValidation:
    """Test SceneParams validation."""

    @pytest.mark.parametrize("radius", [0.0, -1.0, math.nan, math.inf])
    def test_invalid_radius_raises(self, radius):
        """Test the radius must be positive and finite."""
        with pytest.raises(ValueError, match="radius"):
            SceneParams(radius=radius)

    def test_non_finite_amplitude_raises(self):
        """Test the amplitude must be finite."""
        with pytest.raises(ValueError, match="amplitude"):
            SceneParams(amplitude=math.nan)

    def test_negative_ambient_raises(self):
        """Test the ambient floor cannot be negative."""
        with pytest.raises(ValueError, match="ambient"):
            SceneParams(ambient=-0.1)

    def test_wrong_vector_size_raises(self):
        """Test vectors must have three components."""
        with pytest.raises(ValueError, match="eye"):
            SceneParams(eye=(0.0, 3.0))  # type: ignore[arg-type]

    def test_non_finite_color_raises(self):
        """Test colors must be finite."""
        with pytest.raises(ValueError, match="background"):
            SceneParams(background=(0.0, math.inf, 0.0))
