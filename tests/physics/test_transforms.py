from __future__ import annotations

# Third Party Imports
import numpy as np
import pytest

# GEOFRAMES Imports
import geoframes.physics.constants as const
from geoframes import gcrs2itrs, getReductionParams, itrs2gcrs
from geoframes.common.exceptions import EOPLookupError, ValidationError
from geoframes.physics.transforms.eops import EarthOrientationParameter
from geoframes.physics.transforms.methods import validateStateBatch

# Local Imports
from .. import (
    GEO_STATE,
    LEO_STATE,
    REFERENCE_DELTA_TT_UT1,
    REFERENCE_GCRS2ITRS,
    REFERENCE_POLAR_MOTION,
    REFERENCE_POLE_OFFSETS,
    REFERENCE_TT,
)
from .conftest import ConstantEOPLoader

REFERENCE_EOP_KWARGS = {
    "delta_tt_ut1": REFERENCE_DELTA_TT_UT1,
    "polar_motion": REFERENCE_POLAR_MOTION,
    "pole_offsets": REFERENCE_POLE_OFFSETS,
    "length_of_day": 0.0013,
}


@pytest.fixture(name="states")
def getStates() -> np.ndarray:
    """Batch of GCRS position & velocity states."""
    return np.vstack(
        [
            LEO_STATE,
            GEO_STATE,
            np.array([-1200.0e3, 5300.0e3, -4100.0e3, -6.1e3, -1.9e3, 2.2e3]),
            np.array([3.0e6, -2.5e6, 5.5e6, 1.2e3, 4.4e3, -3.0e3]),
        ],
    )


def testPositionOnly(states: np.ndarray):
    """Test positions are rotated by the returned GCRS -> ITRS matrix."""
    positions = states[:, :3]
    r_itrs, rot = gcrs2itrs(positions, *REFERENCE_TT, **REFERENCE_EOP_KWARGS)
    assert r_itrs.shape == positions.shape
    assert np.allclose(rot, REFERENCE_GCRS2ITRS, rtol=0.0, atol=1e-10)
    for row_in, row_out in zip(positions, r_itrs):
        assert np.allclose(row_out, rot @ row_in, rtol=1e-14, atol=1e-8)
        assert np.linalg.norm(row_out) == pytest.approx(np.linalg.norm(row_in), rel=1e-14)


def testPositionMatchesFullState(states: np.ndarray):
    """Test the position half of a 6-D transform equals the 3-D transform."""
    x_itrs, _ = gcrs2itrs(states, *REFERENCE_TT, **REFERENCE_EOP_KWARGS)
    r_itrs, _ = gcrs2itrs(states[:, :3], *REFERENCE_TT, **REFERENCE_EOP_KWARGS)
    assert x_itrs.shape == states.shape
    assert np.allclose(x_itrs[:, :3], r_itrs, rtol=1e-15, atol=1e-9)


def testVelocityCorrection(states: np.ndarray):
    """Test velocity follows the transport theorem in the TIRS."""
    x_itrs, _ = gcrs2itrs(states, *REFERENCE_TT, **REFERENCE_EOP_KWARGS)
    reduction = getReductionParams(*REFERENCE_TT, **REFERENCE_EOP_KWARGS)
    for state, out in zip(states, x_itrs):
        r_tirs = reduction.rot_gcrs2tirs @ state[:3]
        v_tirs = reduction.rot_gcrs2tirs @ state[3:]
        expected = reduction.rot_w @ (v_tirs - np.cross(reduction.omega, r_tirs))
        assert np.allclose(out[3:], expected, rtol=1e-12, atol=1e-9)


def testRoundTrip(states: np.ndarray):
    """Test GCRS -> ITRS -> GCRS recovers positions & velocities."""
    x_itrs, rot = gcrs2itrs(states, *REFERENCE_TT, **REFERENCE_EOP_KWARGS)
    x_gcrs, rot_inv = itrs2gcrs(x_itrs, *REFERENCE_TT, **REFERENCE_EOP_KWARGS)
    assert np.allclose(x_gcrs[:, :3], states[:, :3], rtol=0.0, atol=1e-6)
    assert np.allclose(x_gcrs[:, 3:], states[:, 3:], rtol=0.0, atol=1e-9)
    assert np.allclose(rot_inv, rot.T, rtol=0.0, atol=0.0)

    r_gcrs, _ = itrs2gcrs(x_itrs[:, :3], *REFERENCE_TT, **REFERENCE_EOP_KWARGS)
    assert np.allclose(r_gcrs, states[:, :3], rtol=0.0, atol=1e-6)


def testEarthFixedPoint():
    """Test a point at rest in the ITRS moves with the Earth's spin in the GCRS."""
    state_itrs = np.array([0.0, 6378137.0, 1.0e6, 0.0, 0.0, 0.0])
    state_gcrs, _ = itrs2gcrs(state_itrs, *REFERENCE_TT, **REFERENCE_EOP_KWARGS)
    reduction = getReductionParams(*REFERENCE_TT, **REFERENCE_EOP_KWARGS)
    r_tirs = reduction.rot_w.T @ state_itrs[:3]
    expected_speed = reduction.omega[2] * np.linalg.norm(r_tirs[:2])
    assert np.linalg.norm(state_gcrs[3:]) == pytest.approx(expected_speed, rel=1e-12)
    # ...and transforms back to zero velocity
    state_back, _ = gcrs2itrs(state_gcrs, *REFERENCE_TT, **REFERENCE_EOP_KWARGS)
    assert np.allclose(state_back[3:], 0.0, atol=1e-9)


def testBatchHomogeneity():
    """Test identical inputs give identical outputs, in order."""
    batch = np.tile(LEO_STATE, (25, 1))
    x_itrs, _ = gcrs2itrs(batch, *REFERENCE_TT, **REFERENCE_EOP_KWARGS)
    assert x_itrs.shape == (25, 6)
    assert np.allclose(x_itrs, x_itrs[0], rtol=1e-15, atol=1e-9)

    single, _ = gcrs2itrs(LEO_STATE, *REFERENCE_TT, **REFERENCE_EOP_KWARGS)
    assert single.shape == (6,)
    assert np.allclose(x_itrs[0], single, rtol=1e-15, atol=1e-9)


def testBatchOrder(states: np.ndarray):
    """Test reversing the batch reverses the output."""
    forward, _ = gcrs2itrs(states, *REFERENCE_TT, **REFERENCE_EOP_KWARGS)
    backward, _ = gcrs2itrs(states[::-1], *REFERENCE_TT, **REFERENCE_EOP_KWARGS)
    assert np.allclose(forward[::-1], backward, rtol=1e-15, atol=1e-9)


def testOriginAtRest():
    """Test the origin at rest has no rotational velocity contribution."""
    x_itrs, _ = gcrs2itrs(np.zeros((2, 6)), *REFERENCE_TT, **REFERENCE_EOP_KWARGS)
    assert np.array_equal(x_itrs, np.zeros((2, 6)))


def _noLOD() -> dict:
    """Reference EOP keyword arguments, less the length of day."""
    return {key: value for key, value in REFERENCE_EOP_KWARGS.items() if key != "length_of_day"}


def testPositionIgnoresLOD(states: np.ndarray):
    """Test the length of day has no effect on positions, only on velocities."""
    first, _ = gcrs2itrs(states[:, :3], *REFERENCE_TT, length_of_day=0.0, **_noLOD())
    second, _ = gcrs2itrs(states[:, :3], *REFERENCE_TT, length_of_day=0.003, **_noLOD())
    assert np.array_equal(first, second)

    x_first, _ = gcrs2itrs(states, *REFERENCE_TT, length_of_day=0.0, **_noLOD())
    x_second, _ = gcrs2itrs(states, *REFERENCE_TT, length_of_day=0.003, **_noLOD())
    assert np.array_equal(x_first[:, :3], x_second[:, :3])
    assert not np.array_equal(x_first[:, 3:], x_second[:, 3:])


def testInputUnmodified(states: np.ndarray):
    """Test the input batch isn't modified in place."""
    original = states.copy()
    gcrs2itrs(states, *REFERENCE_TT, **REFERENCE_EOP_KWARGS)
    itrs2gcrs(states, *REFERENCE_TT, **REFERENCE_EOP_KWARGS)
    assert np.array_equal(states, original)


def testAcceptsLists():
    """Test plain nested lists are accepted."""
    x_itrs, _ = gcrs2itrs(LEO_STATE.tolist(), *REFERENCE_TT, **REFERENCE_EOP_KWARGS)
    assert isinstance(x_itrs, np.ndarray)
    assert x_itrs.shape == (6,)


def testFullOverrideMatchesProvider(eop_record: EarthOrientationParameter):
    """Test the lookup-skip path & the provider path agree exactly for equal values."""
    loader = ConstantEOPLoader(eop_record)
    provided_states, provided_rot = gcrs2itrs(LEO_STATE, *REFERENCE_TT, eop_loader=loader)
    assert loader.lookups == 1

    explicit_states, explicit_rot = gcrs2itrs(
        LEO_STATE,
        *REFERENCE_TT,
        delta_tt_ut1=eop_record.delta_tt_ut1,
        polar_motion=(eop_record.x_p, eop_record.y_p),
        pole_offsets=(eop_record.d_x, eop_record.d_y),
        length_of_day=eop_record.length_of_day,
        eop_loader=loader,
    )
    assert loader.lookups == 1
    assert np.array_equal(provided_rot, explicit_rot)
    assert np.array_equal(provided_states, explicit_states)

    provided = getReductionParams(*REFERENCE_TT, eop_loader=loader)
    explicit = getReductionParams(
        *REFERENCE_TT,
        delta_tt_ut1=eop_record.delta_tt_ut1,
        polar_motion=(eop_record.x_p, eop_record.y_p),
        pole_offsets=(eop_record.d_x, eop_record.d_y),
        length_of_day=eop_record.length_of_day,
    )
    assert provided == explicit


def testEmptyOverridesUseProvider(eop_record: EarthOrientationParameter):
    """Test that empty sequences request provider values, like ``None``."""
    loader = ConstantEOPLoader(eop_record)
    with_none, _ = gcrs2itrs(LEO_STATE, *REFERENCE_TT, eop_loader=loader)
    with_empty, _ = gcrs2itrs(
        LEO_STATE,
        *REFERENCE_TT,
        delta_tt_ut1=[],
        polar_motion=[],
        pole_offsets=np.array([]),
        length_of_day=[],
        eop_loader=loader,
    )
    assert np.array_equal(with_none, with_empty)


def testConfiguredProvider(states: np.ndarray):
    """Test transforming with every EOP taken from the configured provider."""
    x_itrs, rot = gcrs2itrs(states, *REFERENCE_TT)
    assert x_itrs.shape == states.shape
    # Provider values are close to, but not exactly, the reference values
    assert np.allclose(rot, REFERENCE_GCRS2ITRS, rtol=0.0, atol=1e-7)


@pytest.mark.parametrize(
    "vectors",
    [
        np.zeros((4, 4)),
        np.zeros((2, 5)),
        np.zeros(4),
        np.zeros((2, 3, 6)),
        np.zeros((6, 2)),
        [[1.0, 2.0, 3.0], [1.0, 2.0, 3.0, 4.0, 5.0, 6.0]],
    ],
)
def testInvalidBatch(vectors, eop_record: EarthOrientationParameter):
    """Test malformed batches are rejected before any EOP lookup."""
    loader = ConstantEOPLoader(eop_record)
    with pytest.raises(ValidationError):
        gcrs2itrs(vectors, *REFERENCE_TT, eop_loader=loader)

    with pytest.raises(ValidationError):
        itrs2gcrs(vectors, *REFERENCE_TT, eop_loader=loader)

    assert loader.lookups == 0


def testInvalidPolarMotion(eop_record: EarthOrientationParameter):
    """Test a three element polar motion is rejected before any EOP lookup."""
    loader = ConstantEOPLoader(eop_record)
    with pytest.raises(ValidationError):
        gcrs2itrs(LEO_STATE, *REFERENCE_TT, polar_motion=(0.1, 0.2, 0.3), eop_loader=loader)

    assert loader.lookups == 0


@pytest.mark.parametrize(
    "overrides",
    [
        {"delta_tt_ut1": "abc"},
        {"delta_tt_ut1": float("nan")},
        {"length_of_day": float("inf")},
        {"polar_motion": (0.1, float("nan"))},
        {"pole_offsets": ("x", "y")},
    ],
)
def testInvalidOverrideValues(overrides: dict, eop_record: EarthOrientationParameter):
    """Test non-numeric or non-finite EOP overrides are rejected before any EOP lookup."""
    loader = ConstantEOPLoader(eop_record)
    with pytest.raises(ValidationError):
        gcrs2itrs(LEO_STATE, *REFERENCE_TT, eop_loader=loader, **overrides)

    assert loader.lookups == 0


def testMalformedProvider():
    """Test a provider returning malformed data aborts the transform."""
    loader = ConstantEOPLoader(np.zeros(6))
    with pytest.raises(EOPLookupError):
        gcrs2itrs(LEO_STATE, *REFERENCE_TT, eop_loader=loader)


def testValidateStateBatch():
    """Test batch validation returns a 2-D float array."""
    batch = validateStateBatch([1, 2, 3])
    assert batch.shape == (1, 3)
    assert batch.dtype == np.float64
    assert validateStateBatch(np.zeros((0, 6))).shape == (0, 6)


def testGEOVelocity():
    """Test a geostationary orbit is nearly at rest in the ITRS."""
    # Equatorial GEO state co-rotating in the TIRS, expressed in the GCRS
    radius = 42164172.0
    speed = const.IERS_MEAN_EARTH_ROTATION_RATE * radius
    reduction = getReductionParams(*REFERENCE_TT, **REFERENCE_EOP_KWARGS)
    r_tirs = np.array([radius, 0.0, 0.0])
    v_tirs = np.cross(reduction.omega, r_tirs)
    state_gcrs = np.concatenate(
        (reduction.rot_gcrs2tirs.T @ r_tirs, reduction.rot_gcrs2tirs.T @ v_tirs),
    )
    state_itrs, _ = gcrs2itrs(state_gcrs, *REFERENCE_TT, **REFERENCE_EOP_KWARGS)
    assert np.linalg.norm(state_gcrs[3:]) == pytest.approx(speed, rel=1e-6)
    assert np.linalg.norm(state_itrs[3:]) < 1e-6
