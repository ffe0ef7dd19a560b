import numpy as np
import pytest

from radar_sim.dsp.waveform import (
    chirp_rate,
    estimate_instantaneous_frequency,
    generate_chirp,
    instantaneous_frequency,
)
from radar_sim.errors import ConfigurationError

FS = 10e6
F0 = 1e6
BW = 2e6


def test_chirp_length_and_amplitude() -> None:
    tx = generate_chirp(200, FS, F0, BW)
    assert tx.shape == (200,)
    assert tx.dtype == np.float64
    assert np.max(np.abs(tx)) <= 1.0
    # sin(0) at the first sample
    assert tx[0] == 0.0


def test_single_sample_chirp_is_zero() -> None:
    tx = generate_chirp(1, FS, F0, BW)
    assert tx.shape == (1,)
    assert tx[0] == 0.0


def test_chirp_rate_spans_bandwidth_over_pulse() -> None:
    k = chirp_rate(200, FS, BW)
    tau = 200 / FS
    assert np.isclose(k, BW / tau)
    assert np.isclose(instantaneous_frequency(0.0, F0, k), F0)
    assert np.isclose(instantaneous_frequency(tau, F0, k), F0 + BW)


def test_measured_frequency_at_pulse_ends() -> None:
    n = 200
    est = estimate_instantaneous_frequency(generate_chirp(n, FS, F0, BW), FS)
    bin_width = FS / n
    # entry i lies between samples i and i + 1
    expected = instantaneous_frequency((np.arange(n - 1) + 0.5) / FS, F0, chirp_rate(n, FS, BW))
    # the outermost few entries carry Hilbert edge ringing
    head = slice(4, 12)
    tail = slice(-12, -4)
    start = np.median(est[head])
    end = np.median(est[tail])
    assert abs(start - np.median(expected[head])) <= bin_width
    assert abs(end - np.median(expected[tail])) <= bin_width
    assert abs(end - (F0 + BW)) <= 3 * bin_width
    assert abs(start - F0) <= 3 * bin_width


def test_zero_crossings_increase_along_pulse() -> None:
    tx = generate_chirp(200, FS, F0, BW)
    first, second = tx[1:100], tx[100:]
    crossings_first = np.count_nonzero(np.diff(np.signbit(first)))
    crossings_second = np.count_nonzero(np.diff(np.signbit(second)))
    # Mean frequency is 1.5 MHz in the first half and 2.5 MHz in the second
    assert crossings_second > crossings_first


def test_estimated_frequency_tracks_sweep() -> None:
    n = 1000
    tx = generate_chirp(n, FS, F0, BW)
    est = estimate_instantaneous_frequency(tx, FS)
    assert est.shape == (n - 1,)
    k = chirp_rate(n, FS, BW)
    t_mid = (np.arange(n - 1) + 0.5) / FS
    expected = instantaneous_frequency(t_mid, F0, k)
    err = np.median(np.abs(est[400:600] - expected[400:600]))
    assert err < 50e3


def test_invalid_parameters_fail_fast() -> None:
    with pytest.raises(ConfigurationError):
        generate_chirp(0, FS, F0, BW)
    with pytest.raises(ConfigurationError):
        generate_chirp(200, 0.0, F0, BW)
    with pytest.raises(ConfigurationError):
        estimate_instantaneous_frequency(np.zeros(1), FS)
