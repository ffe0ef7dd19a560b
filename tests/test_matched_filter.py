import numpy as np
import pytest

from radar_sim.dsp.channel import make_rng, simulate_rx
from radar_sim.dsp.matched_filter import compress, correlate
from radar_sim.dsp.waveform import generate_chirp
from radar_sim.errors import BackendError, ConfigurationError
from radar_sim.metrics.pulse import pulse_energy, snr_db

FS = 10e6
C = 3e8
P = 200
R = 800


def _tx() -> np.ndarray:
    return generate_chirp(P, FS, 1e6, 2e6)


def _rx(target_range: float, noise_std: float = 0.0, seed: int = 0) -> np.ndarray:
    return simulate_rx(_tx(), R, FS, target_range, 0.8, noise_std, make_rng(seed), speed_of_light=C)


def test_output_length_is_power_of_two() -> None:
    for rx_len in (1, 7, 800, 1024):
        tx = _tx()[: min(P, rx_len)]
        out = compress(tx, np.ones(rx_len))
        n = len(out)
        assert n & (n - 1) == 0
        assert n >= 2 * rx_len


def test_noise_free_peak_at_delay() -> None:
    tx = _tx()
    out = compress(tx, _rx(1500.0))
    assert len(out) == 2048
    assert int(np.argmax(out)) == 100
    assert np.isclose(out[100], 0.8 * pulse_energy(tx), rtol=1e-9)


def test_zero_range_peak_at_index_zero() -> None:
    out = compress(_tx(), _rx(0.0))
    assert int(np.argmax(out)) == 0


def test_target_beyond_window_has_no_peak() -> None:
    out = compress(_tx(), _rx(12000.0))
    assert np.max(out) <= 1e-12


def test_noisy_peak_near_delay_with_high_snr() -> None:
    out = compress(_tx(), _rx(1500.0, noise_std=0.1, seed=42))
    peak = int(np.argmax(out[:R]))
    assert peak in {99, 100, 101}
    assert snr_db(out, peak, n_bins=R) >= 20.0


def test_zero_pulse_gives_zero_output() -> None:
    out = compress(np.zeros(P), make_rng(1).standard_normal(R))
    assert np.all(out == 0.0)


def test_single_sample_pulse_gives_zero_output() -> None:
    tx = generate_chirp(1, FS, 1e6, 2e6)
    out = compress(tx, make_rng(1).standard_normal(4))
    assert np.all(out == 0.0)


def test_correlation_is_linear_in_rx() -> None:
    rng = make_rng(5)
    tx = _tx()
    rx1 = rng.standard_normal(R)
    rx2 = rng.standard_normal(R)
    a, b = 0.7, -1.3
    lhs = correlate(tx, a * rx1 + b * rx2)
    rhs = a * correlate(tx, rx1) + b * correlate(tx, rx2)
    assert np.allclose(lhs, rhs, atol=1e-9)


def test_matches_direct_correlation() -> None:
    rng = make_rng(9)
    tx = rng.standard_normal(16)
    rx = rng.standard_normal(64)
    out = compress(tx, rx)
    direct = np.correlate(rx, tx, mode="full")[len(tx) - 1:]
    assert np.allclose(out[: len(direct)], np.abs(direct))


def test_invalid_inputs() -> None:
    with pytest.raises(ConfigurationError):
        compress(np.array([]), np.ones(8))
    with pytest.raises(ConfigurationError):
        compress(np.ones(4), np.array([]))
    with pytest.raises(ConfigurationError):
        compress(np.ones(16), np.ones(8))


def test_non_finite_output_raises_backend_error() -> None:
    tx = _tx().copy()
    tx[3] = np.inf
    with pytest.raises(BackendError):
        compress(tx, _rx(1500.0))
