import numpy as np
import pytest

from radar_sim.config import SimConfig
from radar_sim.dsp.channel import make_rng
from radar_sim.sim.pipeline import RadarSimulator


def test_axes_and_pulse_shapes() -> None:
    sim = RadarSimulator(SimConfig(seed=1))
    assert sim.tx_pulse.shape == sim.time_tx_us.shape == (200,)
    assert sim.time_rx_us.shape == sim.range_m.shape == (800,)
    assert np.isclose(sim.time_tx_us[1], 0.1)
    assert np.allclose(np.diff(sim.range_m), 15.0)
    assert sim.range_m[0] == 0.0


def test_blank_frame_before_first_tick() -> None:
    sim = RadarSimulator(SimConfig(seed=1))
    assert sim.ticks == 0
    assert sim.latest.rx.shape == (800,)
    assert sim.latest.compressed.shape == (2048,)
    assert not np.any(sim.latest.rx)
    assert not np.any(sim.latest.compressed)


def test_tick_publishes_new_frame() -> None:
    sim = RadarSimulator(SimConfig(seed=1))
    first = sim.tick()
    assert sim.latest is first
    assert first.index == 1
    second = sim.tick()
    assert second.index == 2 and sim.ticks == 2
    # fresh noise every tick
    assert not np.array_equal(first.rx, second.rx)
    assert int(np.argmax(second.compressed[:800])) in {99, 100, 101}


def test_shared_arrays_are_read_only() -> None:
    sim = RadarSimulator(SimConfig(seed=1))
    frame = sim.tick()
    for arr in (sim.tx_pulse, sim.range_m, sim.time_rx_us, frame.rx, frame.compressed):
        with pytest.raises(ValueError):
            arr[0] = 1.0


def test_seeded_runs_are_identical() -> None:
    a = [f.rx for f in RadarSimulator(SimConfig(), rng=make_rng(11)).run(3)]
    b = [f.rx for f in RadarSimulator(SimConfig(), rng=make_rng(11)).run(3)]
    assert all(np.array_equal(x, y) for x, y in zip(a, b))


def test_noise_free_tick_peaks_at_target() -> None:
    sim = RadarSimulator(SimConfig(noise_std=0.0, target_range=4500.0))
    frame = sim.tick()
    assert int(np.argmax(frame.compressed)) == 300
