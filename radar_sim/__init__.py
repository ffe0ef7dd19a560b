"""Top level package for the pulse-compression radar simulator.

This package contains submodules for signal processing (dsp), peak
detection, pulse metrics, the simulation engine with its headless
runners (sim) and visualisation (viz).  Users should typically import
from the subpackages, for example:

```python
from radar_sim.config import SimConfig
from radar_sim.dsp.waveform import generate_chirp
from radar_sim.dsp.matched_filter import compress
from radar_sim.sim.pipeline import RadarSimulator
```
"""

__version__ = "0.1.0"

__all__ = [
    "config",
    "errors",
    "dsp",
    "detect",
    "metrics",
    "sim",
    "viz",
]
