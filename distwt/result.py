"""Run statistics and their textual reports."""

from __future__ import annotations

from dataclasses import dataclass, field

_IEC_UNITS = ("", "Ki", "Mi", "Gi", "Ti", "Pi", "Ei")


def format_iec_units(number: int, precision: int = 3) -> str:
    """Format a number with a binary unit prefix, e.g. ``1.500 Ki``."""
    value = float(number)
    scale = 0
    while value >= 1024.0 and scale + 1 < len(_IEC_UNITS):
        value /= 1024.0
        scale += 1
    return f"{value:.{precision}f} {_IEC_UNITS[scale]}"


@dataclass
class Time:
    """Durations of the phases of a run, in seconds."""

    input: float = 0.0
    hist: float = 0.0
    eff: float = 0.0
    construct: float = 0.0
    merge: float = 0.0

    def total(self) -> float:
        return self.input + self.hist + self.eff + self.construct + self.merge


@dataclass
class Result:
    """Summary of one construction run."""

    algo: str
    nodes: int = 1
    workers_per_node: int = 1
    input_name: str = ""
    size: int = 0
    bytes_per_symbol: int = 1
    alphabet: int = 0
    time: Time = field(default_factory=Time)
    memory: int = 0
    traffic: int = 0
    traffic_asym: int = 0

    def sqlplot(self) -> str:
        """A single ``RESULT key=value ...`` line."""
        fields = [
            ("algo", self.algo),
            ("nodes", self.nodes),
            ("workers_per_node", self.workers_per_node),
            ("input", self.input_name),
            ("size", self.size),
            ("bps", self.bytes_per_symbol),
            ("alphabet", self.alphabet),
            ("time_input", f"{self.time.input:g}"),
            ("time_hist", f"{self.time.hist:g}"),
            ("time_eff", f"{self.time.eff:g}"),
            ("time_construct", f"{self.time.construct:g}"),
            ("time_merge", f"{self.time.merge:g}"),
            ("memory", self.memory),
            ("traffic", self.traffic),
            ("traffic_asym", self.traffic_asym),
        ]
        return "RESULT" + "".join(f" {key}={value}" for key, value in fields)

    def readable(self) -> str:
        """A human-readable summary sentence."""
        per_worker = self.memory // (self.workers_per_node * self.nodes)
        return (
            f"Algorithm '{self.algo}' finished processing input '{self.input_name}'"
            f" ({format_iec_units(self.size, 3)}B) after {self.time.total():g}"
            f" seconds using {self.nodes} nodes ({self.workers_per_node} workers each)"
            f" causing {format_iec_units(self.traffic, 3)}B of net traffic"
            f" ({format_iec_units(self.traffic_asym, 3)}B assymetry) "
            f"using at most {format_iec_units(self.memory, 3)}B of overall RAM"
            f" (avg {format_iec_units(per_worker, 3)} per worker)."
        )