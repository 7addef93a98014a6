# SPDX-License-Identifier: LGPL-3-or-later

from collections import Counter
from contextlib import contextmanager
from pathlib import Path

from nmigen.back.pysim import Simulator


_RUN_COUNTS = Counter()
"""how many times get_test_path has been called for each test id"""


def get_test_path(test_case, base_path):
    """get a fresh `Path` for a particular unittest.TestCase instance
    (`test_case`) to write its output to. base_path is either a str or a
    path-like."""
    test_id = test_case.id()
    count = _RUN_COUNTS[test_id]
    _RUN_COUNTS[test_id] += 1
    return Path(base_path) / test_id / str(count)


@contextmanager
def do_sim(test_case, dut, traces=()):
    """simulate `dut`, tracing `traces` to a .vcd file named after
    `test_case` under sim_test_out/"""
    sim = Simulator(dut)
    vcd_path = get_test_path(test_case, "sim_test_out").with_suffix(".vcd")
    vcd_path.parent.mkdir(parents=True, exist_ok=True)
    with sim.write_vcd(str(vcd_path), traces=traces):
        yield sim
