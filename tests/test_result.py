import pytest

from distwt.result import Result, Time, format_iec_units


def make_result():
    return Result(
        algo="seq-test",
        nodes=2,
        workers_per_node=4,
        input_name="data.txt",
        size=4096,
        bytes_per_symbol=1,
        alphabet=26,
        time=Time(input=0.5, hist=1.25, eff=0.25, construct=2.0, merge=0.0),
        memory=8192,
        traffic=2048,
        traffic_asym=1024,
    )


def test_time_total_is_sum():
    t = Time(1.0, 2.0, 3.0, 4.0, 5.0)
    assert t.total() == pytest.approx(1.0 + 2.0 + 3.0 + 4.0 + 5.0)


def test_format_iec_small_and_kibi():
    assert format_iec_units(0, 3) == "0.000 "
    assert format_iec_units(1024, 3) == "1.000 Ki"


def test_format_iec_scales_monotonically():
    units = [format_iec_units(1 << (10 * k), 1).split(" ")[1] for k in range(5)]
    assert len(set(units)) == 5


def test_sqlplot_round_trip():
    res = make_result()
    line = res.sqlplot()
    assert line.startswith("RESULT ")
    pairs = dict(item.split("=", 1) for item in line.split()[1:])
    assert pairs["algo"] == res.algo
    assert pairs["input"] == res.input_name
    assert int(pairs["nodes"]) == res.nodes
    assert int(pairs["alphabet"]) == res.alphabet
    assert float(pairs["time_hist"]) == res.time.hist
    assert int(pairs["traffic_asym"]) == res.traffic_asym
    assert len(pairs) == 15


def test_readable_mentions_run():
    res = make_result()
    text = res.readable()
    assert text.startswith("Algorithm 'seq-test' finished processing input 'data.txt'")
    assert format_iec_units(res.size, 3) + "B" in text
    assert f"{res.time.total():g} seconds" in text
    assert format_iec_units(res.memory // 8, 3) + " per worker" in text


def test_readable_without_workers_raises():
    res = make_result()
    res.nodes = 0
    with pytest.raises(ZeroDivisionError):
        res.readable()