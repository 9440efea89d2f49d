# Run with: python benchmarks/comparison/run_posixtime.py
import pyperf

runner = pyperf.Runner()

runner.timeit(
    "new date",
    "Date(2020, 2, 29)",
    setup="from posixtime import Date",
)

runner.timeit(
    "from epoch millis",
    "f(1_584_707_445_450)",
    setup="from posixtime import DateTime; f = DateTime.from_epoch_millis",
)

runner.timeit(
    "to epoch millis",
    "dt.to_epoch_millis()",
    setup="from posixtime import DateTime; "
    "dt = DateTime(2020, 3, 20, 12, 30, 45)",
)

runner.timeit(
    "increment hour",
    "dt.increment_hour()",
    setup="from posixtime import DateTime; dt = DateTime(2019, 12, 31, 23, 30)",
)

runner.timeit(
    "parse date",
    "f('2020-02-29')",
    setup="from posixtime import Date; f = Date.parse_common_iso",
)
