# Run with: python benchmarks/comparison/run_stdlib.py
import pyperf

runner = pyperf.Runner()

runner.timeit(
    "new date",
    "date(2020, 2, 29)",
    "from datetime import date",
)

runner.timeit(
    "from epoch millis",
    "EPOCH + timedelta(milliseconds=1_584_707_445_450)",
    setup="from datetime import datetime, timedelta; "
    "EPOCH = datetime(1970, 1, 1)",
)

runner.timeit(
    "to epoch millis",
    "(dt - EPOCH) // timedelta(milliseconds=1)",
    setup="from datetime import datetime, timedelta; "
    "EPOCH = datetime(1970, 1, 1); dt = datetime(2020, 3, 20, 12, 30, 45)",
)

runner.timeit(
    "increment hour",
    "dt + timedelta(hours=1)",
    setup="from datetime import datetime, timedelta; "
    "dt = datetime(2019, 12, 31, 23, 30)",
)

runner.timeit(
    "parse date",
    "f('2020-02-29')",
    setup="from datetime import date; f = date.fromisoformat",
)
