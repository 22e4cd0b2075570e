from iesrescale.testing.compare import (
    ROUNDTRIP_ATOL,
    FieldDiff,
    RecordCompareResult,
    compare_records,
    records_close,
)

__all__ = [
    "ROUNDTRIP_ATOL",
    "FieldDiff",
    "RecordCompareResult",
    "compare_records",
    "records_close",
]
