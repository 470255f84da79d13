from typing import NamedTuple


class InternalTotalKey(NamedTuple):
    """Identifies one row of student_internal_totals."""

    student_id: int
    subject_id: int
    cie_no: int

    def as_filter(self):
        return self._asdict()


class OverallTotalKey(NamedTuple):
    """Identifies one row of student_overall_totals."""

    student_id: int
    subject_id: int

    def as_filter(self):
        return self._asdict()
