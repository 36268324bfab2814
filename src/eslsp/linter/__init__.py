"""External linter boundary: running the tool and parsing its report."""

from eslsp.linter.config import LinterConfig
from eslsp.linter.report_parser import parse_report
from eslsp.linter.runner import ReportCallback, Run, RunController
from eslsp.linter.types import DocumentSnapshot, LintDiagnostic, RunState, Severity

__all__ = [
    "DocumentSnapshot",
    "LintDiagnostic",
    "LinterConfig",
    "ReportCallback",
    "Run",
    "RunController",
    "RunState",
    "Severity",
    "parse_report",
]
