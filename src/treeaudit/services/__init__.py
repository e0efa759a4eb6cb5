from .report_service import ReportService
from .walk_service import WalkService


__all__ = [
    'ReportService',
    'WalkService',
]
