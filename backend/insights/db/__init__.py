from .summary_store import SummaryStore

__all__ = ["SummaryStore"]
