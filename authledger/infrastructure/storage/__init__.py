from .records import RecordFile, ensure_exists_writably

__all__ = ["RecordFile", "ensure_exists_writably"]
