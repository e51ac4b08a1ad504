from .record_source_port import RecordSourcePort

__all__ = ["RecordSourcePort"]
