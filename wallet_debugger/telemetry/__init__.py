from .diagnostic_log import DiagnosticLog, LogEntry, Severity, render_payload

__all__ = ["DiagnosticLog", "LogEntry", "Severity", "render_payload"]
