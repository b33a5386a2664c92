"""Logging formatters for detection diagnostics."""

import logging


class SourceFormatter(logging.Formatter):
    """Logging formatter that prepends the detection source when present."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with a source prefix if present.

        Parameters
        ----------
        record : logging.LogRecord
            Log record to format

        Returns
        -------
        str
            Formatted log message, prefixed with ``[source]`` when the record
            carries a ``source`` extra
        """
        msg = super().format(record)
        source = getattr(record, "source", None)

        if source:
            return f"[{source}] {msg}"

        return msg
