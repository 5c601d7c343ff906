"""
Output formatting and export functionality.
"""

from switching_deadlines.output.exporter import ResultExporter
from switching_deadlines.output.formatter import ConsoleFormatter

__all__ = ["ConsoleFormatter", "ResultExporter"]
