"""Report generators."""

from decodey.adapters.reporters.json import JsonReporter
from decodey.adapters.reporters.markdown import MarkdownReporter

__all__ = ["JsonReporter", "MarkdownReporter"]
