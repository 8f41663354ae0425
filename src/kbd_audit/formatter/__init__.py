"""Rendering and writing of ``.kbd`` change-set documents."""

from .dump import ChangeSetDumper, DumpLog, DumpReport, dump_all
from .encoding import PARAMETER_ENCODING, url_encode
from .render import BindingType, format_binding, render, render_document
from .sinks import DocumentSink, FileSink

__all__ = [
    "BindingType",
    "ChangeSetDumper",
    "DocumentSink",
    "DumpLog",
    "DumpReport",
    "FileSink",
    "PARAMETER_ENCODING",
    "dump_all",
    "format_binding",
    "render",
    "render_document",
    "url_encode",
]
