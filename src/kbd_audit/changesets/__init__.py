"""Change-set data model and the capture transform that builds it."""

from . import fields
from .capture import binding_from_capture, build_change_sets, coerce_parameters
from .errors import (
    ChangeSetError,
    MalformedCaptureError,
    ParameterCoercionError,
    ParameterEncodingError,
    SinkWriteError,
    UnsupportedActionError,
    UnsupportedCaptureError,
)
from .models import (
    Action,
    Binding,
    CapturedBinding,
    CaptureRecord,
    ChangeSet,
    Document,
    Qualifier,
    validated_parameters,
)

__all__ = [
    "fields",
    "Action",
    "Binding",
    "CapturedBinding",
    "CaptureRecord",
    "ChangeSet",
    "Document",
    "Qualifier",
    "ChangeSetError",
    "MalformedCaptureError",
    "UnsupportedActionError",
    "ParameterCoercionError",
    "ParameterEncodingError",
    "SinkWriteError",
    "UnsupportedCaptureError",
    "build_change_sets",
    "binding_from_capture",
    "coerce_parameters",
    "validated_parameters",
]
