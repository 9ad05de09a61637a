from .frame import extract_frame
from .metadata import extract_metadata
from .sniff import classify
from .thumbnail import request_thumbnail

__all__ = ["classify", "extract_frame", "extract_metadata", "request_thumbnail"]
