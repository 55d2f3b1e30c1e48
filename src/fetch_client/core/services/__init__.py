# Services package

from .content_type_classifier import classify, media_type
from .response_deserializer import deserialize, parse_form_data
from .status_classifier import check_status, error_for_status

__all__ = [
    "check_status",
    "classify",
    "deserialize",
    "error_for_status",
    "media_type",
    "parse_form_data",
]
