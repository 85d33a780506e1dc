"""Registration file validation (field-by-field deviation messages)."""

from agentreg.validation.registration import validate_registration
from agentreg.validation.utils import is_valid_url, json_type_name

__all__ = ["validate_registration", "is_valid_url", "json_type_name"]
