"""Schema validation for outbound OSMCHA API requests.

Every request goes through :func:`validate_request` before it is sent. A
request is described by a plain dictionary::

    {
        'url': 'https://osmcha.mapbox.com/api/v1/changesets/123/comment/',
        'method': 'GET',
        'headers': {
            'Authorization': '<secret token>',
            'Content-Type': 'application/json',
        },
    }

The ``Authorization`` value is the raw secret; the ``Token`` scheme prefix is
added by the API client at send time.
"""

import logging
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationError


class RequestHeaders(BaseModel):
    """Headers every OSMCHA request must carry."""

    model_config = ConfigDict(extra='forbid')

    authorization: StrictStr = Field(..., alias='Authorization', min_length=1)
    content_type: Optional[StrictStr] = Field(default=None, alias='Content-Type')


class RequestDescriptor(BaseModel):
    """Shape of a request descriptor accepted by the API client."""

    model_config = ConfigDict(extra='forbid')

    url: StrictStr = Field(..., min_length=1)
    method: StrictStr = Field(..., min_length=1)
    headers: RequestHeaders


def _field_path(loc) -> str:
    return '.'.join(str(part) for part in loc) or 'request'


def validate_request(options: Dict) -> Dict:
    """Check a request descriptor against :class:`RequestDescriptor`.

    Args:
        options: Request descriptor dictionary

    Returns:
        The same dictionary, unchanged

    Raises:
        ValidationError: If any required field is missing, empty or not a string
    """
    try:
        RequestDescriptor.model_validate(options)
    except PydanticValidationError as e:
        fields = [_field_path(err['loc']) for err in e.errors()]
        message = f"OSMCHA API request options were invalid: {', '.join(fields)}"
        logging.error(f"{message}\n{e}")
        raise ValidationError(message, fields) from e

    return options
