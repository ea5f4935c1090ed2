"""JSON serialization for values kept in the store."""

import json
from datetime import datetime, date
from enum import Enum
from typing import Any, Union

from .domain.util import format_timestamp


class HubJSONEncoder(json.JSONEncoder):
    """Encodes domain objects in this package for serialization."""

    def default(self, obj: object) -> Any:
        """Look for domain objects, and use their dict-coercion methods."""
        if hasattr(obj, 'to_dict'):
            return obj.to_dict()    # type: ignore
        elif isinstance(obj, datetime):
            return format_timestamp(obj)
        elif isinstance(obj, date):
            return obj.isoformat()
        elif isinstance(obj, Enum):
            return obj.value
        return super(HubJSONEncoder, self).default(obj)


def dumps(obj: Any) -> str:
    """Generate JSON from a Python object."""
    return json.dumps(obj, cls=HubJSONEncoder)


def loads(data: Union[str, bytes]) -> Any:
    """Load a Python object from JSON."""
    if isinstance(data, bytes):
        data = data.decode('utf-8')
    return json.loads(data)
