from datetime import datetime
from typing import Any, TypeAlias


# Type aliases for Python dictionaries
AppConfig: TypeAlias = dict[str, Any]
InspectionReport: TypeAlias = dict[str, Any]

# Durable store row: (alias, long URL, access count, expiration date)
StoreRow: TypeAlias = tuple[str, str, int, datetime | None]
