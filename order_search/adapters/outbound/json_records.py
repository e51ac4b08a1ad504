"""JSON file adapter supplying records exported from the order database."""

import json
import logging
from pathlib import Path
from typing import Any

from ...core.domain.exceptions import RecordLoadError
from ...core.domain.utils import clean_text
from ...core.ports.record_source_port import RecordSourcePort

logger = logging.getLogger(__name__)


class JsonRecordSource(RecordSourcePort):
    """Reads records from a JSON export.

    The file holds either an array of objects or an object with a "records"
    array, which is how the admin data export writes it.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def load(self) -> list[dict[str, Any]]:
        """Load and validate all records.

        Returns:
            Records as dictionaries, in file order.

        Raises:
            RecordLoadError: If the file is missing, not JSON, or not a list
                of objects.
        """
        context = {"path": str(self.path)}

        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise RecordLoadError(
                f"Cannot read records from {self.path}", cause=e, context=context
            ) from e

        try:
            payload = json.loads(clean_text(raw))
        except json.JSONDecodeError as e:
            raise RecordLoadError(
                f"Records file {self.path} is not valid JSON", cause=e, context=context
            ) from e

        if isinstance(payload, dict):
            payload = payload.get("records")

        if not isinstance(payload, list):
            raise RecordLoadError(
                f"Records file {self.path} must contain a list of records", context=context
            )

        for index, record in enumerate(payload):
            if not isinstance(record, dict):
                raise RecordLoadError(
                    f"Record {index} in {self.path} is not an object",
                    context={**context, "index": index},
                )

        logger.debug(f"Loaded {len(payload)} records from {self.path}")
        return payload
