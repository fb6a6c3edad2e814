"""JSON output formatter."""

import json
from pathlib import Path

from newsdesk.core.edition import EditionRecord
from newsdesk.utils.exceptions import OutputError
from newsdesk.utils.logging import get_logger

logger = get_logger(__name__)


class JSONFormatter:
    """Format an edition as JSON output."""

    def format(self, edition: EditionRecord) -> str:
        """Format edition as JSON.

        Field names are the wire names (``time_of_day``, ``dateOfPublication``
        and so on), the same keys the generation prompt asks for.

        Args:
            edition: Edition to format.

        Returns:
            JSON string.
        """
        logger.info(
            "formatting_json_edition",
            local_date=edition.local_date,
            time_slot=edition.time_slot.value,
        )

        edition_dict = edition.model_dump(mode="json", by_alias=True)
        json_output = json.dumps(edition_dict, indent=2, ensure_ascii=False)

        logger.info("json_formatted", size=len(json_output))
        return json_output


def write_edition_json(edition: EditionRecord, json_output_dir: Path) -> Path:
    """Write an edition to ``{json_output_dir}/{date}/{slot}.json``.

    Args:
        edition: Edition to write.
        json_output_dir: Base directory for JSON output.

    Returns:
        Path of the written file.

    Raises:
        OutputError: If the directory or file cannot be written.
    """
    output_dir = Path(json_output_dir) / edition.local_date
    output_path = output_dir / f"{edition.time_slot.value}.json"

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        output_path.write_text(JSONFormatter().format(edition), encoding="utf-8")
    except OSError as e:
        logger.error("json_write_failed", path=str(output_path), error=str(e))
        raise OutputError(f"Failed to write {output_path}: {e}") from e

    logger.info("json_written", path=str(output_path))
    return output_path
