"""Use case applying threshold-based compression through a transcoder port."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from audo_comp.application.audio_tools import ToolTimeoutError, Transcoder
from audo_comp.domain.policies import DEFAULT_COMPRESSION_POLICY, DEFAULT_SELECTION_POLICY, CompressionPolicy
from audo_comp.domain.services import processed_output_path, validate_db_value
from audo_comp.errors import CompressionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CompressionExecutor:
    """Compress one file into its deterministic ``*_processed`` sibling."""

    transcoder: Transcoder
    policy: CompressionPolicy = DEFAULT_COMPRESSION_POLICY
    processed_marker: str = DEFAULT_SELECTION_POLICY.processed_marker

    def output_path_for(self, file_path: Path) -> Path:
        return processed_output_path(file_path, self.processed_marker)

    def compress(self, file_path: Path, threshold_db: float) -> Path:
        threshold = validate_db_value("threshold_db", threshold_db, self.policy)
        output_path = self.output_path_for(file_path)
        if output_path.exists():
            logger.info("Overwriting existing output %s", output_path)

        try:
            exit_status = self.transcoder.transcode(file_path, output_path, threshold, self.policy.curve)
        except ToolTimeoutError as error:
            _discard_partial_output(output_path)
            raise CompressionError(file_path, None, str(error)) from error
        except OSError as error:
            _discard_partial_output(output_path)
            raise CompressionError(file_path, None, f"transcoder could not run: {error}") from error
        except Exception as error:  # noqa: BLE001
            _discard_partial_output(output_path)
            raise CompressionError(file_path, None, f"transcoder failed: {error}") from error

        if exit_status != 0:
            _discard_partial_output(output_path)
            raise CompressionError(file_path, exit_status)
        if not output_path.is_file():
            raise CompressionError(file_path, exit_status, f"no output written to {output_path}")

        logger.debug("Compressed %s -> %s at %.1f dB", file_path.name, output_path.name, threshold)
        return output_path


def _discard_partial_output(output_path: Path) -> None:
    try:
        output_path.unlink(missing_ok=True)
    except OSError:
        logger.warning("Could not remove partial output %s", output_path, exc_info=True)
