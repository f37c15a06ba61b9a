"""Parallel batch processing of templates.

Templates are independent of each other, so a batch is spread over worker
processes with ProcessPoolExecutor. Each worker runs the whole pipeline for
one template (read, extract, resize, emit, render) and returns plain data.

Key components:
- process_template: Top-level picklable function for parallel execution
- TemplateProcessor: Orchestrates a batch and writes the outputs
"""

import time
import traceback
from collections.abc import Callable
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Any

from siegecraft.config import SiegecraftSettings
from siegecraft.core.emitter import GeometryEmitter
from siegecraft.core.extractor import extract_topology
from siegecraft.core.resizer import resize
from siegecraft.io import TemplateReader, TemplateWriter, render_output
from siegecraft.utils import ProcessingLogger, ProcessingStats, configure_logging


def process_template(
    template_path: str,
    width: int,
    height: int,
    config_dict: dict[str, Any],
) -> dict[str, Any]:
    """Run the full pipeline for one template.

    Top-level function designed to be picklable for use with ProcessPoolExecutor.

    Args:
        template_path: Path to an ASCII or CSV template
        width: Target width
        height: Target height
        config_dict: Serialized SiegecraftSettings

    Returns:
        Dictionary containing either:
        - Success: {"name", "output", "anchors", "duration_ms"}
        - Error: {"name", "error", "error_type", "traceback", "duration_ms"}
    """
    start_time = time.time()
    name = Path(template_path).stem

    try:
        settings = SiegecraftSettings(**config_dict)
        reader = TemplateReader(
            Path(template_path), allow_ragged=settings.template.allow_ragged_rows
        )
        template = extract_topology(reader.load())
        resized = resize(template, width, height)
        outlines = GeometryEmitter(settings.geometry).emit(resized)
        output = render_output(
            resized, outlines, settings.processing.output_format, settings.geometry
        )

        return {
            "name": name,
            "output": output,
            "anchors": len(resized.anchors),
            "duration_ms": (time.time() - start_time) * 1000,
        }

    except Exception as e:
        return {
            "name": name,
            "error": str(e),
            "error_type": type(e).__name__,
            "traceback": traceback.format_exc(),
            "duration_ms": (time.time() - start_time) * 1000,
        }


class TemplateProcessor:
    """Orchestrates parallel resizing of many templates.

    Example:
        processor = TemplateProcessor(SiegecraftSettings())
        stats = processor.process(
            template_paths=[Path("tower.txt"), Path("ram.csv")],
            width=24,
            height=16,
            output_dir=Path("out"),
        )
    """

    def __init__(self, config: SiegecraftSettings, quiet: bool = False) -> None:
        """Initialize processor with configuration.

        Args:
            config: Siegecraft settings
            quiet: Keep log records off the console
        """
        self.config = config
        self.logger = configure_logging(
            log_file=config.logging.log_file,
            console_level=config.logging.log_level,
            file_level=config.logging.file_log_level,
            quiet=quiet,
        )
        self.processing_logger = ProcessingLogger(self.logger)

    def process(
        self,
        template_paths: list[Path],
        width: int,
        height: int,
        output_dir: Path | None = None,
        max_workers: int | None = None,
        progress_callback: Callable[[int, int, str, bool], None] | None = None,
    ) -> ProcessingStats:
        """Resize every template and write the outputs.

        Args:
            template_paths: Templates to process
            width: Target width for every template
            height: Target height for every template
            output_dir: Output directory (next to each template if None)
            max_workers: Maximum worker processes (None = config default)
            progress_callback: Optional callback(completed, total, name, success)

        Returns:
            ProcessingStats with counts, timing and error details

        Raises:
            KeyboardInterrupt: If processing is cancelled by user
        """
        stats = self.processing_logger.stats
        stats.start_time = time.time()

        if max_workers is None:
            max_workers = self.config.processing.max_workers

        output_format = self.config.processing.output_format
        config_dict = self.config.model_dump(mode="json")

        self.logger.info(
            "Starting batch",
            templates=len(template_paths),
            width=width,
            height=height,
            max_workers=max_workers,
            format=output_format.value,
        )

        total = len(template_paths)
        completed = 0
        pending_futures: dict = {}

        with ProcessPoolExecutor(max_workers=max_workers) as executor:
            for path in template_paths:
                self.processing_logger.log_template_start(path.stem, width, height)
                future = executor.submit(process_template, str(path), width, height, config_dict)
                pending_futures[future] = path

            try:
                for future in as_completed(list(pending_futures)):
                    path = pending_futures.pop(future)
                    success = False

                    try:
                        result = future.result()
                    except Exception as e:
                        # Executor-level error
                        self.processing_logger.log_template_error(
                            name=path.stem,
                            error=str(e),
                            error_type=type(e).__name__,
                            traceback=traceback.format_exc(),
                        )
                    else:
                        if "error" in result:
                            self.processing_logger.log_template_error(
                                name=result["name"],
                                error=result["error"],
                                error_type=result["error_type"],
                                traceback=result.get("traceback"),
                            )
                        else:
                            success = self._save(path, result, width, height, output_dir)

                    completed += 1
                    if progress_callback is not None:
                        progress_callback(completed, total, path.stem, success)

            except KeyboardInterrupt:
                self.logger.info("Cancellation requested by user")
                stats.was_cancelled = True
                stats.cancelled_count = len(pending_futures)
                executor.shutdown(wait=True, cancel_futures=True)
                raise

        stats.end_time = time.time()

        self.logger.info(
            "Batch complete",
            processed=stats.processed_count,
            errors=stats.error_count,
            duration_seconds=round(stats.duration_seconds, 2),
        )

        return stats

    def _save(
        self,
        path: Path,
        result: dict[str, Any],
        width: int,
        height: int,
        output_dir: Path | None,
    ) -> bool:
        """Write one worker result; returns False if saving failed."""
        output_path = TemplateWriter.get_resized_path(
            path, width, height, self.config.processing.output_format, output_dir
        )
        try:
            TemplateWriter(output_path).write(result["output"])
        except Exception as e:
            self.processing_logger.log_template_error(
                name=result["name"],
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

        self.processing_logger.log_template_complete(
            name=result["name"],
            anchors=result["anchors"],
            duration_ms=result["duration_ms"],
        )
        return True
