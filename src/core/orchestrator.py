"""
Processing orchestrator - converts batches of NF-e XML files to DANFE HTML.
"""
from typing import List, Optional, Union
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import tzinfo
from pathlib import Path
import threading
import time
from loguru import logger

from models import (
    BatchProcessingResult,
    ProcessingResult,
    ProcessingStatus,
    ProcessingError,
)
from utils import FileHandler
from core.nfe_xml import parse
from core.renderer import Danfe


class ProcessingOrchestrator:
    """
    Orchestrates concurrent conversion of NF-e XML files.
    Each file is parsed, assembled and rendered independently; the
    pipeline holds no shared state, so files run on a thread pool.
    """

    def __init__(self,
                 output_dir: Path,
                 max_workers: int = 3,
                 tz: Union[tzinfo, str, None] = None,
                 template_path: Optional[Path] = None):
        """
        Initialize orchestrator.

        Args:
            output_dir: Directory receiving the .html files
            max_workers: Maximum concurrent conversions
            tz: Zone for the protocol time (None = local zone)
            template_path: Optional DANFE template override
        """
        self.output_dir = Path(output_dir)
        self.max_workers = max_workers
        self.tz = tz
        self.template_path = template_path

        self._cancel_flag = threading.Event()

    def process_files(self, file_paths: List[Path]) -> BatchProcessingResult:
        """
        Convert every XML found in `file_paths` (files, folders or ZIPs).

        Returns:
            BatchProcessingResult with one result per XML
        """
        self._cancel_flag.clear()

        logger.info(f"Preparing {len(file_paths)} inputs for processing")
        xml_files = FileHandler.prepare_files_for_processing(file_paths)

        if not xml_files:
            logger.warning("No XML files to process")
            return BatchProcessingResult(total_files=0)

        self.output_dir.mkdir(parents=True, exist_ok=True)
        batch_result = BatchProcessingResult(total_files=len(xml_files))

        logger.info(f"Starting conversion of {len(xml_files)} XMLs (max workers: {self.max_workers})")

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            future_to_file = {}
            taken = set()
            for filename, xml_bytes in xml_files:
                if self._cancel_flag.is_set():
                    logger.info("Processing cancelled before submission")
                    break
                output_path = self._output_path_for(filename, taken)
                future = executor.submit(self._process_single_file, filename, xml_bytes, output_path)
                future_to_file[future] = filename

            for future in as_completed(future_to_file):
                filename = future_to_file[future]
                try:
                    batch_result.add_result(future.result())
                except Exception as e:
                    logger.error(f"Unexpected error processing {filename}: {e}")
                    batch_result.add_result(self._error_result(filename, e))

        batch_result.finalize()

        logger.info(f"Batch conversion complete: {batch_result.summary()}")

        return batch_result

    def _output_path_for(self, filename: str, taken: set) -> Path:
        """
        <stem>.html in the output folder. Inputs sharing a name within the
        batch (same file name in two folders or ZIP entries) get _2, _3...
        """
        stem = Path(filename).stem
        name = f"{stem}.html"
        counter = 1
        while name.lower() in taken:
            counter += 1
            name = f"{stem}_{counter}.html"
        taken.add(name.lower())
        return self.output_dir / name

    def _process_single_file(self, filename: str, xml_bytes: bytes, output_path: Path) -> ProcessingResult:
        """Parse, assemble and render one XML, writing it to output_path"""
        if self._cancel_flag.is_set():
            logger.info(f"Skipping {filename} due to cancellation")
            return ProcessingResult(filename=filename, status=ProcessingStatus.CANCELLED)

        start = time.perf_counter()
        danfe = Danfe.from_nfe(parse(xml_bytes), tz=self.tz, template_path=self.template_path)
        document = danfe.document()

        if document is None:
            return ProcessingResult(
                filename=filename,
                status=ProcessingStatus.ERROR,
                error=ProcessingError(
                    filename=filename,
                    error_type="InvalidDocument",
                    error_message="Arquivo não contém uma NF-e válida"
                ),
                processing_time_seconds=time.perf_counter() - start
            )

        html = danfe.to_html()
        output_path.write_text(html, encoding="utf-8")
        logger.debug(f"Wrote {output_path}")

        return ProcessingResult(
            filename=filename,
            status=ProcessingStatus.COMPLETED,
            document=document,
            output_path=output_path,
            processing_time_seconds=time.perf_counter() - start
        )

    @staticmethod
    def _error_result(filename: str, error: Exception) -> ProcessingResult:
        return ProcessingResult(
            filename=filename,
            status=ProcessingStatus.ERROR,
            error=ProcessingError(
                filename=filename,
                error_type=type(error).__name__,
                error_message=str(error)
            )
        )

    def cancel(self):
        """Cancel ongoing processing"""
        logger.warning("Cancellation requested")
        self._cancel_flag.set()

    def is_cancelled(self) -> bool:
        """Check if processing is cancelled"""
        return self._cancel_flag.is_set()
