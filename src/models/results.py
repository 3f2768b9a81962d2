"""
Models for DANFE conversion results.
"""
from typing import List, Optional
from datetime import datetime
from pathlib import Path
from pydantic import BaseModel, Field
from .document import PresentationDocument, ProcessingStatus


class ProcessingError(BaseModel):
    """Why one XML could not be converted"""
    filename: str
    error_type: str
    error_message: str
    timestamp: datetime = Field(default_factory=datetime.now)


class ProcessingResult(BaseModel):
    """Outcome for one XML: the assembled DANFE data and the written .html"""
    filename: str
    status: ProcessingStatus
    document: Optional[PresentationDocument] = None
    output_path: Optional[Path] = None
    error: Optional[ProcessingError] = None
    processing_time_seconds: float = 0.0


class BatchProcessingResult(BaseModel):
    """Outcome of a conversion batch"""
    total_files: int
    successful: int = 0
    failed: int = 0
    cancelled: int = 0

    results: List[ProcessingResult] = Field(default_factory=list)
    errors: List[ProcessingError] = Field(default_factory=list)

    start_time: datetime = Field(default_factory=datetime.now)
    end_time: Optional[datetime] = None

    @property
    def total_time_seconds(self) -> float:
        if not self.end_time:
            return 0.0
        return (self.end_time - self.start_time).total_seconds()

    @property
    def success_rate(self) -> float:
        """Converted files as a percentage of the batch"""
        return (self.successful / self.total_files) * 100 if self.total_files else 0.0

    @property
    def output_paths(self) -> List[Path]:
        """Written DANFE files, in completion order"""
        return [r.output_path for r in self.results if r.output_path]

    def add_result(self, result: ProcessingResult):
        self.results.append(result)

        if result.status == ProcessingStatus.COMPLETED:
            self.successful += 1
        elif result.status == ProcessingStatus.CANCELLED:
            self.cancelled += 1
        elif result.status == ProcessingStatus.ERROR:
            self.failed += 1
            if result.error:
                self.errors.append(result.error)

    def finalize(self):
        self.end_time = datetime.now()

    def summary(self) -> str:
        return (f"{self.successful} converted, {self.failed} failed, "
                f"{self.cancelled} cancelled in {self.total_time_seconds:.2f}s")
