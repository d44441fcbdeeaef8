import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from core.errors import PDFPartsError
from core.upload_preparer import PreparedUpload, UploadPreparer
from utils.file_utils import list_pdfs, write_outputs

logger = logging.getLogger("pdfparts.batch")


@dataclass
class FileResult:
    path: Path
    success: bool
    duration_s: float
    message: str = ""
    output_paths: list[Path] = field(default_factory=list)


@dataclass
class BatchReport:
    total: int
    succeeded: int
    failed: int
    duration_s: float
    results: list[FileResult] = field(default_factory=list)

    @property
    def success_rate(self) -> float:
        return (self.succeeded / self.total * 100) if self.total > 0 else 0.0

    def summary(self) -> str:
        return (
            f"Lote concluído: {self.succeeded}/{self.total} arquivos"
            f" ({self.success_rate:.0f}% sucesso) em {self.duration_s:.1f}s"
        )


def describe_upload(upload: PreparedUpload) -> str:
    if upload.was_split:
        return f"{len(upload.parts)} partes, {upload.total_pages} páginas"
    return f"sem divisão, {upload.total_pages} páginas"


class BatchProcessor:
    """
    Prepara múltiplos PDFs em lote e grava as partes em output_dir.

    Uso típico:
        processor = BatchProcessor(output_dir=Path("data_output"))
        report = processor.run(input_dir=Path("data_input"), on_progress=update_ui)
    """

    def __init__(self, output_dir: Path, preparer: UploadPreparer | None = None) -> None:
        self._output_dir = output_dir
        self._output_dir.mkdir(parents=True, exist_ok=True)
        self._preparer = preparer or UploadPreparer()

    def run(
        self,
        input_dir: Path,
        on_progress: Callable[[int, int, str], None] | None = None,
        file_list: list[Path] | None = None,
    ) -> BatchReport:
        """
        Itera sobre PDFs do diretório e prepara cada um.

        Args:
            input_dir: diretório com PDFs de entrada.
            on_progress: callback (current, total, filename).
            file_list: se fornecido, usa esta lista ao invés do diretório.
        """
        files = file_list or list_pdfs(input_dir)
        total = len(files)
        results: list[FileResult] = []
        batch_start = time.monotonic()

        logger.info("Iniciando lote: %d arquivos em %s", total, input_dir)

        for idx, pdf_path in enumerate(files):
            if on_progress:
                on_progress(idx + 1, total, pdf_path.name)
            results.append(self._process_one(pdf_path))

        batch_duration = time.monotonic() - batch_start
        succeeded = sum(1 for r in results if r.success)
        report = BatchReport(
            total=total,
            succeeded=succeeded,
            failed=total - succeeded,
            duration_s=batch_duration,
            results=results,
        )
        logger.info(report.summary())
        return report

    def _process_one(self, pdf_path: Path) -> FileResult:
        start = time.monotonic()
        try:
            upload = self._preparer.prepare(pdf_path)
            written = write_outputs(self._output_dir, [(p.name, p.data) for p in upload.parts])
        except (PDFPartsError, OSError) as exc:
            logger.error("Falha ao processar %s: %s", pdf_path.name, exc)
            return FileResult(
                path=pdf_path,
                success=False,
                duration_s=time.monotonic() - start,
                message=str(exc),
            )
        return FileResult(
            path=pdf_path,
            success=True,
            duration_s=time.monotonic() - start,
            message=describe_upload(upload),
            output_paths=written,
        )
