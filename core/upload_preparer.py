import logging
from dataclasses import dataclass, field
from typing import Callable

from core.pdf_compressor import PDFCompressor
from core.pdf_reader import Source
from core.pdf_splitter import PDFSplitter

logger = logging.getLogger("pdfparts.preparer")


@dataclass
class PreparedPart:
    name: str
    page_range: str
    data: bytes
    original_size: int
    compressed: bool = False

    @property
    def final_size(self) -> int:
        return len(self.data)


@dataclass
class PreparedUpload:
    parts: list[PreparedPart] = field(default_factory=list)
    total_pages: int = 0
    was_split: bool = False

    @property
    def total_size(self) -> int:
        return sum(p.final_size for p in self.parts)


class UploadPreparer:
    """
    Prepara um PDF para o pipeline de upload: divide se necessário e
    comprime cada parte.

    Uso típico:
        preparer = UploadPreparer()
        upload = preparer.prepare(Path("relatorio.pdf"), on_progress=update_ui)
        for part in upload.parts:
            enviar(part.name, part.data)
    """

    def __init__(
        self,
        splitter: PDFSplitter | None = None,
        compressor: PDFCompressor | None = None,
        compress: bool = True,
        remove_metadata: bool = True,
    ) -> None:
        self._splitter = splitter or PDFSplitter()
        self._compressor = compressor or PDFCompressor()
        self._compress = compress
        self._remove_metadata = remove_metadata

    def prepare(
        self,
        source: Source,
        original_name: str | None = None,
        on_progress: Callable[[int, int, str], None] | None = None,
    ) -> PreparedUpload:
        split = self._splitter.split_if_needed(source, original_name)
        total = len(split.parts)
        if split.was_split:
            logger.info("Documento dividido em %d partes (%d páginas)", total, split.total_pages)

        prepared = []
        for i, part in enumerate(split.parts):
            if on_progress:
                on_progress(i + 1, total, part.name)

            data = part.data
            compressed = False
            if self._compress:
                result = self._compressor.compress(part.data, remove_metadata=self._remove_metadata)
                # Só fica com a versão "comprimida" se ela de fato encolheu
                if result.compressed_size < part.size:
                    data = result.data
                    compressed = True
                else:
                    logger.debug(
                        "Compressao de %s não reduziu (%.1f%%), mantendo original",
                        part.name, result.compression_ratio,
                    )

            prepared.append(
                PreparedPart(
                    name=part.name,
                    page_range=part.page_range,
                    data=data,
                    original_size=part.size,
                    compressed=compressed,
                )
            )

        return PreparedUpload(parts=prepared, total_pages=split.total_pages, was_split=split.was_split)
