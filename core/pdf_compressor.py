import asyncio
import logging
from dataclasses import dataclass

import fitz

from core.errors import PartConstructionError, ValidationError
from core.metadata import PDFMetadata
from core.pdf_reader import Source, open_document, read_source
from utils.file_utils import human_size

logger = logging.getLogger("pdfparts.compressor")

# Reescrita estrutural: coleta de lixo com fusão de objetos duplicados,
# streams comprimidos e object streams. Conteúdo das páginas é intocado.
SAVE_OPTIONS = {
    "garbage": 4,
    "deflate": True,
    "use_objstms": 1,
    "clean": True,
    "encryption": fitz.PDF_ENCRYPT_NONE,
}


@dataclass
class CompressionResult:
    data: bytes
    original_size: int
    compressed_size: int
    compression_ratio: float    # percentual; negativo se o arquivo cresceu

    @property
    def grew(self) -> bool:
        return self.compressed_size > self.original_size


def compression_ratio(original_size: int, compressed_size: int) -> float:
    return (original_size - compressed_size) / original_size * 100


class PDFCompressor:
    def __init__(self) -> None:
        self._metadata = PDFMetadata()

    def compress(self, source: Source, remove_metadata: bool = True) -> CompressionResult:
        data = read_source(source)
        original_size = len(data)
        doc = open_document(data)
        try:
            if doc.page_count == 0:
                raise ValidationError(f"Documento sem páginas ({original_size} bytes)")
            if remove_metadata:
                self._metadata.clear_descriptive(doc)
            try:
                compressed = doc.tobytes(**SAVE_OPTIONS)
            except Exception as exc:
                logger.error("Erro na serialização (%s): %s", human_size(original_size), exc)
                raise PartConstructionError(
                    f"Falha ao serializar documento comprimido ({original_size} bytes): {exc}"
                ) from exc
        finally:
            doc.close()

        ratio = compression_ratio(original_size, len(compressed))
        logger.info(
            "Compressao concluida: %s -> %s (%.1f%%)",
            human_size(original_size), human_size(len(compressed)), ratio,
        )
        return CompressionResult(
            data=compressed,
            original_size=original_size,
            compressed_size=len(compressed),
            compression_ratio=ratio,
        )

    async def compress_async(self, source: Source, remove_metadata: bool = True) -> CompressionResult:
        """
        Mesma operação de compress(), executada numa thread de trabalho.
        O MuPDF serializa numa única chamada nativa, então é a thread que
        libera o event loop durante documentos grandes.
        """
        return await asyncio.to_thread(self.compress, source, remove_metadata)


def compress(source: Source, remove_metadata: bool = True) -> CompressionResult:
    return PDFCompressor().compress(source, remove_metadata)


# "A arte de comprimir é a arte de preservar o essencial." - Anônimo
