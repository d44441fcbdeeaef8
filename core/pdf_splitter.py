import logging
import math
from dataclasses import dataclass, field
from pathlib import Path

import fitz

from config.settings import (
    DEFAULT_DOCUMENT_NAME,
    DEFAULT_EXTENSION,
    MAX_PAGES_PER_PART,
    MAX_SIZE_FOR_SINGLE_UPLOAD,
)
from core.errors import PartConstructionError, ValidationError
from core.pdf_reader import Source, open_document, read_source
from utils.file_utils import human_size, split_extension

logger = logging.getLogger("pdfparts.splitter")


@dataclass
class Part:
    data: bytes
    name: str
    start_page: int      # 1-indexed, inclusivo
    end_page: int        # 1-indexed, inclusivo

    @property
    def page_range(self) -> str:
        return page_range_label(self.start_page, self.end_page)

    @property
    def page_count(self) -> int:
        return self.end_page - self.start_page + 1

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass
class SplitResult:
    parts: list[Part] = field(default_factory=list)
    total_pages: int = 0
    was_split: bool = False


def part_name(original_name: str, index: int, total: int) -> str:
    """'relatorio.pdf', 2, 3 -> 'relatorio_parte2de3.pdf' (index 1-indexed)."""
    base, ext = split_extension(original_name)
    return f"{base}_parte{index}de{total}.{ext or DEFAULT_EXTENSION}"


def page_range_label(start_page: int, end_page: int) -> str:
    return f"{start_page}-{end_page}"


def plan_ranges(total_pages: int, max_pages: int) -> list[tuple[int, int]]:
    """Intervalos [início, fim) 0-indexed de até max_pages páginas, em ordem."""
    num_parts = math.ceil(total_pages / max_pages)
    ranges = []
    for i in range(num_parts):
        start = i * max_pages
        ranges.append((start, min(start + max_pages, total_pages)))
    return ranges


def _source_name(source: Source) -> str:
    if isinstance(source, (str, Path)):
        return Path(source).name
    name = getattr(source, "name", None)
    if isinstance(name, str) and name:
        return Path(name).name
    return DEFAULT_DOCUMENT_NAME


class PDFSplitter:
    """
    Divide um PDF em partes contíguas de até max_pages páginas.

    Documentos dentro do orçamento (tamanho e páginas, ambos inclusivos)
    passam intactos: a única parte devolvida é o buffer original, sem
    reserialização.
    """

    def __init__(
        self,
        max_pages: int = MAX_PAGES_PER_PART,
        max_bytes: int = MAX_SIZE_FOR_SINGLE_UPLOAD,
    ) -> None:
        if max_pages < 1:
            raise ValueError(f"max_pages deve ser >= 1, recebido {max_pages}")
        if max_bytes < 1:
            raise ValueError(f"max_bytes deve ser >= 1, recebido {max_bytes}")
        self.max_pages = max_pages
        self.max_bytes = max_bytes

    def needs_split(self, size: int, page_count: int) -> bool:
        return not (size <= self.max_bytes and page_count <= self.max_pages)

    def split_if_needed(self, source: Source, original_name: str | None = None) -> SplitResult:
        name = original_name or _source_name(source)
        data = read_source(source)
        doc = open_document(data)
        try:
            total_pages = doc.page_count
            if total_pages == 0:
                logger.error("Documento sem páginas: %s", name)
                raise ValidationError(f"Documento '{name}' não tem páginas ({len(data)} bytes)")

            if not self.needs_split(len(data), total_pages):
                logger.info(
                    "Sem divisão: %s (%d páginas, %s)", name, total_pages, human_size(len(data))
                )
                return SplitResult(
                    parts=[Part(data=data, name=name, start_page=1, end_page=total_pages)],
                    total_pages=total_pages,
                    was_split=False,
                )

            ranges = plan_ranges(total_pages, self.max_pages)
            logger.info(
                "Dividindo %s: %d páginas, %s -> %d partes",
                name, total_pages, human_size(len(data)), len(ranges),
            )
            parts = self._build_parts(doc, ranges, name)
            return SplitResult(parts=parts, total_pages=total_pages, was_split=True)
        finally:
            doc.close()

    def split_by_range(
        self,
        source: Source,
        ranges: list[tuple[int, int]],
        original_name: str | None = None,
    ) -> SplitResult:
        """
        Divide em intervalos explícitos, 0-indexed e inclusivos como em
        fitz.insert_pdf. Sempre reserializa, mesmo com um único intervalo.
        """
        name = original_name or _source_name(source)
        if not ranges:
            raise ValidationError("Nenhum intervalo de páginas informado")

        doc = open_document(read_source(source))
        try:
            total_pages = doc.page_count
            for start, end in ranges:
                if not 0 <= start <= end < total_pages:
                    raise ValidationError(
                        f"Intervalo inválido {start + 1}-{end + 1} para documento de {total_pages} páginas"
                    )
            half_open = [(start, end + 1) for start, end in ranges]
            parts = self._build_parts(doc, half_open, name)
            return SplitResult(parts=parts, total_pages=total_pages, was_split=True)
        finally:
            doc.close()

    def _build_parts(
        self, doc: fitz.Document, ranges: list[tuple[int, int]], original_name: str
    ) -> list[Part]:
        total = len(ranges)
        parts = []
        for i, (start, end) in enumerate(ranges):
            parts.append(self._build_part(doc, start, end, part_name(original_name, i + 1, total), i + 1))
        return parts

    def _build_part(
        self, doc: fitz.Document, start: int, end: int, name: str, index: int
    ) -> Part:
        try:
            with fitz.open() as new_doc:
                new_doc.insert_pdf(doc, from_page=start, to_page=end - 1)
                data = new_doc.tobytes()
        except Exception as exc:
            logger.error("Erro ao montar parte %d (páginas %d-%d): %s", index, start + 1, end, exc)
            raise PartConstructionError(
                f"Falha ao montar parte {index} (páginas {start + 1}-{end}): {exc}",
                part_index=index,
            ) from exc

        logger.debug("Parte %d: páginas %d-%d -> %s (%s)", index, start + 1, end, name, human_size(len(data)))
        return Part(data=data, name=name, start_page=start + 1, end_page=end)


def split_if_needed(source: Source, original_name: str | None = None) -> SplitResult:
    return PDFSplitter().split_if_needed(source, original_name)


# "Dividir para conquistar." - Júlio César
