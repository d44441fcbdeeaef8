import logging
from pathlib import Path
from typing import BinaryIO, Union

import fitz  # pymupdf

from core.errors import ParseError, ReadError
from utils.file_utils import human_size

logger = logging.getLogger("pdfparts.reader")

Source = Union[bytes, bytearray, memoryview, str, Path, BinaryIO]


def describe_source(source: Source) -> str:
    if isinstance(source, (str, Path)):
        return str(source)
    if isinstance(source, (bytes, bytearray, memoryview)):
        return f"<buffer {len(source)} bytes>"
    return getattr(source, "name", None) or type(source).__name__


def read_source(source: Source) -> bytes:
    """
    Carrega a origem inteira em memória.
    Bytes são devolvidos sem cópia; caminhos e arquivos abertos são lidos.
    """
    if isinstance(source, bytes):
        return source
    if isinstance(source, (bytearray, memoryview)):
        return bytes(source)

    description = describe_source(source)
    try:
        if isinstance(source, (str, Path)):
            data = Path(source).read_bytes()
        elif hasattr(source, "read"):
            data = source.read()
        else:
            raise ReadError(f"Tipo de origem não suportado: {type(source).__name__}", description)
    except OSError as exc:
        logger.error("Falha ao ler %s: %s", description, exc)
        raise ReadError(f"Falha ao ler {description}: {exc}", description) from exc

    if not isinstance(data, (bytes, bytearray)):
        raise ReadError(f"Leitura de {description} não retornou bytes", description)
    logger.debug("Origem carregada: %s (%s)", description, human_size(len(data)))
    return bytes(data)


def has_encryption(doc: fitz.Document) -> bool:
    """True se o documento traz dicionário de criptografia, mesmo já desbloqueado."""
    return bool(doc.is_encrypted or (doc.metadata or {}).get("encryption"))


def open_document(data: bytes, permissive: bool = True) -> fitz.Document:
    """
    Rotina única de parse, compartilhada por splitter e compressor.

    Em modo permissivo, marcadores de criptografia que não bloqueiam a
    leitura (senha de usuário vazia) são ignorados; só um documento que
    exige senha de fato é recusado.
    """
    size = len(data)
    if size == 0:
        raise ParseError("Buffer vazio, nada para abrir", size)

    try:
        doc = fitz.open(stream=data, filetype="pdf")
    except Exception as exc:
        logger.error("PDF ilegível (%s): %s", human_size(size), exc)
        raise ParseError(f"Documento corrompido ou não é PDF ({size} bytes): {exc}", size) from exc

    if not permissive and has_encryption(doc):
        doc.close()
        raise ParseError(f"Documento criptografado ({size} bytes)", size)

    if doc.needs_pass and not doc.authenticate(""):
        doc.close()
        raise ParseError(f"Documento protegido por senha ({size} bytes)", size)

    return doc


class PDFReader:
    """
    Carrega e abre um PDF em memória.
    Mantém o documento aberto enquanto o objeto existir; fechar com close().
    """

    def __init__(self, source: Source, permissive: bool = True) -> None:
        self._source = describe_source(source)
        self._data = read_source(source)
        self._doc = open_document(self._data, permissive=permissive)
        logger.info("PDF aberto: %s (%d páginas)", self._source, self._doc.page_count)

    def close(self) -> None:
        if self._doc and not self._doc.is_closed:
            self._doc.close()
            logger.debug("PDF fechado: %s", self._source)

    def __enter__(self) -> "PDFReader":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    @property
    def doc(self) -> fitz.Document:
        return self._doc

    @property
    def data(self) -> bytes:
        return self._data

    @property
    def size(self) -> int:
        return len(self._data)

    @property
    def page_count(self) -> int:
        return self._doc.page_count

    @property
    def is_encrypted(self) -> bool:
        return has_encryption(self._doc)
