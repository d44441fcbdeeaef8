from .errors import PDFPartsError, ReadError, ParseError, PartConstructionError, ValidationError
from .pdf_reader import PDFReader
from .metadata import PDFMetadata
from .pdf_splitter import PDFSplitter, SplitResult, Part, split_if_needed
from .pdf_compressor import PDFCompressor, CompressionResult, compress
from .upload_preparer import UploadPreparer
from .batch_processor import BatchProcessor

__all__ = [
    "PDFPartsError",
    "ReadError",
    "ParseError",
    "PartConstructionError",
    "ValidationError",
    "PDFReader",
    "PDFMetadata",
    "PDFSplitter",
    "SplitResult",
    "Part",
    "split_if_needed",
    "PDFCompressor",
    "CompressionResult",
    "compress",
    "UploadPreparer",
    "BatchProcessor",
]
