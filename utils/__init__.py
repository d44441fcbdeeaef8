from .file_utils import setup_logging, human_size, list_pdfs, split_extension, write_outputs

__all__ = ["setup_logging", "human_size", "list_pdfs", "split_extension", "write_outputs"]
