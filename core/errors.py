"""
Taxonomia de erros do preparo de documentos.

Cada erro carrega a etapa (stage) em que o pipeline quebrou, para que o
chamador mostre uma mensagem específica em vez de um "algo deu errado".
"""


class PDFPartsError(Exception):
    stage = "unknown"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"[{self.stage}] {self.detail}"


class ReadError(PDFPartsError):
    """Os bytes de origem não puderam ser carregados."""

    stage = "read"

    def __init__(self, detail: str, source: str = "") -> None:
        super().__init__(detail)
        self.source = source


class ParseError(PDFPartsError):
    """Bytes carregados, mas não formam um PDF legível."""

    stage = "parse"

    def __init__(self, detail: str, size: int = 0) -> None:
        super().__init__(detail)
        self.size = size


class PartConstructionError(PDFPartsError):
    """
    Parse ok, mas a montagem ou serialização de uma saída falhou.
    part_index é 1-indexed; None quando a saída é o documento inteiro.
    """

    def __init__(self, detail: str, part_index: int | None = None) -> None:
        super().__init__(detail)
        self.part_index = part_index

    @property
    def stage(self) -> str:  # type: ignore[override]
        return "part" if self.part_index is not None else "serialize"


class ValidationError(PDFPartsError):
    """Documento estruturalmente válido, mas recusado por política."""

    stage = "validation"
