import logging
from dataclasses import dataclass, asdict

import fitz

logger = logging.getLogger("pdfparts.metadata")

# Campos descritivos: não afetam o conteúdo renderizado das páginas
DESCRIPTIVE_KEYS = ("title", "author", "subject", "keywords", "producer", "creator")


@dataclass
class Metadata:
    title: str = ""
    author: str = ""
    subject: str = ""
    keywords: str = ""
    creator: str = ""
    producer: str = ""
    creation_date: str = ""
    mod_date: str = ""

    def to_fitz_dict(self) -> dict[str, str]:
        return {
            "title": self.title,
            "author": self.author,
            "subject": self.subject,
            "keywords": self.keywords,
            "creator": self.creator,
            "producer": self.producer,
            "creationDate": self.creation_date,
            "modDate": self.mod_date,
        }

    def as_display_dict(self) -> dict[str, str]:
        """Retorna apenas campos preenchidos, para exibição."""
        raw = asdict(self)
        return {k: v for k, v in raw.items() if v}

    @property
    def has_descriptive(self) -> bool:
        return any(getattr(self, key) for key in DESCRIPTIVE_KEYS)


class PDFMetadata:
    """Lê e altera metadados de PDFs em memória via PyMuPDF."""

    def read(self, doc: fitz.Document) -> Metadata:
        raw = doc.metadata or {}
        return Metadata(
            title=raw.get("title") or "",
            author=raw.get("author") or "",
            subject=raw.get("subject") or "",
            keywords=raw.get("keywords") or "",
            creator=raw.get("creator") or "",
            producer=raw.get("producer") or "",
            creation_date=raw.get("creationDate") or "",
            mod_date=raw.get("modDate") or "",
        )

    def apply(self, doc: fitz.Document, metadata: Metadata) -> None:
        """Escreve metadados no documento aberto. Não salva."""
        doc.set_metadata(metadata.to_fitz_dict())

    def clear_descriptive(self, doc: fitz.Document) -> Metadata:
        """
        Esvazia título, autor, assunto, palavras-chave, produtor e criador.
        Datas são preservadas. Retorna os metadados anteriores.
        """
        previous = self.read(doc)
        cleared = Metadata(
            creation_date=previous.creation_date,
            mod_date=previous.mod_date,
        )
        self.apply(doc, cleared)
        if previous.has_descriptive:
            logger.debug(
                "Metadados descritivos removidos (título: '%s', autor: '%s')",
                previous.title,
                previous.author,
            )
        return previous
