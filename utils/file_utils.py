import logging
import logging.handlers
from pathlib import Path

from config.settings import LOG_DIR, LOG_FORMAT, LOG_DATE_FORMAT, LOG_BACKUP_COUNT


def setup_logging(debug: bool = False, log_dir: Path = LOG_DIR) -> logging.Logger:
    """
    Configura logging rotacionado por dia.
    Retorna o logger raiz da aplicação.
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "pdfparts.log"

    root = logging.getLogger("pdfparts")
    root.setLevel(logging.DEBUG if debug else logging.INFO)

    if root.handlers:
        return root

    # Handler para arquivo - rotação diária
    file_handler = logging.handlers.TimedRotatingFileHandler(
        filename=log_file,
        when="midnight",
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    root.addHandler(file_handler)

    # Handler para console (stderr) apenas em modo debug
    if debug:
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
        root.addHandler(console_handler)

    return root


def human_size(num_bytes: int) -> str:
    """Converte bytes em string legível (KB, MB, GB)."""
    for unit in ("B", "KB", "MB", "GB", "TB"):
        if abs(num_bytes) < 1024.0:
            return f"{num_bytes:.1f} {unit}"
        num_bytes /= 1024.0  # type: ignore[assignment]
    return f"{num_bytes:.1f} PB"


def list_pdfs(directory: Path) -> list[Path]:
    """Lista todos os PDFs em um diretório (não recursivo)."""
    return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix.lower() == ".pdf")


def split_extension(name: str) -> tuple[str, str]:
    """
    Separa nome base e extensão (sem o ponto).
    "relatorio.final.pdf" -> ("relatorio.final", "pdf"); "scan" -> ("scan", "").
    """
    stem, dot, ext = name.rpartition(".")
    if not dot or not stem:
        return name, ""
    return stem, ext


def write_outputs(output_dir: Path, files: list[tuple[str, bytes]]) -> list[Path]:
    """Grava (nome, bytes) em output_dir, criando o diretório se preciso."""
    output_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for name, data in files:
        path = output_dir / Path(name).name
        path.write_bytes(data)
        written.append(path)
    return written


def validate_pdf_path(path: Path) -> None:
    """
    Valida que o caminho aponta para um PDF legível.
    Lança ValueError com mensagem descritiva em caso de falha.
    """
    if not path.exists():
        raise ValueError(f"Arquivo não encontrado: {path}")
    if not path.is_file():
        raise ValueError(f"Não é um arquivo: {path}")
    if path.suffix.lower() != ".pdf":
        raise ValueError(f"Extensão inválida (esperado .pdf): {path.suffix}")
