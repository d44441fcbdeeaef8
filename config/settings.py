import json
import logging
from pathlib import Path
from dataclasses import dataclass, asdict

logger = logging.getLogger("pdfparts.settings")

# Diretórios de trabalho
APP_DIR = Path.home() / ".pdfparts"
LOG_DIR = APP_DIR / "logs"
CONFIG_FILE = APP_DIR / "config.json"
DEFAULT_OUTPUT_DIR = Path("data_output")

# Orçamento de upload: acima disso o documento é dividido
MAX_PAGES_PER_PART = 20
MAX_SIZE_FOR_SINGLE_UPLOAD = 8 * 1024 * 1024  # 8 MiB

# Nome usado quando o chamador não informa o nome original
DEFAULT_DOCUMENT_NAME = "documento.pdf"
DEFAULT_EXTENSION = "pdf"

# Logging
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
LOG_BACKUP_COUNT = 7          # Manter 7 dias de logs

APP_VERSION = "0.1.0"
APP_NAME = "pdfparts"


@dataclass
class UserPreferences:
    last_dir: str = ""
    output_dir: str = str(DEFAULT_OUTPUT_DIR)
    compress: bool = True
    remove_metadata: bool = True
    debug_mode: bool = False

    @classmethod
    def load(cls, path: Path = CONFIG_FILE) -> "UserPreferences":
        if not path.exists():
            return cls()
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return cls(**{k: v for k, v in data.items() if k in cls.__dataclass_fields__})
        except (OSError, ValueError, TypeError) as exc:
            logger.warning("Falha ao carregar config: %s - usando padrões", exc)
            return cls()

    def save(self, path: Path = CONFIG_FILE) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(
            json.dumps(asdict(self), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
        logger.debug("Preferências salvas em %s", path)

