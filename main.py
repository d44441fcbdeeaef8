"""
pdfparts - Entry point CLI.

Prepara PDFs para upload: divide documentos acima do orçamento de páginas
ou tamanho e comprime cada parte.

Uso:
    python main.py caminho/arquivo.pdf
    python main.py --output-dir saida/ caminho/arquivo.pdf
    python main.py --pages 1-10,11-30 caminho/arquivo.pdf
    python main.py --no-compress --keep-metadata caminho/arquivo.pdf
    python main.py --batch caminho/diretorio/
    python main.py --debug caminho/arquivo.pdf
"""

import sys
from pathlib import Path

import click

# Adiciona o diretório do projeto ao sys.path para imports absolutos
sys.path.insert(0, str(Path(__file__).parent))

from config.settings import (
    APP_NAME,
    APP_VERSION,
    CONFIG_FILE,
    LOG_DIR,
    MAX_PAGES_PER_PART,
    MAX_SIZE_FOR_SINGLE_UPLOAD,
    UserPreferences,
)
from core.errors import PartConstructionError, PDFPartsError
from utils.file_utils import human_size, setup_logging, validate_pdf_path, write_outputs

STAGE_LABELS = {
    "read": "leitura",
    "parse": "parse",
    "serialize": "serialização",
    "validation": "validação",
}


def describe_error(exc: PDFPartsError) -> str:
    if isinstance(exc, PartConstructionError) and exc.part_index is not None:
        stage = f"parte {exc.part_index}"
    else:
        stage = STAGE_LABELS.get(exc.stage, exc.stage)
    return f"Erro ({stage}): {exc.detail}"


def parse_page_ranges(value: str) -> list[tuple[int, int]]:
    """'1-10,11,12-20' -> [(0, 9), (10, 10), (11, 19)] (0-indexed, inclusivo)."""
    ranges = []
    for chunk in value.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        start, _, end = chunk.partition("-")
        try:
            first = int(start)
            last = int(end) if end else first
        except ValueError as exc:
            raise click.BadParameter(f"intervalo inválido: '{chunk}'") from exc
        if first < 1 or last < first:
            raise click.BadParameter(f"intervalo inválido: '{chunk}'")
        ranges.append((first - 1, last - 1))
    if not ranges:
        raise click.BadParameter("nenhum intervalo informado")
    return ranges


@click.command()
@click.version_option(APP_VERSION, prog_name=APP_NAME)
@click.argument("path", type=click.Path(exists=True, path_type=Path))
@click.option("--output-dir", "-o", type=click.Path(file_okay=False, path_type=Path), default=None,
              help="Diretório de saída das partes.")
@click.option("--batch", is_flag=True, default=False, help="Modo lote: PATH deve ser um diretório de PDFs.")
@click.option("--pages", default=None, help="Intervalos explícitos, ex.: 1-10,11-30.")
@click.option("--max-pages", type=click.IntRange(min=1), default=MAX_PAGES_PER_PART, show_default=True,
              help="Máximo de páginas por parte.")
@click.option("--max-mb", type=click.FloatRange(min=0, min_open=True), default=None,
              help="Tamanho máximo (MB) para upload sem divisão. Padrão: 8.")
@click.option("--no-compress", is_flag=True, default=False, help="Não comprime as partes.")
@click.option("--keep-metadata", is_flag=True, default=False, help="Preserva título, autor etc.")
@click.option("--debug", is_flag=True, default=False, help="Habilita logs de debug.")
@click.option("--log-dir", type=click.Path(file_okay=False, path_type=Path), default=LOG_DIR,
              envvar="PDFPARTS_LOG_DIR", help="Diretório dos logs rotacionados.")
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path), default=CONFIG_FILE,
              envvar="PDFPARTS_CONFIG", help="Arquivo de preferências JSON.")
def main(
    path: Path,
    output_dir: Path | None,
    batch: bool,
    pages: str | None,
    max_pages: int,
    max_mb: float | None,
    no_compress: bool,
    keep_metadata: bool,
    debug: bool,
    log_dir: Path,
    config_path: Path,
) -> None:
    """pdfparts - Divide e comprime PDFs para upload."""
    prefs = UserPreferences.load(config_path)
    debug = debug or prefs.debug_mode
    logger = setup_logging(debug=debug, log_dir=log_dir)
    logger.info("%s iniciando (batch=%s, debug=%s)", APP_NAME, batch, debug)

    from core.pdf_compressor import PDFCompressor
    from core.pdf_splitter import PDFSplitter
    from core.upload_preparer import UploadPreparer

    max_bytes = int(max_mb * 1024 * 1024) if max_mb else MAX_SIZE_FOR_SINGLE_UPLOAD
    preparer = UploadPreparer(
        splitter=PDFSplitter(max_pages=max_pages, max_bytes=max_bytes),
        compressor=PDFCompressor(),
        compress=prefs.compress and not no_compress,
        remove_metadata=prefs.remove_metadata and not keep_metadata,
    )
    out_dir = output_dir or Path(prefs.output_dir)

    if batch:
        _run_batch_cli(path, out_dir, preparer)
    elif pages:
        _run_ranges_cli(path, out_dir, parse_page_ranges(pages))
    else:
        _run_single_cli(path, out_dir, preparer)

    prefs.last_dir = str(path.resolve().parent if path.is_file() else path.resolve())
    prefs.save(config_path)


def _run_single_cli(path: Path, output_dir: Path, preparer) -> None:
    try:
        validate_pdf_path(path)
    except ValueError as exc:
        click.echo(f"Erro: {exc}", err=True)
        sys.exit(1)

    try:
        upload = preparer.prepare(path)
    except PDFPartsError as exc:
        click.echo(describe_error(exc), err=True)
        sys.exit(1)

    written = write_outputs(output_dir, [(p.name, p.data) for p in upload.parts])
    if upload.was_split:
        click.echo(f"Documento dividido em {len(upload.parts)} partes ({upload.total_pages} páginas total)")
    else:
        click.echo(f"Documento dentro do limite ({upload.total_pages} páginas)")
    for part, out_path in zip(upload.parts, written):
        flag = "comprimido" if part.compressed else "original"
        click.echo(
            f"  {out_path.name:<40} | pags {part.page_range:<9} | {human_size(part.final_size)} ({flag})"
        )


def _run_ranges_cli(path: Path, output_dir: Path, ranges: list[tuple[int, int]]) -> None:
    from core.pdf_splitter import PDFSplitter

    try:
        result = PDFSplitter().split_by_range(path, ranges)
    except PDFPartsError as exc:
        click.echo(describe_error(exc), err=True)
        sys.exit(1)

    written = write_outputs(output_dir, [(p.name, p.data) for p in result.parts])
    click.echo(f"{len(result.parts)} partes gravadas em {output_dir}")
    for part, out_path in zip(result.parts, written):
        click.echo(f"  {out_path.name:<40} | pags {part.page_range:<9} | {human_size(part.size)}")


def _run_batch_cli(path: Path, output_dir: Path, preparer) -> None:
    """Modo lote - imprime relatório no terminal."""
    if not path.is_dir():
        click.echo(f"Erro: '{path}' não é um diretório.", err=True)
        sys.exit(1)

    from core.batch_processor import BatchProcessor

    processor = BatchProcessor(output_dir, preparer=preparer)

    def on_progress(current: int, total: int, filename: str) -> None:
        click.echo(f"  [{current}/{total}] {filename}")

    click.echo(f"Processando PDFs em: {path}")
    report = processor.run(path, on_progress)
    click.echo(f"\n{report.summary()}")

    for result in report.results:
        status = "OK  " if result.success else "ERRO"
        click.echo(f"  {status} | {result.path.name:<40} | {result.duration_s:.2f}s | {result.message}")


# "A mente que se abre a uma nova ideia jamais voltará ao seu tamanho original." - Oliver Wendell Holmes
if __name__ == "__main__":
    main()
