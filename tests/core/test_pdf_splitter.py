import io

import pytest

from config.settings import MAX_PAGES_PER_PART, MAX_SIZE_FOR_SINGLE_UPLOAD
from core.errors import ParseError, PartConstructionError, ReadError, ValidationError
from core.pdf_splitter import PDFSplitter, part_name, plan_ranges, split_if_needed


def test_default_budget():
    assert MAX_PAGES_PER_PART == 20
    assert MAX_SIZE_FOR_SINGLE_UPLOAD == 8 * 1024 * 1024
    splitter = PDFSplitter()
    assert splitter.max_pages == 20
    assert splitter.max_bytes == 8 * 1024 * 1024


def test_split_45_pages(large_pdf_path, read_texts):
    result = split_if_needed(large_pdf_path)
    assert result.was_split
    assert result.total_pages == 45
    assert [p.page_range for p in result.parts] == ["1-20", "21-40", "41-45"]
    assert [p.name for p in result.parts] == [
        "relatorio_parte1de3.pdf",
        "relatorio_parte2de3.pdf",
        "relatorio_parte3de3.pdf",
    ]
    assert [p.page_count for p in result.parts] == [20, 20, 5]
    assert len(read_texts(result.parts[2].data)) == 5


def test_split_preserves_every_page_in_order(make_pdf, read_texts):
    data = make_pdf(45)
    result = split_if_needed(data, "doc.pdf")
    pages = [text for part in result.parts for text in read_texts(part.data)]
    assert pages == read_texts(data)
    assert pages[0] == "Pagina 1 do documento de teste."
    assert pages[-1] == "Pagina 45 do documento de teste."


def test_small_document_passthrough(sample_pdf_bytes):
    result = split_if_needed(sample_pdf_bytes, "curto.pdf")
    assert not result.was_split
    assert result.total_pages == 5
    assert len(result.parts) == 1
    part = result.parts[0]
    assert part.data is sample_pdf_bytes
    assert part.name == "curto.pdf"
    assert part.page_range == "1-5"


def test_boundary_is_not_split(make_pdf):
    data = make_pdf(20)
    splitter = PDFSplitter(max_pages=20, max_bytes=len(data))
    result = splitter.split_if_needed(data, "limite.pdf")
    assert not result.was_split
    assert result.parts[0].data == data


def test_one_byte_over_size_budget_splits(make_pdf):
    data = make_pdf(20)
    splitter = PDFSplitter(max_pages=20, max_bytes=len(data) - 1)
    result = splitter.split_if_needed(data, "limite.pdf")
    assert result.was_split
    assert len(result.parts) == 1
    assert result.parts[0].name == "limite_parte1de1.pdf"
    assert result.parts[0].page_range == "1-20"


def test_split_21_pages(make_pdf):
    result = split_if_needed(make_pdf(21), "ata.pdf")
    assert result.was_split
    assert [p.page_range for p in result.parts] == ["1-20", "21-21"]


def test_ranges_are_contiguous(make_pdf):
    result = PDFSplitter(max_pages=7).split_if_needed(make_pdf(30), "x.pdf")
    assert len(result.parts) == 5
    for previous, current in zip(result.parts, result.parts[1:]):
        assert previous.end_page + 1 == current.start_page
    assert result.parts[0].start_page == 1
    assert result.parts[-1].end_page == 30


@pytest.mark.parametrize(
    "total, max_pages, expected",
    [(45, 20, 3), (21, 20, 2), (40, 20, 2), (1, 20, 1), (100, 1, 100)],
)
def test_plan_ranges_part_count(total, max_pages, expected):
    ranges = plan_ranges(total, max_pages)
    assert len(ranges) == expected
    assert ranges[0][0] == 0
    assert ranges[-1][1] == total


def test_zero_pages_rejected(empty_pdf_bytes):
    with pytest.raises(ValidationError) as excinfo:
        split_if_needed(empty_pdf_bytes, "vazio.pdf")
    assert excinfo.value.stage == "validation"


def test_corrupt_bytes_raise_parse_error():
    with pytest.raises(ParseError) as excinfo:
        split_if_needed(b"isto nao e um pdf", "lixo.pdf")
    assert excinfo.value.size == len(b"isto nao e um pdf")


def test_empty_buffer_raises_parse_error():
    with pytest.raises(ParseError):
        split_if_needed(b"", "nada.pdf")


def test_missing_file_raises_read_error(tmp_path):
    with pytest.raises(ReadError) as excinfo:
        split_if_needed(tmp_path / "nao_existe.pdf")
    assert excinfo.value.stage == "read"


def test_file_object_source_uses_its_name(make_pdf, tmp_path):
    path = tmp_path / "proposta.pdf"
    path.write_bytes(make_pdf(25))
    with path.open("rb") as fh:
        result = split_if_needed(fh)
    assert [p.name for p in result.parts] == ["proposta_parte1de2.pdf", "proposta_parte2de2.pdf"]


def test_anonymous_stream_gets_default_name(make_pdf):
    result = split_if_needed(io.BytesIO(make_pdf(25)))
    assert result.parts[0].name == "documento_parte1de2.pdf"


def test_part_failure_reports_index(make_pdf, monkeypatch):
    calls = {"n": 0}
    original = PDFSplitter._build_part

    def flaky(self, doc, start, end, name, index):
        calls["n"] += 1
        if index == 2:
            raise PartConstructionError("falha simulada", part_index=index)
        return original(self, doc, start, end, name, index)

    monkeypatch.setattr(PDFSplitter, "_build_part", flaky)
    with pytest.raises(PartConstructionError) as excinfo:
        split_if_needed(make_pdf(45), "doc.pdf")
    assert excinfo.value.part_index == 2
    assert excinfo.value.stage == "part"
    assert calls["n"] == 2


def test_library_failure_wrapped_with_part_index(make_pdf, monkeypatch):
    import fitz

    def broken_insert(self, *args, **kwargs):
        raise RuntimeError("insert falhou")

    monkeypatch.setattr(fitz.Document, "insert_pdf", broken_insert)
    with pytest.raises(PartConstructionError) as excinfo:
        split_if_needed(make_pdf(25), "doc.pdf")
    assert excinfo.value.part_index == 1
    assert isinstance(excinfo.value.__cause__, RuntimeError)


def test_split_by_range(sample_pdf_path, read_texts):
    result = PDFSplitter().split_by_range(sample_pdf_path, [(0, 1), (2, 4)])
    assert result.was_split
    assert [p.page_range for p in result.parts] == ["1-2", "3-5"]
    assert [p.name for p in result.parts] == ["sample_parte1de2.pdf", "sample_parte2de2.pdf"]
    assert len(read_texts(result.parts[1].data)) == 3


def test_split_by_range_out_of_bounds(sample_pdf_path):
    with pytest.raises(ValidationError):
        PDFSplitter().split_by_range(sample_pdf_path, [(0, 9)])


@pytest.mark.parametrize(
    "name, expected",
    [
        ("relatorio.pdf", "relatorio_parte2de3.pdf"),
        ("relatorio.final.PDF", "relatorio.final_parte2de3.PDF"),
        ("scan", "scan_parte2de3.pdf"),
    ],
)
def test_part_name(name, expected):
    assert part_name(name, 2, 3) == expected


def test_invalid_limits():
    with pytest.raises(ValueError):
        PDFSplitter(max_pages=0)
    with pytest.raises(ValueError):
        PDFSplitter(max_bytes=0)
