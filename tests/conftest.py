import pytest
import fitz
from pathlib import Path


def build_pdf(page_count: int, metadata: dict[str, str] | None = None) -> bytes:
    doc = fitz.open()
    for i in range(page_count):
        page = doc.new_page()
        page.insert_text((50, 100), f"Pagina {i + 1} do documento de teste.", fontsize=12)
    if metadata:
        doc.set_metadata(metadata)
    data = doc.tobytes()
    doc.close()
    return data


def build_raw_pdf(objects: list[bytes]) -> bytes:
    """Monta um PDF mínimo à mão, com xref correto. Objeto 1 é o catálogo."""
    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for num, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % num + body + b"\nendobj\n"
    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF\n" % xref_offset
    return bytes(out)


def page_texts(data: bytes) -> list[str]:
    with fitz.open(stream=data, filetype="pdf") as doc:
        return [page.get_text().strip() for page in doc]


@pytest.fixture
def make_pdf():
    return build_pdf


@pytest.fixture
def read_texts():
    return page_texts


@pytest.fixture(scope="session")
def tmp_output_dir(tmp_path_factory):
    return tmp_path_factory.mktemp("output")


@pytest.fixture(scope="session")
def sample_pdf_bytes() -> bytes:
    return build_pdf(5)


@pytest.fixture(scope="session")
def sample_pdf_path(tmp_path_factory, sample_pdf_bytes) -> Path:
    path = tmp_path_factory.mktemp("fixtures") / "sample.pdf"
    path.write_bytes(sample_pdf_bytes)
    return path


@pytest.fixture(scope="session")
def large_pdf_path(tmp_path_factory) -> Path:
    path = tmp_path_factory.mktemp("fixtures") / "relatorio.pdf"
    path.write_bytes(build_pdf(45))
    return path


@pytest.fixture(scope="session")
def empty_pdf_bytes() -> bytes:
    return build_raw_pdf([
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [] /Count 0 >>",
    ])


@pytest.fixture(scope="session")
def encrypted_pdf_bytes() -> bytes:
    """Criptografado só com senha de dono: abre sem senha, com permissões restritas."""
    doc = fitz.open()
    page = doc.new_page()
    page.insert_text((50, 100), "Documento protegido.", fontsize=12)
    data = doc.tobytes(
        encryption=fitz.PDF_ENCRYPT_AES_256,
        owner_pw="dono",
        user_pw="",
        permissions=fitz.PDF_PERM_ACCESSIBILITY,
    )
    doc.close()
    return data


@pytest.fixture(scope="session")
def password_pdf_bytes() -> bytes:
    doc = fitz.open()
    doc.new_page()
    data = doc.tobytes(encryption=fitz.PDF_ENCRYPT_AES_256, owner_pw="dono", user_pw="segredo")
    doc.close()
    return data
