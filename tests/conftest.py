import os

import pytest

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.pop("HF_API_KEY", None)

FONT = b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>"


def _text_ops(fragments):
    return "".join(f"BT /F1 12 Tf {x} {y} Td ({text}) Tj ET\n" for x, y, text in fragments).encode("latin-1")


def _stream(content, header=b""):
    return b"<< " + header + b"/Length %d >>\nstream\n" % len(content) + content + b"endstream"


def _serialize(objects):
    """Number objects from 1 (catalog first) and write body, xref and trailer."""
    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n".encode("latin-1") + body + b"\nendobj\n"
    xref_offset = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode("latin-1")
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode("latin-1")
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref_offset}\n%%EOF\n"
    ).encode("latin-1")
    return bytes(out)


def build_pdf(pages):
    """Build a minimal PDF; ``pages`` is a list of [(x, y, text), ...] per page."""
    objects = [b"<< /Type /Catalog /Pages 2 0 R >>", None, FONT]
    page_ids = []
    for fragments in pages:
        page_id = len(objects) + 1
        page_ids.append(page_id)
        objects.append(
            (
                f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
                f"/Resources << /Font << /F1 3 0 R >> >> /Contents {page_id + 1} 0 R >>"
            ).encode("latin-1")
        )
        objects.append(_stream(_text_ops(fragments)))
    kids = " ".join(f"{pid} 0 R" for pid in page_ids)
    objects[1] = f"<< /Type /Pages /Kids [{kids}] /Count {len(page_ids)} >>".encode("latin-1")
    return _serialize(objects)


def build_form_xobject_pdf(fragments):
    """One page whose only content is ``/X1 Do``; all text lives in the Form XObject."""
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [4 0 R] /Count 1 >>",
        FONT,
        (
            b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            b"/Resources << /Font << /F1 3 0 R >> /XObject << /X1 6 0 R >> >> /Contents 5 0 R >>"
        ),
        _stream(b"q /X1 Do Q\n"),
        _stream(
            _text_ops(fragments),
            b"/Type /XObject /Subtype /Form /BBox [0 0 612 792] /Resources << /Font << /F1 3 0 R >> >> ",
        ),
    ]
    return _serialize(objects)


RESUME_PAGES = [
    [
        (72, 650, "Professional Experience: Senior Developer at Initech"),
        (72, 700, "Jane Roe"),
        (400, 700, "jane@example.com"),
    ],
    [
        (72, 700, "Education: BSc Computer Science, State University"),
        (72, 680, "Skills: Python, SQL, Docker, leadership"),
    ],
]


@pytest.fixture
def make_pdf():
    return build_pdf


@pytest.fixture
def make_form_xobject_pdf():
    return build_form_xobject_pdf


@pytest.fixture
def resume_pdf_bytes():
    return build_pdf(RESUME_PAGES)
