import io
import json
from types import SimpleNamespace

import pytest
from docx import Document

from contractguard.models import DOCX_MIME, TEXT_MIME, UploadedDocument

PAYMENT_SENTENCE = "Payment due within 30 days of invoice with no late fee specified."


@pytest.fixture
def contract_text():
    return " ".join([PAYMENT_SENTENCE] * 3)


@pytest.fixture
def canned_payload():
    return {
        "risks": [
            {
                "type": "medium",
                "category": "Payment Terms",
                "description": "No late fee",
                "explanation": "Without a late fee there is no incentive to pay on time.",
                "suggestion": "Add a 1.5% monthly late fee.",
                "location": "Section 1",
                "originalClause": PAYMENT_SENTENCE,
                "suggestedClause": "Payment due within 30 days of invoice; late payments accrue 1.5% monthly.",
            }
        ],
        "overallScore": 70,
        "totalClauses": 1,
        "revisedSections": [
            {
                "section": "Payment",
                "original": PAYMENT_SENTENCE,
                "revised": "Payment due within 30 days of invoice **with a 1.5% monthly late fee**.",
            }
        ],
    }


@pytest.fixture
def canned_response(canned_payload):
    return json.dumps(canned_payload)


@pytest.fixture
def text_upload(contract_text):
    return UploadedDocument(
        content=contract_text.encode("utf-8"),
        mime_type=TEXT_MIME,
        filename="services agreement.txt",
    )


def build_docx(paragraphs, table_rows=None) -> bytes:
    doc = Document()
    for p in paragraphs:
        doc.add_paragraph(p)
    if table_rows:
        table = doc.add_table(rows=len(table_rows), cols=len(table_rows[0]))
        for r, row in enumerate(table_rows):
            for c, value in enumerate(row):
                table.cell(r, c).text = value
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


@pytest.fixture
def docx_upload(contract_text):
    return UploadedDocument(
        content=build_docx(["1. Payment", contract_text]),
        mime_type=DOCX_MIME,
        filename="contract.docx",
    )


class FakeMessages:
    def __init__(self, reply=None, error=None):
        self.reply = reply
        self.error = error
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        blocks = [] if self.reply is None else [SimpleNamespace(type="text", text=self.reply)]
        return SimpleNamespace(content=blocks)


class FakeClient:
    def __init__(self, reply=None, error=None):
        self.messages = FakeMessages(reply, error)


@pytest.fixture
def fake_client_factory():
    return FakeClient


class CompletionSpy:
    """Stands in for request_completion and records every prompt."""

    def __init__(self, reply):
        self.reply = reply
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        return self.reply


@pytest.fixture
def completion_spy(canned_response):
    return CompletionSpy(canned_response)


@pytest.fixture
def make_docx():
    return build_docx
