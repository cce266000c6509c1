import pytest

from models import OperationState
from tests.conftest import FakeAIClient
from utils.ai_client import GenerativeServiceError
from utils.devotional import DevotionalGenerationError, DevotionalGenerator

RECORD = {
    "title": "Esperança renovada",
    "verse": "Lamentações 3:22-23 - As misericórdias do Senhor se renovam a cada manhã.",
    "message": "Cada dia é uma nova oportunidade.",
    "prayer": "Senhor, obrigado pela tua fidelidade. Amém."
}


def test_generate_returns_complete_record():
    generator = DevotionalGenerator(FakeAIClient(RECORD), language='Brazilian Portuguese')

    record = generator.generate()

    assert record.model_dump() == RECORD
    assert generator.current is record
    assert generator.state == OperationState.SUCCEEDED


def test_prompt_requires_all_four_fields():
    client = FakeAIClient(RECORD)
    DevotionalGenerator(client).generate()

    prompt = client.calls[0]['prompt']
    for field in ('title', 'verse', 'message', 'prayer'):
        assert f'"{field}"' in prompt


@pytest.mark.parametrize('response', [
    {k: v for k, v in RECORD.items() if k != 'prayer'},
    dict(RECORD, message=''),
    dict(RECORD, title=None),
    'this is not json',
    [RECORD],
    GenerativeServiceError('unavailable'),
])
def test_invalid_response_reports_failure_and_keeps_prior_record(response):
    generator = DevotionalGenerator(FakeAIClient(RECORD, response))
    prior = generator.generate()

    with pytest.raises(DevotionalGenerationError):
        generator.generate()

    assert generator.current is prior
    assert generator.state == OperationState.FAILED


def test_get_or_generate_only_generates_once():
    client = FakeAIClient(RECORD)
    generator = DevotionalGenerator(client)

    first = generator.get_or_generate()
    second = generator.get_or_generate()

    assert first is second
    assert len(client.calls) == 1


def test_narration_text_includes_every_section():
    record = DevotionalGenerator(FakeAIClient(RECORD)).generate()
    text = record.narration_text()

    for value in RECORD.values():
        assert value in text


def test_narration_connectors_follow_the_content_language():
    record = DevotionalGenerator(FakeAIClient(RECORD)).generate()

    assert "O versículo de hoje é:" in record.narration_text('Brazilian Portuguese')
    assert "Today's verse" not in record.narration_text('Brazilian Portuguese')
    assert "Today's verse is:" in record.narration_text('English')
