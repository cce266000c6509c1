import json
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import anthropic
import httpx
import pytest

from utils.ai_client import AnthropicClient, GenerativeServiceError, parse_json_response


def _message(*texts):
    return SimpleNamespace(content=[SimpleNamespace(type='text', text=t) for t in texts])


def test_parse_json_response_strips_code_fences():
    assert parse_json_response('```json\n{"a": 1}\n```') == {"a": 1}
    assert parse_json_response('```\n[1, 2]\n```') == [1, 2]
    assert parse_json_response(' {"b": 2} ') == {"b": 2}
    with pytest.raises(json.JSONDecodeError):
        parse_json_response('not json')


def test_generate_sends_system_prompt_and_joins_text_blocks():
    client = AnthropicClient(api_key='test-key', model='fast-model')
    sdk = MagicMock()
    sdk.messages.create.return_value = _message('Hello ', 'world')

    with patch('utils.ai_client.anthropic.Anthropic', return_value=sdk):
        text = client.generate('Hi', system='Be kind')

    assert text == 'Hello world'
    kwargs = sdk.messages.create.call_args.kwargs
    assert kwargs['model'] == 'fast-model'
    assert kwargs['system'] == 'Be kind'
    assert kwargs['messages'] == [{"role": "user", "content": "Hi"}]


def test_generate_omits_system_when_not_given():
    client = AnthropicClient(api_key='test-key')
    sdk = MagicMock()
    sdk.messages.create.return_value = _message('ok')

    with patch('utils.ai_client.anthropic.Anthropic', return_value=sdk):
        client.generate('Hi')

    assert 'system' not in sdk.messages.create.call_args.kwargs


def test_generate_json_decodes_payload():
    client = AnthropicClient(api_key='test-key')
    sdk = MagicMock()
    sdk.messages.create.return_value = _message('```json\n[{"v": 1, "t": "um"}]\n```')

    with patch('utils.ai_client.anthropic.Anthropic', return_value=sdk):
        assert client.generate_json('Translate') == [{"v": 1, "t": "um"}]

    assert 'Respond ONLY with valid JSON' in sdk.messages.create.call_args.kwargs['messages'][0]['content']


def test_api_errors_become_generative_service_errors():
    client = AnthropicClient(api_key='test-key')
    sdk = MagicMock()
    request = httpx.Request('POST', 'https://api.anthropic.com/v1/messages')
    sdk.messages.create.side_effect = anthropic.APIConnectionError(request=request)

    with patch('utils.ai_client.anthropic.Anthropic', return_value=sdk):
        with pytest.raises(GenerativeServiceError):
            client.generate('Hi')


def test_missing_api_key_is_reported():
    client = AnthropicClient(api_key=None)
    client.api_key = None
    with pytest.raises(GenerativeServiceError):
        client.generate('Hi')
