"""
Pytest configuration and shared fixtures.

Key fixtures:
- upload_envelope: single-argument envelope as sent by the action engine
- upload_body: the same envelope serialized as request bytes
"""

import json
import sys
from pathlib import Path
from typing import Any

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent / 'src'
sys.path.insert(0, str(src_path))

# Load environment variables
from dotenv import load_dotenv

env_file = Path(__file__).parent.parent / '.env'
if env_file.exists():
    load_dotenv(env_file)


@pytest.fixture
def upload_envelope() -> dict[str, Any]:
    """Envelope for an action with one object argument."""
    return {
        'request_query': 'mutation {\n  uploadDefinitions(args:{\n    content:"foo"\n  }) {\n    result\n  }\n}',
        'session_variables': {'x-hasura-role': 'admin', 'x-hasura-user-id': '42'},
        'input': {'args': {'content': 'foo', 'tags': ['a', 'b'], 'meta': {'size': 3}}},
        'action': {'name': 'uploadDefinitions'},
    }


@pytest.fixture
def upload_body(upload_envelope) -> bytes:
    """The upload envelope as raw request bytes."""
    return json.dumps(upload_envelope).encode('utf-8')
