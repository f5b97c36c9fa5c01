"""Pytest configuration and fixtures"""

import pytest
import tempfile
import os
from unittest.mock import Mock

from parameters import ParameterDetector
from substitution import SubstitutionEngine
from comments import CommentToggler
from renderer import ParameterRenderer
from snippet import SnippetEditor


SAMPLE_SQL = """SELECT o.id, o.status, o.created
FROM orders o
WHERE o.created BETWEEN '01-JAN-24' AND '15-JAN-24'
  AND o.status IN ('A','B','C')
  -- AND o.region = 'EMEA'
  AND o.customer LIKE 'ACME%'
ORDER BY o.created
"""


@pytest.fixture
def sample_sql():
    """A snippet exercising every parameter kind"""
    return SAMPLE_SQL


@pytest.fixture
def temp_config_file():
    """Create a temporary config file for testing"""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        f.write("""
output:
  verbose: true
  show_preview: false
editor:
  backup_on_save: false
  confirm_save: false
""")
        temp_path = f.name
    
    yield temp_path
    
    # Cleanup
    os.unlink(temp_path)


@pytest.fixture
def snippet_file(tmp_path, sample_sql):
    """Write the sample snippet to a file"""
    path = tmp_path / "orders.sql"
    path.write_text(sample_sql, encoding='utf-8')
    return path


@pytest.fixture
def mock_console():
    """Mock rich console for testing"""
    return Mock()


@pytest.fixture
def detector():
    return ParameterDetector()


@pytest.fixture
def engine():
    return SubstitutionEngine()


@pytest.fixture
def toggler():
    return CommentToggler()


@pytest.fixture
def renderer():
    return ParameterRenderer()


@pytest.fixture
def snippet_editor():
    return SnippetEditor()
