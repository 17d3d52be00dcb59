"""
Pytest configuration and shared fixtures
"""

import pytest
import os
import tempfile
import shutil

from wordcount.common.config import ENV_PARALLELISM, ENV_SHARDS, ENV_KEEP_EMPTY


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep WORDCOUNT_* settings from the caller's shell out of tests"""
    for name in (ENV_PARALLELISM, ENV_SHARDS, ENV_KEEP_EMPTY):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def temp_dir():
    """Create temporary directory for test files"""
    dirpath = tempfile.mkdtemp()
    yield dirpath
    shutil.rmtree(dirpath)


@pytest.fixture
def sample_text():
    """Sample text for testing"""
    return """The quick brown fox jumps over the lazy dog.
The dog was really lazy.
The fox was very quick and brown.
Quick brown foxes are amazing animals.
Lazy dogs sleep all day."""


@pytest.fixture
def sample_records(sample_text):
    """Sample text split into one record per line"""
    return sample_text.split('\n')


@pytest.fixture
def sample_input_file(temp_dir, sample_text):
    """Create a sample input file for testing"""
    filepath = os.path.join(temp_dir, 'input.txt')
    with open(filepath, 'w') as f:
        f.write(sample_text)
    return filepath


@pytest.fixture
def sample_counts():
    """Expected word counts for sample_text"""
    return {
        'the': 4, 'quick': 3, 'brown': 3, 'fox': 2, 'jumps': 1, 'over': 1,
        'lazy': 3, 'dog': 2, 'was': 2, 'really': 1, 'very': 1, 'and': 1,
        'foxes': 1, 'are': 1, 'amazing': 1, 'animals': 1, 'dogs': 1,
        'sleep': 1, 'all': 1, 'day': 1,
    }
