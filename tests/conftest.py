"""Pytest configuration and shared fixtures for the md2inline test suite.

This module provides shared fixtures and test configuration that are used
across the entire test suite.
"""

from pathlib import Path

import pytest


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def sample_text() -> str:
    """Provide sample Markdown content for testing.

    Returns
    -------
    str
        Standard sample document used across multiple tests.

    """
    return """# Sample Document

This is a **sample document** with _italic text_ and some `inline code`.
Second line of the same paragraph.

## Section 2

Here is a list:

- Item 1
- Item 2
  - Item 2.1
- Item 3

1. First item
2. Second item

> Quoted text
> -- Someone Famous

```python
def hello_world():
    print("Hello, World!")
```

| Header 1 | Header 2 |
|:---------|---------:|
| Row 1    | Data 1   |

:::NOTE Tip(Heads up)
Remember this.
:::

---

Footer text
"""


@pytest.fixture
def markdown_file(tmp_path: Path, sample_text: str) -> Path:
    """Write the sample document to a temporary ``.md`` file.

    Returns
    -------
    Path
        Path to the Markdown file.

    """
    path = tmp_path / "sample.md"
    path.write_text(sample_text, encoding="utf-8")
    return path
