"""Shared test fixtures and configuration."""

from __future__ import annotations

import pytest

from appmeta.config.settings import Settings
from appmeta.core.store import MetadataStore
from appmeta.models.metadata import Maintainer, Metadata

DESCRIPTION_HEADER = "# A main heading\n## A secondary heading\nA paragraph\n![an image](https://image.com/png)\n"


@pytest.fixture
def settings() -> Settings:
    """Create a test Settings instance with defaults."""
    return Settings(
        _env_file=None,  # type: ignore[call-arg]
        debug=True,
    )


@pytest.fixture
def metadata_fields() -> dict:
    """Field values of a valid document, for building variants."""
    return {
        "title": "App title 1",
        "version": "1.0.0",
        "maintainers": [
            {"name": "Bill Bob", "email": "bill@gmail.com"},
            {"name": "Medhir Bhargava", "email": "email@gmail.com"},
        ],
        "company": "BigCorp",
        "website": "https://www.wikipedia.com",
        "source": "https://github.com",
        "license": "All rights reserved",
        "description": DESCRIPTION_HEADER,
    }


@pytest.fixture
def app_one() -> Metadata:
    """First sample application (blue fox, MIT)."""
    return Metadata(
        title="App title 1",
        version="1.0.0",
        maintainers=[
            Maintainer(name="Bill Bob", email="bill@gmail.com"),
            Maintainer(name="Medhir Bhargava", email="email@gmail.com"),
        ],
        company="BigCorp",
        website="https://www.wikipedia.com",
        source="https://github.com/app1",
        license="MIT",
        description=DESCRIPTION_HEADER + "The quick blue fox jumped on the hen.",
    )


@pytest.fixture
def app_two() -> Metadata:
    """Second sample application (brown fox, Apache)."""
    return Metadata(
        title="App title 2",
        version="2.0.1",
        maintainers=[
            Maintainer(name="Billy Bob", email="billy@gmail.com"),
            Maintainer(name="Medhir Bhargava", email="email@gmail.com"),
        ],
        company="SmallCorp",
        website="https://www.smallcorp.com",
        source="https://github.com/app2",
        license="Apache-2.0",
        description=DESCRIPTION_HEADER + "The quick brown fox jumped on the hen.",
    )


@pytest.fixture
def store(app_one: Metadata, app_two: Metadata) -> MetadataStore:
    """A store with both sample applications indexed."""
    s = MetadataStore()
    s.add_metadata(app_one)
    s.add_metadata(app_two)
    return s


APP_ONE_YAML = """\
title: App title 1
version: 1.0.0
maintainers:
  - name: Bill Bob
    email: bill@gmail.com
  - name: Medhir Bhargava
    email: email@gmail.com
company: BigCorp
website: https://www.wikipedia.com
source: https://github.com/app1
license: MIT
description: |
  ### Interesting Title
  The quick blue fox jumped on the hen.
"""

APP_TWO_YAML = """\
title: App title 2
version: 2.0.1
maintainers:
  - name: Billy Bob
    email: billy@gmail.com
  - name: Medhir Bhargava
    email: email@gmail.com
company: SmallCorp
website: https://www.smallcorp.com
source: https://github.com/app2
license: Apache-2.0
description: |
  ### Interesting Title
  The quick brown fox jumped on the hen.
"""


@pytest.fixture
def app_one_yaml() -> str:
    return APP_ONE_YAML


@pytest.fixture
def app_two_yaml() -> str:
    return APP_TWO_YAML
